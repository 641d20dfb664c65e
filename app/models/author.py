"""
Author Model

Represents an author in the library catalog.

Books point at their author through Book.author_id. There is deliberately no
relationship() back to Book: pages that need an author's books fetch them
with an explicit query (see app.services.catalog).
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils import format_date, new_id


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Indexes:
    - Primary key on id (opaque hex string assigned at creation)
    - family_name: The author list is sorted by it

    Example:
        author = Author(
            first_name="Patrick",
            family_name="Rothfuss",
            date_of_birth=date(1973, 6, 6),
        )
    """

    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's first name"
    )

    family_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's family name"
    )

    # No ordering is enforced between the two dates
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_of_death: Mapped[date | None] = mapped_column(Date, nullable=True)

    # -------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------
    @property
    def name(self) -> str:
        """Display name, "family name, first name"."""
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        """Birth and death dates joined for display, e.g. "Jun 6, 1973 - "."""
        if self.date_of_birth is None and self.date_of_death is None:
            return ""
        return f"{format_date(self.date_of_birth)} - {format_date(self.date_of_death)}"

    @property
    def date_of_birth_formatted(self) -> str:
        return format_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_date(self.date_of_death)

    @property
    def url(self) -> str:
        return f"/catalog/authors/{self.id}"

    def __repr__(self) -> str:
        return f"Author(id='{self.id}', name='{self.name}')"
