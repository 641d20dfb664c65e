"""
Genre Model

Represents a book genre/category in the catalog.

A book can belong to several genres; the link lives in the book_genres
association table defined next to the Book model.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils import new_id


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    The name is not unique at the database level. Creating a genre whose
    name already exists is resolved by the genre controller, which sends the
    user to the existing record instead.
    """

    __tablename__ = "genres"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    # 3 to 100 characters as submitted; escaping can lengthen the stored value
    name: Mapped[str] = mapped_column(
        Text,
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'Fantasy', 'Poetry')"
    )

    @property
    def url(self) -> str:
        return f"/catalog/genres/{self.id}"

    def __repr__(self) -> str:
        return f"Genre(id='{self.id}', name='{self.name}')"
