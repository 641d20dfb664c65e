"""
BookInstance Model

A BookInstance is one physical copy of a Book that the library can lend.
Many copies may exist for the same book.
"""

from datetime import date
from enum import Enum

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils import format_date, new_id


class BookInstanceStatus(str, Enum):
    """
    Lending status of a copy.

    - AVAILABLE: On the shelf
    - MAINTENANCE: Being repaired (default for new copies)
    - LOANED: Checked out until due_back
    - RESERVED: Held for a borrower
    """
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    """
    BookInstance model representing copies of a book.

    Table: book_instances

    Fields:
    - book_id: Identifier of the Book this is a copy of (required)
    - imprint: Publisher and edition details (required)
    - status: One of BookInstanceStatus values
    - due_back: Date the copy is expected back (defaults to today)
    """

    __tablename__ = "book_instances"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    book_id: Mapped[str] = mapped_column(
        String(32),
        index=True,
        nullable=False,
        comment="Identifier of the copied book"
    )

    imprint: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Publisher and edition details"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        index=True,
        nullable=False,
        default=BookInstanceStatus.MAINTENANCE.value,
    )

    due_back: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    @property
    def due_back_formatted(self) -> str:
        return format_date(self.due_back)

    @property
    def url(self) -> str:
        return f"/catalog/bookinstances/{self.id}"

    def __repr__(self) -> str:
        return f"BookInstance(id='{self.id}', book_id='{self.book_id}', status='{self.status}')"
