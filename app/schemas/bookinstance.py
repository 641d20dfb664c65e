"""
BookInstance View Schemas

A copy carries its resolved Book (None when book_id does not resolve).
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.book import BookSummary


class BookInstanceSummary(BaseModel):
    """Copy as shown in lists and on the book detail page."""

    id: str = Field(..., description="Opaque identifier")
    book_id: str
    imprint: str
    status: str
    due_back: date
    due_back_formatted: str = ""
    url: str
    book: BookSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class BookInstanceDetail(BookInstanceSummary):
    """Copy for detail and update pages."""

    def form_values(self) -> dict:
        return {
            "book": self.book_id,
            "imprint": self.imprint,
            "status": self.status,
            "due_back": self.due_back,
        }


class CatalogCounts(BaseModel):
    """Record counts shown on the landing page."""

    book_count: int = 0
    book_instance_count: int = 0
    book_instance_available_count: int = 0
    author_count: int = 0
    genre_count: int = 0
