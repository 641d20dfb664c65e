"""
Book View Schemas

Books reference one author and any number of genres by identifier.
The schemas below carry the resolved references, attached by
app.services.catalog after an explicit lookup:

- author is None when the author_id does not resolve
- genres lists only the genres that resolve, in the book's order
"""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.author import AuthorSummary
from app.schemas.genre import GenreSummary


class BookSummary(BaseModel):
    """Book as shown in lists and on author/genre pages."""

    id: str = Field(..., description="Opaque identifier")
    title: str = Field(..., description="Book title")
    summary: str = Field(..., description="Book summary")
    url: str = Field(..., description="Detail page path")
    author_id: str = Field(..., description="Identifier of the book's author")
    author: AuthorSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class BookDetail(BookSummary):
    """Book with its attached genres, for detail and update pages."""

    isbn: str = Field(..., description="International Standard Book Number")
    genre_ids: list[str] = Field(default_factory=list)
    genres: list[GenreSummary] = Field(default_factory=list)

    def form_values(self) -> dict:
        """Field values for pre-filling the book form."""
        return {
            "title": self.title,
            "author": self.author_id,
            "summary": self.summary,
            "isbn": self.isbn,
            "genre": list(self.genre_ids),
        }
