"""
Genre View Schemas

Schemas for genre pages.
Follows the same pattern as the Author schemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class GenreSummary(BaseModel):
    """Genre as shown in lists and on book pages."""

    id: str = Field(..., description="Opaque identifier")
    name: str = Field(..., description="Genre name")
    url: str = Field(..., description="Detail page path")

    # Set on the book form when the genre is among the book's genres
    checked: bool = False

    model_config = ConfigDict(from_attributes=True)

    def form_values(self) -> dict:
        return {"name": self.name}
