"""
Author View Schemas

These schemas define the shape of Author data handed to the templates.

model_config with from_attributes=True allows building a schema straight
from an Author model instance, including its derived properties
(name, lifespan, url).
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class AuthorSummary(BaseModel):
    """
    Author as shown in lists and as a book's attached author.

    Usage:
        AuthorSummary.model_validate(author)
    """

    id: str = Field(..., description="Opaque identifier")
    name: str = Field(..., description='Display name, "family name, first name"')
    lifespan: str = Field(default="", description="Birth and death dates for display")
    url: str = Field(..., description="Detail page path")

    model_config = ConfigDict(from_attributes=True)


class AuthorDetail(AuthorSummary):
    """Author with every stored field, for detail and update pages."""

    first_name: str
    family_name: str
    date_of_birth: date | None = None
    date_of_death: date | None = None
    date_of_birth_formatted: str = ""
    date_of_death_formatted: str = ""

    def form_values(self) -> dict:
        """Field values for pre-filling the author form."""
        return {
            "first_name": self.first_name,
            "family_name": self.family_name,
            "date_of_birth": self.date_of_birth,
            "date_of_death": self.date_of_death,
        }
