# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================
# - Category: a row of the `categories` table
# - CategoryInput: admin form input for create/update
#
# display_order decides catalog ordering; new categories are appended
# (max + 1) by the category service, never by the client.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from lib.utils import blank_to_none, slugify


class Category(BaseModel):
    """
    A catalog category as stored in the `categories` table.

    Example:
        {
            "id": "9b1c...",
            "name": "Kue Kering",
            "slug": "kue-kering",
            "description": null,
            "image_url": null,
            "display_order": 1,
            "created_at": "2024-12-01T08:00:00Z"
        }
    """

    id: str
    name: str
    slug: str
    description: str | None = None

    # Optional cover image shown on the home page
    image_url: str | None = None

    display_order: int = Field(default=0)
    created_at: datetime | None = None


class CategoryInput(BaseModel):
    """
    Admin input for creating or updating a category.

    A blank slug is derived from the name, matching what the admin form
    does when the slug field is left empty.
    """

    name: str = Field(..., max_length=100, description="Display name")
    slug: str | None = Field(default=None, max_length=120, description="URL-safe slug")
    description: str | None = Field(default=None, description="Optional description")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        return value

    @field_validator("slug", "description", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def fill_slug(self) -> "CategoryInput":
        self.slug = slugify(self.slug or self.name)
        if not self.slug:
            raise ValueError("Category slug must contain letters or digits")
        return self

    def to_row(self) -> dict:
        """Mutable columns written on insert and full-replace update."""
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
        }
