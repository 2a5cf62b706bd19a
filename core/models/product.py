# =============================================================================
# core/models/product.py - Product and Product Image Schemas
# =============================================================================
# - Product: a row of the `products` table
# - ProductImage: a row of the `product_images` table
# - ProductDetail: product + ordered images + category (detail pages)
# - ProductInput: admin form input for create/update
#
# Price is nullable: None means "price on inquiry" (negotiated over
# WhatsApp) and an empty price input is never stored as 0.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, computed_field, field_validator

from lib.utils import blank_to_none, normalize_price

from .category import Category


class Product(BaseModel):
    """A catalog product as stored in the `products` table."""

    id: str
    name: str
    description: str | None = None

    # Whole rupiah; None = price on inquiry
    price: int | None = None

    # Nullable: deleting a category leaves its products uncategorized
    category_id: str | None = None

    is_available: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductImage(BaseModel):
    """
    A product photo as stored in the `product_images` table.

    storage_path is the object key inside the bucket. Rows written before
    the column existed only carry image_url; the key is then recovered
    from the URL (see core/services/storage_service.py).
    """

    id: str
    product_id: str
    image_url: str
    storage_path: str | None = None
    is_primary: bool = False
    display_order: int = 0
    created_at: datetime | None = None


class ProductDetail(BaseModel):
    """
    Product with its images (by display order) and category.

    Example:
        {
            "product": {"id": "...", "name": "Nastar", ...},
            "images": [{"id": "...", "is_primary": true, ...}],
            "category": {"id": "...", "name": "Kue Kering", ...}
        }
    """

    product: Product
    images: list[ProductImage] = Field(default_factory=list)
    category: Category | None = None

    @computed_field
    @property
    def primary_image(self) -> ProductImage | None:
        """The image flagged primary, falling back to the first image."""
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None


class ProductInput(BaseModel):
    """
    Admin input for creating or updating a product (full replace).

    Example:
        {"name": "Nastar", "price": "150.000", "category_id": "...", "is_available": true}
    """

    name: str = Field(..., max_length=200)
    description: str | None = None
    price: int | None = Field(default=None, description="Whole rupiah, blank for price on inquiry")
    category_id: str | None = None
    is_available: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Product name is required")
        return value

    @field_validator("description", "category_id", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, value):
        return normalize_price(value)

    def to_row(self) -> dict:
        """Columns written on insert and full-replace update."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category_id": self.category_id,
            "is_available": self.is_available,
        }
