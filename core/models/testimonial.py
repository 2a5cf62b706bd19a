# =============================================================================
# core/models/testimonial.py - Testimonial Schemas
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from lib.utils import blank_to_none

from .product import Product


class Testimonial(BaseModel):
    """A customer testimonial as stored in the `testimonials` table."""

    id: str
    customer_name: str
    message: str
    product_id: str | None = None
    image_url: str | None = None
    is_featured: bool = False
    created_at: datetime | None = None


class TestimonialWithProduct(BaseModel):
    """Testimonial plus the product it mentions, for the public wall."""

    testimonial: Testimonial
    product: Product | None = None


class TestimonialInput(BaseModel):
    """
    Customer-submitted testimonial.

    The image (if any) is uploaded first through the testimonial image
    endpoint and its URL passed here.
    """

    customer_name: str = Field(..., min_length=2, max_length=100)
    message: str = Field(..., min_length=10, max_length=500)
    product_id: str | None = None
    image_url: str | None = None

    @field_validator("customer_name", "message", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("product_id", "image_url", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)

    def to_row(self) -> dict:
        return {
            "customer_name": self.customer_name,
            "message": self.message,
            "product_id": self.product_id,
            "image_url": self.image_url,
            "is_featured": False,
        }
