# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - category.py: Category rows and admin input
# - product.py: Product / ProductImage rows, detail view, admin input
# - testimonial.py: Testimonial rows and customer input
# - results.py: ActionResult and upload/dashboard results
#
# Store rows are decoded into these models at the service boundary.
# =============================================================================

from .category import Category, CategoryInput
from .product import Product, ProductDetail, ProductImage, ProductInput
from .results import (
    ActionResult,
    BatchUploadResult,
    DashboardStats,
    ProductWithImages,
    UploadedImage,
)
from .testimonial import Testimonial, TestimonialInput, TestimonialWithProduct

__all__ = [
    # Category
    "Category",
    "CategoryInput",
    # Product
    "Product",
    "ProductDetail",
    "ProductImage",
    "ProductInput",
    # Testimonial
    "Testimonial",
    "TestimonialInput",
    "TestimonialWithProduct",
    # Results
    "ActionResult",
    "BatchUploadResult",
    "DashboardStats",
    "ProductWithImages",
    "UploadedImage",
]
