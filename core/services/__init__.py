# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .catalog_service import CatalogService
from .category_service import CategoryService
from .image_service import ImageFile, ImageService
from .product_service import ProductService
from .storage_service import StorageService, extract_storage_path
from .testimonial_service import TestimonialService

__all__ = [
    "CatalogService",
    "CategoryService",
    "ImageFile",
    "ImageService",
    "ProductService",
    "StorageService",
    "TestimonialService",
    "extract_storage_path",
]
