# =============================================================================
# core/models/results.py - Action Result Schemas
# =============================================================================
# Public catalog actions never raise: they return an ActionResult carrying
# either data or a human-readable error. Callers branch on `error`.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field

from .product import Product, ProductImage


class ActionResult(BaseModel):
    """
    Outcome of a catalog action.

    Example (success):
        {"success": true, "data": {...}, "error": null, "status_code": 200}

    Example (failure):
        {"success": false, "data": null, "error": "Unsupported file type: text/plain",
         "code": "INVALID_IMAGE_TYPE", "status_code": 400}
    """

    success: bool = True
    data: Any = None
    error: str | None = None
    code: str | None = None
    status_code: int = 200

    # Non-fatal problems (e.g. some images in a batch failed)
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def succeeded(cls, data: Any = None, status_code: int = 200, warnings: list[str] | None = None) -> "ActionResult":
        return cls(success=True, data=data, status_code=status_code, warnings=warnings or [])

    @classmethod
    def failed(cls, error: str, code: str, status_code: int) -> "ActionResult":
        return cls(success=False, error=error, code=code, status_code=status_code)


class UploadedImage(BaseModel):
    """Result of a single image upload."""

    url: str
    storage_path: str

    # Only set for product images (testimonial uploads have no row yet)
    image: ProductImage | None = None


class BatchUploadResult(BaseModel):
    """
    Result of a sequential multi-image upload.

    Successful uploads are kept even when others fail; `failed` holds
    one "filename: error" entry per rejected file.
    """

    uploaded: list[UploadedImage] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.uploaded) + len(self.failed)

    def summary(self) -> str:
        return f"{len(self.uploaded)} photo(s) uploaded, {len(self.failed)} failed"


class ProductWithImages(BaseModel):
    """Product card data: product plus its images, used by list views."""

    product: Product
    images: list[ProductImage] = Field(default_factory=list)


class DashboardStats(BaseModel):
    """Counters and recent products for the admin dashboard."""

    total_products: int = 0
    total_categories: int = 0
    total_testimonials: int = 0
    available_products: int = 0
    recent_products: list[Product] = Field(default_factory=list)
