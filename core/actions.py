# =============================================================================
# core/actions.py - Catalog Mutation Actions
# =============================================================================
# The public boundary of the catalog mutation service. Every action returns
# an ActionResult carrying either data or a human-readable error; no
# exception crosses this boundary. Routers (and any other caller) branch on
# `result.error`.
#
# Usage:
#   actions = CatalogActions(categories, products, images, testimonials)
#   result = actions.create_category(name="Kue Kering", slug="kue-kering")
#   if result.error:
#       show_banner(result.error)
# =============================================================================

import logging
from typing import Any, Callable

from pydantic import ValidationError

from app.exceptions import CatalogException
from core.models import (
    ActionResult,
    BatchUploadResult,
    CategoryInput,
    ProductInput,
    TestimonialInput,
)
from core.services.category_service import CategoryService
from core.services.image_service import ImageFile, ImageService
from core.services.product_service import ProductService
from core.services.testimonial_service import TestimonialService

logger = logging.getLogger(__name__)


def validation_message(error: ValidationError) -> str:
    """First validation problem as a short sentence: "name: Category name is required"."""
    first = error.errors(include_url=False)[0]
    message = first.get("msg", "Invalid input").removeprefix("Value error, ")
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {message}" if location else message


class CatalogActions:
    """
    Result-returning facade over the catalog services.
    """

    def __init__(
        self,
        categories: CategoryService,
        products: ProductService,
        images: ImageService,
        testimonials: TestimonialService,
    ):
        self.categories = categories
        self.products = products
        self.images = images
        self.testimonials = testimonials

    def _run(self, operation: str, fn: Callable[[], Any], status_code: int = 200) -> ActionResult:
        try:
            data = fn()
        except ValidationError as e:
            message = validation_message(e)
            logger.info(f"{operation} rejected: {message}")
            return ActionResult.failed(message, "VALIDATION_ERROR", 400)
        except CatalogException as e:
            logger.info(f"{operation} failed: [{e.code}] {e.message}")
            return ActionResult.failed(e.message, e.code, e.status_code)
        except Exception:
            logger.exception(f"{operation} failed unexpectedly")
            return ActionResult.failed("An unexpected error occurred", "INTERNAL_ERROR", 500)

        return ActionResult.succeeded(data, status_code=status_code)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def create_category(self, name: str, slug: str | None = None, description: str | None = None) -> ActionResult:
        return self._run(
            "create_category",
            lambda: self.categories.create_category(
                CategoryInput(name=name, slug=slug, description=description)
            ),
            status_code=201,
        )

    def update_category(
        self,
        category_id: str,
        name: str,
        slug: str | None = None,
        description: str | None = None,
    ) -> ActionResult:
        return self._run(
            "update_category",
            lambda: self.categories.update_category(
                category_id, CategoryInput(name=name, slug=slug, description=description)
            ),
        )

    def delete_category(self, category_id: str) -> ActionResult:
        return self._run("delete_category", lambda: self.categories.delete_category(category_id))

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def create_product(
        self,
        name: str,
        description: str | None = None,
        price: Any = None,
        category_id: str | None = None,
        is_available: bool = True,
    ) -> ActionResult:
        return self._run(
            "create_product",
            lambda: self.products.create_product(
                ProductInput(
                    name=name,
                    description=description,
                    price=price,
                    category_id=category_id,
                    is_available=is_available,
                )
            ),
            status_code=201,
        )

    def create_product_with_images(
        self,
        name: str,
        files: list[ImageFile],
        description: str | None = None,
        price: Any = None,
        category_id: str | None = None,
        is_available: bool = True,
    ) -> ActionResult:
        """
        The "add product" flow: create the product, then upload its photos
        with the first one as primary.

        Failed photos don't undo the product or the photos that did upload;
        they come back as warnings.
        """
        created = self.create_product(
            name=name,
            description=description,
            price=price,
            category_id=category_id,
            is_available=is_available,
        )
        if created.error or not files:
            return created

        product = created.data
        batch = self.upload_product_images(product.id, files, first_is_primary=True)
        if batch.error:
            return ActionResult.succeeded(
                {"product": product, "images": BatchUploadResult()},
                status_code=201,
                warnings=[batch.error],
            )
        return ActionResult.succeeded(
            {"product": product, "images": batch.data},
            status_code=201,
            warnings=batch.warnings,
        )

    def update_product(
        self,
        product_id: str,
        name: str,
        description: str | None = None,
        price: Any = None,
        category_id: str | None = None,
        is_available: bool = True,
    ) -> ActionResult:
        return self._run(
            "update_product",
            lambda: self.products.update_product(
                product_id,
                ProductInput(
                    name=name,
                    description=description,
                    price=price,
                    category_id=category_id,
                    is_available=is_available,
                ),
            ),
        )

    def delete_product(self, product_id: str) -> ActionResult:
        return self._run("delete_product", lambda: self.products.delete_product(product_id))

    # -------------------------------------------------------------------------
    # Product Images
    # -------------------------------------------------------------------------

    def upload_product_image(self, product_id: str, file: ImageFile, is_primary: bool = False) -> ActionResult:
        return self._run(
            "upload_product_image",
            lambda: self.images.upload_product_image(product_id, file, is_primary=is_primary),
            status_code=201,
        )

    def upload_product_images(
        self,
        product_id: str,
        files: list[ImageFile],
        first_is_primary: bool | None = None,
    ) -> ActionResult:
        result = self._run(
            "upload_product_images",
            lambda: self.images.upload_product_images(product_id, files, first_is_primary=first_is_primary),
            status_code=201,
        )
        if result.ok and result.data.failed:
            result.warnings = [result.data.summary(), *result.data.failed]
        return result

    def delete_product_image(self, image_id: str, product_id: str) -> ActionResult:
        return self._run(
            "delete_product_image",
            lambda: self.images.delete_product_image(image_id, product_id),
        )

    def set_primary_image(self, image_id: str, product_id: str) -> ActionResult:
        return self._run(
            "set_primary_image",
            lambda: self.images.set_primary_image(image_id, product_id),
        )

    # -------------------------------------------------------------------------
    # Testimonials
    # -------------------------------------------------------------------------

    def upload_testimonial_image(self, file: ImageFile) -> ActionResult:
        return self._run(
            "upload_testimonial_image",
            lambda: self.testimonials.upload_testimonial_image(file),
            status_code=201,
        )

    def create_testimonial(
        self,
        customer_name: str,
        message: str,
        product_id: str | None = None,
        image_url: str | None = None,
    ) -> ActionResult:
        return self._run(
            "create_testimonial",
            lambda: self.testimonials.create_testimonial(
                TestimonialInput(
                    customer_name=customer_name,
                    message=message,
                    product_id=product_id,
                    image_url=image_url,
                )
            ),
            status_code=201,
        )

    def toggle_testimonial_featured(self, testimonial_id: str, is_featured: bool) -> ActionResult:
        return self._run(
            "toggle_testimonial_featured",
            lambda: self.testimonials.toggle_featured(testimonial_id, is_featured),
        )

    def delete_testimonial(self, testimonial_id: str) -> ActionResult:
        return self._run(
            "delete_testimonial",
            lambda: self.testimonials.delete_testimonial(testimonial_id),
        )
