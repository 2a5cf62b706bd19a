# =============================================================================
# core/services/testimonial_service.py - Testimonial Business Logic
# =============================================================================
# Customers upload an optional photo first, then submit the testimonial
# with the returned URL. The two calls are independent: a failed insert
# leaves the uploaded photo in storage.
#
# Deleting a testimonial removes the row only; its photo stays in storage.
# =============================================================================

import logging

from supabase import Client

from app.exceptions import MissingFieldError, NotFoundError, PersistenceError
from app.revalidation import ViewInvalidator, paths
from core.models import Product, Testimonial, TestimonialInput, TestimonialWithProduct, UploadedImage
from core.services.image_service import ImageFile
from core.services.storage_service import StorageService
from lib.supabase_client import decode_row, decode_rows, execute

logger = logging.getLogger(__name__)

TABLE = "testimonials"


class TestimonialService:
    """
    Service for testimonial operations.
    """

    def __init__(self, client: Client, storage: StorageService, invalidator: ViewInvalidator):
        self.client = client
        self.storage = storage
        self.invalidator = invalidator

    def upload_testimonial_image(self, file: ImageFile) -> UploadedImage:
        """
        Validate and upload a testimonial photo.

        Returns:
            UploadedImage with the public URL to pass to create_testimonial

        Raises:
            CatalogValidationError: Bad type/size
            StorageUploadError: If the upload fails
        """
        if file is None or not file.content:
            raise MissingFieldError("file")

        self.storage.validate_image(file.content_type, file.size)

        key = self.storage.testimonial_image_key(file.filename, file.content_type)
        self.storage.upload(key, file.content, file.content_type)
        return UploadedImage(url=self.storage.get_public_url(key), storage_path=key)

    def create_testimonial(self, data: TestimonialInput) -> Testimonial:
        """
        Insert a testimonial (never featured on creation).

        Raises:
            PersistenceError: On invalid product_id (409) or store failure
        """
        response = execute(
            self.client.table(TABLE).insert(data.to_row()),
            "create_testimonial",
        )

        testimonial = decode_row(Testimonial, response.data, "create_testimonial")
        if testimonial is None:
            raise PersistenceError("Insert returned no data", operation="create_testimonial")

        logger.info(f"Created testimonial: {testimonial.id} from {testimonial.customer_name}")
        self.invalidator.invalidate(paths.testimonial_paths())
        return testimonial

    def toggle_featured(self, testimonial_id: str, is_featured: bool) -> Testimonial:
        """
        Set the featured flag. Any number of testimonials may be featured.

        Raises:
            NotFoundError: If no row has this id
        """
        response = execute(
            self.client.table(TABLE)
            .update({"is_featured": is_featured})
            .eq("id", testimonial_id),
            "toggle_testimonial_featured",
            testimonial_id=testimonial_id,
        )

        testimonial = decode_row(Testimonial, response.data, "toggle_testimonial_featured")
        if testimonial is None:
            raise NotFoundError("testimonial", testimonial_id)

        logger.info(f"Testimonial {testimonial_id} featured={is_featured}")
        self.invalidator.invalidate(paths.testimonial_paths())
        return testimonial

    def delete_testimonial(self, testimonial_id: str) -> Testimonial:
        """
        Delete a testimonial row.

        Raises:
            NotFoundError: If no row has this id
        """
        response = execute(
            self.client.table(TABLE).delete().eq("id", testimonial_id),
            "delete_testimonial",
            testimonial_id=testimonial_id,
        )

        testimonial = decode_row(Testimonial, response.data, "delete_testimonial")
        if testimonial is None:
            raise NotFoundError("testimonial", testimonial_id)

        if testimonial.image_url:
            logger.info(f"Testimonial {testimonial_id} deleted, photo kept in storage: {testimonial.image_url}")
        else:
            logger.info(f"Deleted testimonial: {testimonial_id}")
        self.invalidator.invalidate(paths.testimonial_paths())
        return testimonial

    def list_testimonials(self, featured_first: bool = True) -> list[TestimonialWithProduct]:
        """
        Testimonials newest first (featured ones on top when requested),
        each with the product it mentions.
        """
        query = self.client.table(TABLE).select("*")
        if featured_first:
            query = query.order("is_featured", desc=True)
        query = query.order("created_at", desc=True)

        response = execute(query, "list_testimonials")
        testimonials = decode_rows(Testimonial, response.data, "list_testimonials")

        product_ids = sorted({t.product_id for t in testimonials if t.product_id})
        products: dict[str, Product] = {}
        if product_ids:
            products_response = execute(
                self.client.table("products").select("*").in_("id", product_ids),
                "list_testimonial_products",
            )
            products = {
                p.id: p
                for p in decode_rows(Product, products_response.data, "list_testimonial_products")
            }

        return [
            TestimonialWithProduct(testimonial=t, product=products.get(t.product_id or ""))
            for t in testimonials
        ]
