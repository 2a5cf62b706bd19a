# =============================================================================
# core/services/image_service.py - Product Image Workflow
# =============================================================================
# Upload/delete of product photos, coupling storage objects to
# `product_images` rows.
#
# Upload order: validate -> upload object -> next display_order ->
# (clear old primary) -> insert row. Storage happens first, so any database
# failure afterwards removes the object it just uploaded.
#
# Delete order: read row -> delete row -> remove object. A missing row means
# the image is already gone and is not an error.
# =============================================================================

import logging
from dataclasses import dataclass

from supabase import Client

from app.exceptions import CatalogException, MissingFieldError, NotFoundError, PersistenceError
from app.revalidation import ViewInvalidator, paths
from core.models import BatchUploadResult, ProductImage, UploadedImage
from core.services.storage_service import StorageService
from lib.supabase_client import decode_row, decode_rows, execute

logger = logging.getLogger(__name__)

TABLE = "product_images"


@dataclass
class ImageFile:
    """An uploaded file as received from the client."""
    filename: str | None
    content: bytes
    content_type: str | None

    @property
    def size(self) -> int:
        return len(self.content)


class ImageService:
    """
    Service for product image operations.
    """

    def __init__(self, client: Client, storage: StorageService, invalidator: ViewInvalidator):
        self.client = client
        self.storage = storage
        self.invalidator = invalidator

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_images(self, product_id: str) -> list[ProductImage]:
        """Images of a product in display order."""
        response = execute(
            self.client.table(TABLE)
            .select("*")
            .eq("product_id", product_id)
            .order("display_order"),
            "list_product_images",
            product_id=product_id,
        )
        return decode_rows(ProductImage, response.data, "list_product_images")

    def get_image(self, image_id: str, product_id: str) -> ProductImage | None:
        response = execute(
            self.client.table(TABLE)
            .select("*")
            .eq("id", image_id)
            .eq("product_id", product_id)
            .limit(1),
            "get_product_image",
            image_id=image_id,
        )
        return decode_row(ProductImage, response.data, "get_product_image")

    def has_primary(self, product_id: str) -> bool:
        response = execute(
            self.client.table(TABLE)
            .select("id")
            .eq("product_id", product_id)
            .eq("is_primary", True)
            .limit(1),
            "find_primary_image",
            product_id=product_id,
        )
        return bool(response.data)

    def next_display_order(self, product_id: str) -> int:
        """Highest display_order of this product's images + 1 (1 for the first)."""
        response = execute(
            self.client.table(TABLE)
            .select("display_order")
            .eq("product_id", product_id)
            .order("display_order", desc=True)
            .limit(1),
            "max_image_order",
            product_id=product_id,
        )
        rows = response.data or []
        current = rows[0].get("display_order") if rows else None
        return (current or 0) + 1

    def clear_primary(self, product_id: str) -> None:
        """Unset is_primary on every image of the product."""
        execute(
            self.client.table(TABLE)
            .update({"is_primary": False})
            .eq("product_id", product_id)
            .eq("is_primary", True),
            "clear_primary_image",
            product_id=product_id,
        )

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    def upload_product_image(
        self,
        product_id: str,
        file: ImageFile,
        is_primary: bool = False,
    ) -> UploadedImage:
        """
        Upload one product image and record it.

        Args:
            product_id: Product the image belongs to
            file: The uploaded file
            is_primary: Make this the product's only primary image

        Returns:
            UploadedImage with public URL, storage key and the new row

        Raises:
            CatalogValidationError: Bad type/size, before storage is touched
            StorageUploadError: If the object upload fails
            PersistenceError: If recording the row fails (object removed again)
        """
        if not product_id:
            raise MissingFieldError("product_id")
        if file is None or not file.content:
            raise MissingFieldError("file")

        self.storage.validate_image(file.content_type, file.size)

        key = self.storage.product_image_key(product_id, file.filename, file.content_type)
        self.storage.upload(key, file.content, file.content_type)

        try:
            public_url = self.storage.get_public_url(key)
            display_order = self.next_display_order(product_id)

            if is_primary:
                self.clear_primary(product_id)

            response = execute(
                self.client.table(TABLE).insert({
                    "product_id": product_id,
                    "image_url": public_url,
                    "storage_path": key,
                    "is_primary": is_primary,
                    "display_order": display_order,
                }),
                "insert_product_image",
                product_id=product_id,
            )
            image = decode_row(ProductImage, response.data, "insert_product_image")
            if image is None:
                raise PersistenceError("Insert returned no data", operation="insert_product_image")

        except Exception:
            # Compensating delete: the row never made it, so the object is an orphan
            logger.warning(f"Recording image for product {product_id} failed, removing {key}")
            self.storage.remove_quietly([key])
            raise

        logger.info(
            f"Uploaded image {image.id} for product {product_id} "
            f"(order={display_order}, primary={is_primary})"
        )
        self.invalidator.invalidate(paths.product_image_paths(product_id))
        return UploadedImage(url=public_url, storage_path=key, image=image)

    def upload_product_images(
        self,
        product_id: str,
        files: list[ImageFile],
        first_is_primary: bool | None = None,
    ) -> BatchUploadResult:
        """
        Upload several images one after another, collecting failures.

        Args:
            product_id: Product the images belong to
            files: Files in the order the admin picked them
            first_is_primary: True marks the first file primary (new product),
                False never marks one, None marks the first file primary only
                when the product has no primary image yet (editing)

        Returns:
            BatchUploadResult; successful uploads are kept even if others fail
        """
        if first_is_primary is None:
            first_is_primary = not self.has_primary(product_id)

        result = BatchUploadResult()
        for index, file in enumerate(files):
            name = getattr(file, "filename", None) or "file"
            try:
                uploaded = self.upload_product_image(
                    product_id,
                    file,
                    is_primary=first_is_primary and index == 0,
                )
                result.uploaded.append(uploaded)
            except CatalogException as e:
                result.failed.append(f"{name}: {e.message}")
            except Exception:
                logger.exception(f"Unexpected error uploading {name} for product {product_id}")
                result.failed.append(f"{name}: Upload failed")

        if result.failed:
            logger.warning(f"Batch upload for product {product_id}: {result.summary()}")
        return result

    # -------------------------------------------------------------------------
    # Delete / Primary
    # -------------------------------------------------------------------------

    def delete_product_image(self, image_id: str, product_id: str) -> ProductImage | None:
        """
        Delete an image row, then its storage object.

        Returns:
            The deleted row, or None if it was already gone

        Raises:
            PersistenceError: If the row delete fails (object is kept)
        """
        image = self.get_image(image_id, product_id)
        if image is None:
            logger.info(f"Image {image_id} already deleted")
            return None

        execute(
            self.client.table(TABLE)
            .delete()
            .eq("id", image_id)
            .eq("product_id", product_id),
            "delete_product_image",
            image_id=image_id,
        )

        key = self.storage.resolve_key(image)
        if key:
            self.storage.remove_quietly([key])
        else:
            logger.warning(f"No storage key recoverable for image {image_id}: {image.image_url}")

        logger.info(f"Deleted image {image_id} of product {product_id}")
        self.invalidator.invalidate(paths.product_image_paths(product_id))
        return image

    def set_primary_image(self, image_id: str, product_id: str) -> ProductImage:
        """
        Make an existing image the product's only primary image.

        Raises:
            NotFoundError: If the image doesn't belong to the product
        """
        if self.get_image(image_id, product_id) is None:
            raise NotFoundError("image", image_id)

        self.clear_primary(product_id)
        response = execute(
            self.client.table(TABLE)
            .update({"is_primary": True})
            .eq("id", image_id),
            "set_primary_image",
            image_id=image_id,
        )
        image = decode_row(ProductImage, response.data, "set_primary_image")
        if image is None:
            raise NotFoundError("image", image_id)

        logger.info(f"Image {image_id} is now primary for product {product_id}")
        self.invalidator.invalidate(paths.product_image_paths(product_id))
        return image
