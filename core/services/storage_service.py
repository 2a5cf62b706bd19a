# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image validation, key generation, upload, public URLs and removal
# against the single catalog bucket.
#
# Key layout:
#   product images:      {product_id}/{epoch_millis}.{ext}
#   testimonial images:  testimonials/{epoch_millis}-{random7}.{ext}
#
# Public URLs embed /storage/v1/object/public/{bucket}/ followed by the key,
# which is how keys are recovered for rows that predate the storage_path
# column.
# =============================================================================

import logging
import secrets
import string
import time
from typing import Callable

from supabase import Client

from app.config import Settings
from app.exceptions import (
    ImageTooLargeError,
    InvalidImageTypeError,
    StorageDeleteError,
    StorageUploadError,
)
from core.models import ProductImage
from lib.utils import file_extension

logger = logging.getLogger(__name__)

PUBLIC_PATH_MARKER = "/storage/v1/object/public/{bucket}/"

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


def extract_storage_path(public_url: str, bucket: str) -> str | None:
    """
    Recover a storage key from a public URL.

    Example:
        extract_storage_path(
            "https://x.supabase.co/storage/v1/object/public/kue/p1/1700000000000.jpg",
            "kue",
        )  # "p1/1700000000000.jpg"

    Returns:
        The key, or None if the URL doesn't point into the bucket
    """
    marker = PUBLIC_PATH_MARKER.format(bucket=bucket)
    index = public_url.find(marker)
    if index == -1:
        return None
    key = public_url[index + len(marker):].split("?", 1)[0]
    return key or None


class StorageService:
    """
    Service for Supabase Storage operations on catalog images.
    """

    def __init__(
        self,
        client: Client,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.bucket = settings.STORAGE_BUCKET
        self.allowed_types = settings.allowed_image_types_list
        self.max_size_bytes = settings.max_image_size_bytes
        self.max_size_mb = settings.MAX_IMAGE_SIZE_MB
        self._clock = clock

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_image(self, content_type: str | None, size_bytes: int) -> None:
        """
        Reject files that are not allowed raster images or exceed the cap.

        Raises:
            InvalidImageTypeError: If the MIME type isn't allowed
            ImageTooLargeError: If the file is larger than the cap
        """
        if (content_type or "").lower() not in self.allowed_types:
            raise InvalidImageTypeError(content_type, self.allowed_types)

        if size_bytes > self.max_size_bytes:
            raise ImageTooLargeError(size_bytes, self.max_size_mb)

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def _millis(self) -> int:
        return int(self._clock() * 1000)

    def product_image_key(self, product_id: str, filename: str | None, content_type: str | None) -> str:
        return f"{product_id}/{self._millis()}.{file_extension(filename, content_type)}"

    def testimonial_image_key(self, filename: str | None, content_type: str | None) -> str:
        suffix = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(7))
        return f"testimonials/{self._millis()}-{suffix}.{file_extension(filename, content_type)}"

    def resolve_key(self, image: ProductImage) -> str | None:
        """Storage key of an image row: stored column first, URL fallback."""
        return image.storage_path or extract_storage_path(image.image_url, self.bucket)

    # -------------------------------------------------------------------------
    # Upload / URL / Remove
    # -------------------------------------------------------------------------

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """
        Upload image bytes under the given key.

        Returns:
            The storage key

        Raises:
            StorageUploadError: If upload fails
        """
        try:
            self.client.storage.from_(self.bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type},
            )
        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise StorageUploadError(path, str(e)) from e

        logger.info(f"Uploaded image to storage: {path}")
        return path

    def get_public_url(self, path: str) -> str:
        """Public URL for a key in the catalog bucket."""
        return self.client.storage.from_(self.bucket).get_public_url(path)

    def remove(self, paths: list[str]) -> None:
        """
        Delete objects from the bucket.

        Raises:
            StorageDeleteError: If storage rejects the removal
        """
        if not paths:
            return

        try:
            self.client.storage.from_(self.bucket).remove(paths)
        except Exception as e:
            logger.error(f"Storage delete failed for {paths}: {e}")
            raise StorageDeleteError(paths, str(e)) from e

        logger.info(f"Deleted {len(paths)} object(s) from storage: {paths}")

    def remove_quietly(self, paths: list[str]) -> bool:
        """
        Best-effort removal used after the database is already consistent.

        A failure leaves orphaned objects behind; it is logged, never raised.

        Returns:
            True if removed (or nothing to remove)
        """
        try:
            self.remove(paths)
            return True
        except StorageDeleteError as e:
            logger.warning(f"Leaked storage objects {paths}: {e.message}")
            return False
