# =============================================================================
# tests/test_storage_service.py - Storage Service Tests
# =============================================================================
# Image validation, storage key layout and the public URL <-> key contract.
# =============================================================================

import re

import pytest

from app.config import Settings
from app.exceptions import (
    ImageTooLargeError,
    InvalidImageTypeError,
    StorageDeleteError,
    StorageUploadError,
)
from core.models import ProductImage
from core.services import StorageService, extract_storage_path


class TestExtractStoragePath:
    def test_recovers_key_from_public_url(self):
        url = "https://x.supabase.co/storage/v1/object/public/kue/p1/1700000000000.jpg"
        assert extract_storage_path(url, "kue") == "p1/1700000000000.jpg"

    def test_strips_query_string(self):
        url = "https://x.supabase.co/storage/v1/object/public/kue/testimonials/1-abc.png?t=1"
        assert extract_storage_path(url, "kue") == "testimonials/1-abc.png"

    def test_other_bucket_or_foreign_url(self):
        assert extract_storage_path("https://x.supabase.co/storage/v1/object/public/other/a.jpg", "kue") is None
        assert extract_storage_path("https://cdn.example.com/a.jpg", "kue") is None

    def test_round_trip_with_public_url(self, storage):
        key = storage.product_image_key("p1", "nastar.png")
        assert extract_storage_path(storage.get_public_url(key), "kue") == key


class TestValidateImage:
    @pytest.mark.parametrize("content_type", [
        "image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif", "IMAGE/PNG",
    ])
    def test_allowed_types(self, storage, content_type):
        storage.validate_image(content_type, 1024)

    @pytest.mark.parametrize("content_type", ["image/svg+xml", "text/plain", "application/pdf", None])
    def test_rejected_types(self, storage, content_type):
        with pytest.raises(InvalidImageTypeError) as exc_info:
            storage.validate_image(content_type, 1024)
        assert exc_info.value.status_code == 400

    def test_size_cap_is_inclusive(self, storage, settings):
        storage.validate_image("image/jpeg", settings.max_image_size_bytes)

        with pytest.raises(ImageTooLargeError):
            storage.validate_image("image/jpeg", settings.max_image_size_bytes + 1)

    def test_cap_comes_from_settings(self, client):
        service = StorageService(client, Settings(_env_file=None, MAX_IMAGE_SIZE_MB=1))

        with pytest.raises(ImageTooLargeError):
            service.validate_image("image/png", 1024 * 1024 + 1)


class TestKeys:
    def test_product_key_layout(self, storage):
        key = storage.product_image_key("p1", "Nastar.JPEG", "image/jpeg")
        assert re.fullmatch(r"p1/\d{13}\.jpeg", key)

    def test_product_keys_are_unique_per_call(self, storage):
        first = storage.product_image_key("p1", "a.jpg", "image/jpeg")
        assert first != storage.product_image_key("p1", "a.jpg", "image/jpeg")

    def test_testimonial_key_layout(self, storage):
        key = storage.testimonial_image_key("photo.png", "image/png")
        assert re.fullmatch(r"testimonials/\d{13}-[a-z0-9]{7}\.png", key)

    def test_missing_extension_comes_from_content_type(self, storage):
        assert storage.product_image_key("p1", "photo", "image/jpeg").endswith(".jpg")
        assert storage.product_image_key("p1", "photo", "image/webp").endswith(".webp")

    def test_path_in_filename_cannot_escape_key(self, storage):
        key = storage.testimonial_image_key("x.jpg/../../evil/payload", "image/jpeg")
        assert re.fullmatch(r"testimonials/\d{13}-[a-z0-9]{7}\.jpg", key)

    def test_extension_must_match_content_type(self, storage):
        assert storage.testimonial_image_key("shell.html", "image/jpeg").endswith(".jpg")
        assert storage.product_image_key("p1", "photo.png", "image/gif").endswith(".gif")

    def test_resolve_key_prefers_storage_path(self, storage):
        image = ProductImage(
            id="i1",
            product_id="p1",
            image_url="https://cdn.example.com/elsewhere.jpg",
            storage_path="p1/1.jpg",
        )
        assert storage.resolve_key(image) == "p1/1.jpg"

    def test_resolve_key_falls_back_to_url(self, storage):
        image = ProductImage(
            id="i1",
            product_id="p1",
            image_url=storage.get_public_url("p1/2.jpg"),
        )
        assert storage.resolve_key(image) == "p1/2.jpg"


class TestUploadAndRemove:
    def test_upload_stores_object_with_content_type(self, storage, client):
        storage.upload("p1/1.jpg", b"data", "image/jpeg")
        assert client.storage.objects[("kue", "p1/1.jpg")] == (b"data", "image/jpeg")

    def test_upload_failure_raises(self, storage, client):
        client.storage.failures.add("upload")

        with pytest.raises(StorageUploadError) as exc_info:
            storage.upload("p1/1.jpg", b"data", "image/jpeg")
        assert exc_info.value.status_code == 502

    def test_remove(self, storage, client):
        storage.upload("p1/1.jpg", b"data", "image/jpeg")
        storage.remove(["p1/1.jpg"])
        assert client.storage.keys() == []

    def test_remove_failure_raises(self, storage, client):
        client.storage.failures.add("remove")
        with pytest.raises(StorageDeleteError):
            storage.remove(["p1/1.jpg"])

    def test_remove_quietly_reports_leak(self, storage, client):
        storage.upload("p1/1.jpg", b"data", "image/jpeg")
        client.storage.failures.add("remove")

        assert storage.remove_quietly(["p1/1.jpg"]) is False
        assert client.storage.keys() == ["p1/1.jpg"]

    def test_remove_nothing_is_a_no_op(self, storage, client):
        client.storage.failures.add("remove")
        assert storage.remove_quietly([]) is True
