# =============================================================================
# tests/test_models.py - Model and Input Normalization Tests
# =============================================================================
# Unit tests for the Pydantic models and the helpers they use:
# - Admin input is trimmed and blank fields become None
# - Prices keep only their digits; blank never becomes 0
# - Slugs fall back to the name
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

import core.models as models
from core.models import (
    ActionResult,
    BatchUploadResult,
    CategoryInput,
    ProductDetail,
    ProductImage,
    ProductInput,
)
from lib.utils import blank_to_none, file_extension, normalize_price, slugify


# =============================================================================
# Utility Tests
# =============================================================================

class TestSlugify:
    """Tests for slugify()."""

    @pytest.mark.parametrize("text,expected", [
        ("Kue Kering", "kue-kering"),
        ("  Snack Box!! ", "snack-box"),
        ("Nasi  Kotak -- Spesial", "nasi-kotak-spesial"),
        ("Tumpeng", "tumpeng"),
        ("!!!", ""),
    ])
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestNormalizePrice:
    """Tests for normalize_price()."""

    @pytest.mark.parametrize("value,expected", [
        (None, None),
        ("", None),
        ("   ", None),
        ("abc", None),
        ("150.000", 150000),
        ("Rp 25.000", 25000),
        (25000, 25000),
        (12500.0, 12500),
        (0, 0),
    ])
    def test_normalize_price(self, value, expected):
        assert normalize_price(value) == expected

    @pytest.mark.parametrize("value", [-1, -5000.0, "-5000", "  -Rp 5.000"])
    def test_negative_rejected(self, value):
        with pytest.raises(ValueError):
            normalize_price(value)

    def test_bool_is_not_a_price(self):
        assert normalize_price(True) is None


class TestSmallHelpers:
    def test_blank_to_none(self):
        assert blank_to_none("  ") is None
        assert blank_to_none("") is None
        assert blank_to_none("x") == "x"
        assert blank_to_none(0) == 0

    def test_file_extension(self):
        assert file_extension("nastar.JPG", "image/jpeg") == "jpg"
        assert file_extension("nastar.jpeg", "image/jpg") == "jpeg"
        assert file_extension("archive.tar.png", "image/png") == "png"
        assert file_extension("photo", "image/gif") == "gif"
        assert file_extension(None, "image/webp") == "webp"
        assert file_extension("trailing.", "image/jpeg") == "jpg"

    @pytest.mark.parametrize("filename,content_type,expected", [
        ("x.jpg/../../evil/payload", "image/jpeg", "jpg"),
        ("shell.html", "image/png", "png"),
        ("photo.png", "image/avif", "avif"),
        ("photo.png", "image/svg+xml", "jpg"),
        ("photo.png", None, "jpg"),
    ])
    def test_file_extension_follows_content_type(self, filename, content_type, expected):
        assert file_extension(filename, content_type) == expected


# =============================================================================
# Input Model Tests
# =============================================================================

class TestCategoryInput:
    """Tests for CategoryInput."""

    def test_slug_defaults_to_slugified_name(self):
        data = CategoryInput(name="  Kue Kering ")

        assert data.name == "Kue Kering"
        assert data.slug == "kue-kering"

    def test_blank_slug_and_description_become_none_or_derived(self):
        data = CategoryInput(name="Snack Box", slug="  ", description="")

        assert data.slug == "snack-box"
        assert data.description is None

    def test_explicit_slug_is_normalized(self):
        data = CategoryInput(name="Kue Basah", slug="Jajan Pasar")
        assert data.slug == "jajan-pasar"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            CategoryInput(name="   ")

    def test_to_row_excludes_display_order(self):
        row = CategoryInput(name="Tumpeng").to_row()
        assert row == {"name": "Tumpeng", "slug": "tumpeng", "description": None}


class TestProductInput:
    """Tests for ProductInput."""

    def test_blank_price_is_none_not_zero(self):
        data = ProductInput(name="Nastar", price="")
        assert data.price is None

    def test_formatted_price_keeps_digits(self):
        data = ProductInput(name="Nastar", price="Rp 150.000")
        assert data.price == 150000

    def test_blank_optional_fields_become_none(self):
        data = ProductInput(name="Nastar", description=" ", category_id="")

        assert data.description is None
        assert data.category_id is None
        assert data.is_available is True

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ProductInput(name="")

    @pytest.mark.parametrize("price", [-5000, "-5000"])
    def test_negative_price_rejected(self, price):
        with pytest.raises(ValidationError):
            ProductInput(name="Nastar", price=price)


class TestTestimonialInput:
    """Tests for TestimonialInput."""

    def test_valid_input_is_stripped(self):
        data = models.TestimonialInput(
            customer_name="  Ibu Sari ",
            message="  Enak sekali, anak-anak suka!  ",
            product_id="",
        )

        assert data.customer_name == "Ibu Sari"
        assert data.message == "Enak sekali, anak-anak suka!"
        assert data.product_id is None
        assert data.to_row()["is_featured"] is False

    @pytest.mark.parametrize("customer_name,message", [
        ("A", "Enak sekali, pasti pesan lagi"),
        ("Ibu Sari", "Enak"),
        ("Ibu Sari", "x" * 501),
        ("x" * 101, "Enak sekali, pasti pesan lagi"),
    ])
    def test_length_limits(self, customer_name, message):
        with pytest.raises(ValidationError):
            models.TestimonialInput(customer_name=customer_name, message=message)


# =============================================================================
# Result Model Tests
# =============================================================================

class TestResults:
    def test_action_result_failed(self):
        result = ActionResult.failed("Category not found", "CATEGORY_NOT_FOUND", 404)

        assert result.success is False
        assert result.ok is False
        assert result.data is None
        assert result.status_code == 404

    def test_action_result_serializes_models(self):
        image = ProductImage(id="i1", product_id="p1", image_url="https://x/y.jpg")
        result = ActionResult.succeeded(image, status_code=201)

        dumped = result.model_dump(mode="json")
        assert dumped["data"]["id"] == "i1"
        assert dumped["status_code"] == 201
        assert dumped["error"] is None

    def test_batch_summary(self):
        batch = BatchUploadResult(failed=["a.txt: Unsupported"])
        assert batch.attempted == 1
        assert batch.summary() == "0 photo(s) uploaded, 1 failed"


class TestProductDetail:
    def _image(self, image_id: str, primary: bool = False) -> ProductImage:
        return ProductImage(
            id=image_id,
            product_id="p1",
            image_url=f"https://x/{image_id}.jpg",
            is_primary=primary,
        )

    def test_primary_image_prefers_flag(self):
        detail = ProductDetail(
            product=models.Product(id="p1", name="Nastar"),
            images=[self._image("a"), self._image("b", primary=True)],
        )
        assert detail.primary_image.id == "b"

    def test_primary_image_falls_back_to_first(self):
        detail = ProductDetail(
            product=models.Product(id="p1", name="Nastar"),
            images=[self._image("a"), self._image("b")],
        )
        assert detail.primary_image.id == "a"

    def test_primary_image_none_without_images(self):
        detail = ProductDetail(product=models.Product(id="p1", name="Nastar"))
        assert detail.primary_image is None
        assert detail.model_dump()["primary_image"] is None
