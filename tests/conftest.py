# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Wires every service against the in-memory Supabase fake (tests/fakes.py)
# - Provides an API TestClient with app.state populated by hand
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds its settings at import time

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("REVALIDATION_ENABLED", "false")

import pytest

from app.config import Settings
from core.actions import CatalogActions
from core.models import CategoryInput, ProductInput
from core.services import (
    CatalogService,
    CategoryService,
    ImageFile,
    ImageService,
    ProductService,
    StorageService,
)
from core.services import testimonial_service
from tests.fakes import FakeClock, FakeSupabase, RecordingInvalidator

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings from the test environment, independent of any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def client():
    """Fresh in-memory Supabase client."""
    return FakeSupabase()


@pytest.fixture
def invalidator():
    return RecordingInvalidator()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(client, settings, clock):
    return StorageService(client, settings, clock=clock)


@pytest.fixture
def category_service(client, invalidator):
    return CategoryService(client, invalidator)


@pytest.fixture
def product_service(client, storage, invalidator):
    return ProductService(client, storage, invalidator)


@pytest.fixture
def image_service(client, storage, invalidator):
    return ImageService(client, storage, invalidator)


@pytest.fixture
def testimonials(client, storage, invalidator):
    return testimonial_service.TestimonialService(client, storage, invalidator)


@pytest.fixture
def catalog(client):
    return CatalogService(client)


@pytest.fixture
def actions(category_service, product_service, image_service, testimonials):
    return CatalogActions(category_service, product_service, image_service, testimonials)


@pytest.fixture
def jpeg():
    """Factory for small JPEG uploads."""
    def make(filename: str = "nastar.jpg") -> ImageFile:
        return ImageFile(filename=filename, content=JPEG_BYTES, content_type="image/jpeg")
    return make


@pytest.fixture
def category(category_service):
    """A saved 'Kue Kering' category."""
    return category_service.create_category(CategoryInput(name="Kue Kering"))


@pytest.fixture
def product(product_service, category):
    """A saved, available product in the 'Kue Kering' category."""
    return product_service.create_product(
        ProductInput(name="Nastar Keju", price=85000, category_id=category.id)
    )
