# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    def test_only_url_and_service_key_are_required(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

        settings = Settings(
            _env_file=None,
            SUPABASE_URL="https://x.supabase.co",
            SUPABASE_SERVICE_KEY="service-key",
        )

        assert settings.STORAGE_BUCKET == "kue"
        assert not hasattr(settings, "SUPABASE_ANON_KEY")

    def test_missing_service_key_fails(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None, SUPABASE_URL="https://x.supabase.co")

    def test_derived_lists(self):
        settings = Settings(
            _env_file=None,
            ALLOWED_IMAGE_TYPES="image/PNG, image/jpeg",
            ADMIN_EMAILS=" Owner@Kue.id ,",
            MAX_IMAGE_SIZE_MB=2,
        )

        assert settings.allowed_image_types_list == ["image/png", "image/jpeg"]
        assert settings.admin_emails_list == ["owner@kue.id"]
        assert settings.max_image_size_bytes == 2 * 1024 * 1024
