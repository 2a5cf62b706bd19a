# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the bakery catalog API:
# - fakes.py: In-memory Supabase client used by every service test
# - test_models.py: Input normalization and model validation
# - test_storage_service.py: Image validation, keys, URL/key contract
# - test_*_service.py: Service behavior against the fake store
# - test_actions.py: The never-raising action boundary, end to end
# - test_routers.py: HTTP surface through FastAPI's TestClient
# - test_revalidation.py: Invalidation events and renderer fan-out
#
# Run tests with: poetry run pytest
# =============================================================================
