# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog business logic:
# - models/: Pydantic schemas for rows, inputs and results
# - services/: Supabase-backed services (raise CatalogException subclasses)
# - actions.py: Result-returning boundary used by the API layer
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
