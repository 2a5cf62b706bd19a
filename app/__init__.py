# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: Per-request service wiring
# - exceptions.py: Catalog error taxonomy and handlers
# - auth/: Supabase JWT verification for admin routes
# - revalidation/: Renderer cache invalidation (Redis pub/sub + WebSocket)
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
