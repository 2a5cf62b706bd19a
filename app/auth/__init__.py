# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based admin authentication using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_admin, AuthUser
#
#   @router.delete("/admin/products/{id}")
#   async def delete(user: AuthUser = Depends(get_current_admin)):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_admin, get_current_user
from app.auth.models import AuthUser

__all__ = [
    "get_current_admin",
    "get_current_user",
    "AuthUser",
]
