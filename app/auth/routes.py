# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-in itself happens client-side with Supabase Auth; the admin UI calls
# this route to check that its stored token still grants admin access.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_admin
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_admin)
) -> dict:
    """
    Verify that the current token is valid and belongs to an admin.

    Raises:
        401: If token is invalid or expired
        403: If the user isn't an admin
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
