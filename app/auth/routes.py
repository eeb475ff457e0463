# =============================================================================
# app/auth/routes.py - Authorization Routes
# =============================================================================
# Token inspection endpoints. Login itself happens client-side against
# Supabase Auth; these routes only confirm what a token grants.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Get the user carried by the current token.

    Raises:
        401: If not authenticated
    """
    return user


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
