# =============================================================================
# app/auth/__init__.py - Authorization Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth tokens.
#
# Usage:
#   from app.auth import get_current_user, require_user, AuthUser
# =============================================================================

from app.auth.dependencies import (
    decode_token,
    get_current_user,
    require_user,
)
from app.auth.models import AuthUser

__all__ = [
    "decode_token",
    "get_current_user",
    "require_user",
    "AuthUser",
]
