# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - contact_us.py: Contact request input, stored record and field errors
#
# These models define the "contract" between API and clients.
# =============================================================================

from .contact_us import (
    ContactUsCreate,
    ContactUsRecord,
    FieldError,
    RequesterInfo,
)

__all__ = [
    "ContactUsCreate",
    "ContactUsRecord",
    "FieldError",
    "RequesterInfo",
]
