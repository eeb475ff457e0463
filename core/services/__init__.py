# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .contact_us_service import ContactUsService
from .validator import ContactUsValidator, ValidationResult

__all__ = [
    "ContactUsService",
    "ContactUsValidator",
    "ValidationResult",
]
