# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The service is built in the app lifespan and stored on app.state.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services import ContactUsService


def get_contact_us_service(request: Request) -> ContactUsService:
    """
    Get the ContactUsService created at startup.

    Tests override this dependency to inject in-memory collaborators.
    """
    return request.app.state.contact_us_service


# Type alias for dependency injection
ContactUsServiceDep = Annotated[ContactUsService, Depends(get_contact_us_service)]
