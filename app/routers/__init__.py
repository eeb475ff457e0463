# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - contact_us.py: Contact request CRUD endpoints
# - hello_world.py: Smoke-test greeting
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import contact_us
from . import hello_world

__all__ = [
    "health",
    "contact_us",
    "hello_world",
]
