# =============================================================================
# app/routers/hello_world.py - Hello World Endpoint
# =============================================================================
# Smoke-test route mounted next to the contact-us resource.
# =============================================================================

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def hello_world(name: str = "World"):
    """Greet the caller."""
    return {"message": f"Hello, {name}!"}
