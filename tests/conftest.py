# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Wires the service to in-memory Supabase and Redis doubles
# - Provides a TestClient with the service dependency overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_contact_us_service
from app.main import app
from core.services import ContactUsService, ContactUsValidator
from lib.cache import ReadThroughCache
from lib.supabase_client import ContactUsRepository
from tests.fakes import FakeRedis, FakeSupabaseClient, ManualClock


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_contact_request():
    """A valid create body in API (camelCase) form."""
    return {
        "talkAbout": "website",
        "timeFrame": "3 months",
        "projectType": "e-commerce",
        "budget": "10k-20k",
        "description": "We need a new storefront with checkout.",
        "requester": {
            "name": "Jane Doe",
            "companyName": "Acme",
            "email": "jane@example.com",
            "phoneNumber": "+1 555 0100",
        },
    }


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def supabase_client():
    return FakeSupabaseClient()


@pytest.fixture
def redis_client(clock):
    return FakeRedis(clock=clock)


@pytest.fixture
def repository(supabase_client):
    return ContactUsRepository(supabase_client, table="contact_us", search_column="description")


@pytest.fixture
def cache(redis_client):
    return ReadThroughCache(redis_client, ttl_seconds=3, namespace="contact-us")


@pytest.fixture
def service(repository, cache):
    return ContactUsService(
        repository=repository,
        cache=cache,
        validator=ContactUsValidator(),
        timeout_seconds=5.0,
    )


@pytest.fixture
def client(service):
    """TestClient bound to the in-memory service. Lifespan is not run."""
    app.dependency_overrides[get_contact_us_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
