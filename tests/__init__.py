# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Contact Us API:
# - test_models.py: Schema and validator tests
# - test_pagination.py: Page window arithmetic
# - test_cache.py: Read-through cache TTL behaviour
# - test_contact_us_service.py: Service against in-memory doubles
# - test_contact_us_api.py: HTTP endpoints through TestClient
# - test_auth.py: Bearer token gate
# - test_health.py: Health, root and hello-world routes
#
# Run tests with: pytest
# =============================================================================
