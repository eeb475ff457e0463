# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the contact request pipeline:
# - models/: Pydantic schemas for data validation
# - services/: Validation, persistence orchestration and caching
#
# Routers in app/ stay thin and delegate here.
# =============================================================================
