# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - supabase_client.py: Supabase client factory and contact request queries
# - cache.py: Redis read-through cache for single-record lookups
# - pagination.py: Page window arithmetic
# - utils.py: Shared utilities (error base class, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    ContactUsRepository,
    SupabaseClientError,
    create_supabase_client,
)
from lib.cache import ReadThroughCache, create_redis_client
from lib.pagination import PageWindow, coerce_positive_int, paginate
from lib.utils import ApplicationError, normalize_uuid

__all__ = [
    # Supabase
    "ContactUsRepository",
    "SupabaseClientError",
    "create_supabase_client",
    # Cache
    "ReadThroughCache",
    "create_redis_client",
    # Pagination
    "PageWindow",
    "coerce_positive_int",
    "paginate",
    # Utils
    "ApplicationError",
    "normalize_uuid",
]
