# =============================================================================
# core/services/contact_us_service.py - Contact Request Business Logic
# =============================================================================
# Orchestrates validation, persistence and caching for contact requests.
# Separates HTTP concerns from database/business logic.
#
# The repository is synchronous (Supabase client), so every call is pushed
# to a worker thread and bounded by the request timeout.
# =============================================================================

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar
from uuid import UUID, uuid4

from pydantic import ValidationError

from app.exceptions import (
    ContactUsNotFoundError,
    ContactUsValidationError,
    PersistenceError,
    PersistenceTimeoutError,
)
from core.models.contact_us import ContactUsRecord
from core.services.validator import ContactUsValidator
from lib.cache import ReadThroughCache
from lib.pagination import PageWindow, paginate
from lib.supabase_client import ContactUsRepository, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContactUsService:
    """
    Service for contact request operations.

    Constructed once at startup with its collaborators and shared by all
    requests.
    """

    def __init__(
        self,
        repository: ContactUsRepository,
        cache: ReadThroughCache,
        validator: ContactUsValidator | None = None,
        timeout_seconds: float = 10.0,
    ):
        self.repository = repository
        self.cache = cache
        self.validator = validator or ContactUsValidator()
        self.timeout_seconds = timeout_seconds

    async def _call(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        """Run a repository call off the event loop with a timeout."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{operation} timed out after {self.timeout_seconds}s")
            raise PersistenceTimeoutError(operation, self.timeout_seconds) from e
        except SupabaseClientError as e:
            logger.error(f"{operation} failed: {e}")
            raise PersistenceError(operation, e.message) from e

    def _records(self, rows: list[dict[str, Any]]) -> list[ContactUsRecord]:
        """Parse rows, logging and skipping any that no longer fit the schema."""
        records = []
        for row in rows:
            try:
                records.append(ContactUsRecord.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed contact request {row.get('id')}: "
                    f"{e.error_count()} error(s)"
                )
        return records

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_requests(
        self,
        record_id: str | UUID | None = None,
        text: str | None = None,
    ) -> list[ContactUsRecord]:
        """
        List contact requests.

        Args:
            record_id: Exact id match
            text: Case-insensitive substring of the search column

        Returns:
            Matching records; every record when no filter is given
        """
        rows = await self._call("find", self.repository.find, record_id, text)
        return self._records(rows)

    async def get_request(self, record_id: str | UUID) -> ContactUsRecord:
        """
        Get one contact request through the read-through cache.

        Raises:
            ContactUsNotFoundError: If no record has this id
        """
        record_id_str = normalize_uuid(record_id)

        async def load() -> dict[str, Any] | None:
            return await self._call("find_by_id", self.repository.find_by_id, record_id_str)

        try:
            row = await asyncio.wait_for(
                self.cache.get_or_load(record_id_str, load),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise PersistenceTimeoutError("cached find_by_id", self.timeout_seconds) from e

        if row is None:
            raise ContactUsNotFoundError(record_id_str)
        return ContactUsRecord.model_validate(row)

    async def count_requests(self) -> int:
        return await self._call("count", self.repository.count)

    async def paginate_requests(
        self,
        page: int,
        rows_per_page: int,
    ) -> tuple[list[ContactUsRecord], PageWindow]:
        """
        Fetch one page of contact requests in creation order.

        A page past the last one returns an empty list.
        """
        total = await self.count_requests()
        window = paginate(page, rows_per_page, total)

        if not window.in_range:
            return [], window

        rows = await self._call(
            "find_page", self.repository.find_page, window.offset, window.limit
        )
        return self._records(rows), window

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_request(self, payload: Any) -> ContactUsRecord:
        """
        Validate and store a new contact request.

        Raises:
            ContactUsValidationError: With every violated field; nothing is stored
        """
        result = self.validator.validate(payload)
        if not result.ok:
            logger.info(f"Rejected contact request with {len(result.errors)} invalid field(s)")
            raise ContactUsValidationError(result.error_dicts())

        row = {
            **result.value.to_row(),
            "id": str(uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        stored = await self._call("insert", self.repository.insert, row)

        logger.info(f"Created contact request: {stored['id']}")
        return ContactUsRecord.model_validate(stored)

    async def update_request(self, record_id: str | UUID, changes: Any) -> ContactUsRecord | None:
        """
        Apply a full or partial update.

        The merged record must still pass validation. Unknown ids are a no-op.

        Returns:
            The updated record, or None when the id doesn't exist

        Raises:
            ContactUsValidationError: If the merged record is invalid
        """
        record_id_str = normalize_uuid(record_id)

        row = await self._call("find_by_id", self.repository.find_by_id, record_id_str)
        if row is None:
            logger.info(f"Update skipped, contact request not found: {record_id_str}")
            return None

        current = ContactUsRecord.model_validate(row)
        result = self.validator.validate_update(current, changes)
        if not result.ok:
            raise ContactUsValidationError(result.error_dicts())

        updated = await self._call(
            "update", self.repository.update, record_id_str, result.value.to_row()
        )
        await self.cache.evict(record_id_str)

        logger.info(f"Updated contact request: {record_id_str}")
        return ContactUsRecord.model_validate(updated) if updated else None

    async def delete_request(self, record_id: str | UUID) -> int:
        """Delete one request. Unknown ids are a no-op."""
        record_id_str = normalize_uuid(record_id)

        removed = await self._call("delete", self.repository.delete, record_id_str)
        await self.cache.evict(record_id_str)

        logger.info(f"Deleted {removed} contact request(s) for id {record_id_str}")
        return removed

    async def delete_requests(self, record_ids: list[str | UUID]) -> int:
        """Delete every request whose id is listed."""
        ids = [normalize_uuid(record_id) for record_id in record_ids]
        if not ids:
            return 0

        removed = await self._call("delete_many", self.repository.delete_many, ids)
        await self.cache.evict(*ids)

        logger.info(f"Bulk deleted {removed} of {len(ids)} contact request(s)")
        return removed

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    async def check_database(self) -> bool:
        try:
            await self.count_requests()
        except (PersistenceError, PersistenceTimeoutError):
            return False
        return True

    async def check_cache(self) -> bool:
        try:
            return await asyncio.wait_for(self.cache.ping(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            return False
