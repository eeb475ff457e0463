# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides the persistence layer for contact requests:
# - create_supabase_client(): builds the shared Supabase client at startup
# - ContactUsRepository: typed queries against the contact_us table
#
# The nested `requester` object is stored as a JSONB column, so each row is
# a self-contained document.
#
# The Supabase client is synchronous. Callers running inside the event loop
# should dispatch repository methods to a worker thread (see ContactUsService).
#
# Usage:
#   client = create_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   repository = ContactUsRepository(client, table="contact_us")
#   rows = repository.find(text="website")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Raised for connectivity loss, rejected queries and unexpected responses.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


def create_supabase_client(url: str, key: str) -> Client:
    """
    Create a Supabase client.

    Uses the service_role key which bypasses Row Level Security (RLS).
    This is appropriate for server-side operations.

    Raises:
        SupabaseClientError: If client creation fails
    """
    try:
        client = create_client(url, key)
    except Exception as e:
        raise SupabaseClientError(
            message=f"Failed to create Supabase client: {e}",
            code="CLIENT_INIT_FAILED",
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
        ) from e
    logger.info("Supabase client initialized successfully")
    return client


def _escape_like(text: str) -> str:
    """
    Escape LIKE wildcards so user text is matched literally.

    PostgREST rewrites every `*` in a like pattern to `%`, and a backslash
    does not protect it. A `*` therefore becomes the single-character `_`
    wildcard, and callers narrow the rows with `_contains_literal`.
    """
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")


def _contains_literal(value: Any, text: str) -> bool:
    return text.casefold() in str(value or "").casefold()


class ContactUsRepository:
    """
    Queries against the contact requests table.

    Every method returns plain row dicts (snake_case columns) and wraps
    driver failures in SupabaseClientError.
    """

    def __init__(
        self,
        client: Client,
        table: str = "contact_us",
        search_column: str = "description",
    ):
        self.client = client
        self.table = table
        self.search_column = search_column

    def _query(self):
        return self.client.table(self.table)

    def _fail(self, operation: str, error: Exception, **details: Any) -> SupabaseClientError:
        return SupabaseClientError(
            message=f"Failed to {operation}: {error}",
            code=f"{operation.upper().replace(' ', '_')}_FAILED",
            details={"table": self.table, **details},
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find(
        self,
        record_id: str | UUID | None = None,
        text: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Find rows by exact id and/or case-insensitive text match.

        With neither filter, returns every row.
        """
        try:
            query = self._query().select("*")
            if record_id:
                query = query.eq("id", normalize_uuid(record_id))
            if text:
                query = query.ilike(self.search_column, f"%{_escape_like(text)}%")
            response = query.order("created_at").order("id").execute()
        except Exception as e:
            raise self._fail("find contact requests", e, id=record_id, text=text) from e

        rows = response.data or []
        if text and "*" in text:
            rows = [row for row in rows if _contains_literal(row.get(self.search_column), text)]
        logger.debug(f"Found {len(rows)} rows in {self.table}")
        return rows

    def find_by_id(self, record_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a single row, or None if it doesn't exist."""
        record_id_str = normalize_uuid(record_id)
        try:
            response = (
                self._query()
                .select("*")
                .eq("id", record_id_str)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise self._fail("fetch contact request", e, id=record_id_str) from e

        rows = response.data or []
        return rows[0] if rows else None

    def count(self) -> int:
        """Exact number of rows in the table."""
        try:
            response = (
                self._query()
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise self._fail("count contact requests", e) from e

        return response.count or 0

    def find_page(self, offset: int, limit: int) -> list[dict[str, Any]]:
        """
        Fetch a window of rows in creation order.

        Args:
            offset: Number of rows to skip
            limit: Maximum number of rows to return
        """
        try:
            response = (
                self._query()
                .select("*")
                .order("created_at")
                .order("id")
                .range(offset, offset + limit - 1)
                .execute()
            )
        except Exception as e:
            raise self._fail("fetch contact request page", e, offset=offset, limit=limit) from e

        return response.data or []

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new row.

        Returns:
            The stored row as returned by the database

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        try:
            response = self._query().insert(row).execute()
        except Exception as e:
            raise self._fail("insert contact request", e, id=row.get("id")) from e

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": self.table, "id": row.get("id")},
            )
        return response.data[0]

    def update(self, record_id: str | UUID, fields: dict[str, Any]) -> dict[str, Any] | None:
        """Replace the given columns; returns the updated row or None if absent."""
        record_id_str = normalize_uuid(record_id)
        try:
            response = (
                self._query()
                .update(fields)
                .eq("id", record_id_str)
                .execute()
            )
        except Exception as e:
            raise self._fail("update contact request", e, id=record_id_str) from e

        rows = response.data or []
        return rows[0] if rows else None

    def delete(self, record_id: str | UUID) -> int:
        """Delete one row. Returns the number of rows removed (0 or 1)."""
        record_id_str = normalize_uuid(record_id)
        try:
            response = self._query().delete().eq("id", record_id_str).execute()
        except Exception as e:
            raise self._fail("delete contact request", e, id=record_id_str) from e

        return len(response.data or [])

    def delete_many(self, record_ids: list[str | UUID]) -> int:
        """Delete every row whose id is in record_ids."""
        ids = [normalize_uuid(record_id) for record_id in record_ids]
        if not ids:
            return 0
        try:
            response = self._query().delete().in_("id", ids).execute()
        except Exception as e:
            raise self._fail("delete contact requests", e, ids=ids) from e

        return len(response.data or [])
