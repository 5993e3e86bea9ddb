import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest.types import ReturnMethod
from supabase import PostgrestAPIError

from infrastructure.backend.errors import DataApiError

log = logging.getLogger(__name__)


def filter_value(value: Any) -> Any:
    if isinstance(value, bool):
        return str(value).lower()
    return value


def apply_filters(query, filters: Optional[Dict[str, Any]]):
    for column, value in (filters or {}).items():
        query = query.eq(column, filter_value(value))
    return query


def apply_order(query, order: Optional[str]):
    """Accepts PostgREST style "column.asc" / "column.desc"."""
    if not order:
        return query
    column, _, direction = order.partition(".")
    return query.order(column, desc=direction == "desc")


class SupabaseRestClient:
    """
    Table access through the supabase client's PostgREST builder.
    Every call carries the caller's access token so row-level policies apply;
    without one the anon key is used.
    """

    def __init__(self, client):
        self._client = client
        self._anon_key = client.supabase_key

    def _table(self, table: str, access_token: Optional[str]):
        self._client.postgrest.auth(access_token or self._anon_key)
        return self._client.table(table)

    def _execute(self, query, table: str, op: str):
        try:
            return query.execute()
        except PostgrestAPIError as e:
            message = e.message or e.hint or f"{op} on {table} failed"
            log.error(f"❌ {op} on {table} failed: {e.code} {message}")
            raise DataApiError(str(message), code=e.code) from e
        except httpx.HTTPError as e:
            log.error(f"❌ {op} on {table} failed: {e}")
            raise DataApiError(f"Network error: {e}") from e

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query = apply_filters(self._table(table, access_token).select(columns), filters)
        query = apply_order(query, order)
        return self._execute(query, table, "select").data or []

    def select_one(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        access_token: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        rows = self.select(table, columns, filters=filters, access_token=access_token)
        if len(rows) > 1:
            raise DataApiError(f"Expected a single {table} row, got {len(rows)}")
        return rows[0] if rows else None

    def insert(self, table: str, record: Dict[str, Any], access_token: Optional[str] = None) -> None:
        query = self._table(table, access_token).insert(record, returning=ReturnMethod.minimal)
        self._execute(query, table, "insert")

    def update(
        self,
        table: str,
        filters: Dict[str, Any],
        fields: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> None:
        if not filters:
            raise DataApiError(f"Refusing to update {table} without a filter")
        query = self._table(table, access_token).update(fields, returning=ReturnMethod.minimal)
        self._execute(apply_filters(query, filters), table, "update")

    def delete(self, table: str, filters: Dict[str, Any], access_token: Optional[str] = None) -> None:
        if not filters:
            raise DataApiError(f"Refusing to delete from {table} without a filter")
        query = self._table(table, access_token).delete(returning=ReturnMethod.minimal)
        self._execute(apply_filters(query, filters), table, "delete")
