from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.types import ReturnMethod
from supabase import PostgrestAPIError

from infrastructure.backend.errors import DataApiError
from infrastructure.backend.supabase_rest import SupabaseRestClient, apply_order, filter_value


@pytest.fixture
def supabase_client():
    client = MagicMock()
    client.supabase_key = "anon"
    return client


def _query(client):
    """The builder returned by client.table(); chained calls return itself."""
    query = MagicMock()
    for name in ("select", "insert", "update", "delete", "eq", "order"):
        getattr(query, name).return_value = query
    query.execute.return_value = SimpleNamespace(data=[])
    client.table.return_value = query
    return query


def test_filter_value_lowers_booleans():
    assert filter_value(True) == "true"
    assert filter_value(False) == "false"
    assert filter_value(5) == 5


def test_apply_order_reads_direction():
    query = MagicMock()
    apply_order(query, "created_at.desc")
    query.order.assert_called_once_with("created_at", desc=True)

    query = MagicMock()
    apply_order(query, "full_name.asc")
    query.order.assert_called_once_with("full_name", desc=False)


def test_select_builds_query_and_uses_token(supabase_client):
    query = _query(supabase_client)
    query.execute.return_value = SimpleNamespace(data=[{"id": "1"}])

    rows = SupabaseRestClient(supabase_client).select(
        "products", "*, baker:profiles(id)", filters={"baker_id": "B"}, order="created_at.desc", access_token="tok"
    )

    assert rows == [{"id": "1"}]
    supabase_client.postgrest.auth.assert_called_once_with("tok")
    supabase_client.table.assert_called_once_with("products")
    query.select.assert_called_once_with("*, baker:profiles(id)")
    query.eq.assert_called_once_with("baker_id", "B")
    query.order.assert_called_once_with("created_at", desc=True)


def test_select_without_token_uses_anon_key(supabase_client):
    _query(supabase_client)

    SupabaseRestClient(supabase_client).select("products")

    supabase_client.postgrest.auth.assert_called_once_with("anon")


def test_select_one(supabase_client):
    query = _query(supabase_client)
    rest = SupabaseRestClient(supabase_client)

    assert rest.select_one("profiles", filters={"id": "x"}) is None

    query.execute.return_value = SimpleNamespace(data=[{"id": "x"}])
    assert rest.select_one("profiles", filters={"id": "x"}) == {"id": "x"}

    query.execute.return_value = SimpleNamespace(data=[{"id": "x"}, {"id": "x"}])
    with pytest.raises(DataApiError):
        rest.select_one("profiles", filters={"id": "x"})


def test_insert_asks_for_minimal_return(supabase_client):
    query = _query(supabase_client)

    SupabaseRestClient(supabase_client).insert(
        "ratings", {"product_id": "P", "user_id": "U", "rating": 5}, access_token="tok"
    )

    supabase_client.table.assert_called_once_with("ratings")
    query.insert.assert_called_once_with(
        {"product_id": "P", "user_id": "U", "rating": 5}, returning=ReturnMethod.minimal
    )
    query.execute.assert_called_once()


def test_policy_rejection_raises_with_message(supabase_client):
    query = _query(supabase_client)
    query.execute.side_effect = PostgrestAPIError(
        {"code": "42501", "message": "new row violates row-level security policy", "hint": None, "details": None}
    )

    with pytest.raises(DataApiError) as exc:
        SupabaseRestClient(supabase_client).insert("orders", {"product_id": "P"})

    assert exc.value.code == "42501"
    assert "row-level security" in exc.value.message


def test_update_filters_rows(supabase_client):
    query = _query(supabase_client)

    SupabaseRestClient(supabase_client).update("profiles", {"id": "U"}, {"is_approved": True}, access_token="tok")

    query.update.assert_called_once_with({"is_approved": True}, returning=ReturnMethod.minimal)
    query.eq.assert_called_once_with("id", "U")


def test_unfiltered_update_and_delete_are_refused(supabase_client):
    query = _query(supabase_client)
    rest = SupabaseRestClient(supabase_client)

    with pytest.raises(DataApiError):
        rest.update("products", {}, {"price": 0})
    with pytest.raises(DataApiError):
        rest.delete("products", {})

    query.execute.assert_not_called()


def test_delete_by_id(supabase_client):
    query = _query(supabase_client)

    SupabaseRestClient(supabase_client).delete("products", {"id": "prod-1"}, access_token="tok")

    query.delete.assert_called_once_with(returning=ReturnMethod.minimal)
    query.eq.assert_called_once_with("id", "prod-1")


def test_network_failure_is_wrapped(supabase_client):
    query = _query(supabase_client)
    query.execute.side_effect = httpx.ReadTimeout("slow")

    with pytest.raises(DataApiError, match="Network error"):
        SupabaseRestClient(supabase_client).select("products")
