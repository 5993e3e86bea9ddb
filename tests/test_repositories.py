from unittest.mock import MagicMock

import pytest

from infrastructure.backend.errors import DataApiError
from infrastructure.repositories.order_repository import OrderRepository, RatingRepository
from infrastructure.repositories.product_repository import ProductRepository
from infrastructure.repositories.profile_repository import PROFILE_COLUMNS, ProfileRepository
from use_cases.session_models import Role


def _token():
    return "tok"


def test_fetch_profile_maps_row():
    client = MagicMock()
    client.select_one.return_value = {"id": "U", "email": "u@x.io", "role": "Baker", "is_approved": True}
    repo = ProfileRepository(client, _token)

    profile = repo.fetch_profile("U")

    assert profile.role is Role.BAKER
    assert profile.is_approved is True
    client.select_one.assert_called_once_with(
        "profiles", PROFILE_COLUMNS, filters={"id": "U"}, access_token="tok"
    )


def test_missing_profile_raises():
    client = MagicMock()
    client.select_one.return_value = None

    with pytest.raises(DataApiError):
        ProfileRepository(client, _token).fetch_profile("ghost")


def test_list_bakers_filters_by_role():
    client = MagicMock()
    client.select.return_value = [{"id": "B1", "role": "baker"}, {"id": "B2", "role": "baker"}]

    bakers = ProfileRepository(client, _token).list_bakers()

    assert [b.id for b in bakers] == ["B1", "B2"]
    assert client.select.call_args[1]["filters"] == {"role": "baker"}


def test_product_not_found():
    client = MagicMock()
    client.select_one.return_value = None

    with pytest.raises(DataApiError, match="Product not found"):
        ProductRepository(client, _token).get_product("nope")


def test_product_row_with_embedded_baker():
    client = MagicMock()
    client.select.return_value = [{
        "id": 7,
        "name": "Rye",
        "price": "4.50",
        "category": "Bread",
        "baker_id": "B",
        "average_rating": 4.5,
        "order_count": 3,
        "baker": {"id": "B", "full_name": "Ann", "phone": "+1 555 0100"},
    }]

    [product] = ProductRepository(client, _token).list_products()

    assert product.id == "7"
    assert product.price == 4.5
    assert product.baker.full_name == "Ann"
    assert product.order_count == 3


def test_product_writes_use_id_filter():
    client = MagicMock()
    repo = ProductRepository(client, _token)

    repo.update_product("P", {"price": 2.0})
    repo.delete_product("P")

    client.update.assert_called_once_with("products", {"id": "P"}, {"price": 2.0}, access_token="tok")
    client.delete.assert_called_once_with("products", {"id": "P"}, access_token="tok")


def test_rating_insert_goes_to_ratings_table():
    client = MagicMock()

    RatingRepository(client, _token).submit_rating({"product_id": "P", "user_id": "U", "rating": 5})

    client.insert.assert_called_once_with(
        "ratings", {"product_id": "P", "user_id": "U", "rating": 5}, access_token="tok"
    )


def test_user_orders_carry_product_totals():
    client = MagicMock()
    client.select.return_value = [{
        "id": "O1",
        "product_id": "P",
        "user_id": "U",
        "quantity": 3,
        "status": "pending",
        "payment_status": "pending",
        "product": {"name": "Rye", "price": 4.5},
    }]

    [order] = OrderRepository(client, _token).list_user_orders("U")

    assert order.product_name == "Rye"
    assert order.total == 13.5
    assert client.select.call_args[1]["filters"] == {"user_id": "U"}
