from unittest.mock import MagicMock

import pytest

from infrastructure.backend.errors import DataApiError
from use_cases import mutations
from use_cases.mutations import ActionContext
from use_cases.session_models import Profile, Role, Session


@pytest.fixture
def signed_in_ctx():
    store = MagicMock()
    store.get_session.return_value = Session(access_token="tok", refresh_token="r", user_id="U")
    return ActionContext(store=store, navigate=MagicMock(), notify=MagicMock())


@pytest.fixture
def anonymous_ctx():
    store = MagicMock()
    store.get_session.return_value = None
    return ActionContext(store=store, navigate=MagicMock(), notify=MagicMock())


def test_order_while_unauthenticated_redirects_silently(anonymous_ctx):
    orders = MagicMock()

    result = mutations.place_order(anonymous_ctx, orders, "P", 2)

    assert result.status == "REDIRECTED"
    anonymous_ctx.navigate.assert_called_once_with("/login")
    orders.place_order.assert_not_called()
    anonymous_ctx.notify.assert_not_called()


def test_two_unauthenticated_orders_produce_two_redirects_and_no_writes(anonymous_ctx):
    orders = MagicMock()

    mutations.place_order(anonymous_ctx, orders, "P", 1)
    mutations.place_order(anonymous_ctx, orders, "P", 1)

    assert anonymous_ctx.navigate.call_count == 2
    orders.place_order.assert_not_called()


def test_place_order_writes_pending_order_and_navigates(signed_in_ctx):
    orders = MagicMock()

    result = mutations.place_order(signed_in_ctx, orders, "P", "3")

    assert result.status == "SUCCESS"
    orders.place_order.assert_called_once_with({
        "product_id": "P",
        "user_id": "U",
        "quantity": 3,
        "status": "pending",
        "payment_status": "pending",
    })
    signed_in_ctx.navigate.assert_called_once_with("/orders")
    assert signed_in_ctx.notify.call_args[0][0].title == "Order placed successfully"


@pytest.mark.parametrize("quantity", [0, -1, "abc", None, 1.9, "1.5", True])
def test_place_order_rejects_bad_quantity_before_guard(signed_in_ctx, quantity):
    orders = MagicMock()

    result = mutations.place_order(signed_in_ctx, orders, "P", quantity)

    assert result.status == "INVALID"
    signed_in_ctx.store.get_session.assert_not_called()
    orders.place_order.assert_not_called()


def test_place_order_failure_notifies_destructively(signed_in_ctx):
    orders = MagicMock()
    orders.place_order.side_effect = DataApiError("new row violates row-level security policy", status=403)

    result = mutations.place_order(signed_in_ctx, orders, "P", 1)

    assert result.status == "FAILED"
    notification = signed_in_ctx.notify.call_args[0][0]
    assert notification.variant == "destructive"
    assert notification.title == "Failed to place order"
    assert "row-level security" in notification.description
    signed_in_ctx.navigate.assert_not_called()


def test_unexpected_failure_gets_generic_message(signed_in_ctx):
    ratings = MagicMock()
    ratings.submit_rating.side_effect = KeyError("oops")

    result = mutations.submit_rating(signed_in_ctx, ratings, "P", 4)

    assert result.status == "FAILED"
    assert signed_in_ctx.notify.call_args[0][0].description == mutations.UNEXPECTED_ERROR


def test_rating_five_is_written_once_then_success(signed_in_ctx):
    ratings = MagicMock()

    result = mutations.submit_rating(signed_in_ctx, ratings, "P", 5)

    assert result.status == "SUCCESS"
    ratings.submit_rating.assert_called_once_with({"product_id": "P", "user_id": "U", "rating": 5})
    notification = signed_in_ctx.notify.call_args[0][0]
    assert notification.title == "Rating submitted"
    assert notification.variant == "default"


@pytest.mark.parametrize("rating", [0, 6, "x", 4.7, False, float("inf")])
def test_rating_out_of_range_is_invalid(signed_in_ctx, rating):
    ratings = MagicMock()
    assert mutations.submit_rating(signed_in_ctx, ratings, "P", rating).status == "INVALID"
    ratings.submit_rating.assert_not_called()


def test_update_profile_targets_session_subject(signed_in_ctx):
    profiles = MagicMock()

    result = mutations.update_profile(signed_in_ctx, profiles, "  Jane Baker ", "+12345678901")

    assert result.status == "SUCCESS"
    profiles.update_profile.assert_called_once_with("U", {"full_name": "Jane Baker", "phone": "+12345678901"})


@pytest.mark.parametrize("full_name, phone", [("J", "+12345678901"), ("Jane", "12345")])
def test_update_profile_validates_input(signed_in_ctx, full_name, phone):
    profiles = MagicMock()
    result = mutations.update_profile(signed_in_ctx, profiles, full_name, phone)
    assert result.status == "INVALID"
    profiles.update_profile.assert_not_called()


def test_create_product_is_owned_by_subject(signed_in_ctx):
    products = MagicMock()

    result = mutations.create_product(signed_in_ctx, products, " Sourdough ", "7.5", "Bread", "")

    assert result.status == "SUCCESS"
    products.create_product.assert_called_once_with({
        "name": "Sourdough",
        "price": 7.5,
        "description": None,
        "category": "Bread",
        "baker_id": "U",
    })


@pytest.mark.parametrize(
    "name, price, category",
    [
        ("", 1, "Bread"),
        ("Bun", -1, "Bread"),
        ("Bun", "free", "Bread"),
        ("Bun", 1, "  "),
        ("Bun", "inf", "Bread"),
        ("Bun", float("nan"), "Bread"),
    ],
)
def test_product_form_validation(signed_in_ctx, name, price, category):
    products = MagicMock()
    result = mutations.create_product(signed_in_ctx, products, name, price, category)
    assert result.status == "INVALID"
    products.create_product.assert_not_called()


def test_update_and_delete_product_are_scoped_by_id(signed_in_ctx):
    products = MagicMock()

    mutations.update_product(signed_in_ctx, products, "prod-1", "Bun", 0, "Pastry", "Soft")
    mutations.delete_product(signed_in_ctx, products, "prod-1")

    products.update_product.assert_called_once_with(
        "prod-1", {"name": "Bun", "price": 0.0, "description": "Soft", "category": "Pastry"}
    )
    products.delete_product.assert_called_once_with("prod-1")


def test_toggle_approval_refetches_bakers(signed_in_ctx):
    profiles = MagicMock()
    fresh = [Profile(id="B", email="b@x.io", role=Role.BAKER, is_approved=True)]
    profiles.list_bakers.return_value = fresh

    result = mutations.set_baker_approval(signed_in_ctx, profiles, "B", True)

    assert result.status == "SUCCESS"
    assert result.data == fresh
    profiles.update_profile.assert_called_once_with("B", {"is_approved": True})
    assert signed_in_ctx.notify.call_args[0][0].description == "Baker approved successfully"


def test_failed_toggle_does_not_refetch(signed_in_ctx):
    profiles = MagicMock()
    profiles.update_profile.side_effect = DataApiError("permission denied", status=403)

    result = mutations.set_baker_block(signed_in_ctx, profiles, "B", True)

    assert result.status == "FAILED"
    profiles.list_bakers.assert_not_called()


def test_whole_float_quantity_is_accepted(signed_in_ctx):
    orders = MagicMock()

    result = mutations.place_order(signed_in_ctx, orders, "P", 2.0)

    assert result.status == "SUCCESS"
    assert orders.place_order.call_args[0][0]["quantity"] == 2


def test_toggle_failure_of_refetch_still_succeeds(signed_in_ctx):
    profiles = MagicMock()
    profiles.list_bakers.side_effect = DataApiError("timeout")

    result = mutations.set_baker_block(signed_in_ctx, profiles, "B", False)

    assert result.status == "SUCCESS"
    assert result.data is None
