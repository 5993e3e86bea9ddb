"""
Guarded write operations.

Each executor validates its input, re-checks the session through the action
guard and performs exactly one data-store write scoped by the acting subject.
Outcomes are reported through the injected notify callable; a guard redirect
is silent.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Optional, Tuple

from infrastructure.backend.errors import BackendError
from use_cases.action_guard import require_session
from use_cases.domain_models import Notification

log = logging.getLogger(__name__)

MutationStatus = Literal["SUCCESS", "FAILED", "REDIRECTED", "INVALID"]

ORDERS_ROUTE = "/orders"
UNEXPECTED_ERROR = "An unexpected error occurred"


@dataclass(frozen=True)
class MutationResult:
    status: MutationStatus
    message: str = ""
    data: Any = None


@dataclass(frozen=True)
class ActionContext:
    store: Any
    navigate: Callable[[str], None]
    notify: Callable[[Notification], None]


def whole_number(value: Any) -> Optional[int]:
    """Integer value of value, or None for bools, fractions and non-numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _execute(
    ctx: ActionContext,
    write: Callable[[str], None],
    success: Notification,
    failure_title: str,
    after: Optional[Callable[[], Any]] = None,
) -> MutationResult:
    guard = require_session(ctx.store, ctx.navigate)
    if guard.status == "REDIRECT":
        return MutationResult(status="REDIRECTED")
    try:
        write(guard.user_id)
    except BackendError as e:
        log.error(f"{failure_title}: {e.message}")
        message = e.message or UNEXPECTED_ERROR
        ctx.notify(Notification(failure_title, message, "destructive"))
        return MutationResult(status="FAILED", message=message)
    except Exception as e:
        log.error(f"{failure_title}: {e}", exc_info=True)
        ctx.notify(Notification(failure_title, UNEXPECTED_ERROR, "destructive"))
        return MutationResult(status="FAILED", message=UNEXPECTED_ERROR)

    ctx.notify(success)
    data = None
    if after is not None:
        try:
            data = after()
        except Exception as e:
            # The write is committed; only the follow-up read failed.
            log.error(f"Follow-up after '{success.title}' failed: {e}", exc_info=True)
    return MutationResult(status="SUCCESS", message=success.description, data=data)


# --- buyer actions ---

def place_order(ctx: ActionContext, orders, product_id: str, quantity: Any) -> MutationResult:
    quantity = whole_number(quantity)
    if quantity is None:
        return MutationResult(status="INVALID", message="Quantity must be a whole number")
    if quantity < 1:
        return MutationResult(status="INVALID", message="Quantity must be at least 1")

    def write(user_id: str) -> None:
        orders.place_order({
            "product_id": product_id,
            "user_id": user_id,
            "quantity": quantity,
            "status": "pending",
            "payment_status": "pending",
        })

    return _execute(
        ctx,
        write,
        Notification("Order placed successfully", "Your order has been placed and is pending payment."),
        "Failed to place order",
        after=lambda: ctx.navigate(ORDERS_ROUTE),
    )


def submit_rating(ctx: ActionContext, ratings, product_id: str, rating: Any) -> MutationResult:
    rating = whole_number(rating)
    if rating is None:
        return MutationResult(status="INVALID", message="Rating must be a whole number")
    if not 1 <= rating <= 5:
        return MutationResult(status="INVALID", message="Rating must be between 1 and 5")

    def write(user_id: str) -> None:
        ratings.submit_rating({"product_id": product_id, "user_id": user_id, "rating": rating})

    return _execute(
        ctx,
        write,
        Notification("Rating submitted", "Thank you for rating this product!"),
        "Failed to submit rating",
    )


# --- profile ---

def validate_profile_form(full_name: str, phone: str) -> Optional[str]:
    if len((full_name or "").strip()) < 2:
        return "Full name must be at least 2 characters"
    if len((phone or "").strip()) < 10:
        return "Phone number must be at least 10 characters"
    return None


def update_profile(ctx: ActionContext, profiles, full_name: str, phone: str) -> MutationResult:
    problem = validate_profile_form(full_name, phone)
    if problem:
        return MutationResult(status="INVALID", message=problem)

    # The subject always comes from the live session, never from the form.
    def write(user_id: str) -> None:
        profiles.update_profile(user_id, {"full_name": full_name.strip(), "phone": phone.strip()})

    return _execute(
        ctx,
        write,
        Notification("Success", "Profile updated successfully"),
        "Failed to update profile",
    )


# --- baker products ---

def validate_product_form(
    name: str, price: Any, category: str, description: Optional[str] = None
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Returns (fields, None) when valid, (None, problem) otherwise."""
    name = (name or "").strip()
    category = (category or "").strip()
    if not name:
        return None, "Name is required"
    try:
        price = float(price)
    except (TypeError, ValueError):
        return None, "Price must be a number"
    if not math.isfinite(price) or price < 0:
        return None, "Price must be positive"
    if not category:
        return None, "Category is required"
    description = (description or "").strip() or None
    return {"name": name, "price": price, "description": description, "category": category}, None


def create_product(ctx: ActionContext, products, name, price, category, description=None) -> MutationResult:
    fields, problem = validate_product_form(name, price, category, description)
    if problem:
        return MutationResult(status="INVALID", message=problem)

    def write(user_id: str) -> None:
        products.create_product({**fields, "baker_id": user_id})

    return _execute(
        ctx,
        write,
        Notification("Product created", "Your product has been created successfully."),
        "Failed to create product",
    )


def update_product(ctx: ActionContext, products, product_id: str, name, price, category,
                   description=None) -> MutationResult:
    fields, problem = validate_product_form(name, price, category, description)
    if problem:
        return MutationResult(status="INVALID", message=problem)
    return _execute(
        ctx,
        lambda _user_id: products.update_product(product_id, fields),
        Notification("Product updated", "Your product has been updated successfully."),
        "Failed to update product",
    )


def delete_product(ctx: ActionContext, products, product_id: str) -> MutationResult:
    return _execute(
        ctx,
        lambda _user_id: products.delete_product(product_id),
        Notification("Product deleted", "Your product has been removed."),
        "Failed to delete product",
    )


# --- admin ---

def set_baker_approval(ctx: ActionContext, profiles, baker_id: str, approved: bool) -> MutationResult:
    """Result data carries the re-fetched baker list on success."""
    verb = "approved" if approved else "unapproved"
    return _execute(
        ctx,
        lambda _user_id: profiles.update_profile(baker_id, {"is_approved": approved}),
        Notification("Success", f"Baker {verb} successfully"),
        "Failed to update baker status",
        after=profiles.list_bakers,
    )


def set_baker_block(ctx: ActionContext, profiles, baker_id: str, blocked: bool) -> MutationResult:
    verb = "blocked" if blocked else "unblocked"
    return _execute(
        ctx,
        lambda _user_id: profiles.update_profile(baker_id, {"is_blocked": blocked}),
        Notification("Success", f"Baker {verb} successfully"),
        "Failed to update baker status",
        after=profiles.list_bakers,
    )
