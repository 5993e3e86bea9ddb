"""Application layer contracts for orchestrating high-level flows."""

from .action_guard import GuardResult, require_session
from .auth_controller import AuthController, describe_auth_error
from .auth_flow import AuthFlowResult, AuthFlowStatus, check_route_access
from .domain_models import Notification, Order, Product
from .session_models import Profile, Role, Session, destination_for, is_admin, is_approved
from .session_store import SessionStore, Subscription

__all__ = [
    "AuthController",
    "AuthFlowResult",
    "AuthFlowStatus",
    "GuardResult",
    "Notification",
    "Order",
    "Product",
    "Profile",
    "Role",
    "Session",
    "SessionStore",
    "Subscription",
    "check_route_access",
    "describe_auth_error",
    "destination_for",
    "is_admin",
    "is_approved",
    "require_session",
]
