"""Route access orchestration (application layer)."""

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from use_cases.session_models import (
    ADMIN_ROUTE,
    BAKER_DASHBOARD_ROUTE,
    BROWSE_ROUTE,
    LOGIN_ROUTE,
    Role,
)

log = logging.getLogger(__name__)

AuthFlowStatus = Literal["CONTINUE", "STOP"]

PUBLIC_ROUTES = ("/", LOGIN_ROUTE, "/register", "/baker/register")
PRODUCT_DETAIL_PREFIX = "/products/"
ROUTE_ROLES = {
    ADMIN_ROUTE: (Role.ADMIN,),
    BAKER_DASHBOARD_ROUTE: (Role.BAKER,),
    "/baker/products": (Role.BAKER,),
}


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for route access checks."""

    status: AuthFlowStatus
    reason: str
    redirect_to: Optional[str] = None


def is_public(route: str) -> bool:
    # Product details are browsable anonymously; their actions are guarded.
    return route in PUBLIC_ROUTES or route.startswith(PRODUCT_DETAIL_PREFIX)


def check_route_access(route: str, store, profiles) -> AuthFlowResult:
    """
    Decides whether the current subject may render a route. Role checks here
    only pick which screen is shown; data access is still enforced by the
    backend policies.
    """
    if is_public(route):
        return AuthFlowResult(status="CONTINUE", reason="public")

    session = store.get_session()
    if session is None:
        return AuthFlowResult(status="STOP", reason="auth_required", redirect_to=LOGIN_ROUTE)

    allowed = ROUTE_ROLES.get(route)
    if allowed is None:
        return AuthFlowResult(status="CONTINUE", reason="authenticated")

    try:
        profile = profiles.fetch_profile(session.user_id)
    except Exception as e:
        log.error(f"Route check for {route} could not load profile: {e}")
        return AuthFlowResult(status="STOP", reason="profile_unavailable", redirect_to=LOGIN_ROUTE)
    if profile.role not in allowed:
        return AuthFlowResult(status="STOP", reason="forbidden_role", redirect_to=BROWSE_ROUTE)
    return AuthFlowResult(status="CONTINUE", reason="authenticated")
