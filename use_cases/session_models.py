"""Session and profile DTOs shared across application layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Optional

AuthEvent = Literal["SIGNED_IN", "SIGNED_OUT", "TOKEN_REFRESHED", "USER_UPDATED"]

ADMIN_ROUTE = "/admin"
BAKER_DASHBOARD_ROUTE = "/baker/dashboard"
BROWSE_ROUTE = "/products"
LOGIN_ROUTE = "/login"


class Role(str, Enum):
    BUYER = "buyer"
    BAKER = "baker"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Unknown or missing role text falls back to BUYER."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.BUYER


ROLE_DESTINATIONS: Dict[Role, str] = {
    Role.ADMIN: ADMIN_ROUTE,
    Role.BAKER: BAKER_DASHBOARD_ROUTE,
    Role.BUYER: BROWSE_ROUTE,
}


@dataclass(frozen=True)
class Session:
    access_token: str
    refresh_token: str
    user_id: str
    email: Optional[str] = None
    expires_at: Optional[int] = None

    def is_expired(self, now_ts: float, leeway: int = 10) -> bool:
        if self.expires_at is None:
            return False
        return now_ts >= self.expires_at - leeway


@dataclass(frozen=True)
class Profile:
    id: str
    email: str
    role: Role = Role.BUYER
    full_name: Optional[str] = None
    phone: Optional[str] = None
    is_approved: Optional[bool] = None
    is_blocked: Optional[bool] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=str(row["id"]),
            email=row.get("email") or "",
            role=Role.parse(row.get("role")),
            full_name=row.get("full_name"),
            phone=row.get("phone"),
            is_approved=row.get("is_approved"),
            is_blocked=row.get("is_blocked"),
        )


def destination_for(role: Any) -> str:
    if not isinstance(role, Role):
        role = Role.parse(role)
    return ROLE_DESTINATIONS[role]


def is_admin(profile: Profile) -> bool:
    return profile.role is Role.ADMIN


def is_approved(profile: Profile) -> bool:
    return bool(profile.is_approved) and not profile.is_blocked
