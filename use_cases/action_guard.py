"""Session re-check performed right before any mutating request."""

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from use_cases.session_models import LOGIN_ROUTE

GuardStatus = Literal["PROCEED", "REDIRECT"]


@dataclass(frozen=True)
class GuardResult:
    status: GuardStatus
    user_id: Optional[str] = None


def require_session(store, navigate: Callable[[str], None]) -> GuardResult:
    """
    Asks the store at call time; a missing session redirects to login without
    any notification. An expired token is refreshed inside get_session(); when
    that refresh is rejected the auth controller records the expiry for the
    login screen without a toast, so the redirect stays silent.
    """
    session = store.get_session()
    if session is None:
        navigate(LOGIN_ROUTE)
        return GuardResult(status="REDIRECT")
    return GuardResult(status="PROCEED", user_id=session.user_id)

