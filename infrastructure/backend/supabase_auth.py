import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

import httpx
from supabase import AuthError, AuthRetryableError

from infrastructure.backend.errors import AuthApiError
from use_cases.session_models import Session

log = logging.getLogger(__name__)


@contextmanager
def translate_auth_errors(operation: str):
    """Re-raises supabase auth failures as AuthApiError; unreachable server means status None."""
    try:
        yield
    except AuthRetryableError as e:
        log.error(f"Auth {operation} could not reach the server: {e.message}")
        raise AuthApiError(f"Network error: {e.message}") from e
    except AuthError as e:
        status = getattr(e, "status", None) or None
        log.info(f"Auth {operation} answered {status}: {e.message}")
        raise AuthApiError(str(e.message), status=status, code=getattr(e, "code", None)) from e
    except httpx.HTTPError as e:
        log.error(f"Auth {operation} failed: {e}")
        raise AuthApiError(f"Network error: {e}") from e


def session_from_response(response) -> Session:
    session = response.session
    if session is None:
        raise AuthApiError("No session returned by the identity provider")
    user = session.user or response.user
    return Session(
        access_token=session.access_token,
        refresh_token=session.refresh_token or "",
        user_id=str(user.id) if user is not None else "",
        email=user.email if user is not None else None,
        expires_at=session.expires_at,
    )


class SupabaseAuthClient:
    """
    Identity operations on top of a supabase client. The wrapped client belongs
    to one browser session; its own auto-refresh is off so SessionStore stays
    the only owner of the token lifecycle.
    """

    def __init__(self, client):
        self._auth = client.auth

    def sign_in_with_password(self, email: str, password: str) -> Session:
        with translate_auth_errors("sign-in"):
            response = self._auth.sign_in_with_password({"email": email, "password": password})
        return session_from_response(response)

    def refresh_session(self, refresh_token: str) -> Session:
        with translate_auth_errors("refresh"):
            response = self._auth.refresh_session(refresh_token)
        return session_from_response(response)

    def sign_out(self, access_token: str) -> None:
        with translate_auth_errors("sign-out"):
            self._auth.admin.sign_out(access_token)

    def sign_up(self, email: str, password: str, metadata: Optional[dict] = None) -> Dict[str, Any]:
        """
        Registers a new identity. With email confirmation enabled the result
        carries only the user, otherwise also an access token.
        """
        with translate_auth_errors("sign-up"):
            response = self._auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata or {}}}
            )
        user = response.user
        return {
            "user": {"id": str(user.id), "email": user.email} if user is not None else None,
            "access_token": response.session.access_token if response.session is not None else None,
        }
