"""
Authentication lifecycle controller.

Observes the SessionStore for the lifetime of a browser session: routes a
freshly signed-in subject by role, compensates with a forced sign-out when the
subject's profile cannot be resolved, and exposes a login() operation with
loading/error state for the login screen.
"""

import logging
from typing import Callable, Optional, Tuple

from infrastructure.backend.errors import AuthApiError
from use_cases.domain_models import Notification
from use_cases.session_models import AuthEvent, Session, destination_for

log = logging.getLogger(__name__)

PROFILE_ACCESS_ERROR = "Error accessing user profile"
SESSION_EXPIRED_ERROR = "Your session has expired. Please log in again."
INVALID_CREDENTIALS_ERROR = "Invalid email or password. Please try again."
EMAIL_NOT_CONFIRMED_ERROR = "Please verify your email address before logging in."
GENERIC_LOGIN_ERROR = "An error occurred during login"


def describe_auth_error(err: AuthApiError) -> Tuple[str, bool]:
    """
    Maps an identity provider failure to (user message, session_expired).
    Unclassified failures pass the provider message through verbatim.
    """
    code = (err.code or "").lower()
    text = (err.message or "").lower()
    if code == "invalid_credentials" or "invalid login credentials" in text:
        return INVALID_CREDENTIALS_ERROR, False
    if code == "email_not_confirmed" or "email not confirmed" in text:
        return EMAIL_NOT_CONFIRMED_ERROR, False
    if code == "refresh_token_not_found" or "refresh token" in text or "refresh_token" in text:
        return SESSION_EXPIRED_ERROR, True
    return err.message or GENERIC_LOGIN_ERROR, False


class AuthController:
    def __init__(
        self,
        store,
        profile_resolver,
        navigate: Callable[[str], None],
        notify: Callable[[Notification], None],
    ):
        self._store = store
        self._profiles = profile_resolver
        self._navigate = navigate
        self._notify = notify
        self._subscription = None
        self.loading = False
        self.error = ""

    # --- lifecycle ---

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    def mount(self) -> "AuthController":
        if self.mounted:
            return self
        if self._store.get_session() is None:
            # Clears leftovers of an invalid or expired token.
            self._safe_sign_out()
        self._subscription = self._store.on_auth_state_change(self._handle_event)
        log.debug("Auth controller mounted")
        return self

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            log.debug("Auth controller unmounted")

    def __enter__(self) -> "AuthController":
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # --- events ---

    def _handle_event(self, event: AuthEvent, session: Optional[Session]) -> None:
        if not self.mounted:
            return
        if event == "SIGNED_IN" and session is not None:
            self._route_signed_in(session)
        elif event == "SIGNED_OUT":
            self.error = ""
        elif event == "TOKEN_REFRESHED" and session is None:
            self._expire_session()
        else:
            log.debug(f"Auth event {event} needs no action")

    def _route_signed_in(self, session: Session) -> None:
        try:
            profile = self._profiles.fetch_profile(session.user_id)
        except Exception as e:
            log.error(f"Error fetching user profile for {session.user_id}: {e}", exc_info=True)
            if not self.mounted:
                return
            self._notify(Notification("Error", PROFILE_ACCESS_ERROR, "destructive"))
            self._sign_out_with_error(PROFILE_ACCESS_ERROR)
            return
        if not self.mounted:
            return
        destination = destination_for(profile.role)
        log.info(f"Routing {profile.role.value} {profile.id} to {destination}")
        self._navigate(destination)

    def _expire_session(self) -> None:
        """
        No toast here: an expiry found by the action guard must stay a silent
        redirect. The message is shown by the login screen through `error`.
        """
        self._sign_out_with_error(SESSION_EXPIRED_ERROR)

    def _sign_out_with_error(self, message: str) -> None:
        # SIGNED_OUT clears the error, so it is set once that event has been delivered.
        self._safe_sign_out()
        self._store.after_dispatch(lambda: self._set_error(message))

    def _set_error(self, message: str) -> None:
        if self.mounted:
            self.error = message

    def _safe_sign_out(self) -> None:
        try:
            self._store.sign_out()
        except Exception as e:
            log.error(f"Sign-out failed: {e}", exc_info=True)

    # --- operations ---

    def login(self, email: str, password: str) -> bool:
        """
        Signs in with credentials. Navigation is left to the SIGNED_IN event.
        Returns True when the identity provider accepted the credentials.
        """
        self.loading = True
        self.error = ""
        try:
            self._store.sign_in_with_password(email.strip(), password)
            return True
        except AuthApiError as e:
            log.info(f"Login rejected: {e.message}")
            message, expired = describe_auth_error(e)
            if expired:
                self._safe_sign_out()
            self._fail_login(message)
        except Exception as e:
            log.error(f"Login error: {e}", exc_info=True)
            self._fail_login(GENERIC_LOGIN_ERROR)
        finally:
            self.loading = False
        return False

    def logout(self) -> None:
        self._safe_sign_out()

    def _fail_login(self, message: str) -> None:
        self.error = message
        self._notify(Notification("Login Failed", message, "destructive"))
