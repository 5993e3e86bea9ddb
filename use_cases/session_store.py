"""Per-browser-session holder of the authenticated session and its event stream."""

import itertools
import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple

from infrastructure.backend.errors import AuthApiError, BackendError
from use_cases.session_models import AuthEvent, Session

log = logging.getLogger(__name__)

AuthStateHandler = Callable[[AuthEvent, Optional[Session]], None]


class Subscription:
    def __init__(self, store: "SessionStore", key: int):
        self._store = store
        self._key = key
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._store._remove_subscriber(self._key)
            self.active = False


class SessionStore:
    """
    Owns the current session. Mutated only through sign-in, sign-out and token
    refresh; everyone else reads it via get_session() or listens through
    on_auth_state_change().

    Events are delivered one at a time in emission order. An event emitted by a
    handler while another event is being delivered is queued behind it.
    Callbacks registered with after_dispatch() run once the queue is drained.
    """

    def __init__(self, auth_client, session: Optional[Session] = None, clock: Callable[[], float] = time.time):
        self._auth = auth_client
        self._session = session
        self._clock = clock
        self._lock = threading.RLock()
        self._subscribers: Dict[int, AuthStateHandler] = {}
        self._keys = itertools.count(1)
        self._queue: Deque[Tuple[AuthEvent, Optional[Session]]] = deque()
        self._deferred: Deque[Callable[[], None]] = deque()
        self._dispatching = False

    # --- reads ---

    def get_session(self) -> Optional[Session]:
        """Returns the live session, refreshing an expired access token first."""
        with self._lock:
            session = self._session
        if session is None:
            return None
        if not session.is_expired(self._clock()):
            return session
        return self._refresh(session)

    def access_token(self) -> Optional[str]:
        with self._lock:
            return self._session.access_token if self._session else None

    # --- writes ---

    def sign_in_with_password(self, email: str, password: str) -> Session:
        session = self._auth.sign_in_with_password(email, password)
        with self._lock:
            self._session = session
        log.info(f"Signed in subject {session.user_id}")
        self._emit("SIGNED_IN", session)
        return session

    def sign_out(self) -> None:
        """Idempotent: always ends with no local session and a SIGNED_OUT event."""
        with self._lock:
            session, self._session = self._session, None
        if session is not None:
            try:
                self._auth.sign_out(session.access_token)
            except BackendError as e:
                # The server-side token may already be gone; the local session is dropped regardless.
                log.warning(f"Remote sign-out failed: {e.message}")
        self._emit("SIGNED_OUT", None)

    def notify_user_updated(self) -> None:
        with self._lock:
            session = self._session
        if session is not None:
            self._emit("USER_UPDATED", session)

    def _refresh(self, session: Session) -> Optional[Session]:
        try:
            fresh = self._auth.refresh_session(session.refresh_token)
        except AuthApiError as e:
            if e.status is None:
                log.warning(f"Token refresh unreachable, keeping current session: {e.message}")
                return session
            log.info(f"Token refresh rejected: {e.message}")
            with self._lock:
                if self._session is session:
                    self._session = None
            self._emit("TOKEN_REFRESHED", None)
            return None
        with self._lock:
            self._session = fresh
        self._emit("TOKEN_REFRESHED", fresh)
        return fresh

    # --- events ---

    def on_auth_state_change(self, handler: AuthStateHandler) -> Subscription:
        with self._lock:
            key = next(self._keys)
            self._subscribers[key] = handler
        return Subscription(self, key)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def after_dispatch(self, callback: Callable[[], None]) -> None:
        """Runs callback after every queued event is delivered, or right away when idle."""
        with self._lock:
            if self._dispatching:
                self._deferred.append(callback)
                return
        callback()

    def _remove_subscriber(self, key: int) -> None:
        with self._lock:
            self._subscribers.pop(key, None)

    def _emit(self, event: AuthEvent, session: Optional[Session]) -> None:
        with self._lock:
            self._queue.append((event, session))
            if self._dispatching:
                return
            self._dispatching = True
            try:
                while self._queue or self._deferred:
                    if not self._queue:
                        callback = self._deferred.popleft()
                        try:
                            callback()
                        except Exception as e:
                            log.error(f"Deferred auth callback failed: {e}", exc_info=True)
                        continue
                    current_event, current_session = self._queue.popleft()
                    for handler in list(self._subscribers.values()):
                        try:
                            handler(current_event, current_session)
                        except Exception as e:
                            log.error(f"Auth state handler failed on {current_event}: {e}", exc_info=True)
            finally:
                self._dispatching = False
