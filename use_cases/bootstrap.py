"""Startup orchestration for one browser session."""

from dataclasses import dataclass
from typing import Literal, Tuple
import logging

import backend
from infrastructure.backend.errors import BackendConfigError
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]
    reason: str = ""


def run_startup() -> StartupResult:
    """Initialise session state and mount the auth controller exactly once per session."""
    executed_steps = []

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    try:
        backend.load_settings()
    except BackendConfigError as e:
        log.error(f"Startup stopped: {e.message}")
        return StartupResult(status="STOP", planned_steps=tuple(executed_steps), reason=e.message)
    executed_steps.append("load_settings")

    # Query the current session before subscribing, so an event fired right
    # after an empty session check is still observed.
    controller = session_manager.get_controller()
    if not controller.mounted:
        controller.mount()
        executed_steps.append("mount_auth_controller")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
