"""Buyer and baker sign-up orchestration (application layer)."""

import logging
import re
from dataclasses import dataclass
from typing import Literal, Optional

from infrastructure.backend.errors import AuthApiError, BackendError
from use_cases.session_models import Role

log = logging.getLogger(__name__)

RegistrationStatus = Literal["REGISTERED", "INVALID", "FAILED"]

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class RegistrationResult:
    status: RegistrationStatus
    message: str
    user_id: Optional[str] = None


def describe_signup_error(err: AuthApiError) -> str:
    if err.message == "Email address is invalid":
        return "Please enter a valid email address"
    if err.message == "User already registered":
        return "This email is already registered. Please try logging in instead."
    return err.message or "An error occurred during registration"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_credentials(email: str, password: str) -> Optional[str]:
    if not _EMAIL_RE.match(email):
        return "Please enter a valid email address"
    if len(password or "") < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def _user_id_from_signup(payload: dict) -> Optional[str]:
    user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
    user_id = user.get("id") if isinstance(user, dict) else None
    return str(user_id) if user_id else None


def register_buyer(auth_client, email: str, password: str, full_name: str = "") -> RegistrationResult:
    email = normalize_email(email)
    problem = validate_credentials(email, password)
    if problem:
        return RegistrationResult(status="INVALID", message=problem)
    try:
        payload = auth_client.sign_up(email, password, {"full_name": full_name.strip()})
    except AuthApiError as e:
        return RegistrationResult(status="FAILED", message=describe_signup_error(e))
    log.info(f"Registered buyer {email}")
    return RegistrationResult(
        status="REGISTERED",
        message="Registration successful! Please check your email to verify your account.",
        user_id=_user_id_from_signup(payload),
    )


def register_baker(auth_client, rest_client, email: str, password: str, full_name: str, phone: str) -> RegistrationResult:
    """
    Signs up the identity, then promotes the freshly created profile to the
    baker role. The profile row itself is created by the backend on sign-up.
    """
    email = normalize_email(email)
    problem = validate_credentials(email, password)
    if not problem and len((full_name or "").strip()) < 2:
        problem = "Full name must be at least 2 characters"
    if not problem and len((phone or "").strip()) < 10:
        problem = "Phone number must be at least 10 characters"
    if problem:
        return RegistrationResult(status="INVALID", message=problem)

    try:
        payload = auth_client.sign_up(email, password, {"full_name": full_name.strip()})
    except AuthApiError as e:
        return RegistrationResult(status="FAILED", message=describe_signup_error(e))

    user_id = _user_id_from_signup(payload)
    if not user_id:
        return RegistrationResult(status="FAILED", message="An error occurred during registration")

    try:
        rest_client.update(
            "profiles",
            {"id": user_id},
            {"role": Role.BAKER.value, "phone": phone.strip()},
            access_token=payload.get("access_token"),
        )
    except BackendError as e:
        log.error(f"Failed to set baker role for {user_id}: {e.message}")
        return RegistrationResult(
            status="FAILED",
            message="Failed to set baker role. Please contact support.",
            user_id=user_id,
        )

    log.info(f"Registered baker {email}")
    return RegistrationResult(
        status="REGISTERED",
        message="Registration successful! Please check your email to verify your account.",
        user_id=user_id,
    )
