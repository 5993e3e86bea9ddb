"""Configuration lookup and construction of the hosted-backend client."""

import logging
import os
from dataclasses import dataclass

import streamlit as st
from supabase import Client, create_client
from supabase.client import ClientOptions

from infrastructure.backend.errors import BackendConfigError

log = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 10.0


def get_secret(key):
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    return value or os.getenv(key)


@dataclass(frozen=True)
class BackendSettings:
    url: str
    anon_key: str
    timeout: float = DEFAULT_HTTP_TIMEOUT


def load_settings() -> BackendSettings:
    url = get_secret("SUPABASE_URL")
    anon_key = get_secret("SUPABASE_ANON_KEY")
    missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_ANON_KEY", anon_key)) if not value]
    if missing:
        raise BackendConfigError(f"Missing backend configuration: {', '.join(missing)}")
    raw_timeout = get_secret("HTTP_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_HTTP_TIMEOUT
    except ValueError:
        log.warning(f"Ignoring invalid HTTP_TIMEOUT={raw_timeout!r}")
        timeout = DEFAULT_HTTP_TIMEOUT
    return BackendSettings(url=url, anon_key=anon_key, timeout=timeout)


def create_session_client() -> Client:
    """
    Builds a supabase client for one browser session. The client remembers the
    user it signed in, so it is never shared between sessions.
    """
    settings = load_settings()
    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=settings.timeout,
    )
    log.debug(f"Creating backend client for {settings.url}")
    return create_client(settings.url, settings.anon_key, options=options)
