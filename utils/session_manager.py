import logging

import streamlit as st

import backend
from infrastructure.backend.supabase_auth import SupabaseAuthClient
from infrastructure.backend.supabase_rest import SupabaseRestClient
from infrastructure.repositories.order_repository import OrderRepository, RatingRepository
from infrastructure.repositories.product_repository import ProductRepository
from infrastructure.repositories.profile_repository import ProfileRepository
from use_cases.auth_controller import AuthController
from use_cases.domain_models import Notification
from use_cases.mutations import ActionContext
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

This module owns the Streamlit session state of one browser tab.

Keys of st.session_state:

backend_client: supabase.Client | None
    this tab's own client, it remembers the signed-in user
    default: None
    owner: session_manager

session_store: SessionStore | None
    holder of the authenticated session and its event stream
    default: None
    owner: session_manager

auth_controller: AuthController | None
    mounted once per browser session, routes on SIGNED_IN
    default: None
    owner: session_manager

route: str
    current page path
    default: "/"
    owner: session_manager.navigate

nav_pending: bool
    a navigation happened during this run and a rerun is due
    default: False
    owner: session_manager

notifications: list[Notification]
    toasts queued for the next render
    default: []
    owner: session_manager.notify

editing_product_id: str | None
    product currently loaded into the baker product form
    default: None
    owner: views.baker_view

admin_bakers: list[Profile] | None
    baker list re-read by the last admin toggle, shown on the next run
    default: None
    owner: views.admin_view
"""


HOME_ROUTE = "/"


def init_session_state():
    if "backend_client" not in st.session_state:
        st.session_state.backend_client = None
    if "session_store" not in st.session_state:
        st.session_state.session_store = None
    if "auth_controller" not in st.session_state:
        st.session_state.auth_controller = None
    if "route" not in st.session_state:
        st.session_state.route = HOME_ROUTE
    if "nav_pending" not in st.session_state:
        st.session_state.nav_pending = False
    if "notifications" not in st.session_state:
        st.session_state.notifications = []
    if "editing_product_id" not in st.session_state:
        st.session_state.editing_product_id = None
    if "admin_bakers" not in st.session_state:
        st.session_state.admin_bakers = None


# --- navigation and notifications ---

def navigate(route: str):
    if route == "/auth/login":
        route = "/login"
    if st.session_state.get("route") != route:
        log.debug(f"Navigate {st.session_state.get('route')} -> {route}")
        st.session_state.route = route
        st.session_state.nav_pending = True


def current_route() -> str:
    return st.session_state.get("route", HOME_ROUTE)


def flush_navigation():
    """Reruns the script when a navigation happened during this run."""
    if st.session_state.get("nav_pending"):
        st.session_state.nav_pending = False
        st.rerun()


def notify(notification: Notification):
    st.session_state.notifications.append(notification)


def render_notifications():
    pending = st.session_state.get("notifications") or []
    st.session_state.notifications = []
    for n in pending:
        icon = "⚠️" if n.variant == "destructive" else "✅"
        text = f"**{n.title}**" + (f" {n.description}" if n.description else "")
        st.toast(text, icon=icon)


# --- session wiring ---

def backend_client():
    if st.session_state.backend_client is None:
        st.session_state.backend_client = backend.create_session_client()
    return st.session_state.backend_client


def auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient(backend_client())


def rest_client() -> SupabaseRestClient:
    return SupabaseRestClient(backend_client())


def get_store() -> SessionStore:
    if st.session_state.session_store is None:
        st.session_state.session_store = SessionStore(auth_client())
    return st.session_state.session_store


def profile_repo() -> ProfileRepository:
    return ProfileRepository(rest_client(), get_store().access_token)


def product_repo() -> ProductRepository:
    return ProductRepository(rest_client(), get_store().access_token)


def order_repo() -> OrderRepository:
    return OrderRepository(rest_client(), get_store().access_token)


def rating_repo() -> RatingRepository:
    return RatingRepository(rest_client(), get_store().access_token)


def action_context() -> ActionContext:
    return ActionContext(store=get_store(), navigate=navigate, notify=notify)


def get_controller() -> AuthController:
    if st.session_state.auth_controller is None:
        st.session_state.auth_controller = AuthController(get_store(), profile_repo(), navigate, notify)
    return st.session_state.auth_controller


def logout():
    controller = st.session_state.get("auth_controller")
    if controller is not None:
        controller.logout()
    else:
        get_store().sign_out()
    navigate(HOME_ROUTE)
    flush_navigation()


def notify_success(title: str, description: str = ""):
    notify(Notification(title, description))


def notify_error(title: str, description: str = ""):
    notify(Notification(title, description, "destructive"))
