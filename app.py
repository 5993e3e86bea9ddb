import logging

import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from infrastructure.backend.errors import BackendError
from use_cases import auth_flow, bootstrap
from use_cases.session_models import Role, is_admin
from utils import session_manager
from views import (
    admin_view, baker_view, catalog_view, home_view,
    login_view, orders_view, register_view,
)

log = logging.getLogger(__name__)

# --- PAGE SETTINGS ---
st.set_page_config(page_title="HomeBaked", page_icon="🥖", layout="wide", initial_sidebar_state="expanded")
ui.setup_style()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.error(f"🚨 The app is not configured: {startup_result.reason}")
    st.stop()

store = session_manager.get_store()
session = store.get_session()

# --- SIDEBAR ---
with st.sidebar:
    st.title("🥖 HomeBaked")
    nav = [("🏠 Home", "/"), ("🧁 Products", "/products")]
    if session is not None:
        nav.append(("🧾 My Orders", "/orders"))
        try:
            profile = session_manager.profile_repo().fetch_profile(session.user_id)
        except BackendError as e:
            log.warning(f"Sidebar could not load profile: {e.message}")
            profile = None
        if profile is not None and profile.role is Role.BAKER:
            nav.append(("🥐 Dashboard", "/baker/dashboard"))
        if profile is not None and is_admin(profile):
            nav.append(("⚙️ Admin", "/admin"))
    for label, target in nav:
        if st.button(label, key=f"nav_{target}", use_container_width=True):
            session_manager.navigate(target)
    st.divider()
    if session is not None:
        st.caption(f"Signed in as {session.email or session.user_id}")
        if st.button("🚪 Log out", use_container_width=True):
            session_manager.logout()
    else:
        if st.button("🔐 Log in", use_container_width=True):
            session_manager.navigate("/login")
        if st.button("📝 Register", use_container_width=True):
            session_manager.navigate("/register")
    session_manager.flush_navigation()

session_manager.render_notifications()

# --- ROUTE ACCESS ---
route = session_manager.current_route()
access = auth_flow.check_route_access(route, store, session_manager.profile_repo())
if access.status == "STOP":
    session_manager.navigate(access.redirect_to)
    session_manager.flush_navigation()
    st.stop()

# --- ROUTING ---
if route == "/":
    home_view.render_home()
elif route == "/login":
    login_view.render_auth_screen()
elif route == "/register":
    register_view.render_register()
elif route == "/baker/register":
    register_view.render_baker_register()
elif route == "/products":
    catalog_view.render_catalog()
elif route.startswith(auth_flow.PRODUCT_DETAIL_PREFIX):
    catalog_view.render_product_details(route[len(auth_flow.PRODUCT_DETAIL_PREFIX):])
elif route == "/orders":
    orders_view.render_orders()
elif route == "/baker/dashboard":
    baker_view.render_baker_dashboard()
elif route == "/baker/products":
    baker_view.render_baker_products()
elif route == "/admin":
    admin_view.render_admin_panel()
else:
    st.warning("Page not found.")
    if st.button("Back to home"):
        session_manager.navigate("/")
        session_manager.flush_navigation()
