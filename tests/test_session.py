from unittest.mock import MagicMock, patch

import streamlit as st

from use_cases.domain_models import Notification
from utils import session_manager


def test_init_session_state():
    st.session_state.clear()
    session_manager.init_session_state()
    assert st.session_state.session_store is None
    assert st.session_state.auth_controller is None
    assert st.session_state.route == "/"
    assert st.session_state.nav_pending is False
    assert st.session_state.notifications == []
    assert st.session_state.editing_product_id is None


def test_init_session_state_keeps_existing_values():
    st.session_state.clear()
    st.session_state.route = "/orders"
    session_manager.init_session_state()
    assert st.session_state.route == "/orders"


def test_navigate_marks_pending_only_on_change():
    st.session_state.clear()
    session_manager.init_session_state()

    session_manager.navigate("/")
    assert st.session_state.nav_pending is False

    session_manager.navigate("/auth/login")
    assert st.session_state.route == "/login"
    assert st.session_state.nav_pending is True


@patch("utils.session_manager.st.rerun")
def test_flush_navigation_reruns_once(mock_rerun):
    st.session_state.clear()
    session_manager.init_session_state()
    session_manager.navigate("/products")

    session_manager.flush_navigation()
    session_manager.flush_navigation()

    mock_rerun.assert_called_once()
    assert st.session_state.nav_pending is False


@patch("utils.session_manager.st.toast")
def test_notifications_are_rendered_once(mock_toast):
    st.session_state.clear()
    session_manager.init_session_state()
    session_manager.notify_error("Failed to place order", "denied")
    session_manager.notify(Notification("Rating submitted"))

    session_manager.render_notifications()
    session_manager.render_notifications()

    assert mock_toast.call_count == 2
    assert mock_toast.call_args_list[0][1]["icon"] == "⚠️"
    assert mock_toast.call_args_list[1][1]["icon"] == "✅"
    assert st.session_state.notifications == []


@patch("utils.session_manager.backend.create_session_client")
def test_store_is_created_once_per_session(mock_client):
    st.session_state.clear()
    session_manager.init_session_state()

    first = session_manager.get_store()
    second = session_manager.get_store()

    assert first is second
    mock_client.assert_called_once()


@patch("utils.session_manager.st.rerun")
def test_logout_goes_home(mock_rerun):
    st.session_state.clear()
    session_manager.init_session_state()
    controller = MagicMock()
    st.session_state.auth_controller = controller
    st.session_state.route = "/orders"

    session_manager.logout()

    controller.logout.assert_called_once()
    assert st.session_state.route == "/"
    mock_rerun.assert_called_once()
