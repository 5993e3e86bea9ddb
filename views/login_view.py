import streamlit as st

from utils import session_manager


def render_auth_screen():
    controller = session_manager.get_controller()

    st.title("🔐 Log in to HomeBaked")
    if controller.error:
        st.error(controller.error)

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", disabled=controller.loading)
        if submitted:
            if not email.strip() or not password:
                st.error("Enter your email and password.")
            else:
                with st.spinner("Signing in..."):
                    controller.login(email, password)
                # A successful login navigates through the SIGNED_IN event.
                session_manager.flush_navigation()
                if controller.error:
                    st.error(controller.error)

    c1, c2 = st.columns(2)
    if c1.button("Create an account", use_container_width=True):
        session_manager.navigate("/register")
        session_manager.flush_navigation()
    if c2.button("Become a baker", use_container_width=True):
        session_manager.navigate("/baker/register")
        session_manager.flush_navigation()
