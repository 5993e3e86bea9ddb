import streamlit as st

from use_cases import registration_flow
from utils import session_manager


def render_register():
    st.title("📝 Sign up for a new account")
    with st.form("register_form", clear_on_submit=True):
        full_name = st.text_input("Full name")
        email = st.text_input("Email *")
        password = st.text_input("Password *", type="password")
        submitted = st.form_submit_button("Sign up")
        if submitted:
            result = registration_flow.register_buyer(session_manager.auth_client(), email, password, full_name)
            if result.status == "REGISTERED":
                st.success(result.message)
            else:
                st.error(result.message)

    if st.button("Already have an account? Log in"):
        session_manager.navigate("/login")
        session_manager.flush_navigation()


def render_baker_register():
    st.title("🥖 Become a Baker")
    st.caption("Register as a baker to start selling your products. An administrator approves new bakers.")
    with st.form("baker_register_form", clear_on_submit=False):
        full_name = st.text_input("Full name *", placeholder="John Doe")
        email = st.text_input("Email *", placeholder="john@example.com")
        password = st.text_input("Password *", type="password")
        phone = st.text_input("Phone number *", placeholder="+1234567890")
        submitted = st.form_submit_button("Register as Baker")
        if submitted:
            with st.spinner("Registering..."):
                result = registration_flow.register_baker(
                    session_manager.auth_client(),
                    session_manager.rest_client(),
                    email,
                    password,
                    full_name,
                    phone,
                )
            if result.status == "REGISTERED":
                session_manager.notify_success("Registration successful!", result.message)
                session_manager.navigate("/")
                session_manager.flush_navigation()
            else:
                st.error(result.message)
