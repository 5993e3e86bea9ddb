import plotly.express as px
import streamlit as st

import ui
from infrastructure.backend.errors import BackendError
from use_cases import catalog_flow, mutations
from use_cases.session_models import is_approved
from utils import session_manager


def _current_profile():
    session = session_manager.get_store().get_session()
    if session is None:
        session_manager.navigate("/login")
        session_manager.flush_navigation()
        return None
    try:
        return session_manager.profile_repo().fetch_profile(session.user_id)
    except BackendError as e:
        st.error("Failed to load profile")
        st.caption(e.message)
        return None


def _after_action():
    session_manager.flush_navigation()
    session_manager.render_notifications()


def render_baker_dashboard():
    st.header("🥐 Baker Dashboard")
    profile = _current_profile()
    if profile is None:
        return

    with st.container(border=True):
        st.subheader("Account Status")
        st.write(f"Email: {profile.email}")
        if profile.is_blocked:
            st.error("Your account has been blocked. Contact the administrator.")
        elif is_approved(profile):
            st.success("Approved")
        else:
            st.warning("Pending approval")

    with st.form("baker_profile_form"):
        st.subheader("Edit Profile")
        full_name = st.text_input("Full Name", value=profile.full_name or "", placeholder="John Doe")
        phone = st.text_input("Phone Number", value=profile.phone or "", placeholder="+1234567890")
        if st.form_submit_button("Save Changes"):
            result = mutations.update_profile(
                session_manager.action_context(), session_manager.profile_repo(), full_name, phone
            )
            if result.status == "INVALID":
                st.error(result.message)
            elif result.status == "SUCCESS":
                session_manager.get_store().notify_user_updated()
            _after_action()

    try:
        products = session_manager.product_repo().list_baker_products(profile.id)
    except BackendError as e:
        st.error(e.message or "Failed to load products")
        products = []
    if products:
        st.subheader("Product performance")
        stats = catalog_flow.product_stats_frame(products)
        fig = px.bar(stats, x="Product", y="Orders", color="Category", title="Orders per product",
                     hover_data=["Rating"])
        st.plotly_chart(ui.update_chart_layout(fig), use_container_width=True)

    with st.container(border=True):
        st.subheader("Manage Products")
        st.caption("Add, edit, or remove your bakery products")
        if st.button("Go to products"):
            session_manager.navigate("/baker/products")
            session_manager.flush_navigation()


def render_baker_products():
    st.header("📦 My Products")
    session = session_manager.get_store().get_session()
    if session is None:
        session_manager.navigate("/login")
        session_manager.flush_navigation()
        return

    repo = session_manager.product_repo()
    ctx = session_manager.action_context()
    try:
        products = repo.list_baker_products(session.user_id)
    except BackendError as e:
        st.error(e.message or "Failed to load products")
        products = []

    editing = next((p for p in products if p.id == st.session_state.editing_product_id), None)
    with st.form("product_form", clear_on_submit=editing is None):
        st.subheader("Edit Product" if editing else "Add New Product")
        name = st.text_input("Name", value=editing.name if editing else "")
        price = st.number_input("Price", min_value=0.0, step=0.5, value=float(editing.price) if editing else 0.0)
        description = st.text_area("Description", value=(editing.description or "") if editing else "")
        category = st.text_input("Category", value=editing.category if editing else "")
        if st.form_submit_button("Update Product" if editing else "Add Product"):
            if editing:
                result = mutations.update_product(ctx, repo, editing.id, name, price, category, description)
            else:
                result = mutations.create_product(ctx, repo, name, price, category, description)
            if result.status == "INVALID":
                st.error(result.message)
            elif result.status == "SUCCESS":
                st.session_state.editing_product_id = None
                st.rerun()
            _after_action()

    if editing and st.button("Cancel editing"):
        st.session_state.editing_product_id = None
        st.rerun()

    for category, items in catalog_flow.group_by_category(products).items():
        st.subheader(category)
        for product in items:
            c1, c2, c3 = st.columns([3, 1, 1])
            c1.markdown(f"**{product.name}** · {ui.format_price(product.price)}")
            c1.caption(product.description or "")
            if c2.button("Edit", key=f"edit_{product.id}", use_container_width=True):
                st.session_state.editing_product_id = product.id
                st.rerun()
            if c3.button("Delete", key=f"delete_{product.id}", use_container_width=True):
                result = mutations.delete_product(ctx, repo, product.id)
                if result.status == "SUCCESS":
                    st.rerun()
                _after_action()
