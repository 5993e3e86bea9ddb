import streamlit as st

import ui
from infrastructure.backend.errors import BackendError
from use_cases import catalog_flow, mutations
from utils import session_manager


def render_catalog():
    st.header("🧁 Our Products")
    try:
        products = session_manager.product_repo().list_products()
    except BackendError as e:
        st.error(e.message or "Failed to load products")
        return
    if not products:
        st.info("No products yet. Check back soon!")
        return

    for category, items in catalog_flow.group_by_category(products).items():
        st.subheader(category)
        cols = st.columns(3)
        for i, product in enumerate(items):
            with cols[i % 3]:
                if product.image_url:
                    st.image(product.image_url, use_container_width=True)
                st.markdown(f"**{product.name}** · {ui.format_price(product.price)}")
                st.caption(product.description or "No description available")
                if product.baker and product.baker.full_name:
                    st.caption(f"by {product.baker.full_name}")
                if st.button("Order Now", key=f"order_now_{product.id}", use_container_width=True):
                    session_manager.navigate(f"/products/{product.id}")
                    session_manager.flush_navigation()


def render_product_details(product_id: str):
    try:
        product = session_manager.product_repo().get_product(product_id)
    except BackendError as e:
        st.error(e.message or "Failed to load product")
        return

    is_authenticated = session_manager.get_store().get_session() is not None
    ctx = session_manager.action_context()

    c1, c2 = st.columns(2)
    with c1:
        if product.image_url:
            st.image(product.image_url, use_container_width=True)
    with c2:
        st.title(product.name)
        st.markdown(f"### {ui.format_price(product.price)}")
        if product.average_rating is not None:
            st.write(f"Rating: {product.average_rating:.1f} ⭐")
        st.write(product.description or "")

        baker_name = product.baker.full_name if product.baker and product.baker.full_name else "Anonymous"
        st.markdown(f"**Baker:** {baker_name}")
        link = catalog_flow.whatsapp_link(product.baker.phone if product.baker else None)
        if link:
            st.link_button("Contact via WhatsApp", link)
        elif st.button("Contact via WhatsApp"):
            session_manager.notify_error("Contact not available", "The baker hasn't provided a contact number.")
            st.rerun()

        with st.form("order_form"):
            quantity = st.number_input("Quantity", min_value=1, value=1, step=1)
            if st.form_submit_button("Place Order" if is_authenticated else "Login to Order"):
                result = mutations.place_order(ctx, session_manager.order_repo(), product.id, quantity)
                if result.status == "INVALID":
                    st.error(result.message)
                _after_action()

        with st.form("rating_form"):
            rating = st.number_input("Rate this product", min_value=1, max_value=5, value=5, step=1)
            if st.form_submit_button("Submit Rating" if is_authenticated else "Login to Rate"):
                result = mutations.submit_rating(ctx, session_manager.rating_repo(), product.id, rating)
                if result.status == "INVALID":
                    st.error(result.message)
                _after_action()


def _after_action():
    session_manager.flush_navigation()
    session_manager.render_notifications()
