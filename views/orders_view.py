import streamlit as st

from infrastructure.backend.errors import BackendError
from use_cases import catalog_flow
from utils import session_manager


def render_orders():
    st.header("🧾 My Orders")
    session = session_manager.get_store().get_session()
    if session is None:
        session_manager.navigate("/login")
        session_manager.flush_navigation()
        return

    try:
        orders = session_manager.order_repo().list_user_orders(session.user_id)
    except BackendError as e:
        st.error(e.message or "Failed to load orders")
        return
    if not orders:
        st.info("You haven't placed any orders yet.")
        return

    df = catalog_flow.orders_frame(orders)
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Total": st.column_config.NumberColumn(format="$%.2f"),
            "Date": st.column_config.DateColumn(format="DD.MM.YYYY"),
        },
    )
