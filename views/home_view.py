import streamlit as st

from utils import session_manager

FEATURES = [
    ("🚚 Local Delivery", "Fresh baked goods delivered right to your doorstep from local bakers in your area."),
    ("✅ Quality Assured", "All our bakers are verified and maintain the highest quality standards."),
    ("⏰ Fresh & On Time", "Schedule your orders in advance and receive them fresh when you need them."),
]


def render_home():
    st.title("Fresh Baked Goodness")
    st.write("Connect with local bakers and discover homemade treats made with love.")
    c1, c2 = st.columns(2)
    if c1.button("Browse Products", type="primary", use_container_width=True):
        session_manager.navigate("/products")
        session_manager.flush_navigation()
    if c2.button("Become a Baker", use_container_width=True):
        session_manager.navigate("/baker/register")
        session_manager.flush_navigation()

    st.subheader("Why Choose HomeBaked?")
    cols = st.columns(len(FEATURES))
    for col, (title, text) in zip(cols, FEATURES):
        with col:
            st.markdown(f"**{title}**")
            st.caption(text)
