import pandas as pd
import streamlit as st

import ui
from infrastructure.backend.errors import BackendError
from use_cases import mutations
from utils import session_manager


def _status(baker) -> str:
    if baker.is_blocked:
        return "Blocked"
    return "Approved" if baker.is_approved else "Pending"


def _load_bakers():
    fresh = st.session_state.get("admin_bakers")
    if fresh is not None:
        # Already re-read by the toggle that triggered this run.
        st.session_state.admin_bakers = None
        return fresh
    try:
        return session_manager.profile_repo().list_bakers()
    except BackendError as e:
        st.error("Failed to load bakers")
        st.caption(e.message)
        return None


def render_admin_panel():
    st.header("⚙️ Admin Dashboard")
    bakers = _load_bakers()
    if bakers is None:
        return
    if not bakers:
        st.info("No bakers registered yet.")
        return

    pending = [b for b in bakers if not b.is_approved]
    if pending:
        st.warning(f"Awaiting approval: {len(pending)}")

    bakers_df = pd.DataFrame(
        [
            {
                "Name": b.full_name or "—",
                "Email": b.email,
                "Phone": b.phone or "—",
                "Status": _status(b),
            }
            for b in bakers
        ]
    )
    st.dataframe(bakers_df, use_container_width=True, hide_index=True)

    ctx = session_manager.action_context()
    repo = session_manager.profile_repo()
    st.subheader("Actions")
    for baker in bakers:
        c1, c2, c3 = st.columns([2, 1, 1])
        c1.markdown(f"**{baker.full_name or baker.email}** {ui.badge(_status(baker))}  \n{baker.email}",
                    unsafe_allow_html=True)
        approve_label = "Revoke" if baker.is_approved else "Approve"
        if c2.button(approve_label, key=f"approve_{baker.id}", use_container_width=True,
                     type="secondary" if baker.is_approved else "primary"):
            result = mutations.set_baker_approval(ctx, repo, baker.id, not baker.is_approved)
            _finish(result)
        block_label = "Unblock" if baker.is_blocked else "Block"
        if c3.button(block_label, key=f"block_{baker.id}", use_container_width=True):
            result = mutations.set_baker_block(ctx, repo, baker.id, not baker.is_blocked)
            _finish(result)


def _finish(result):
    session_manager.flush_navigation()
    if result.status == "SUCCESS":
        st.session_state.admin_bakers = result.data
        st.rerun()
    session_manager.render_notifications()
