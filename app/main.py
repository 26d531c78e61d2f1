"""
Streamlit Frontend for Hydration Tracker

The page only reads session state and calls session operations.
It never edits a day entry directly.

DESIGN PRINCIPLES:
1. One tap to log a glass
2. Every change can be undone
3. Today's events are always visible
4. Storage problems are shown, never fatal
"""

import streamlit as st

from hydration.config import get_settings
from hydration.orchestrator import TrackerSession, create_app_components
from hydration.queries import liters


# Page configuration
st.set_page_config(
    page_title="Hydration Tracker",
    page_icon="💧",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_session() -> TrackerSession:
    """Get or create the tracker session (cached)."""
    session, _ = create_app_components(use_storage=True)
    return session


def main():
    """Main application entry point."""
    session = get_session()
    settings = get_settings()

    render_sidebar(session)

    st.title("💧 Hydration Tracker")
    if not session.last_save_ok:
        st.warning("Your last change could not be saved. It is kept until you close the app.")

    col1, col2 = st.columns(2)
    with col1:
        render_progress(session)
    with col2:
        render_controls(session, settings.quick_options_list, settings.removal_step_ml)
        render_today_events(session)

    st.markdown("---")
    render_chart(session, settings.history_window_days)
    render_history(session)


def render_sidebar(session: TrackerSession):
    """Render goal settings."""
    st.sidebar.title("⚙️ Settings")
    new_goal = st.sidebar.number_input(
        "Daily goal (ml)",
        min_value=1,
        value=session.goal,
        step=50,
        help="A typical value is 2000-3000 ml. Adjust to your weight and activity.",
    )
    if st.sidebar.button("Save goal"):
        if session.set_goal(new_goal):
            st.sidebar.success(f"Goal set to {session.goal} ml")
        else:
            st.sidebar.error("The goal must be a positive number.")
    st.sidebar.markdown("---")
    st.sidebar.caption("Data is stored locally in a JSON file.")


def render_progress(session: TrackerSession):
    """Render today's progress."""
    progress = session.progress()
    total = session.today_total()

    st.subheader("Today's progress")
    st.progress(progress / 100, text=f"{progress}%")
    st.metric("Drunk today", f"{total} ml / {session.goal} ml")
    st.caption(f"{liters(total):.2f} L")
    if progress >= 100:
        st.success("Goal reached!")


def render_controls(session: TrackerSession, quick_options: list[int], removal_step: int):
    """Render quick-add buttons and manual controls."""
    st.subheader("Add a portion")

    columns = st.columns(len(quick_options) + 1)
    for column, amount in zip(columns, quick_options):
        if column.button(f"+{amount} ml", key=f"quick_{amount}"):
            session.add_intake(amount)
            st.rerun()
    if columns[-1].button(f"-{removal_step} ml", key="remove_step"):
        session.remove_intake(removal_step)
        st.rerun()

    custom = st.number_input("Custom amount (ml)", value=250, step=50)
    col_add, col_undo, col_reset = st.columns(3)
    if col_add.button("Add", type="primary"):
        session.add_intake(custom)
        st.rerun()
    if col_undo.button("Undo"):
        session.undo_last()
        st.rerun()
    if col_reset.button("Reset today"):
        session.reset_today()
        st.rerun()


def render_today_events(session: TrackerSession):
    """Render today's events, newest first."""
    st.subheader("Today - details")
    entry = session.today_entry()
    if not entry.events:
        st.info("No entries today")
        return

    for event in reversed(entry.events):
        sign = "+" if event.amount > 0 else ""
        action = "removed" if event.is_removal else "added"
        st.markdown(f"**{event.label}** {sign}{event.amount} ml · {action} · `{event.time}`")


def render_chart(session: TrackerSession, window_days: int):
    """Render the trailing window chart."""
    st.subheader(f"Last {window_days} days")
    points = [point.model_dump() for point in session.last_days(window_days)]
    st.area_chart(points, x="date", y="amount")


def render_history(session: TrackerSession):
    """Render the history table, newest first."""
    st.subheader("History")
    rows = session.history()
    if not rows:
        st.info("No records yet - start by adding your first portion")
        return
    st.table([
        {"Date": row.date, "Amount (ml)": row.total, "Share": f"{row.share_percent}%"}
        for row in rows
    ])


if __name__ == "__main__":
    main()
