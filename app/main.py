"""
Streamlit Frontend for the Expense Tracker

Two screens:
1. All Expenses - the whole collection, newest first, with a total
2. Manage Expense - add a new expense, or edit/delete an existing one

The pages only read the controllers' presentation contract (state,
error, snapshot/form) and forward user actions to them. All state that
must survive a rerun lives in st.session_state.
"""

import asyncio

import streamlit as st

from expense_tracker.config import validate_all_settings
from expense_tracker.controllers import (
    ExpenseListController,
    ManageExpenseController,
    ScreenState,
)
from expense_tracker.models import AmountInput, DateInput, DescriptionInput
from expense_tracker.orchestrator import ExpenseSession, create_app_components


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_session() -> ExpenseSession:
    """Get or create this browser session's components."""
    if "expense_session" not in st.session_state:
        st.session_state.expense_session = create_app_components()
    return st.session_state.expense_session


def navigate(screen: str, expense_id=None):
    """Switch screens. Opening the manage screen builds a fresh controller."""
    session = get_session()
    if screen == "manage":
        st.session_state.manage_controller = session.manage_screen(expense_id)
    else:
        st.session_state.manage_controller = None
    st.session_state.screen = screen


def render_error_overlay(message: str, on_confirm):
    """Full-screen error with a dismiss button."""
    st.error(f"An error occurred! {message}")
    if st.button("Okay"):
        on_confirm()
        st.rerun()


def render_list_page(session: ExpenseSession):
    """Render the All Expenses screen."""
    st.title("All Expenses")

    if "list_controller" not in st.session_state:
        st.session_state.list_controller = session.list_screen()
    controller: ExpenseListController = st.session_state.list_controller

    if controller.state == ScreenState.IDLE:
        with st.spinner("Loading expenses..."):
            run_async(controller.load())

    if controller.state == ScreenState.FAILED:
        render_error_overlay(controller.error, controller.dismiss_error)
        return

    view = controller.snapshot()

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**{view.period_label}**")
    with col2:
        st.markdown(f"**${view.total:,.2f}**")

    st.markdown("---")

    if not view.expenses:
        st.info("No expenses registered found!")

    for expense in view.expenses:
        col1, col2, col3 = st.columns([4, 2, 1])
        with col1:
            st.markdown(f"**{expense.description}**  \n{expense.date.isoformat()}")
        with col2:
            st.markdown(f"${expense.amount:,.2f}")
        with col3:
            if st.button("Edit", key=f"edit-{expense.id}"):
                navigate("manage", expense.id)
                st.rerun()

    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("➕ Add Expense", type="primary"):
            navigate("manage")
            st.rerun()
    with col2:
        if st.button("🔄 Refresh", disabled=controller.is_busy):
            run_async(controller.load())
            st.rerun()


def render_manage_page():
    """Render the Manage Expense screen."""
    controller: ManageExpenseController = st.session_state.manage_controller

    if controller.state == ScreenState.DONE:
        navigate("list")
        st.rerun()

    st.title(controller.title)

    if controller.state == ScreenState.FAILED:
        render_error_overlay(controller.error, controller.dismiss_error)
        for issue in controller.validation_issues:
            st.caption(issue)
        return

    form = controller.form

    st.subheader("Your Expense")

    col1, col2 = st.columns(2)
    with col1:
        amount_text = st.text_input(
            "Amount",
            value=form.amount_text,
            placeholder="Expense Amount",
        )
    with col2:
        date_text = st.text_input(
            "Date",
            value=form.date_text,
            placeholder="YYYY-MM-DD",
        )
    description = st.text_area(
        "Description",
        value=form.description,
        placeholder="Expense Description",
    )

    if amount_text != form.amount_text:
        controller.apply(AmountInput(text=amount_text))
    if date_text != form.date_text:
        controller.apply(DateInput(text=date_text))
    if description != form.description:
        controller.apply(DescriptionInput(value=description))

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Cancel", disabled=controller.is_busy):
            controller.cancel()
            st.rerun()
    with col2:
        if st.button(controller.confirm_label, type="primary", disabled=controller.is_busy):
            with st.spinner("Saving..."):
                run_async(controller.confirm())
            st.rerun()

    if controller.is_editing:
        st.markdown("---")
        if st.button("🗑️ Delete", disabled=controller.is_busy):
            with st.spinner("Deleting..."):
                run_async(controller.delete())
            st.rerun()


def render_settings_sidebar():
    """Show whether the remote service is configured."""
    status = validate_all_settings()
    if status.get("remote", False):
        st.sidebar.success("✅ Remote service configured")
    else:
        error = status.get("remote_error", "Not configured")
        st.sidebar.error(f"❌ Remote service - {error}")


def main():
    """Main application entry point."""
    st.sidebar.title("💸 Expense Tracker")
    render_settings_sidebar()

    if "screen" not in st.session_state:
        st.session_state.screen = "list"

    try:
        session = get_session()
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    if st.session_state.screen == "manage" and st.session_state.get("manage_controller"):
        render_manage_page()
    else:
        render_list_page(session)


if __name__ == "__main__":
    main()
