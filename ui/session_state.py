"""Session state initialization and management.

This module provides functions for initializing and managing Streamlit session state.
"""

import streamlit as st

from orders.config import STEP_BASIC_INFO, STEP_CONFIGURE_PRODUCTS
from orders.models import OrderDraft


def init_session_state():
    """Initialize all session state variables with defaults."""
    # Form state
    if "draft" not in st.session_state:
        st.session_state.draft = OrderDraft()
    if "catalog" not in st.session_state:
        st.session_state.catalog = None
    if "catalog_file_name" not in st.session_state:
        st.session_state.catalog_file_name = None

    # Bumped whenever quantities change outside the variant tables,
    # so data editors drop their stale edits
    if "editor_version" not in st.session_state:
        st.session_state.editor_version = 0

    # Save results
    if "submission_result" not in st.session_state:
        st.session_state.submission_result = None
    if "saved_draft" not in st.session_state:
        st.session_state.saved_draft = None
    if "notification" not in st.session_state:
        st.session_state.notification = None


def reset_draft():
    """Start a new, empty order."""
    st.session_state.draft = OrderDraft()
    st.session_state.editor_version += 1


def bump_editor_version():
    st.session_state.editor_version += 1


def notify(kind: str, message: str):
    """Queue a notification shown at the top of the next render.

    Args:
        kind: "success", "error" or "info"
        message: Text to show
    """
    st.session_state.notification = (kind, message)


def go_to_step(step: int) -> list[str]:
    """Move the form to a step if every earlier step is complete.

    Entering the configure step builds the product drafts from the selection.

    Args:
        step: Target step number

    Returns:
        List of problems that blocked the move (empty when moved)
    """
    draft: OrderDraft = st.session_state.draft
    step = max(STEP_BASIC_INFO, min(step, STEP_CONFIGURE_PRODUCTS))
    problems = draft.validate_step(step - 1) if step > STEP_BASIC_INFO else []
    if problems:
        return problems

    if step == STEP_CONFIGURE_PRODUCTS and draft.current_step < STEP_CONFIGURE_PRODUCTS:
        missing = draft.initialize_products(st.session_state.catalog)
        bump_editor_version()
        if missing:
            notify("error", f"Products not found: {', '.join(missing)}")

    draft.current_step = step
    return []
