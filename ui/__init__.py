"""UI module for Streamlit components.

This package contains all Streamlit-specific UI components.
The components are separated from business logic (in orders/) to allow:
- Testing of business logic without Streamlit
- The command-line order script to share the same logic
"""

from .session_state import init_session_state, reset_draft, notify, go_to_step
from .steps import (
    render_step_indicator,
    render_basic_info,
    render_product_picker,
    render_product_config,
)
from .results import render_results

__all__ = [
    # Session state
    "init_session_state",
    "reset_draft",
    "notify",
    "go_to_step",
    # Steps
    "render_step_indicator",
    "render_basic_info",
    "render_product_picker",
    "render_product_config",
    # Results
    "render_results",
]
