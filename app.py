"""
Order Creation Streamlit App

A multi-step form for creating manufacturing orders: pick a client and a
manufacturer, add products, configure variant quantities and samples, then
submit or save as draft.
"""

import json

import streamlit as st

from orders import OrderDraft, OrderStore, OrderSubmitter, load_catalog
from orders.config import (
    DB_PATH,
    MEDIA_DIR,
    STEP_BASIC_INFO,
    STEP_ADD_PRODUCTS,
    STEP_CONFIGURE_PRODUCTS,
)
from orders.exceptions import OrdersError, OrderValidationError
from orders.logger import get_logger
from ui import (
    init_session_state,
    reset_draft,
    notify,
    render_step_indicator,
    render_basic_info,
    render_product_picker,
    render_product_config,
    render_results,
)

log = get_logger("app")

# Page config
st.set_page_config(
    page_title="Create Order",
    page_icon="🧵",
    layout="wide",
)

init_session_state()


@st.cache_resource
def get_store(db_path: str, media_dir: str) -> OrderStore:
    store = OrderStore(db_path, media_dir)
    store.init_db()
    return store


def save_order(is_draft: bool):
    """Save the current draft and keep the result in session state."""
    store = get_store(DB_PATH, MEDIA_DIR)
    submitter = OrderSubmitter(store, st.session_state.catalog)
    draft: OrderDraft = st.session_state.draft
    try:
        with st.spinner("Saving order..."):
            result = submitter.submit(draft, is_draft=is_draft)
    except OrderValidationError as e:
        for problem in e.problems:
            st.error(problem)
        return
    except OrdersError as e:
        log.error(f"Error creating order: {e}")
        st.error(f"Error creating order: {e}")
        return

    st.session_state.submission_result = result
    st.session_state.saved_draft = draft
    notify("success", result.message)
    st.rerun()


# Main UI
st.title("🧵 Create Order")

# Sidebar for catalog and draft files
with st.sidebar:
    st.header("⚙️ Catalog")

    catalog_file = st.file_uploader(
        "Upload catalog workbook",
        type=["xlsx"],
        key="catalog_file",
        help="Sheets: Clients, Manufacturers, Products, Variants",
    )
    if catalog_file and catalog_file.name != st.session_state.catalog_file_name:
        catalog, error = load_catalog(catalog_file)
        if error:
            st.error(error)
        else:
            st.session_state.catalog = catalog
            st.session_state.catalog_file_name = catalog_file.name
            reset_draft()

    catalog = st.session_state.catalog
    if catalog:
        st.caption(
            f"{len(catalog.clients)} clients · {len(catalog.manufacturers)} manufacturers · "
            f"{len(catalog.products)} products"
        )

        st.divider()
        st.subheader("Draft file")
        st.download_button(
            label="Export draft (JSON)",
            data=json.dumps(st.session_state.draft.to_dict(), ensure_ascii=False, indent=2),
            file_name="order_draft.json",
            mime="application/json",
        )
        draft_file = st.file_uploader("Import draft (JSON)", type=["json"], key="draft_file")
        if draft_file and st.button("Load draft"):
            try:
                st.session_state.draft = OrderDraft.from_dict(json.load(draft_file), catalog)
            except (ValueError, AttributeError) as e:
                st.error(f"Invalid draft file: {e}")
            else:
                st.session_state.editor_version += 1
                st.rerun()

# Queued notification from the previous run
if st.session_state.notification:
    kind, message = st.session_state.notification
    getattr(st, kind, st.info)(message)
    st.session_state.notification = None

if st.session_state.catalog is None:
    st.info("Upload a catalog workbook in the sidebar to start.")
    st.stop()

if st.session_state.submission_result:
    result = st.session_state.submission_result
    render_results(result, st.session_state.saved_draft)
    if result.is_draft and st.button("Send draft to manufacturer", type="primary"):
        submitter = OrderSubmitter(get_store(DB_PATH, MEDIA_DIR), st.session_state.catalog)
        try:
            promoted = submitter.promote_draft(result.order_id, result.products)
        except OrdersError as e:
            log.error(f"Error submitting draft {result.order_number}: {e}")
            st.error(f"Error submitting draft: {e}")
        else:
            st.session_state.submission_result = promoted
            notify("success", f"{result.order_number} sent as {promoted.order_number}")
            st.rerun()
    if st.button("Create another order"):
        st.session_state.submission_result = None
        st.session_state.saved_draft = None
        reset_draft()
        st.rerun()
    st.stop()

draft: OrderDraft = st.session_state.draft
render_step_indicator(draft.current_step)
st.divider()

if draft.current_step == STEP_BASIC_INFO:
    render_basic_info(draft, st.session_state.catalog)
elif draft.current_step == STEP_ADD_PRODUCTS:
    render_product_picker(draft, st.session_state.catalog)
else:
    render_product_config(draft, st.session_state.catalog)

    st.divider()
    col1, col2 = st.columns(2)
    if col1.button("Save as Draft", key="save_draft", use_container_width=True):
        save_order(is_draft=True)
    if col2.button("Create Order", key="submit_order", type="primary", use_container_width=True):
        save_order(is_draft=False)

# Footer
st.divider()
st.caption(f"Order Creation App v1.0 · step {draft.current_step} of {STEP_CONFIGURE_PRODUCTS}")
