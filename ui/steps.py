"""Form step UI components for Streamlit.

This module renders the three steps of order creation. All state changes go
through the OrderDraft setters in orders.models.
"""

import streamlit as st
import pandas as pd

from orders.config import (
    STEP_LABELS,
    STEP_BASIC_INFO,
    STEP_ADD_PRODUCTS,
    STEP_CONFIGURE_PRODUCTS,
    SAMPLE_STATUSES,
    ACCEPTED_FILE_TYPES,
)
from orders.exceptions import OrdersError
from orders.models import Catalog, MediaFile, OrderDraft, OrderProductDraft, SampleRequest
from orders.variants import count_combinations

from .session_state import bump_editor_version, go_to_step


def uploaded_to_media(uploaded_files) -> list[MediaFile]:
    """Convert Streamlit UploadedFile objects to MediaFile."""
    return [
        MediaFile(
            filename=f.name,
            content_type=f.type or "application/octet-stream",
            data=f.getvalue(),
        )
        for f in uploaded_files or []
    ]


def render_step_indicator(current_step: int):
    """Render step progress; completed steps can be clicked to go back."""
    cols = st.columns(len(STEP_LABELS))
    for col, (number, label) in zip(cols, STEP_LABELS.items()):
        if number < current_step:
            if col.button(f"✓ {number}. {label}", key=f"step_nav_{number}", use_container_width=True):
                go_to_step(number)
                st.rerun()
        elif number == current_step:
            col.button(f"{number}. {label}", key=f"step_nav_{number}", type="primary",
                       disabled=True, use_container_width=True)
        else:
            col.button(f"{number}. {label}", key=f"step_nav_{number}", disabled=True,
                       use_container_width=True)


def render_basic_info(draft: OrderDraft, catalog: Catalog):
    """Step 1: order name, client and manufacturer."""
    st.subheader(STEP_LABELS[STEP_BASIC_INFO])

    draft.order_name = st.text_input("Order Name", value=draft.order_name, placeholder="New Order")

    client_ids = [""] + [c.id for c in catalog.clients]
    client_names = {c.id: f"{c.name} ({c.email})" if c.email else c.name for c in catalog.clients}
    draft.client_id = st.selectbox(
        "Client",
        options=client_ids,
        index=client_ids.index(draft.client_id) if draft.client_id in client_ids else 0,
        format_func=lambda cid: client_names.get(cid, "Select a client..."),
    )

    # Auto-default manufacturer if there is only one
    if not draft.manufacturer_id and len(catalog.manufacturers) == 1:
        draft.manufacturer_id = catalog.manufacturers[0].id

    manufacturer_ids = [""] + [m.id for m in catalog.manufacturers]
    manufacturer_names = {m.id: m.name for m in catalog.manufacturers}
    draft.manufacturer_id = st.selectbox(
        "Manufacturer",
        options=manufacturer_ids,
        index=manufacturer_ids.index(draft.manufacturer_id) if draft.manufacturer_id in manufacturer_ids else 0,
        format_func=lambda mid: manufacturer_names.get(mid, "Select a manufacturer..."),
    )

    if st.button("Next →", key="next_step1", type="primary"):
        problems = go_to_step(STEP_ADD_PRODUCTS)
        for problem in problems:
            st.error(problem)
        if not problems:
            st.rerun()


def render_product_picker(draft: OrderDraft, catalog: Catalog):
    """Step 2: search products and choose how many instances of each."""
    st.subheader(STEP_LABELS[STEP_ADD_PRODUCTS])

    query = st.text_input("Search products", key="product_search", placeholder="Search products...")
    products = catalog.search_products(query)

    if not products:
        st.info("No products match your search.")

    for product in products:
        count = draft.selected_products.get(product.id, 0)
        col1, col2, col3, col4 = st.columns([6, 1, 1, 1])
        if product.variants:
            dims = ", ".join(f"{v.name}: {len(v.options)}" for v in product.variants)
            variants_text = f"{dims} ({count_combinations(product.dimension_map)} combinations)"
        else:
            variants_text = "No variants"
        col1.markdown(f"**{product.title}**  \n{product.description or ''}  \n*{variants_text}*")
        if col2.button("−", key=f"minus_{product.id}", disabled=count == 0):
            draft.set_product_count(product.id, count - 1)
            st.rerun()
        col3.write(f"**{count}**")
        if col4.button("+", key=f"plus_{product.id}"):
            draft.set_product_count(product.id, count + 1)
            st.rerun()

    total = sum(draft.selected_products.values())
    st.caption(f"{total} product(s) selected")

    col_back, col_next = st.columns(2)
    if col_back.button("← Back", key="back_step2"):
        go_to_step(STEP_BASIC_INFO)
        st.rerun()
    if col_next.button("Next →", key="next_step2", type="primary"):
        problems = go_to_step(STEP_CONFIGURE_PRODUCTS)
        for problem in problems:
            st.error(problem)
        if not problems:
            st.rerun()


def render_quick_fill(draft: OrderDraft):
    """Quick Fill: distribute one total across every product's variants."""
    with st.container(border=True):
        st.markdown("**Quick Fill Quantities**")
        st.caption("Distribute quantity evenly across all variants")
        col1, col2 = st.columns([3, 1])
        total = col1.number_input("Total quantity", min_value=0, step=1, value=0,
                                  key="quick_fill_total", label_visibility="collapsed")
        if col2.button("Distribute", key="quick_fill_button"):
            if total > 0:
                draft.quick_fill(int(total))
                bump_editor_version()
                st.rerun()


def render_variant_table(order_product: OrderProductDraft, key: str):
    """Variant table with editable quantity and notes columns."""
    df = pd.DataFrame(
        [{"Variant": i.variant_combo, "Quantity": i.quantity, "Notes": i.notes} for i in order_product.items]
    )
    edited = st.data_editor(
        df,
        key=f"{key}_items_{st.session_state.editor_version}",
        disabled=["Variant"],
        hide_index=True,
        use_container_width=True,
        column_config={
            "Quantity": st.column_config.NumberColumn(min_value=0, step=1),
            "Notes": st.column_config.TextColumn(help="Optional notes..."),
        },
    )
    for idx, row in edited.iterrows():
        order_product.set_quantity(idx, row["Quantity"])
        notes = row["Notes"]
        order_product.set_notes(idx, "" if pd.isna(notes) else str(notes))


def render_sample_request(sample: SampleRequest, key: str):
    """Sample request fields (fee, ETA, status, notes, files)."""
    sample.set_fee(st.text_input("Sample Fee", value=sample.fee, key=f"{key}_sample_fee"))
    sample.set_eta(st.text_input("Sample ETA", value=sample.eta, key=f"{key}_sample_eta"))

    status = sample.effective_status if sample.has_data else sample.status
    sample.status = st.selectbox(
        "Sample Status",
        options=SAMPLE_STATUSES,
        index=SAMPLE_STATUSES.index(status) if status in SAMPLE_STATUSES else 0,
        format_func=lambda s: s.replace("_", " ").title(),
        key=f"{key}_sample_status",
    )
    sample.notes = st.text_area("Sample Notes", value=sample.notes, key=f"{key}_sample_notes")

    render_media_upload(sample.media_files, sample.add_media, sample.remove_media, f"{key}_sample_media")


def render_media_upload(files: list[MediaFile], add, remove, key: str):
    """File uploader plus the list of already attached files."""
    uploaded = st.file_uploader(
        "Attach files",
        type=ACCEPTED_FILE_TYPES,
        accept_multiple_files=True,
        key=key,
    )
    if uploaded and st.button("Add files", key=f"{key}_add"):
        try:
            add(uploaded_to_media(uploaded))
        except OrdersError as e:
            st.error(str(e))
        else:
            st.rerun()

    for idx, f in enumerate(files):
        col1, col2 = st.columns([5, 1])
        col1.write(f"📎 {f.filename} ({f.size / 1024:.0f} KB)")
        if col2.button("✕", key=f"{key}_remove_{idx}"):
            remove(idx)
            st.rerun()


def render_product_card(draft: OrderDraft, index: int):
    """One configurable product instance."""
    order_product = draft.products[index]
    key = f"product_{index}_{order_product.product_order_number}"

    with st.expander(
        f"{order_product.product.title} · {order_product.product_order_number} "
        f"({order_product.total_quantity} units)",
        expanded=True,
    ):
        order_product.description = st.text_input(
            "Product Description", value=order_product.description, key=f"{key}_description"
        )
        col1, col2, col3 = st.columns(3)
        order_product.standard_price = col1.text_input(
            "Standard Price", value=order_product.standard_price, key=f"{key}_standard_price")
        order_product.bulk_price = col2.text_input(
            "Bulk Price", value=order_product.bulk_price, key=f"{key}_bulk_price")
        order_product.production_time = col3.text_input(
            "Production Time", value=order_product.production_time, key=f"{key}_production_time")
        col1, col2 = st.columns(2)
        order_product.shipping_air_price = col1.text_input(
            "Shipping (Air)", value=order_product.shipping_air_price, key=f"{key}_air")
        order_product.shipping_boat_price = col2.text_input(
            "Shipping (Boat)", value=order_product.shipping_boat_price, key=f"{key}_boat")

        render_variant_table(order_product, key)

        st.markdown("**Reference Media**")
        render_media_upload(order_product.media_files, order_product.add_media,
                            order_product.remove_media, f"{key}_media")

        with st.expander("Sample Request", expanded=order_product.sample.is_requested):
            render_sample_request(order_product.sample, key)

        if st.button("Remove product", key=f"{key}_remove"):
            draft.remove_product(index)
            bump_editor_version()
            st.rerun()


def render_product_config(draft: OrderDraft, catalog: Catalog):
    """Step 3: configure every product instance."""
    st.subheader(STEP_LABELS[STEP_CONFIGURE_PRODUCTS])

    client = catalog.find_client(draft.client_id)
    manufacturer = catalog.find_manufacturer(draft.manufacturer_id)
    with st.container(border=True):
        st.markdown(f"### {draft.order_name or 'New Order'}")
        col1, col2 = st.columns(2)
        col1.markdown(f"**Client**  \n{client.name if client else 'N/A'}  \n{client.email if client else 'N/A'}")
        col2.markdown(
            f"**Manufacturer**  \n{manufacturer.name if manufacturer else 'N/A'}  \n"
            f"{manufacturer.email if manufacturer else 'N/A'}"
        )

    render_quick_fill(draft)

    for index in range(len(draft.products)):
        render_product_card(draft, index)

    with st.expander("Order Sample Request", expanded=draft.sample.is_requested):
        render_sample_request(draft.sample, "order")

    if st.button("← Back", key="back_step3"):
        go_to_step(STEP_ADD_PRODUCTS)
        st.rerun()
