"""Results rendering UI components.

This module provides Streamlit components for rendering the saved order and
its manufacturing sheet download.
"""

import streamlit as st
from datetime import datetime

from orders.exporter import build_manufacturing_sheet, manufacturing_sheet_excel
from orders.models import OrderDraft
from orders.submission import SubmissionResult


def render_results(result: SubmissionResult, draft: OrderDraft):
    """Render the saved order summary with the manufacturing sheet download.

    Args:
        result: Outcome of saving the order
        draft: The draft that was saved (source of the line items)
    """
    st.success(result.message)

    col1, col2, col3 = st.columns(3)
    col1.metric("Order Number", result.order_number)
    col2.metric("Products", result.product_count)
    col3.metric("Total Units", draft.total_quantity)

    if result.warnings:
        with st.expander(f"Warnings ({len(result.warnings)})"):
            for warning in result.warnings:
                st.warning(warning)

    st.divider()
    st.subheader("Products")
    for saved in result.products:
        st.markdown(
            f"└─ **{saved.product_order_number}** {saved.title}: "
            f"{saved.item_count} variants, {saved.media_count} files"
        )

    product_numbers = result.product_numbers
    sheet = build_manufacturing_sheet(result.order_number, draft, product_numbers)
    with st.expander("Manufacturing sheet preview"):
        st.dataframe(sheet, hide_index=True, use_container_width=True)

    st.download_button(
        label="Download manufacturing sheet",
        data=manufacturing_sheet_excel(result.order_number, draft, product_numbers),
        file_name=f"{result.order_number}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        type="primary",
        key=f"download_{result.order_number}",
    )
