"""Manufacturing sheet export - one row per variant line item."""

import io
from typing import Iterator, Mapping, Optional

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from .config import EXPORT_COLUMNS
from .models import OrderDraft, OrderProductDraft
from .numbering import product_order_number

SUMMARY_SHEET = "Summary"
SUMMARY_COLUMNS = ["Product Number", "Product", "Total Quantity"]
HEADER_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")


def _numbered_products(
    order_number: str,
    draft: OrderDraft,
    product_numbers: Optional[Mapping[int, str]],
) -> Iterator[tuple[str, OrderProductDraft]]:
    """(product number, product) pairs in draft order.

    With saved numbers, only the products they name are exported.
    """
    for idx, order_product in enumerate(draft.products):
        if product_numbers is None:
            yield product_order_number(order_number, order_product.product.title, order_product.description), order_product
        elif idx in product_numbers:
            yield product_numbers[idx], order_product


def _product_rows(order_number: str, number: str, order_product: OrderProductDraft) -> list[dict]:
    return [
        {
            "Order Number": order_number,
            "Product Number": number,
            "Product": order_product.description or order_product.product.title,
            "Variant": item.variant_combo,
            "Quantity": item.quantity,
            "Notes": item.notes,
        }
        for item in order_product.items
    ]


def build_manufacturing_sheet(
    order_number: str,
    draft: OrderDraft,
    product_numbers: Optional[Mapping[int, str]] = None,
) -> pd.DataFrame:
    """
    Build the manufacturing sheet for an order.

    Args:
        order_number: Saved order number
        draft: Order draft with configured products
        product_numbers: Saved product numbers keyed by draft position
            (SubmissionResult.product_numbers). Products missing from it were
            not saved and are left out. Numbers are computed from the order
            number when omitted.

    Returns:
        DataFrame with EXPORT_COLUMNS, one row per line item (zero quantities included)
    """
    rows = []
    for number, order_product in _numbered_products(order_number, draft, product_numbers):
        rows.extend(_product_rows(order_number, number, order_product))
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def _sheet_name(name: str, used: set[str]) -> str:
    """Excel-safe unique sheet name (max 31 chars, no []:*?/\\)."""
    cleaned = "".join("_" if c in "[]:*?/\\" else c for c in name)[:31] or "Sheet"
    candidate, n = cleaned, 2
    while candidate in used:
        suffix = f" ({n})"
        candidate = cleaned[:31 - len(suffix)] + suffix
        n += 1
    used.add(candidate)
    return candidate


def manufacturing_sheet_excel(
    order_number: str,
    draft: OrderDraft,
    product_numbers: Optional[Mapping[int, str]] = None,
) -> bytes:
    """
    Export the manufacturing sheet as xlsx bytes.

    The Summary sheet lists total quantity per product instance; each instance
    then gets its own sheet with its variant lines, even when two instances
    share a product number.
    """
    numbered = list(_numbered_products(order_number, draft, product_numbers))
    summary = pd.DataFrame(
        [
            {
                "Product Number": number,
                "Product": order_product.description or order_product.product.title,
                "Total Quantity": order_product.total_quantity,
            }
            for number, order_product in numbered
        ],
        columns=SUMMARY_COLUMNS,
    )

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        used = {SUMMARY_SHEET}
        summary.to_excel(writer, index=False, sheet_name=SUMMARY_SHEET)
        for number, order_product in numbered:
            product_df = pd.DataFrame(_product_rows(order_number, number, order_product), columns=EXPORT_COLUMNS)
            product_df[["Variant", "Quantity", "Notes"]].to_excel(
                writer, index=False, sheet_name=_sheet_name(number, used)
            )

        for ws in writer.book.worksheets:
            for cell in ws[1]:
                cell.font = Font(bold=True)
                cell.fill = HEADER_FILL
            for col_idx, column in enumerate(ws.iter_cols(min_row=1, max_row=ws.max_row), start=1):
                width = max((len(str(c.value)) for c in column if c.value is not None), default=8)
                ws.column_dimensions[get_column_letter(col_idx)].width = min(width + 2, 60)

    return buffer.getvalue()
