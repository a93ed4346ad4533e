#!/usr/bin/env python3
"""Generate a demo catalog workbook for the order creation app"""

import sys
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import PatternFill, Font

from config import DEFAULT_CATALOG_FILE
from orders.config import (
    CLIENTS_SHEET,
    MANUFACTURERS_SHEET,
    PRODUCTS_SHEET,
    VARIANTS_SHEET,
    PARTY_COLUMNS,
    PRODUCT_COLUMNS,
    VARIANT_COLUMNS,
)

CLIENTS = [
    ("c-001", "Halcyon Apparel", "orders@halcyon.example"),
    ("c-002", "Northwind Outfitters", "buying@northwind.example"),
    ("c-003", "Bluebird Kids", "hello@bluebird.example"),
]

MANUFACTURERS = [
    ("m-001", "Everbright Garment Co.", "factory@everbright.example"),
]

PRODUCTS = [
    ("p-001", "Slim Tee", "Crew neck cotton tee"),
    ("p-002", "Hoodie", "Heavyweight fleece hoodie"),
    ("p-003", "Tote Bag", "Canvas tote"),
    ("p-004", "Cap", "Six panel cap"),
]

# (product_id, variant type, option) in display order
VARIANTS = [
    ("p-001", "Color", "Red"),
    ("p-001", "Color", "Blue"),
    ("p-001", "Size", "S"),
    ("p-001", "Size", "M"),
    ("p-001", "Size", "L"),
    ("p-002", "Color", "Black"),
    ("p-002", "Color", "Heather Grey"),
    ("p-002", "Size", "M"),
    ("p-002", "Size", "L"),
    ("p-002", "Size", "XL"),
    ("p-002", "Print", "Front"),
    ("p-002", "Print", "Back"),
    ("p-004", "Color", "Navy"),
    ("p-004", "Color", "Khaki"),
]

HEADER_FILL = PatternFill("solid", fgColor="DDEBF7")


def write_sheet(wb: Workbook, title: str, headers: list[str], rows: list[tuple]):
    """Add a sheet with a bold, filled header row."""
    ws = wb.create_sheet(title)
    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
        ws.cell(row=1, column=col).font = Font(bold=True)
        ws.cell(row=1, column=col).fill = HEADER_FILL
    for i, values in enumerate(rows):
        for col, value in enumerate(values, 1):
            ws.cell(row=2 + i, column=col, value=value)
    for col_letter in "ABC":
        ws.column_dimensions[col_letter].width = 32
    return ws


def create_sample_catalog(target: str = DEFAULT_CATALOG_FILE) -> Path:
    """Write the demo catalog to target (the path the app and scripts read by default)."""
    wb = Workbook()
    wb.remove(wb.active)

    write_sheet(wb, CLIENTS_SHEET, PARTY_COLUMNS, CLIENTS)
    write_sheet(wb, MANUFACTURERS_SHEET, PARTY_COLUMNS, MANUFACTURERS)
    write_sheet(wb, PRODUCTS_SHEET, PRODUCT_COLUMNS, PRODUCTS)
    write_sheet(wb, VARIANTS_SHEET, VARIANT_COLUMNS, VARIANTS)

    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    wb.save(target)

    print(f"Created: {target}")
    print(f"  - {len(CLIENTS)} clients, {len(MANUFACTURERS)} manufacturers")
    print(f"  - {len(PRODUCTS)} products ({len(VARIANTS)} variant options)")
    print("  - Slim Tee: 6 combinations, Hoodie: 12, Tote Bag: none, Cap: 2")
    return target


if __name__ == "__main__":
    create_sample_catalog(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CATALOG_FILE)
