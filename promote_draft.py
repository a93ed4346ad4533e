#!/usr/bin/env python3
"""
Submit a saved draft order to its manufacturer

- Without arguments: lists saved drafts
- With an order number: DRAFT-001203 becomes e.g. HAL-001203, products are
  routed to the manufacturer and the manufacturer is notified
"""

import sys

from config import DEFAULT_CATALOG_FILE
from orders import OrderStore, OrderSubmitter, format_order_number, load_catalog
from orders.config import DB_PATH, MEDIA_DIR, ORDER_STATUS_DRAFT
from orders.exceptions import OrdersError


def list_drafts(store: OrderStore) -> int:
    drafts = store.fetch_all("orders", status=ORDER_STATUS_DRAFT)
    if not drafts:
        print("No saved drafts.")
        return 0
    print(f"Saved drafts ({len(drafts)}):")
    for order in drafts:
        print(f"  {format_order_number(order['order_number'])}  {order['order_name'] or ''}")
    return 0


def promote_draft(order_number: str, catalog_file: str) -> int:
    """
    Main draft promotion function

    Args:
        order_number: Draft order number (padding is fixed, e.g. DRAFT-1203)
        catalog_file: Catalog workbook (client names for the order prefix)

    Returns:
        Process exit code
    """
    catalog, error = load_catalog(catalog_file)
    if error:
        print(f"Error: {error}")
        return 1

    store = OrderStore(DB_PATH, MEDIA_DIR)
    store.init_db()

    order_number = format_order_number(order_number)
    order = store.find_order(order_number)
    if order is None:
        print(f"Error: order {order_number} not found")
        return 1

    try:
        result = OrderSubmitter(store, catalog).promote_draft(order["id"])
    except OrdersError as e:
        print(f"Error: {e}")
        return 1

    for warning in result.warnings:
        print(f"  Warning: {warning}")
    print(f"{order_number} -> {result.order_number}")
    print(result.message)
    return 0


if __name__ == "__main__":
    store = OrderStore(DB_PATH, MEDIA_DIR)
    store.init_db()

    if len(sys.argv) < 2:
        print("Usage: python promote_draft.py <draft order number> [catalog.xlsx]")
        sys.exit(list_drafts(store))

    catalog_file = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_CATALOG_FILE
    sys.exit(promote_draft(sys.argv[1], catalog_file))
