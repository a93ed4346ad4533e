#!/usr/bin/env python3
"""
Create an order from a catalog workbook and a draft JSON file

- Loads clients, manufacturers and products from the catalog
- Rebuilds the draft (variant combinations are regenerated from the catalog)
- Saves it as a submitted order, or as a draft with --draft
- Writes the manufacturing sheet to the output directory
"""

import json
import sys
from datetime import datetime
from pathlib import Path

from config import DEFAULT_CATALOG_FILE, OUTPUT_DIR, SCRIPT_USER_ID
from orders import (
    OrderDraft,
    OrderStore,
    OrderSubmitter,
    load_catalog,
    manufacturing_sheet_excel,
)
from orders.config import DB_PATH, MEDIA_DIR
from orders.exceptions import OrdersError, OrderValidationError


def create_order(catalog_file: str, draft_file: str, is_draft: bool = False) -> int:
    """
    Main order creation function

    Args:
        catalog_file: Path to catalog Excel file
        draft_file: Path to draft JSON file
        is_draft: Save as draft instead of submitting

    Returns:
        Process exit code
    """
    print(f"Loading {catalog_file}...")
    catalog, error = load_catalog(catalog_file)
    if error:
        print(f"Error: {error}")
        return 1

    with open(draft_file, encoding="utf-8") as f:
        draft = OrderDraft.from_dict(json.load(f), catalog)

    # Drafts exported before step 3 only carry the product selection
    if not draft.products and draft.selected_products:
        missing = draft.initialize_products(catalog)
        for product_id in missing:
            print(f"  Warning: product not found: {product_id}")

    print(f"Products: {len(draft.products)}")
    print(f"Total units: {draft.total_quantity}")

    store = OrderStore(DB_PATH, MEDIA_DIR)
    store.init_db()

    try:
        result = OrderSubmitter(store, catalog, user_id=SCRIPT_USER_ID).submit(draft, is_draft=is_draft)
    except OrderValidationError as e:
        for problem in e.problems:
            print(f"Error: {problem}")
        return 1
    except OrdersError as e:
        print(f"Error creating order: {e}")
        return 1

    for warning in result.warnings:
        print(f"  Warning: {warning}")

    # Manufacturing sheet
    output_path = Path(OUTPUT_DIR)
    output_path.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    sheet_file = output_path / f"{result.order_number}_{timestamp}.xlsx"
    sheet_file.write_bytes(manufacturing_sheet_excel(result.order_number, draft, result.product_numbers))

    # Summary
    print(f"\n=== Summary ===")
    print(result.message)
    for saved in result.products:
        print(f"  {saved.product_order_number}: {saved.title} ({saved.item_count} variants, {saved.media_count} files)")
    print(f"Manufacturing sheet: {sheet_file}")
    return 0


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if a != "--draft"]

    if not args:
        print("Usage: python create_order.py <draft.json> [catalog.xlsx] [--draft]")
        print("  --draft = save as draft (DRAFT- prefix, not sent to the manufacturer)")
        sys.exit(1)

    draft_file = args[0]
    catalog_file = args[1] if len(args) > 1 else DEFAULT_CATALOG_FILE

    sys.exit(create_order(catalog_file, draft_file, "--draft" in sys.argv[1:]))
