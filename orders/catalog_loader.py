"""Catalog workbook loading.

This module loads clients, manufacturers and products (with variants) from an
Excel workbook. It is UI-agnostic and can be used by both Streamlit and CLI
applications.
"""

import pandas as pd
from typing import BinaryIO, Union

from .config import (
    CLIENTS_SHEET,
    MANUFACTURERS_SHEET,
    PRODUCTS_SHEET,
    VARIANTS_SHEET,
    PARTY_COLUMNS,
    PRODUCT_COLUMNS,
    VARIANT_COLUMNS,
)
from .exceptions import VariantKeyCollisionError
from .logger import get_logger
from .models import Catalog, Party, Product, VariantDimension
from .variants import group_variants_by_type

log = get_logger("catalog_loader")


def cell_text(val) -> str:
    """Convert cell value to string, treating NaN/empty as "" and whole floats as ints."""
    if val is None or pd.isna(val):
        return ""
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val).strip()


def validate_required_columns(
    df: pd.DataFrame,
    required_columns: list[str]
) -> tuple[bool, list[str]]:
    """Validate that DataFrame has all required columns.

    Args:
        df: DataFrame to validate
        required_columns: List of required column names

    Returns:
        Tuple of (is_valid, list_of_missing_columns)
    """
    missing = [col for col in required_columns if col not in df.columns]
    return len(missing) == 0, missing


def parse_parties(df: pd.DataFrame) -> list[Party]:
    """Build clients or manufacturers from a sheet, sorted by name. Rows without id are skipped."""
    parties = []
    for _, row in df.iterrows():
        party_id = cell_text(row["id"])
        if not party_id:
            continue
        parties.append(Party(
            id=party_id,
            name=cell_text(row["name"]),
            email=cell_text(row["email"]),
        ))
    return sorted(parties, key=lambda p: p.name.lower())


def parse_products(products_df: pd.DataFrame, variants_df: pd.DataFrame | None) -> list[Product]:
    """Build products and attach their variant dimensions, sorted by title.

    Variant rows keep their sheet order, which fixes the dimension order (and
    therefore the combination keys) for each product.
    """
    rows_by_product: dict[str, list[tuple[str, str]]] = {}
    if variants_df is not None:
        for _, row in variants_df.iterrows():
            product_id = cell_text(row["product_id"])
            if product_id:
                rows_by_product.setdefault(product_id, []).append(
                    (cell_text(row["type"]), cell_text(row["option"]))
                )

    products = []
    for _, row in products_df.iterrows():
        product_id = cell_text(row["id"])
        if not product_id:
            continue
        dimensions = group_variants_by_type(rows_by_product.get(product_id, []))
        products.append(Product(
            id=product_id,
            title=cell_text(row["title"]),
            description=cell_text(row["description"]),
            variants=[VariantDimension(name=n, options=o) for n, o in dimensions.items()],
        ))
    return sorted(products, key=lambda p: p.title.lower())


def load_catalog(
    file: Union[str, BinaryIO]
) -> tuple[Catalog | None, str | None]:
    """Load catalog workbook.

    Required sheets: Clients, Manufacturers, Products. The Variants sheet is
    optional (products without variants get a single "No Variants" line).

    Args:
        file: Path or file-like object (uploaded file or opened file)

    Returns:
        Tuple of (Catalog, error_message)
        If successful: (catalog, None)
        If error: (None, error_message)
    """
    try:
        sheets = pd.read_excel(file, sheet_name=None, dtype=object)
    except Exception as e:
        log.error(f"Error reading catalog file: {e}")
        return None, f"Error reading file: {e}"
    finally:
        if hasattr(file, "seek"):
            file.seek(0)

    required = {
        CLIENTS_SHEET: PARTY_COLUMNS,
        MANUFACTURERS_SHEET: PARTY_COLUMNS,
        PRODUCTS_SHEET: PRODUCT_COLUMNS,
    }
    for sheet, columns in required.items():
        if sheet not in sheets:
            return None, f"Sheet '{sheet}' not found"
        is_valid, missing = validate_required_columns(sheets[sheet], columns)
        if not is_valid:
            return None, f"Sheet '{sheet}' is missing columns: {', '.join(missing)}"

    variants_df = sheets.get(VARIANTS_SHEET)
    if variants_df is not None:
        is_valid, missing = validate_required_columns(variants_df, VARIANT_COLUMNS)
        if not is_valid:
            return None, f"Sheet '{VARIANTS_SHEET}' is missing columns: {', '.join(missing)}"

    catalog = Catalog(
        clients=parse_parties(sheets[CLIENTS_SHEET]),
        manufacturers=parse_parties(sheets[MANUFACTURERS_SHEET]),
        products=parse_products(sheets[PRODUCTS_SHEET], variants_df),
    )
    for product in catalog.products:
        try:
            product.variant_combinations()
        except VariantKeyCollisionError as e:
            log.error(f"Product {product.id} has colliding variant keys: {e.duplicates}")
            return None, f"Product '{product.title}': {e}"

    log.info(
        f"Catalog loaded: {len(catalog.clients)} clients, "
        f"{len(catalog.manufacturers)} manufacturers, {len(catalog.products)} products"
    )
    return catalog, None
