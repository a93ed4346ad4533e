"""Shared fixtures for order creation tests."""

import pytest
import pandas as pd
from orders.models import (
    Catalog,
    MediaFile,
    OrderDraft,
    Party,
    Product,
    VariantDimension,
)
from orders.store import OrderStore

CLIENT_ID = "c-001"
MANUFACTURER_ID = "m-001"
TEE_ID = "p-tee"
TOTE_ID = "p-tote"
CAP_ID = "p-cap"


def make_product(product_id: str, title: str, description: str = "", **dimensions) -> Product:
    """Helper to create a product; keyword order is dimension order."""
    return Product(
        id=product_id,
        title=title,
        description=description,
        variants=[VariantDimension(name=n, options=list(o)) for n, o in dimensions.items()],
    )


def make_media(filename: str, content_type: str = "image/png", size: int = 16) -> MediaFile:
    """Helper to create an in-memory media file."""
    return MediaFile(filename=filename, content_type=content_type, data=b"x" * size)


def make_catalog_sheets(variants: list[tuple] | None = None) -> dict[str, pd.DataFrame]:
    """Catalog workbook contents as DataFrames, keyed by sheet name.

    Args:
        variants: (product_id, type, option) rows; None leaves the Variants sheet out
    """
    sheets = {
        "Clients": pd.DataFrame([
            {"id": CLIENT_ID, "name": "Halcyon Apparel", "email": "orders@halcyon.example"},
            {"id": "c-002", "name": "Bluebird Kids", "email": ""},
        ]),
        "Manufacturers": pd.DataFrame([
            {"id": MANUFACTURER_ID, "name": "Everbright", "email": "factory@everbright.example"},
        ]),
        "Products": pd.DataFrame([
            {"id": TEE_ID, "title": "Slim Tee", "description": "Performance"},
            {"id": TOTE_ID, "title": "Tote Bag", "description": ""},
        ]),
    }
    if variants is not None:
        sheets["Variants"] = pd.DataFrame(variants, columns=["product_id", "type", "option"])
    return sheets


def write_workbook(path, sheets: dict[str, pd.DataFrame]):
    """Write DataFrames to an xlsx file, one sheet each."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, index=False, sheet_name=name)
    return path


@pytest.fixture
def tee():
    """Product with two dimensions: 2 colors x 3 sizes."""
    return make_product(TEE_ID, "Slim Tee", "Performance", Color=["Red", "Blue"], Size=["S", "M", "L"])


@pytest.fixture
def tote():
    """Product without variants."""
    return make_product(TOTE_ID, "Tote Bag")


@pytest.fixture
def cap():
    """Product with an empty dimension next to a real one."""
    return make_product(CAP_ID, "Cap", "", Color=["Navy", "Khaki"], Size=[])


@pytest.fixture
def catalog(tee, tote, cap):
    """Catalog with one client, one manufacturer and three products."""
    return Catalog(
        clients=[Party(CLIENT_ID, "Halcyon Apparel", "orders@halcyon.example")],
        manufacturers=[Party(MANUFACTURER_ID, "Everbright", "factory@everbright.example")],
        products=[tee, tote, cap],
    )


@pytest.fixture
def draft(catalog):
    """Draft at step 3 with one tee and one tote configured."""
    d = OrderDraft(order_name="Spring drop", client_id=CLIENT_ID, manufacturer_id=MANUFACTURER_ID)
    d.set_product_count(TEE_ID, 1)
    d.set_product_count(TOTE_ID, 1)
    d.initialize_products(catalog)
    d.current_step = 3
    return d


@pytest.fixture
def store(tmp_path):
    """Empty order store in a temporary directory."""
    s = OrderStore(tmp_path / "orders.db", tmp_path / "media")
    s.init_db()
    return s
