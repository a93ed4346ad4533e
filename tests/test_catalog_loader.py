"""Tests for catalog workbook loading."""

import io

import pandas as pd
from orders.catalog_loader import cell_text, load_catalog, validate_required_columns
from tests.conftest import TEE_ID, TOTE_ID, make_catalog_sheets, write_workbook

TEE_VARIANTS = [
    (TEE_ID, "Size", "S"),
    (TEE_ID, "Color", "Red"),
    (TEE_ID, "Size", "M"),
    (TEE_ID, "Color", "Blue"),
]


class TestLoadCatalog:
    """Workbook with Clients, Manufacturers, Products and Variants sheets."""

    def test_loads_all_sheets(self, tmp_path):
        path = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets(TEE_VARIANTS))
        catalog, error = load_catalog(str(path))

        assert error is None
        assert [c.name for c in catalog.clients] == ["Bluebird Kids", "Halcyon Apparel"]
        assert catalog.clients[0].email == ""
        assert len(catalog.manufacturers) == 1
        assert [p.title for p in catalog.products] == ["Slim Tee", "Tote Bag"]

    def test_dimension_order_follows_sheet(self, tmp_path):
        path = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets(TEE_VARIANTS))
        catalog, _ = load_catalog(str(path))
        tee = catalog.find_product(TEE_ID)

        assert [v.name for v in tee.variants] == ["Size", "Color"]
        assert tee.variant_combinations() == ["S / Red", "S / Blue", "M / Red", "M / Blue"]

    def test_product_without_variant_rows(self, tmp_path):
        path = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets(TEE_VARIANTS))
        catalog, _ = load_catalog(str(path))
        assert catalog.find_product(TOTE_ID).variant_combinations() == ["No Variants"]

    def test_variants_sheet_optional(self, tmp_path):
        path = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets(None))
        catalog, error = load_catalog(str(path))
        assert error is None
        assert all(p.variants == [] for p in catalog.products)

    def test_file_like_object(self, tmp_path):
        path = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets(TEE_VARIANTS))
        buffer = io.BytesIO(path.read_bytes())
        catalog, error = load_catalog(buffer)
        assert error is None
        assert buffer.tell() == 0

    def test_missing_sheet(self, tmp_path):
        sheets = make_catalog_sheets(None)
        del sheets["Manufacturers"]
        path = write_workbook(tmp_path / "catalog.xlsx", sheets)
        catalog, error = load_catalog(str(path))
        assert catalog is None
        assert error == "Sheet 'Manufacturers' not found"

    def test_missing_columns(self, tmp_path):
        sheets = make_catalog_sheets(None)
        sheets["Products"] = sheets["Products"].drop(columns=["description"])
        path = write_workbook(tmp_path / "catalog.xlsx", sheets)
        catalog, error = load_catalog(str(path))
        assert catalog is None
        assert "description" in error

    def test_colliding_variant_keys(self, tmp_path):
        variants = [
            (TEE_ID, "Color", "Red / Blue"),
            (TEE_ID, "Color", "Red"),
            (TEE_ID, "Size", "S"),
            (TEE_ID, "Size", "Blue / S"),
        ]
        path = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets(variants))
        catalog, error = load_catalog(str(path))
        assert catalog is None
        assert error.startswith("Product 'Slim Tee'")
        assert "Red / Blue / S" in error

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "not_excel.xlsx"
        path.write_text("hello")
        catalog, error = load_catalog(str(path))
        assert catalog is None
        assert error.startswith("Error reading file")


class TestHelpers:
    def test_cell_text(self):
        assert cell_text(float("nan")) == ""
        assert cell_text(None) == ""
        assert cell_text(1203.0) == "1203"
        assert cell_text("  Red ") == "Red"

    def test_validate_required_columns(self):
        df = pd.DataFrame(columns=["id", "name"])
        assert validate_required_columns(df, ["id", "name"]) == (True, [])
        assert validate_required_columns(df, ["id", "email"]) == (False, ["email"])
