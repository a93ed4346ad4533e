"""Tests for the demo catalog workbook."""

from orders.catalog_loader import load_catalog
from sample_catalog import create_sample_catalog


class TestSampleCatalog:
    """The generated workbook loads like an uploaded catalog."""

    def test_writes_requested_path(self, tmp_path):
        target = create_sample_catalog(tmp_path / "nested" / "catalog.xlsx")
        assert target == tmp_path / "nested" / "catalog.xlsx"
        assert target.exists()

    def test_loads_without_error(self, tmp_path):
        target = create_sample_catalog(tmp_path / "catalog.xlsx")
        catalog, error = load_catalog(target)
        assert error is None
        assert len(catalog.clients) == 3
        assert len(catalog.manufacturers) == 1
        tee = catalog.find_product("p-001")
        assert len(tee.variant_combinations()) == 6
        assert catalog.find_product("p-003").variant_combinations() == ["No Variants"]
