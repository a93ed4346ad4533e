"""Tests for the command-line scripts against a temporary store."""

import pytest

import promote_draft
import route_sample
from orders.store import OrderStore
from orders.submission import OrderSubmitter
from tests.conftest import make_catalog_sheets, write_workbook


@pytest.fixture
def script_store(tmp_path, monkeypatch):
    """Point both scripts at a store in tmp_path."""
    db_path, media_dir = tmp_path / "orders.db", tmp_path / "media"
    for module in (promote_draft, route_sample):
        monkeypatch.setattr(module, "DB_PATH", db_path)
        monkeypatch.setattr(module, "MEDIA_DIR", media_dir)
    store = OrderStore(db_path, media_dir)
    store.init_db()
    return store


class TestPromoteDraftScript:
    """Drafts are looked up by (possibly unpadded) number and sent on."""

    def test_promotes_unpadded_number(self, tmp_path, script_store, catalog, draft, capsys):
        saved = OrderSubmitter(script_store, catalog).submit(draft, is_draft=True)
        catalog_file = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets())

        assert promote_draft.promote_draft("DRAFT-1200", catalog_file) == 0
        assert "DRAFT-001200 -> HAL-001200" in capsys.readouterr().out
        assert script_store.fetch_one("orders", saved.order_id)["status"] == "in_progress"

    def test_unknown_number(self, tmp_path, script_store, capsys):
        catalog_file = write_workbook(tmp_path / "catalog.xlsx", make_catalog_sheets())
        assert promote_draft.promote_draft("DRAFT-9999", catalog_file) == 1
        assert "DRAFT-009999 not found" in capsys.readouterr().out

    def test_list_drafts(self, script_store, catalog, draft, capsys):
        OrderSubmitter(script_store, catalog).submit(draft, is_draft=True)
        OrderSubmitter(script_store, catalog).submit(draft)
        assert promote_draft.list_drafts(script_store) == 0
        out = capsys.readouterr().out
        assert "Saved drafts (1)" in out
        assert "DRAFT-001200" in out


class TestRouteSampleScript:
    """Sample routing from the command line."""

    @pytest.fixture
    def order(self, script_store):
        script_store.insert("orders", {
            "order_number": "HAL-001200",
            "client_id": "c-001",
            "manufacturer_id": "m-001",
            "sample_routed_to": "admin",
            "sample_notes": "",
        })
        return script_store.find_order("HAL-001200")

    def test_admin_sends_to_manufacturer(self, script_store, order, capsys):
        assert route_sample.route("HAL-1200", "admin", "manufacturer", "Two pieces") == 0
        stored = script_store.fetch_one("orders", order["id"])
        assert stored["sample_routed_to"] == "manufacturer"
        assert "Two pieces" in stored["sample_notes"]
        assert script_store.fetch_all("audit_log")[0]["user_name"] == "Command line"
        assert "admin -> manufacturer" in capsys.readouterr().out

    def test_disallowed_move_lists_destinations(self, script_store, order, capsys):
        assert route_sample.route("HAL-001200", "client", "manufacturer") == 1
        out = capsys.readouterr().out
        assert "Allowed destinations: none" in out
        assert script_store.fetch_all("audit_log") == []

    def test_unknown_order(self, script_store, capsys):
        assert route_sample.route("HAL-5", "admin", "client") == 1
        assert "HAL-000005 not found" in capsys.readouterr().out
