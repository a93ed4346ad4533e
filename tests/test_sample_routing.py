"""Tests for sample routing between admin, manufacturer and client.

Routing Rules:
1. Admin (or super admin) holding the sample -> manufacturer or client
2. Manufacturer or client holding the sample -> back to admin only
3. Never manufacturer <-> client directly
"""

from datetime import datetime

import pytest
from orders.exceptions import SampleRoutingError, StoreError
from orders.sample_routing import (
    SampleRoutingState,
    allowed_destinations,
    append_note,
    can_route,
    route_order_sample,
    route_sample,
)

NOW = datetime(2026, 3, 14, 9, 30)


class TestAllowedDestinations:
    """Transition table lookups."""

    def test_admin_destinations(self):
        assert allowed_destinations("admin", "admin") == {
            "manufacturer": "sent_to_manufacturer",
            "client": "sent_to_client",
        }

    def test_super_admin_acts_as_admin(self):
        assert can_route("super_admin", "admin", "client")

    def test_manufacturer_returns_to_admin_only(self):
        assert allowed_destinations("manufacturer", "manufacturer") == {"admin": "returned_to_admin"}
        assert not can_route("manufacturer", "manufacturer", "client")

    def test_client_returns_to_admin_only(self):
        assert can_route("client", "client", "admin")
        assert not can_route("client", "client", "manufacturer")

    def test_cannot_route_sample_held_by_someone_else(self):
        assert allowed_destinations("manufacturer", "admin") == {}
        assert not can_route("admin", "manufacturer", "client")


class TestRouteSample:
    """Pure routing transition."""

    def test_admin_to_manufacturer(self):
        outcome = route_sample(
            SampleRoutingState(), "admin", "manufacturer",
            order_id="o-1", order_number="HAL-001200", user_id="u-1", user_name="Ana", now=NOW,
        )
        assert outcome.state.routed_to == "manufacturer"
        assert outcome.state.workflow_status == "sent_to_manufacturer"
        assert outcome.state.routed_by == "u-1"
        assert outcome.state.routed_at == NOW.isoformat()
        assert outcome.notify_party == "manufacturer"
        assert "HAL-001200" in outcome.notification_message

    def test_audit_entry(self):
        outcome = route_sample(SampleRoutingState(), "admin", "client", order_id="o-1", now=NOW)
        assert outcome.audit.action_type == "sample_routed"
        assert outcome.audit.target_id == "o-1"
        assert outcome.audit.old_value == "routed_to: admin"
        assert outcome.audit.new_value == "routed_to: client, status: sent_to_client"

    def test_state_not_modified(self):
        state = SampleRoutingState()
        route_sample(state, "admin", "client", now=NOW)
        assert state.routed_to == "admin"

    def test_round_trip_back_to_admin(self):
        sent = route_sample(SampleRoutingState(), "admin", "manufacturer", now=NOW)
        back = route_sample(sent.state, "manufacturer", "admin", notes="Ready", now=NOW)
        assert back.state.routed_to == "admin"
        assert back.state.workflow_status == "returned_to_admin"
        assert back.state.notes == "[03/14/2026 - Manufacturer] Ready"

    def test_forbidden_transition(self):
        sent = route_sample(SampleRoutingState(), "admin", "manufacturer", now=NOW)
        with pytest.raises(SampleRoutingError) as exc:
            route_sample(sent.state, "manufacturer", "client", now=NOW)
        assert exc.value.routed_to == "manufacturer"
        assert exc.value.destination == "client"


class TestAppendNote:
    def test_first_note(self):
        assert append_note("", "Check seams", "super_admin", NOW) == "[03/14/2026 - Admin] Check seams"

    def test_appends_with_blank_line(self):
        notes = append_note("[03/01/2026 - Admin] First", "Second", "client", NOW)
        assert notes == "[03/01/2026 - Admin] First\n\n[03/14/2026 - Client] Second"

    def test_blank_note_keeps_existing(self):
        assert append_note("kept", "   ", "admin", NOW) == "kept"


class TestRouteOrderSample:
    """Routing persisted on a stored order."""

    @pytest.fixture
    def order_id(self, store):
        return store.insert("orders", {
            "order_number": "HAL-001200",
            "client_id": "c-001",
            "manufacturer_id": "m-001",
            "created_by": "admin-1",
            "sample_routed_to": "admin",
            "sample_workflow_status": "pending",
            "sample_notes": "",
        })

    def test_persists_state_audit_and_notification(self, store, order_id):
        route_order_sample(
            store, order_id, "admin", "manufacturer",
            notes="Two pieces please", user_id="admin-1", user_name="Ana", now=NOW,
        )
        order = store.fetch_one("orders", order_id)
        assert order["sample_routed_to"] == "manufacturer"
        assert order["sample_workflow_status"] == "sent_to_manufacturer"
        assert order["sample_notes"] == "[03/14/2026 - Admin] Two pieces please"

        audit = store.fetch_all("audit_log", target_id=order_id)
        assert len(audit) == 1
        assert audit[0]["user_name"] == "Ana"

        notifications = store.fetch_all("notifications", order_id=order_id)
        assert [n["user_id"] for n in notifications] == ["m-001"]

    def test_return_notifies_creator(self, store, order_id):
        route_order_sample(store, order_id, "admin", "client", now=NOW)
        route_order_sample(store, order_id, "client", "admin", notes="Approved", now=NOW)
        notifications = store.fetch_all("notifications", order_id=order_id)
        assert [n["user_id"] for n in notifications] == ["c-001", "admin-1"]
        assert store.fetch_one("orders", order_id)["sample_workflow_status"] == "returned_to_admin"

    def test_rejected_transition_writes_nothing(self, store, order_id):
        with pytest.raises(SampleRoutingError):
            route_order_sample(store, order_id, "manufacturer", "client", now=NOW)
        assert store.fetch_all("audit_log") == []
        assert store.fetch_one("orders", order_id)["sample_routed_to"] == "admin"

    def test_unknown_order(self, store):
        with pytest.raises(StoreError):
            route_order_sample(store, "missing", "admin", "client", now=NOW)
