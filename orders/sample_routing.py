"""Sample request routing between admin, manufacturer and client.

Routing rules:
- Admin can route to: Manufacturer, Client
- Manufacturer can route to: Admin only
- Client can route to: Admin only (approve/reject)
- Never Manufacturer <-> Client directly

A party can only route a sample it currently holds.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from .config import NOTIFICATION_SAMPLE_ROUTED
from .exceptions import SampleRoutingError, StoreError
from .logger import get_logger

log = get_logger("sample_routing")

ADMIN = "admin"
MANUFACTURER = "manufacturer"
CLIENT = "client"
PARTIES = (ADMIN, MANUFACTURER, CLIENT)

# (acting party, current holder) -> {destination: new workflow status}
TRANSITIONS: dict[tuple[str, str], dict[str, str]] = {
    (ADMIN, ADMIN): {
        MANUFACTURER: "sent_to_manufacturer",
        CLIENT: "sent_to_client",
    },
    (MANUFACTURER, MANUFACTURER): {
        ADMIN: "returned_to_admin",
    },
    (CLIENT, CLIENT): {
        ADMIN: "returned_to_admin",
    },
}

NOTIFICATION_MESSAGES = {
    ADMIN: "Sample request returned to admin for order {order_number}",
    MANUFACTURER: "Sample request sent to you for order {order_number}",
    CLIENT: "Sample ready for your review on order {order_number}",
}


def party_for_role(role: str) -> str:
    """Map a user role to the routing party it acts as."""
    if role == "super_admin":
        return ADMIN
    return role


def role_display_name(role: str) -> str:
    """Role name used in note prefixes ("super_admin" shows as "Admin")."""
    party = party_for_role(role)
    return party[:1].upper() + party[1:]


@dataclass
class SampleRoutingState:
    """Where the sample request currently sits."""
    routed_to: str = ADMIN
    workflow_status: str = "pending"
    routed_at: Optional[str] = None
    routed_by: Optional[str] = None
    notes: str = ""


@dataclass
class AuditEntry:
    """Audit log row for one routing action."""
    user_id: Optional[str]
    user_name: str
    action_type: str
    target_type: str
    target_id: Optional[str]
    old_value: str
    new_value: str
    timestamp: str


@dataclass
class RoutingOutcome:
    """Everything a routing action produces."""
    state: SampleRoutingState
    audit: AuditEntry
    notify_party: str
    notification_type: str = NOTIFICATION_SAMPLE_ROUTED
    notification_message: str = ""


def allowed_destinations(role: str, routed_to: str) -> dict[str, str]:
    """Destinations (and resulting statuses) available to a role for the current holder."""
    return dict(TRANSITIONS.get((party_for_role(role), routed_to), {}))


def can_route(role: str, routed_to: str, destination: str) -> bool:
    return destination in allowed_destinations(role, routed_to)


def append_note(existing: str, note: Optional[str], role: str, when: datetime) -> str:
    """Append a dated, role-tagged note to the existing sample notes."""
    if not note or not note.strip():
        return existing or ""
    entry = f"[{when.strftime('%m/%d/%Y')} - {role_display_name(role)}] {note.strip()}"
    return f"{existing}\n\n{entry}" if existing else entry


def route_sample(
    state: SampleRoutingState,
    role: str,
    destination: str,
    *,
    order_id: Optional[str] = None,
    order_number: str = "",
    notes: Optional[str] = None,
    user_id: Optional[str] = None,
    user_name: str = "Unknown User",
    now: Optional[datetime] = None,
) -> RoutingOutcome:
    """
    Move a sample request to another party.

    Args:
        state: Current routing state (not modified)
        role: Role of the acting user
        destination: Party to route to
        order_id: Order the sample belongs to (for the audit row)
        order_number: Order number (for the notification message)
        notes: Optional note appended to the sample notes
        user_id: Acting user id
        user_name: Acting user display name
        now: Timestamp to record (defaults to current time)

    Returns:
        RoutingOutcome with the new state, audit row and notification

    Raises:
        SampleRoutingError: If the transition is not allowed
    """
    destinations = allowed_destinations(role, state.routed_to)
    if destination not in destinations:
        log.warning(f"Rejected sample routing: role={role} holder={state.routed_to} destination={destination}")
        raise SampleRoutingError(role, state.routed_to, destination)

    now = now or datetime.now()
    timestamp = now.isoformat()
    new_status = destinations[destination]

    new_state = SampleRoutingState(
        routed_to=destination,
        workflow_status=new_status,
        routed_at=timestamp,
        routed_by=user_id,
        notes=append_note(state.notes, notes, role, now),
    )

    audit = AuditEntry(
        user_id=user_id,
        user_name=user_name,
        action_type="sample_routed",
        target_type="order",
        target_id=order_id,
        old_value=f"routed_to: {state.routed_to}",
        new_value=f"routed_to: {destination}, status: {new_status}",
        timestamp=timestamp,
    )

    log.info(f"Sample for order {order_number or order_id} routed {state.routed_to} -> {destination} ({new_status})")

    return RoutingOutcome(
        state=new_state,
        audit=audit,
        notify_party=destination,
        notification_message=NOTIFICATION_MESSAGES[destination].format(order_number=order_number),
    )


def route_order_sample(
    store,
    order_id: str,
    role: str,
    destination: str,
    *,
    notes: Optional[str] = None,
    user_id: Optional[str] = None,
    user_name: str = "Unknown User",
    now: Optional[datetime] = None,
) -> RoutingOutcome:
    """
    Route the order-level sample of a stored order and persist the result.

    Updates the order's sample_* columns, writes an audit_log row and a
    notification for the receiving party.

    Args:
        store: OrderStore holding the order
        order_id: Order to route

    Raises:
        StoreError: If the order does not exist
        SampleRoutingError: If the transition is not allowed
    """
    order = store.fetch_one("orders", order_id)
    if order is None:
        raise StoreError(f"Order not found: {order_id}")

    state = SampleRoutingState(
        routed_to=order.get("sample_routed_to") or ADMIN,
        workflow_status=order.get("sample_workflow_status") or "pending",
        routed_at=order.get("sample_routed_at"),
        routed_by=order.get("sample_routed_by"),
        notes=order.get("sample_notes") or "",
    )
    outcome = route_sample(
        state, role, destination,
        order_id=order_id,
        order_number=order.get("order_number") or "",
        notes=notes,
        user_id=user_id,
        user_name=user_name,
        now=now,
    )

    store.update("orders", order_id, {
        "sample_routed_to": outcome.state.routed_to,
        "sample_workflow_status": outcome.state.workflow_status,
        "sample_routed_at": outcome.state.routed_at,
        "sample_routed_by": outcome.state.routed_by,
        "sample_notes": outcome.state.notes,
    })
    store.insert("audit_log", asdict(outcome.audit))

    recipients = {
        ADMIN: order.get("created_by"),
        MANUFACTURER: order.get("manufacturer_id"),
        CLIENT: order.get("client_id"),
    }
    recipient = recipients.get(destination)
    if recipient:
        store.insert("notifications", {
            "user_id": recipient,
            "type": outcome.notification_type,
            "message": outcome.notification_message,
            "order_id": order_id,
        })
    else:
        log.warning(f"No recipient for sample notification on order {order_id} ({destination})")

    return outcome
