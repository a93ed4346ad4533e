#!/usr/bin/env python3
"""
Route the sample request of a stored order

- Admin can send the sample to the manufacturer or the client
- Manufacturer and client can only return it to the admin
- Notes are appended as "[date - Role] note"
"""

import sys

from config import SCRIPT_USER_ID
from orders import (
    OrderStore,
    allowed_destinations,
    can_route,
    format_order_number,
    route_order_sample,
)
from orders.config import DB_PATH, MEDIA_DIR
from orders.exceptions import OrdersError
from orders.sample_routing import ADMIN


def route(order_number: str, role: str, destination: str, note: str | None = None) -> int:
    """
    Main routing function

    Args:
        order_number: Order number (padding is fixed, e.g. HAL-1203)
        role: Acting role (admin, super_admin, manufacturer, client)
        destination: Party to send the sample to
        note: Optional note appended to the sample notes

    Returns:
        Process exit code
    """
    store = OrderStore(DB_PATH, MEDIA_DIR)
    store.init_db()

    order_number = format_order_number(order_number)
    order = store.find_order(order_number)
    if order is None:
        print(f"Error: order {order_number} not found")
        return 1

    holder = order.get("sample_routed_to") or ADMIN
    if not can_route(role, holder, destination):
        options = ", ".join(allowed_destinations(role, holder)) or "none"
        print(f"Error: {role} cannot route a sample held by {holder} to {destination}")
        print(f"  Allowed destinations: {options}")
        return 1

    try:
        outcome = route_order_sample(
            store, order["id"], role, destination,
            notes=note,
            user_id=SCRIPT_USER_ID,
            user_name="Command line",
        )
    except OrdersError as e:
        print(f"Error routing sample: {e}")
        return 1

    print(f"Order {order_number}: sample {holder} -> {outcome.state.routed_to} ({outcome.state.workflow_status})")
    print(f"  {outcome.notification_message}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print("Usage: python route_sample.py <order number> <role> <destination> [note]")
        print("  role: admin, super_admin, manufacturer, client")
        sys.exit(1)

    note = " ".join(sys.argv[4:]) or None
    sys.exit(route(sys.argv[1], sys.argv[2], sys.argv[3], note))
