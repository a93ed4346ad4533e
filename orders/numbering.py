"""Order, product and media numbering."""

import random
import re
import string
from typing import Iterable, Optional

from .config import (
    ORDER_NUMBER_START,
    ORDER_NUMBER_DIGITS,
    DRAFT_PREFIX,
    FALLBACK_CLIENT_PREFIX,
    FALLBACK_PRODUCT_CODE,
    FALLBACK_DESCRIPTION_CODE,
)

_TRAILING_NUMBER = re.compile(r"-(\d{6})$")


def _code(text: Optional[str], fallback: str) -> str:
    """First three characters of text, upper-cased."""
    text = (text or "").strip()
    return text[:3].upper() if text else fallback


def client_prefix(client_name: Optional[str]) -> str:
    """Order number prefix for a client: first 3 letters of its name."""
    return _code(client_name, FALLBACK_CLIENT_PREFIX)


def extract_order_sequence(order_number: Optional[str]) -> Optional[int]:
    """
    Extract the sequential part of an order number.

    Example: "HAL-001203" -> 1203

    Returns None when the number does not end in a 6-digit sequence.
    """
    if not order_number:
        return None
    match = _TRAILING_NUMBER.search(str(order_number))
    if match:
        return int(match.group(1))
    return None


def next_order_number(
    existing_numbers: Iterable[str],
    is_draft: bool,
    client_name: Optional[str] = None,
) -> str:
    """
    Generate the next sequential order number.

    The sequence is shared across all prefixes: the highest existing
    sequence plus one, or ORDER_NUMBER_START when nothing matches.

    Args:
        existing_numbers: Order numbers already stored
        is_draft: Drafts get the DRAFT prefix
        client_name: Client name for the prefix of submitted orders

    Returns:
        Order number like "HAL-001204" or "DRAFT-001204"
    """
    sequences = [s for s in (extract_order_sequence(n) for n in existing_numbers) if s]
    next_number = max(sequences) + 1 if sequences else ORDER_NUMBER_START
    prefix = DRAFT_PREFIX if is_draft else client_prefix(client_name)
    return f"{prefix}-{next_number:0{ORDER_NUMBER_DIGITS}d}"


def convert_draft_order_number(draft_order_number: str, client_name: str) -> str:
    """
    Convert a draft order number to a real one, keeping its sequence.

    Example: DRAFT-001203 -> HAL-001203 (client "Halcyon")
    """
    if not draft_order_number.startswith(f"{DRAFT_PREFIX}-"):
        return draft_order_number
    number_part = draft_order_number.split("-", 1)[1]
    return f"{client_prefix(client_name)}-{number_part}"


def format_order_number(order_number: Optional[str]) -> str:
    """Clean up a stored order number for display (strip NaN artefacts, pad to 6 digits)."""
    if not order_number:
        return "N/A"
    cleaned = re.sub(r"000NaN|NaN", "", order_number)
    parts = cleaned.split("-")
    if len(parts) != 2:
        return cleaned
    prefix, number = parts
    return f"{prefix}-{number.zfill(ORDER_NUMBER_DIGITS)}"


def order_numeric_part(order_number: str) -> str:
    """Numeric part of an order number ("HAL-001203" -> "001203")."""
    if "-" in order_number:
        return order_number.split("-", 1)[1]
    return order_number.zfill(ORDER_NUMBER_DIGITS)


def product_order_number(
    order_number: str,
    product_title: Optional[str],
    description: Optional[str],
) -> str:
    """
    Final product number inside an order.

    Example: ("HAL-001234", "Slim Tee", "Performance") -> "001234-SLI-PER"
    """
    return (
        f"{order_numeric_part(order_number)}"
        f"-{_code(product_title, FALLBACK_PRODUCT_CODE)}"
        f"-{_code(description, FALLBACK_DESCRIPTION_CODE)}"
    )


def temporary_product_number(rng: Optional[random.Random] = None) -> str:
    """Placeholder product number used while the order is being drafted."""
    rng = rng or random
    tag = "".join(rng.choice(string.ascii_uppercase + string.digits) for _ in range(4))
    return f"PRD-{tag}"


def media_display_name(
    product_number: str,
    kind: str,
    counter: int,
    extension: str,
) -> str:
    """
    Display name for an uploaded media file.

    Example: ("001234-SLI-PER", "bulk", 1, "png") -> "001234-SLI-PER-bulk-01.png"
    """
    return f"{product_number}-{kind}-{counter:02d}.{extension}"
