"""Quantity helpers: even distribution and parsing of user-entered quantities."""

from .exceptions import InvalidQuantityError


def distribute_quantity(total: int, count: int) -> list[int]:
    """
    Split a total evenly across a number of variant combinations.

    The first `total % count` combinations receive one extra unit, so the
    allocation sums exactly to `total` and no two entries differ by more
    than one.

    Example: distribute_quantity(10, 3) -> [4, 3, 3]

    Args:
        total: Units to distribute (>= 0)
        count: Number of combinations (>= 1)

    Returns:
        List of `count` non-negative integers summing to `total`

    Raises:
        InvalidQuantityError: On negative total, count < 1 or non-integer input
    """
    for name, value in (("total", total), ("count", count)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidQuantityError(f"{name} must be an integer, got {value!r}")
    if total < 0:
        raise InvalidQuantityError(f"total must be >= 0, got {total}")
    if count < 1:
        raise InvalidQuantityError(f"count must be >= 1, got {count}")

    base, remainder = divmod(total, count)
    return [base + 1 if i < remainder else base for i in range(count)]


def parse_quantity(value) -> int:
    """Convert a form value to a quantity, treating blanks/garbage as 0 and clamping negatives."""
    if value is None or value == "":
        return 0
    try:
        qty = int(float(value))
    except (ValueError, TypeError, OverflowError):
        return 0
    return max(qty, 0)
