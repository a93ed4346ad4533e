"""Variant combination generation for products with variant dimensions."""

from typing import Iterable, Mapping, Optional

from .config import VARIANT_SEPARATOR, NO_VARIANTS_LABEL
from .exceptions import VariantKeyCollisionError


def _clean_options(options: Iterable[str]) -> list[str]:
    """Strip values, drop blanks and collapse duplicates (first occurrence wins)."""
    cleaned = []
    for option in options:
        if option is None:
            continue
        value = str(option).strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def generate_variant_combinations(
    dimensions: Mapping[str, Iterable[str]],
    separator: str = VARIANT_SEPARATOR,
) -> list[str]:
    """
    Generate every variant combination key for a product.

    Dimensions are processed in mapping iteration order, so the textual layout
    of each key follows that order. Callers must pass the same mapping (same
    key order) to get the same keys back.

    Empty dimensions are skipped. A product with no non-empty dimensions
    yields a single NO_VARIANTS_LABEL combination.

    Values may contain the separator as long as the joined keys stay
    distinct; when two combinations join to the same key the product
    cannot be ordered and VariantKeyCollisionError is raised.

    Example:
        {"Color": ["Red", "Blue"], "Size": ["S", "M"]}
        -> ["Red / S", "Red / M", "Blue / S", "Blue / M"]

    Args:
        dimensions: Mapping of dimension name to ordered option values
        separator: String placed between the values of one combination

    Returns:
        List of combination keys, one per element of the Cartesian product

    Raises:
        VariantKeyCollisionError: If two combinations share a key
    """
    option_lists = [_clean_options(options) for options in dimensions.values()]
    option_lists = [options for options in option_lists if options]

    if not option_lists:
        return [NO_VARIANTS_LABEL]

    partials: list[tuple[str, ...]] = [()]
    for options in option_lists:
        partials = [partial + (option,) for partial in partials for option in options]

    keys = [separator.join(values) for values in partials]
    if len(set(keys)) != len(keys):
        seen: set[str] = set()
        duplicates = []
        for key in keys:
            if key in seen and key not in duplicates:
                duplicates.append(key)
            seen.add(key)
        raise VariantKeyCollisionError(duplicates)
    return keys


def count_combinations(dimensions: Mapping[str, Iterable[str]]) -> int:
    """Number of combinations generate_variant_combinations will return."""
    total = 1
    for options in dimensions.values():
        count = len(_clean_options(options))
        if count:
            total *= count
    return total


def group_variants_by_type(
    rows: Iterable[tuple[Optional[str], Optional[str]]]
) -> dict[str, list[str]]:
    """
    Group flat (type_name, option_value) rows into a dimension mapping.

    Types and values keep the order they are first seen in, which pins the
    dimension order used for combination keys.

    Args:
        rows: Iterable of (variant type name, option value) pairs

    Returns:
        Dict mapping type name to its ordered list of values
    """
    variants_by_type: dict[str, list[str]] = {}
    for type_name, option_value in rows:
        if not type_name or not option_value:
            continue
        type_name = str(type_name).strip()
        option_value = str(option_value).strip()
        if not type_name or not option_value:
            continue
        values = variants_by_type.setdefault(type_name, [])
        if option_value not in values:
            values.append(option_value)
    return variants_by_type
