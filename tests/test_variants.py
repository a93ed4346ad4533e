"""Tests for variant combination generation."""

import pytest
from orders.exceptions import VariantKeyCollisionError
from orders.variants import (
    count_combinations,
    generate_variant_combinations,
    group_variants_by_type,
)


class TestGenerateVariantCombinations:
    """Cartesian product of dimension values, joined with " / "."""

    def test_two_dimensions(self):
        """First dimension varies slowest."""
        combos = generate_variant_combinations({"Color": ["Red", "Blue"], "Size": ["S", "M"]})
        assert combos == ["Red / S", "Red / M", "Blue / S", "Blue / M"]

    def test_single_dimension(self):
        assert generate_variant_combinations({"Size": ["S", "M", "L"]}) == ["S", "M", "L"]

    def test_three_dimensions_count(self):
        dims = {"Color": ["Red", "Blue"], "Size": ["S", "M", "L"], "Print": ["Front", "Back"]}
        combos = generate_variant_combinations(dims)
        assert len(combos) == 12
        assert combos[0] == "Red / S / Front"
        assert combos[-1] == "Blue / L / Back"

    def test_no_dimensions_gives_sentinel(self):
        assert generate_variant_combinations({}) == ["No Variants"]

    def test_all_dimensions_empty_gives_sentinel(self):
        assert generate_variant_combinations({"Color": [], "Size": ["", "  "]}) == ["No Variants"]

    def test_empty_dimension_is_skipped(self):
        """An empty dimension does not wipe out the others."""
        combos = generate_variant_combinations({"Color": ["Navy", "Khaki"], "Size": []})
        assert combos == ["Navy", "Khaki"]

    def test_blank_and_duplicate_values_collapsed(self):
        combos = generate_variant_combinations({"Size": ["S", " S ", "", None, "M"]})
        assert combos == ["S", "M"]

    def test_keys_are_unique(self):
        combos = generate_variant_combinations({"A": ["1", "2", "3"], "B": ["x", "y"]})
        assert len(combos) == len(set(combos))

    def test_same_input_same_keys(self):
        """Regenerating from the same mapping gives identical keys."""
        dims = {"Color": ["Red", "Blue"], "Size": ["S", "M"]}
        assert generate_variant_combinations(dims) == generate_variant_combinations(dict(dims))

    def test_dimension_order_drives_key_layout(self):
        combos = generate_variant_combinations({"Size": ["S"], "Color": ["Red"]})
        assert combos == ["S / Red"]

    def test_custom_separator(self):
        combos = generate_variant_combinations({"Color": ["Red"], "Size": ["S"]}, separator="-")
        assert combos == ["Red-S"]


class TestCountCombinations:
    """Count matches the generator without building the keys."""

    def test_matches_generator(self):
        dims = {"Color": ["Red", "Blue"], "Size": ["S", "M", "L"], "Fit": []}
        assert count_combinations(dims) == len(generate_variant_combinations(dims))

    def test_no_dimensions_is_one(self):
        assert count_combinations({}) == 1


class TestGroupVariantsByType:
    """Flat variant rows grouped into ordered dimensions."""

    def test_groups_in_first_seen_order(self):
        rows = [("Size", "S"), ("Color", "Red"), ("Size", "M"), ("Color", "Blue")]
        grouped = group_variants_by_type(rows)
        assert list(grouped) == ["Size", "Color"]
        assert grouped == {"Size": ["S", "M"], "Color": ["Red", "Blue"]}

    def test_skips_incomplete_rows(self):
        rows = [("Size", ""), (None, "Red"), ("", "M"), ("Color", "Red")]
        assert group_variants_by_type(rows) == {"Color": ["Red"]}

    def test_dedups_values(self):
        rows = [("Size", "S"), ("Size", " S "), ("Size", "M")]
        assert group_variants_by_type(rows) == {"Size": ["S", "M"]}

    def test_empty(self):
        assert group_variants_by_type([]) == {}


class TestVariantKeyCollisions:
    """Values containing the separator must not produce duplicate keys."""

    def test_colliding_values_rejected(self):
        dims = {"A": ["x / y", "x"], "B": ["z", "y / z"]}
        with pytest.raises(VariantKeyCollisionError) as exc:
            generate_variant_combinations(dims)
        assert exc.value.duplicates == ["x / y / z"]

    def test_separator_inside_value_allowed_when_keys_distinct(self):
        combos = generate_variant_combinations({"Print": ["Front / Back", "Front"], "Size": ["S"]})
        assert combos == ["Front / Back / S", "Front / S"]

    def test_collision_is_value_error(self):
        with pytest.raises(ValueError):
            generate_variant_combinations({"A": ["a / b", "a"], "B": ["b / c", "c"]})
