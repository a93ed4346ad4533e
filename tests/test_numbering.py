"""Tests for order, product and media numbering."""

import random

from orders.numbering import (
    client_prefix,
    convert_draft_order_number,
    extract_order_sequence,
    format_order_number,
    media_display_name,
    next_order_number,
    product_order_number,
    temporary_product_number,
)


class TestNextOrderNumber:
    """Sequence shared by drafts and submitted orders, starting at 1200."""

    def test_first_order(self):
        assert next_order_number([], is_draft=False, client_name="Halcyon") == "HAL-001200"

    def test_first_draft(self):
        assert next_order_number([], is_draft=True) == "DRAFT-001200"

    def test_increments_highest(self):
        existing = ["HAL-001203", "DRAFT-001207", "BLU-001205"]
        assert next_order_number(existing, is_draft=False, client_name="Bluebird") == "BLU-001208"

    def test_ignores_malformed(self):
        existing = ["legacy", "HAL-12", None, "HAL-001201"]
        assert next_order_number(existing, is_draft=True) == "DRAFT-001202"

    def test_client_fallback(self):
        assert next_order_number([], is_draft=False, client_name=None) == "ORD-001200"
        assert next_order_number([], is_draft=False, client_name="  ") == "ORD-001200"


class TestOrderNumberHelpers:
    def test_client_prefix(self):
        assert client_prefix("bluebird kids") == "BLU"
        assert client_prefix("Al") == "AL"

    def test_extract_sequence(self):
        assert extract_order_sequence("HAL-001203") == 1203
        assert extract_order_sequence("HAL-1203") is None
        assert extract_order_sequence("") is None

    def test_convert_draft(self):
        assert convert_draft_order_number("DRAFT-001203", "Halcyon") == "HAL-001203"
        assert convert_draft_order_number("HAL-001203", "Bluebird") == "HAL-001203"

    def test_format(self):
        assert format_order_number("HAL-1203") == "HAL-001203"
        assert format_order_number("HAL-000NaN1203") == "HAL-001203"
        assert format_order_number(None) == "N/A"
        assert format_order_number("plain") == "plain"


class TestProductNumbers:
    def test_product_order_number(self):
        assert product_order_number("HAL-001234", "Slim Tee", "Performance") == "001234-SLI-PER"

    def test_product_order_number_fallbacks(self):
        assert product_order_number("DRAFT-001200", "", None) == "001200-PRD-GEN"

    def test_temporary_number(self):
        number = temporary_product_number(random.Random(1))
        assert number.startswith("PRD-")
        assert len(number) == 8

    def test_media_display_name(self):
        assert media_display_name("001234-SLI-PER", "bulk", 1, "png") == "001234-SLI-PER-bulk-01.png"
        assert media_display_name("001234-SLI-PER", "sample", 12, "pdf") == "001234-SLI-PER-sample-12.pdf"
