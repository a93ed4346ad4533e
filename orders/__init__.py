"""Core module for order creation logic."""

from .models import (
    VariantDimension,
    Product,
    Party,
    Catalog,
    OrderLineItem,
    MediaFile,
    SampleRequest,
    OrderProductDraft,
    OrderDraft,
    parse_price,
)
from .variants import (
    generate_variant_combinations,
    count_combinations,
    group_variants_by_type,
)
from .quantities import distribute_quantity, parse_quantity
from .numbering import (
    next_order_number,
    convert_draft_order_number,
    format_order_number,
    product_order_number,
    media_display_name,
)
from .sample_routing import (
    SampleRoutingState,
    RoutingOutcome,
    allowed_destinations,
    can_route,
    route_sample,
    route_order_sample,
)
from .exceptions import (
    OrdersError,
    InvalidQuantityError,
    OrderValidationError,
    SampleRoutingError,
    VariantKeyCollisionError,
    StoreError,
    SubmissionError,
    MediaTooLargeError,
)
from .catalog_loader import load_catalog, validate_required_columns
from .store import OrderStore
from .submission import OrderSubmitter, SubmissionResult
from .exporter import build_manufacturing_sheet, manufacturing_sheet_excel

__all__ = [
    # Models
    "VariantDimension",
    "Product",
    "Party",
    "Catalog",
    "OrderLineItem",
    "MediaFile",
    "SampleRequest",
    "OrderProductDraft",
    "OrderDraft",
    "parse_price",
    # Variants / quantities
    "generate_variant_combinations",
    "count_combinations",
    "group_variants_by_type",
    "distribute_quantity",
    "parse_quantity",
    # Numbering
    "next_order_number",
    "convert_draft_order_number",
    "format_order_number",
    "product_order_number",
    "media_display_name",
    # Sample routing
    "SampleRoutingState",
    "RoutingOutcome",
    "allowed_destinations",
    "can_route",
    "route_sample",
    "route_order_sample",
    # Errors
    "OrdersError",
    "InvalidQuantityError",
    "OrderValidationError",
    "SampleRoutingError",
    "VariantKeyCollisionError",
    "StoreError",
    "SubmissionError",
    "MediaTooLargeError",
    # Loading / persistence / export
    "load_catalog",
    "validate_required_columns",
    "OrderStore",
    "OrderSubmitter",
    "SubmissionResult",
    "build_manufacturing_sheet",
    "manufacturing_sheet_excel",
]
