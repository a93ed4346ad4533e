"""Data models for order creation."""

from dataclasses import dataclass, field
from typing import Optional

from .config import (
    MAX_FILE_SIZE_BYTES,
    SAMPLE_STATUS_NONE,
    SAMPLE_STATUS_PENDING,
    STEP_BASIC_INFO,
    STEP_ADD_PRODUCTS,
    STEP_CONFIGURE_PRODUCTS,
)
from .exceptions import MediaTooLargeError
from .logger import get_logger
from .numbering import temporary_product_number
from .quantities import distribute_quantity, parse_quantity
from .variants import generate_variant_combinations

log = get_logger("models")


def parse_price(val) -> float:
    """Convert a price field to float, treating blanks/garbage as 0."""
    if val is None or val == "":
        return 0.0
    try:
        return float(val)
    except (ValueError, TypeError):
        return 0.0


@dataclass
class VariantDimension:
    """A named axis of variation (e.g., Color) with its ordered values."""
    name: str
    options: list[str] = field(default_factory=list)


@dataclass
class Product:
    """Catalog product with its variant dimensions."""
    id: str
    title: str
    description: str = ""
    variants: list[VariantDimension] = field(default_factory=list)

    @property
    def dimension_map(self) -> dict[str, list[str]]:
        """Variant dimensions as an ordered name -> options mapping."""
        return {v.name: list(v.options) for v in self.variants}

    def variant_combinations(self) -> list[str]:
        """All combination keys for this product."""
        return generate_variant_combinations(self.dimension_map)

    def matches(self, query: str) -> bool:
        """Case-insensitive search on title and description."""
        query = (query or "").strip().lower()
        if not query:
            return True
        return query in self.title.lower() or query in (self.description or "").lower()


@dataclass
class Party:
    """A client or a manufacturer."""
    id: str
    name: str
    email: str = ""


@dataclass
class Catalog:
    """Everything an admin picks from while creating an order."""
    clients: list[Party] = field(default_factory=list)
    manufacturers: list[Party] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)

    def find_client(self, client_id: str) -> Optional[Party]:
        return next((c for c in self.clients if c.id == client_id), None)

    def find_manufacturer(self, manufacturer_id: str) -> Optional[Party]:
        return next((m for m in self.manufacturers if m.id == manufacturer_id), None)

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def search_products(self, query: str) -> list[Product]:
        return [p for p in self.products if p.matches(query)]


@dataclass
class OrderLineItem:
    """Quantity and notes for one variant combination."""
    variant_combo: str
    quantity: int = 0
    notes: str = ""


@dataclass
class MediaFile:
    """A file attached to an order product (reference media or sample media)."""
    filename: str
    content_type: str = "application/octet-stream"
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return "file"
        return self.filename.rsplit(".", 1)[1].lower() or "file"

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


def check_media_size(files: list[MediaFile], limit: int = MAX_FILE_SIZE_BYTES) -> None:
    """Raise MediaTooLargeError for the first file over the upload limit."""
    for f in files:
        if f.size > limit:
            raise MediaTooLargeError(f.filename, f.size, limit)


@dataclass
class SampleRequest:
    """Sample request metadata attached to a product or to the whole order."""
    fee: str = ""
    eta: str = ""
    status: str = SAMPLE_STATUS_NONE
    notes: str = ""
    media_files: list[MediaFile] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        """Whether a fee, an ETA or files have been provided."""
        return (
            parse_price(self.fee) > 0
            or bool(self.eta and self.eta.strip())
            or len(self.media_files) > 0
        )

    @property
    def is_requested(self) -> bool:
        """Whether this sample request should be treated as active."""
        return self.has_data or bool(self.notes and self.notes.strip()) or self.status != SAMPLE_STATUS_NONE

    @property
    def effective_status(self) -> str:
        """Status after auto-detection from the entered data."""
        if not self.has_data:
            return SAMPLE_STATUS_NONE
        if self.status == SAMPLE_STATUS_NONE:
            return SAMPLE_STATUS_PENDING
        return self.status

    def _activate(self):
        if self.status == SAMPLE_STATUS_NONE:
            self.status = SAMPLE_STATUS_PENDING

    def set_fee(self, value: str):
        self.fee = value
        if parse_price(value) > 0:
            self._activate()

    def set_eta(self, value: str):
        self.eta = value
        if value:
            self._activate()

    def add_media(self, files: list[MediaFile]):
        check_media_size(files)
        if files:
            self.media_files.extend(files)
            self._activate()

    def remove_media(self, index: int):
        del self.media_files[index]

    def to_dict(self) -> dict:
        return {"fee": self.fee, "eta": self.eta, "status": self.status, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: dict) -> "SampleRequest":
        return cls(
            fee=data.get("fee", ""),
            eta=data.get("eta", ""),
            status=data.get("status", SAMPLE_STATUS_NONE),
            notes=data.get("notes", ""),
        )


@dataclass
class OrderProductDraft:
    """One product instance being configured in step 3."""
    product: Product
    product_order_number: str = ""
    description: str = ""
    standard_price: str = ""
    bulk_price: str = ""
    shipping_air_price: str = ""
    shipping_boat_price: str = ""
    production_time: str = ""
    items: list[OrderLineItem] = field(default_factory=list)
    media_files: list[MediaFile] = field(default_factory=list)
    sample: SampleRequest = field(default_factory=SampleRequest)

    @classmethod
    def for_product(cls, product: Product) -> "OrderProductDraft":
        """Create a draft with one empty line item per variant combination."""
        return cls(
            product=product,
            product_order_number=temporary_product_number(),
            items=[OrderLineItem(variant_combo=c) for c in product.variant_combinations()],
        )

    @property
    def variant_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def set_quantity(self, index: int, value) -> int:
        """Set quantity of one line item from a form value. Returns the stored quantity."""
        qty = parse_quantity(value)
        self.items[index].quantity = qty
        return qty

    def set_notes(self, index: int, notes: str):
        self.items[index].notes = notes or ""

    def distribute(self, total: int):
        """Spread total evenly across all line items (first items get the remainder)."""
        if not self.items:
            return
        for item, qty in zip(self.items, distribute_quantity(total, len(self.items))):
            item.quantity = qty

    def add_media(self, files: list[MediaFile]):
        check_media_size(files)
        self.media_files.extend(files)

    def remove_media(self, index: int):
        del self.media_files[index]

    def to_dict(self) -> dict:
        return {
            "product_id": self.product.id,
            "product_order_number": self.product_order_number,
            "description": self.description,
            "standard_price": self.standard_price,
            "bulk_price": self.bulk_price,
            "shipping_air_price": self.shipping_air_price,
            "shipping_boat_price": self.shipping_boat_price,
            "production_time": self.production_time,
            "items": [
                {"variant_combo": i.variant_combo, "quantity": i.quantity, "notes": i.notes}
                for i in self.items
            ],
            "sample": self.sample.to_dict(),
        }


@dataclass
class OrderDraft:
    """Complete state of the create-order form."""
    order_name: str = ""
    client_id: str = ""
    manufacturer_id: str = ""
    current_step: int = STEP_BASIC_INFO
    selected_products: dict[str, int] = field(default_factory=dict)  # product_id -> instances
    products: list[OrderProductDraft] = field(default_factory=list)
    sample: SampleRequest = field(default_factory=SampleRequest)  # order-level sample

    def set_product_count(self, product_id: str, count: int):
        """Set how many instances of a product to add (0 removes it)."""
        count = parse_quantity(count)
        if count == 0:
            self.selected_products.pop(product_id, None)
        else:
            self.selected_products[product_id] = count

    def initialize_products(self, catalog: Catalog) -> list[str]:
        """
        Build product drafts for every selected product instance.

        Products not found in the catalog are skipped.

        Returns:
            List of product ids that could not be found
        """
        missing = []
        products = []
        for product_id, count in self.selected_products.items():
            product = catalog.find_product(product_id)
            if product is None:
                log.error(f"Product not found for ID: {product_id}")
                missing.append(product_id)
                continue
            for _ in range(count):
                products.append(OrderProductDraft.for_product(product))
        self.products = products
        log.info(f"Initialized {len(products)} order products from {len(self.selected_products)} selections")
        return missing

    def remove_product(self, index: int):
        del self.products[index]

    def quick_fill(self, total: int):
        """Distribute the same total across the combinations of every product."""
        for order_product in self.products:
            order_product.distribute(total)

    @property
    def total_quantity(self) -> int:
        return sum(p.total_quantity for p in self.products)

    @property
    def has_sample_request(self) -> bool:
        """Whether any product or the order itself carries a sample request."""
        if self.sample.is_requested:
            return True
        return any(p.sample.is_requested for p in self.products)

    def validate_step(self, step: int) -> list[str]:
        """
        Blocking problems for a step (empty list = step is complete).

        Step 3 also re-checks the earlier steps, so it doubles as the
        pre-save validation.
        """
        problems = []
        if step >= STEP_BASIC_INFO:
            if not self.client_id:
                problems.append("Select a client")
            if not self.manufacturer_id:
                problems.append("Select a manufacturer")
        if step >= STEP_ADD_PRODUCTS and not self.selected_products:
            problems.append("Add at least one product")
        if step >= STEP_CONFIGURE_PRODUCTS and not self.products:
            problems.append("No products to configure")
        return problems

    def to_dict(self) -> dict:
        """Convert draft to dictionary for JSON export (media files are not included)."""
        return {
            "order_name": self.order_name,
            "client_id": self.client_id,
            "manufacturer_id": self.manufacturer_id,
            "current_step": self.current_step,
            "selected_products": dict(self.selected_products),
            "products": [p.to_dict() for p in self.products],
            "sample": self.sample.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, catalog: Catalog) -> "OrderDraft":
        """Create draft from dictionary (JSON import). Unknown products are skipped."""
        draft = cls(
            order_name=data.get("order_name", ""),
            client_id=data.get("client_id", ""),
            manufacturer_id=data.get("manufacturer_id", ""),
            current_step=data.get("current_step", STEP_BASIC_INFO),
            selected_products=dict(data.get("selected_products", {})),
            sample=SampleRequest.from_dict(data.get("sample", {})),
        )
        for entry in data.get("products", []):
            product = catalog.find_product(entry.get("product_id", ""))
            if product is None:
                log.warning(f"Skipping unknown product in draft: {entry.get('product_id')}")
                continue
            order_product = OrderProductDraft.for_product(product)
            for key in (
                "product_order_number", "description", "standard_price", "bulk_price",
                "shipping_air_price", "shipping_boat_price", "production_time",
            ):
                if key in entry:
                    setattr(order_product, key, entry[key])
            # Keep freshly generated combinations; copy saved values onto matching keys
            saved = {i.get("variant_combo"): i for i in entry.get("items", [])}
            for item in order_product.items:
                if item.variant_combo in saved:
                    item.quantity = parse_quantity(saved[item.variant_combo].get("quantity"))
                    item.notes = saved[item.variant_combo].get("notes", "") or ""
            order_product.sample = SampleRequest.from_dict(entry.get("sample", {}))
            draft.products.append(order_product)
        return draft
