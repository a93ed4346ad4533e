"""Order submission - writes a draft to the store as a draft or a submitted order."""

from dataclasses import dataclass, field
from typing import Optional

from .config import (
    DEFAULT_ORDER_NAME,
    ORDER_STATUS_DRAFT,
    ORDER_STATUS_IN_PROGRESS,
    PRODUCT_STATUS_PENDING,
    PRODUCT_STATUS_SENT,
    ITEM_STATUS_PENDING,
    NOTIFICATION_NEW_ORDER,
    NOTIFICATION_SAMPLE_REQUESTED,
    SAMPLE_STATUS_NONE,
    STEP_CONFIGURE_PRODUCTS,
)
from .exceptions import OrderValidationError, StoreError, SubmissionError
from .logger import get_logger
from .models import Catalog, MediaFile, OrderDraft, OrderProductDraft
from .numbering import (
    next_order_number,
    convert_draft_order_number,
    product_order_number,
    media_display_name,
)
from .sample_routing import ADMIN, MANUFACTURER
from .store import OrderStore

log = get_logger("submission")


@dataclass
class SavedProduct:
    """Result of saving one order product (draft_index points into OrderDraft.products)."""
    draft_index: int
    order_product_id: str
    product_order_number: str
    title: str
    item_count: int
    media_count: int = 0


@dataclass
class SubmissionResult:
    """Outcome of saving an order."""
    order_id: str
    order_number: str
    status: str
    is_draft: bool
    products: list[SavedProduct] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    notification_id: Optional[str] = None

    @property
    def product_count(self) -> int:
        return len(self.products)

    @property
    def product_numbers(self) -> dict[int, str]:
        """Saved product numbers keyed by position in the draft."""
        return {p.draft_index: p.product_order_number for p in self.products}

    @property
    def message(self) -> str:
        action = "saved as draft" if self.is_draft else "created"
        return f"Order {self.order_number} {action} successfully!"


def notification_for(order_number: str, has_sample_request: bool) -> tuple[str, str]:
    """Notification type and message for the manufacturer of a submitted order."""
    if has_sample_request:
        return NOTIFICATION_SAMPLE_REQUESTED, f"New order {order_number} with sample request"
    return NOTIFICATION_NEW_ORDER, f"New order {order_number} has been assigned to you"


class OrderSubmitter:
    """
    Saves an OrderDraft.

    Write order:
    1. Order row (failure aborts with SubmissionError)
    2. Manufacturer notification (submitted orders only)
    3. Per product: product row, all line items (zero quantities included), media

    Failures after step 1 are logged, collected as warnings and skipped.
    """

    def __init__(self, store: OrderStore, catalog: Catalog, user_id: Optional[str] = None):
        self.store = store
        self.catalog = catalog
        self.user_id = user_id

    def submit(self, draft: OrderDraft, is_draft: bool = False) -> SubmissionResult:
        """
        Save the draft.

        Args:
            draft: Order draft from the form
            is_draft: Save as draft (DRAFT- prefix, nothing routed to the manufacturer)

        Returns:
            SubmissionResult with ids, numbers and warnings

        Raises:
            OrderValidationError: Draft misses client, manufacturer or products
            SubmissionError: Order row could not be written
        """
        problems = draft.validate_step(STEP_CONFIGURE_PRODUCTS)
        if problems:
            raise OrderValidationError(problems)

        client = self.catalog.find_client(draft.client_id)
        client_name = client.name if client else None
        order_number = next_order_number(self.store.order_numbers(), is_draft, client_name)
        status = ORDER_STATUS_DRAFT if is_draft else ORDER_STATUS_IN_PROGRESS
        has_sample = draft.has_sample_request

        log.info(f"Saving order {order_number} (draft={is_draft}, products={len(draft.products)}, sample={has_sample})")

        try:
            order_id = self.store.insert("orders", {
                "order_number": order_number,
                "order_name": draft.order_name or DEFAULT_ORDER_NAME,
                "client_id": draft.client_id,
                "manufacturer_id": draft.manufacturer_id,
                "status": status,
                "created_by": self.user_id,
                "sample_fee": draft.sample.fee,
                "sample_eta": draft.sample.eta,
                "sample_status": draft.sample.effective_status,
                "sample_notes": draft.sample.notes,
                "sample_routed_to": ADMIN,
                "sample_workflow_status": "pending",
            })
        except StoreError as e:
            log.error(f"Database error creating order {order_number}: {e}")
            raise SubmissionError(f"Failed to create order: {e}", order_number=order_number) from e

        result = SubmissionResult(
            order_id=order_id,
            order_number=order_number,
            status=status,
            is_draft=is_draft,
        )

        if not is_draft and draft.manufacturer_id:
            result.notification_id = self._notify_manufacturer(result, draft.manufacturer_id, has_sample)

        for index, order_product in enumerate(draft.products):
            saved = self._save_product(result, index, order_product, is_draft)
            if saved:
                result.products.append(saved)

        log.info(f"Order {order_number} saved: {result.product_count} products, {len(result.warnings)} warnings")
        return result

    def promote_draft(
        self,
        order_id: str,
        saved_products: Optional[list[SavedProduct]] = None,
    ) -> SubmissionResult:
        """
        Turn a saved draft into a submitted order.

        The draft keeps its sequence with the client prefix
        (DRAFT-001203 -> HAL-001203). Its products are routed to the
        manufacturer, who is then notified.

        Args:
            order_id: Stored draft order
            saved_products: Products from the draft's SubmissionResult, so
                their draft positions carry over

        Returns:
            SubmissionResult of the submitted order

        Raises:
            SubmissionError: Order missing, not a draft, or not updatable
        """
        order = self.store.fetch_one("orders", order_id)
        if order is None:
            raise SubmissionError(f"Order not found: {order_id}")
        draft_number = order.get("order_number") or ""
        if order.get("status") != ORDER_STATUS_DRAFT:
            raise SubmissionError(f"Order {draft_number} is not a draft", order_number=draft_number)

        client = self.catalog.find_client(order.get("client_id") or "")
        order_number = convert_draft_order_number(draft_number, client.name if client else "")
        try:
            self.store.update("orders", order_id, {
                "order_number": order_number,
                "status": ORDER_STATUS_IN_PROGRESS,
            })
        except StoreError as e:
            log.error(f"Database error promoting {draft_number}: {e}")
            raise SubmissionError(f"Failed to submit draft: {e}", order_number=draft_number) from e

        result = SubmissionResult(
            order_id=order_id,
            order_number=order_number,
            status=ORDER_STATUS_IN_PROGRESS,
            is_draft=False,
        )
        positions = {p.order_product_id: p.draft_index for p in saved_products or []}
        rows = self.store.fetch_all("order_products", order_id=order_id)
        for index, row in enumerate(rows):
            try:
                self.store.update("order_products", row["id"], {
                    "product_status": PRODUCT_STATUS_SENT,
                    "routed_to": MANUFACTURER,
                })
            except StoreError as e:
                log.error(f"Error routing product {row['product_order_number']}: {e}")
                result.warnings.append(f"Product {row['product_order_number']} not sent: {e}")
            product = self.catalog.find_product(row.get("product_id") or "")
            result.products.append(SavedProduct(
                draft_index=positions.get(row["id"], index),
                order_product_id=row["id"],
                product_order_number=row["product_order_number"],
                title=product.title if product else row.get("product_id") or "",
                item_count=len(self.store.fetch_all("order_items", order_product_id=row["id"])),
                media_count=len(self.store.fetch_all("order_media", order_product_id=row["id"])),
            ))

        has_sample = (
            (order.get("sample_status") or SAMPLE_STATUS_NONE) != SAMPLE_STATUS_NONE
            or bool((order.get("sample_notes") or "").strip())
            or any(row.get("sample_required") for row in rows)
        )
        if order.get("manufacturer_id"):
            result.notification_id = self._notify_manufacturer(result, order["manufacturer_id"], has_sample)

        log.info(f"Draft {draft_number} submitted as {order_number} ({result.product_count} products)")
        return result

    def _notify_manufacturer(self, result: SubmissionResult, manufacturer_id: str, has_sample: bool) -> Optional[str]:
        notification_type, message = notification_for(result.order_number, has_sample)
        try:
            return self.store.insert("manufacturer_notifications", {
                "manufacturer_id": manufacturer_id,
                "order_id": result.order_id,
                "product_id": None,
                "type": notification_type,
                "message": message,
                "is_read": 0,
            })
        except StoreError as e:
            log.error(f"Error creating manufacturer notification for {result.order_number}: {e}")
            result.warnings.append(f"Manufacturer notification not created: {e}")
            return None

    def _save_product(
        self,
        result: SubmissionResult,
        index: int,
        order_product: OrderProductDraft,
        is_draft: bool,
    ) -> Optional[SavedProduct]:
        product = order_product.product
        if not product.id:
            log.error(f"Product ID is missing for: {product.title}")
            result.warnings.append(f"Failed to save product {product.title}: Missing product ID")
            return None

        final_number = product_order_number(result.order_number, product.title, order_product.description)
        sample = order_product.sample

        try:
            order_product_id = self.store.insert("order_products", {
                "order_id": result.order_id,
                "product_id": product.id,
                "product_order_number": final_number,
                "description": order_product.description or "",
                "standard_price": order_product.standard_price,
                "bulk_price": order_product.bulk_price,
                "shipping_air_price": order_product.shipping_air_price,
                "shipping_boat_price": order_product.shipping_boat_price,
                "production_time": order_product.production_time,
                "sample_required": int(sample.is_requested),
                "sample_fee": sample.fee,
                "sample_eta": sample.eta,
                "sample_status": sample.effective_status,
                "sample_notes": sample.notes or "",
                "product_status": PRODUCT_STATUS_PENDING if is_draft else PRODUCT_STATUS_SENT,
                "routed_to": ADMIN if is_draft else MANUFACTURER,
            })
        except StoreError as e:
            log.error(f"Error saving product {product.title}: {e}")
            result.warnings.append(f"Failed to save product {product.title}: {e}")
            return None

        items = [
            {
                "order_product_id": order_product_id,
                "variant_combo": item.variant_combo,
                "quantity": item.quantity or 0,
                "notes": item.notes or "",
                "admin_status": ITEM_STATUS_PENDING,
                "manufacturer_status": ITEM_STATUS_PENDING,
            }
            for item in order_product.items
        ]
        try:
            self.store.insert_many("order_items", items)
        except StoreError as e:
            log.error(f"Error saving items for {final_number}: {e}")
            result.warnings.append(f"Variant items for {final_number} not saved: {e}")

        media_count = self._upload_media(result, order_product_id, final_number, order_product.media_files, "bulk")
        media_count += self._upload_media(result, order_product_id, final_number, sample.media_files, "sample")

        log.info(f"Product {final_number} saved with {len(items)} items and {media_count} files")
        return SavedProduct(
            draft_index=index,
            order_product_id=order_product_id,
            product_order_number=final_number,
            title=product.title,
            item_count=len(items),
            media_count=media_count,
        )

    def _upload_media(
        self,
        result: SubmissionResult,
        order_product_id: str,
        product_number: str,
        files: list[MediaFile],
        kind: str,
    ) -> int:
        """Upload files and record them. Counter only advances on success."""
        counter = 1
        for f in files:
            display_name = media_display_name(product_number, kind, counter, f.extension)
            path = f"{result.order_id}/{order_product_id}/{display_name}"
            if kind == "sample":
                file_type = "sample_image" if f.is_image else "sample_document"
            else:
                file_type = "image" if f.is_image else "document"
            try:
                url = self.store.upload(path, f.data)
            except (StoreError, OSError) as e:
                log.error(f"Failed to upload \"{f.filename}\": {e}")
                result.warnings.append(f"Failed to upload \"{f.filename}\": {e}")
                continue
            try:
                self.store.insert("order_media", {
                    "order_product_id": order_product_id,
                    "file_url": url,
                    "file_type": file_type,
                    "uploaded_by": self.user_id,
                    "original_filename": f.filename,
                    "display_name": display_name,
                })
            except StoreError as e:
                # Free the display name for the next file
                self.store.remove(path)
                log.error(f"Failed to record \"{f.filename}\": {e}")
                result.warnings.append(f"Failed to record \"{f.filename}\": {e}")
                continue
            counter += 1
        return counter - 1
