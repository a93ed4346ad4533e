"""Default configuration values."""

import os

# Variant combinations
VARIANT_SEPARATOR = " / "
NO_VARIANTS_LABEL = "No Variants"

# Order numbering
ORDER_NUMBER_START = 1200
ORDER_NUMBER_DIGITS = 6
DRAFT_PREFIX = "DRAFT"
FALLBACK_CLIENT_PREFIX = "ORD"
FALLBACK_PRODUCT_CODE = "PRD"
FALLBACK_DESCRIPTION_CODE = "GEN"
DEFAULT_ORDER_NAME = "New Order"

# Order / product statuses
ORDER_STATUS_DRAFT = "draft"
ORDER_STATUS_IN_PROGRESS = "in_progress"
PRODUCT_STATUS_PENDING = "pending"
PRODUCT_STATUS_SENT = "sent_to_manufacturer"
ITEM_STATUS_PENDING = "pending"

# Sample request statuses (shown in the sample status select)
SAMPLE_STATUSES = [
    "no_sample",
    "pending",
    "in_production",
    "ready",
    "shipped",
    "delivered",
    "sample_approved",
    "rejected",
]
SAMPLE_STATUS_NONE = "no_sample"
SAMPLE_STATUS_PENDING = "pending"

# Notification types
NOTIFICATION_NEW_ORDER = "new_order"
NOTIFICATION_SAMPLE_REQUESTED = "sample_requested"
NOTIFICATION_SAMPLE_ROUTED = "sample_routed"

# Media
MEDIA_BUCKET = "order-media"
MAX_FILE_SIZE_MB = 50
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
ACCEPTED_FILE_TYPES = [
    "ai", "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "csv",
    "png", "jpg", "jpeg", "gif", "webp", "mp4", "mov",
]

# Form steps
STEP_BASIC_INFO = 1
STEP_ADD_PRODUCTS = 2
STEP_CONFIGURE_PRODUCTS = 3
STEP_LABELS = {
    STEP_BASIC_INFO: "Basic Info",
    STEP_ADD_PRODUCTS: "Add Products",
    STEP_CONFIGURE_PRODUCTS: "Configure Products",
}

# Catalog workbook layout
CLIENTS_SHEET = "Clients"
MANUFACTURERS_SHEET = "Manufacturers"
PRODUCTS_SHEET = "Products"
VARIANTS_SHEET = "Variants"
PARTY_COLUMNS = ["id", "name", "email"]
PRODUCT_COLUMNS = ["id", "title", "description"]
VARIANT_COLUMNS = ["product_id", "type", "option"]

# Output columns for manufacturing sheets
EXPORT_COLUMNS = [
    "Order Number",
    "Product Number",
    "Product",
    "Variant",
    "Quantity",
    "Notes",
]

# Environment overrides
DB_PATH = os.getenv("ORDERS_DB_PATH", "orders.db")
MEDIA_DIR = os.getenv("ORDERS_MEDIA_DIR", "media")
LOG_DIR = os.getenv("ORDERS_LOG_DIR", "logs")
LOG_FILE = os.getenv("ORDERS_LOG_FILE", "orders.log")
LOG_LEVEL = os.getenv("ORDERS_LOG_LEVEL", "INFO").upper()
