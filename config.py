# Configuration for order scripts

# Catalog workbook used when none is given on the command line
DEFAULT_CATALOG_FILE = "catalog.xlsx"

# Output directory for manufacturing sheets
OUTPUT_DIR = "output"

# User recorded as creator of orders saved from the command line
SCRIPT_USER_ID = "cli"
