import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
DATA_DIR = BASE_DIR / os.getenv("DATA_DIR", "data")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Filename Configuration ---
ITEMS_FILENAME = os.getenv("ITEMS_FILENAME", "inventory_items.csv")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "reorder_report")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() == "true"

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = int(os.getenv("WEBHOOK_TIMEOUT", "15"))

# --- Reorder Rules ---
# Extra days of stock on top of the supplier lead time before an item
# leaves the WARNING band.
SAFETY_MARGIN_DAYS = int(os.getenv("SAFETY_MARGIN_DAYS", "2"))

# --- WhatsApp ---
WHATSAPP_BASE_URL = os.getenv("WHATSAPP_BASE_URL", "https://wa.me/")
WHATSAPP_MESSAGE_TEMPLATE = os.getenv(
    "WHATSAPP_MESSAGE_TEMPLATE",
    "Hello, I would like to reorder {name}. "
    "Our current stock is about {current_stock} {unit}. Thank you.",
)

# --- Storage Layout ---
# Column order of the items file, using the original camelCase names.
ITEM_COLUMNS = [
    "id",
    "name",
    "unit",
    "currentStock",
    "requirementPerRecipe",
    "recipesToday",
    "leadTime",
    "supplierWhatsapp",
]

# Written to an empty store on first run.
SEED_ITEMS = [
    {
        "id": "1",
        "name": "Tepung Terigu",
        "unit": "kg",
        "currentStock": 50,
        "requirementPerRecipe": 0.5,
        "recipesToday": 20,
        "leadTime": 3,
        "supplierWhatsapp": "+6281234567890",
    },
    {
        "id": "2",
        "name": "Gula Pasir",
        "unit": "kg",
        "currentStock": 20,
        "requirementPerRecipe": 0.2,
        "recipesToday": 20,
        "leadTime": 2,
        "supplierWhatsapp": "+6281234567891",
    },
    {
        "id": "3",
        "name": "Kotak Kemasan",
        "unit": "pcs",
        "currentStock": 200,
        "requirementPerRecipe": 1,
        "recipesToday": 80,
        "leadTime": 5,
        "supplierWhatsapp": "+6281234567892",
    },
    {
        "id": "4",
        "name": "Mentega",
        "unit": "kg",
        "currentStock": 5,
        "requirementPerRecipe": 0.1,
        "recipesToday": 20,
        "leadTime": 1,
        "supplierWhatsapp": None,
    },
]
