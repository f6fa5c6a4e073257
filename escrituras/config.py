# escrituras/config.py
import os

from dotenv import load_dotenv

# Load .env
load_dotenv()

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CATALOG_PATH = os.path.join(PACKAGE_DIR, "data", "books.yml")

# ---- ENV VALUES ----
CATALOG_PATH = os.getenv("ESCRITURAS_CATALOG_PATH", DEFAULT_CATALOG_PATH)
LOG_LEVEL = os.getenv("ESCRITURAS_LOG_LEVEL", "WARNING").upper()

# Vector store namespaces, tried in order when looking up an identifier
NAMESPACES = tuple(
    ns.strip()
    for ns in os.getenv("ESCRITURAS_NAMESPACES", "escrituras,test").split(",")
    if ns.strip()
)

# ---- IDENTIFIER FORMAT ----
ID_SEPARATOR = "-"
CHAPTER_WIDTH = 2
VERSE_WIDTH = 3

# Longest verse range a single citation may expand to (Salmos 119 has 176)
MAX_RANGE_VERSES = int(os.getenv("ESCRITURAS_MAX_RANGE_VERSES", "200"))
