"""Configuration module: environment variables and constants."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env lives at the project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Source site ---
SOURCE_BASE_URL: str = os.getenv("SOURCE_BASE_URL", "https://id.my-best.com").rstrip("/")

# Fixed listing pages scanned for category tiles
CATEGORY_PAGE_PATHS = ("/", "/categories")

# Asset host token used to recognise product/category images
ASSET_HOST_TOKEN: str = os.getenv("ASSET_HOST_TOKEN", "img.id.my-best.com")

# --- Public API ---
API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8080/api").rstrip("/")
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8080"))
API_VERSION = "1.3.0"

# --- Affiliate ---
AFFILIATE_ID: str = os.getenv("AFFILIATE_ID", "11379810076")
REDIRECT_HOSTS = tuple(
    h.strip() for h in os.getenv("REDIRECT_HOSTS", "atid.me").split(",") if h.strip()
)
MARKETPLACE_TOKEN: str = os.getenv("MARKETPLACE_TOKEN", "shopee")

# --- User-Agent ---
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# --- Request settings ---
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "15"))  # seconds

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs")))
