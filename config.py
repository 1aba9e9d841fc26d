"""
Application configuration: read once from the environment at import time.
"""

import os

STORAGE_PATH = os.getenv("STORAGE_PATH", "")

PAGE_SIZE = int(os.getenv("PAGE_SIZE", "20"))
ADMIN_PAGE_SIZE = int(os.getenv("ADMIN_PAGE_SIZE", "12"))

DEFAULT_PRICE_RANGE = (0, int(os.getenv("PRICE_MAX", "1000000")))
ADMIN_PRICE_RANGE = (0, 500000)

SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "1") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8000"))

CART_STORE_KEY = "cart-store"
WISHLIST_STORE_KEY = "wishlist-store"
