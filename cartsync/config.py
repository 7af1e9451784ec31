"""
Cart configuration.

All settings come from environment variables so the same package can run
against Upstash Redis in production and an in-memory store locally.
"""

import os

# Persisted cart entry
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "campgrounds-cart")
CART_TTL_SECONDS = int(os.environ.get("CART_TTL_SECONDS", "86400"))  # 24 hours, 0 = no expiry

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


def redis_configured() -> bool:
    """True when both Upstash credentials are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)
