"""
Cart Errors

Centralized error messages and exception types.
"""

# Scope errors
ERROR_NO_CART_SCOPE = "use_cart must be used within a cart_scope"

# Checkout errors
ERROR_EMPTY_CART = "Cannot check out an empty cart"

# Storage errors
ERROR_REDIS_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"


class CartContextError(RuntimeError):
    """A cart operation was requested outside of any cart scope."""


class EmptyCartError(ValueError):
    """Checkout was requested for a cart with no lines."""
