"""
cartsync - client-side shopping cart state

Modules:
- cart: line items, identity keys, CartManager
- storage: key-value store adapters (memory, Upstash Redis)
- catalog: purchasable references (products, menu items)
- notifications: cart notification events and bus
- context: cart_scope / use_cart
- checkout: order payload for the payments backend
- realtime: Redis Streams notification sink

Note: Imports are lazy so that importing the package does not pull in
Redis or pydantic until a component is used.
"""

__all__ = [
    "CartManager",
    "LineItem",
    "identity_key",
    "InMemoryStore",
    "RedisStore",
    "cart_scope",
    "use_cart",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name in ("CartManager", "LineItem", "identity_key"):
        from cartsync import cart
        return getattr(cart, name)
    elif name in ("InMemoryStore", "RedisStore"):
        from cartsync import storage
        return getattr(storage, name)
    elif name in ("cart_scope", "use_cart"):
        from cartsync import context
        return getattr(context, name)
    raise AttributeError(f"module 'cartsync' has no attribute '{name}'")
