"""Cart package: line items, identity keys and the manager."""
from .models import LineItem, canonical_customizations, identity_key
from .service import CartManager

__all__ = [
    "LineItem",
    "CartManager",
    "canonical_customizations",
    "identity_key",
]
