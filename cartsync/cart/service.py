"""Cart manager: the authoritative in-memory cart mirrored to a key-value store."""
import json
from dataclasses import replace
from typing import List, Optional, Tuple

from cartsync import config
from cartsync.catalog import PurchasableReference
from cartsync.logging import describe_reference, get_logger
from cartsync.notifications import NotificationBus
from cartsync.storage import KeyValueStore, get_store
from .models import CustomizationSet, LineItem, identity_key, snapshot_customizations

logger = get_logger(__name__)


class CartManager:
    """
    Owns the session cart and keeps the store in sync with it.

    The persisted snapshot is loaded exactly once, in the constructor.
    After that every mutation rewrites the whole collection to the store
    and emits one notification on ``notifications``.

    Usage:
        manager = CartManager(store=InMemoryStore())
        manager.notifications.subscribe(show_toast)
        manager.add_item(latte, 2, {"size": "Grande"})
        manager.get_total()
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        storage_key: Optional[str] = None,
        notifications: Optional[NotificationBus] = None,
    ):
        self._store = store if store is not None else get_store()
        self.storage_key = storage_key or config.CART_STORAGE_KEY
        self.notifications = notifications if notifications is not None else NotificationBus()
        self._items: List[LineItem] = []
        self._initialized = False
        self._load()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def items(self) -> Tuple[LineItem, ...]:
        """Snapshot of the cart lines in insertion order."""
        return tuple(self._items)

    # ==================== PERSISTENCE ====================

    def _load(self) -> None:
        """Read the persisted cart once; purge it if it is corrupted."""
        raw = self._store.load(self.storage_key)
        if raw:
            try:
                data = json.loads(raw)
                if not isinstance(data, list):
                    raise TypeError(f"Cart payload must be a list, got {type(data).__name__}")
                self._items = [LineItem.from_dict(entry) for entry in data]
                logger.debug(f"Loaded {len(self._items)} cart lines from {self.storage_key}")
            except (ValueError, KeyError, TypeError, RecursionError) as e:
                # Corrupted data - start empty and drop it
                logger.warning(f"Corrupted cart data under {self.storage_key}: {e}")
                self._items = []
                self._delete()
        self._initialized = True

    def _persist(self) -> None:
        if not self._initialized:
            return
        try:
            raw = json.dumps([item.to_dict() for item in self._items])
            saved = self._store.save(self.storage_key, raw)
        except Exception as e:
            logger.error(f"Failed to persist cart: {e}", exc_info=True)
            return
        if not saved:
            logger.warning(f"Cart store rejected write for {self.storage_key}")

    def _delete(self) -> None:
        try:
            deleted = self._store.delete(self.storage_key)
        except Exception as e:
            logger.error(f"Failed to delete persisted cart: {e}", exc_info=True)
            return
        if not deleted:
            logger.warning(f"Cart store rejected delete for {self.storage_key}")

    # ==================== MUTATIONS ====================

    def add_item(
        self,
        reference: PurchasableReference,
        quantity: int = 1,
        customizations: Optional[CustomizationSet] = None,
    ) -> LineItem:
        """
        Add ``quantity`` units, merging with the line that has the same identity key.

        A merge keeps the existing line's position and its stored customizations.

        Returns:
            The resulting line
        """
        key = identity_key(reference.id, customizations)
        index = next(
            (i for i, item in enumerate(self._items) if item.key == key),
            None,
        )

        if index is not None:
            existing = self._items[index]
            line = replace(existing, quantity=existing.quantity + quantity)
            self._items[index] = line
        else:
            line = LineItem(
                reference=reference,
                quantity=quantity,
                customizations=snapshot_customizations(customizations),
            )
            self._items.append(line)

        logger.debug(f"Added {quantity} x {describe_reference(reference)}")
        self._persist()
        self.notifications.success(f"{reference.name} added to cart!")
        return line

    def remove_item(self, reference_id: str) -> None:
        """Remove every line for this catalog id, whatever its customizations."""
        self._items = [item for item in self._items if item.reference.id != reference_id]
        self._persist()
        self.notifications.info("Item removed from cart")

    def update_quantity(self, reference_id: str, quantity: int) -> None:
        """
        Set the quantity of every line for this catalog id.

        A quantity of zero or less removes those lines instead.
        """
        if quantity <= 0:
            self.remove_item(reference_id)
            return

        self._items = [
            replace(item, quantity=quantity) if item.reference.id == reference_id else item
            for item in self._items
        ]
        self._persist()

    def clear(self) -> None:
        """Empty the cart and delete the persisted entry."""
        self._items = []
        self._delete()
        self.notifications.info("Cart cleared")

    def close(self) -> None:
        """Detach subscribers. Persisted state is left as is."""
        self.notifications.clear()

    # ==================== QUERIES ====================

    def get_total(self):
        """Sum of price times quantity over all lines."""
        return sum((item.total_price for item in self._items), 0)

    def get_item_count(self) -> int:
        """Total units in the cart (not distinct lines)."""
        return sum(item.quantity for item in self._items)

    def is_in_cart(self, reference_id: str) -> bool:
        return any(item.reference.id == reference_id for item in self._items)

    def get_cart_summary(self) -> dict:
        """Get cart summary for display or AI context."""
        if not self._items:
            return {
                "is_empty": True,
                "total_items": 0,
                "lines": 0,
                "items": [],
                "total": 0,
            }

        return {
            "is_empty": False,
            "total_items": self.get_item_count(),
            "lines": len(self._items),
            "items": [
                {
                    "product_id": item.reference.id,
                    "product_name": item.reference.name,
                    "quantity": item.quantity,
                    "unit_price": item.reference.price,
                    "total": item.total_price,
                    "customizations": item.to_dict()["customizations"],
                }
                for item in self._items
            ],
            "total": self.get_total(),
        }
