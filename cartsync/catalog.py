"""
Catalog Models - Purchasable references the cart accepts.

The catalog backend serves two item shapes (shop products and cafe menu
items). The cart only relies on ``id``, ``name`` and ``price``; everything
else is carried along untouched so a persisted reference round-trips.
"""

from decimal import Decimal
from typing import Any, List, Literal, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class PurchasableReference(Protocol):
    """Anything the cart can hold a line for."""

    id: str
    name: str
    price: Any


# ============================================================
# Catalog entities
# ============================================================

class CatalogItem(BaseModel):
    """Generic catalog entry with only the fields the cart needs."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    kind: Literal["item"] = "item"
    id: str = Field(alias="_id", description="Catalog identifier")
    name: str = Field(description="Display name")
    # Kept in the numeric type it was given; Decimal is stored as a string
    price: Union[int, Decimal, float] = Field(description="Unit price, uninterpreted")


class Product(CatalogItem):
    """Shop product (coffee beans, merchandise, gift cards...)."""

    kind: Literal["product"] = "product"
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    points_earned: Optional[int] = Field(default=None, alias="pointsEarned")
    in_stock: Optional[bool] = Field(default=None, alias="inStock")


class MenuItem(CatalogItem):
    """Cafe menu item (drink or food)."""

    kind: Literal["menu_item"] = "menu_item"
    description: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    item_type: Optional[str] = Field(default=None, alias="itemType")
    points_earned: Optional[int] = Field(default=None, alias="pointsEarned")
    preparation_time: Optional[int] = Field(default=None, alias="preparationTime")


class Customizations(BaseModel):
    """Options chosen for a menu item. Unknown options are kept as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    size: Optional[str] = None
    milk: Optional[str] = None
    extras: Optional[List[str]] = None
    special_instructions: Optional[str] = Field(default=None, alias="specialInstructions")


_REFERENCE_MODELS = {
    "item": CatalogItem,
    "product": Product,
    "menu_item": MenuItem,
}


def _infer_kind(data: dict) -> str:
    """Type payloads written before references carried a kind."""
    if "itemType" in data or "item_type" in data:
        return "menu_item"
    if "category" in data:
        return "product"
    return "item"


def reference_to_dict(reference: PurchasableReference) -> dict[str, Any]:
    """Serialize a reference for storage."""
    if isinstance(reference, BaseModel):
        return reference.model_dump(mode="json", by_alias=True)
    return {
        "kind": "item",
        "_id": reference.id,
        "name": reference.name,
        "price": str(reference.price) if isinstance(reference.price, Decimal) else reference.price,
    }


def reference_from_dict(data: Any) -> CatalogItem:
    """
    Rebuild a stored reference.

    Raises:
        TypeError: payload is not an object
        ValueError: unknown kind or fields fail validation
    """
    if not isinstance(data, dict):
        raise TypeError(f"Catalog reference must be an object, got {type(data).__name__}")
    kind = data.get("kind") or _infer_kind(data)
    model = _REFERENCE_MODELS.get(kind)
    if model is None:
        raise ValueError(f"Unknown catalog reference kind: {kind}")
    return model.model_validate(data)
