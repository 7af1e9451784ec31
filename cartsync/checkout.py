"""
Checkout payload.

Turns the cart snapshot into the order lines the payments backend expects
when creating a checkout session.
"""

from typing import Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from cartsync.cart import LineItem
from cartsync.errors import ERROR_EMPTY_CART, EmptyCartError


class CheckoutItem(BaseModel):
    """One order line sent to the payments backend."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Product name")
    price: float = Field(description="Unit price")
    quantity: int = Field(description="Units ordered")
    product_id: str = Field(alias="productId", description="Catalog id")


class CheckoutRequest(BaseModel):
    """Body of a create-checkout-session call."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[CheckoutItem]
    order_type: Literal["pickup", "delivery"] = Field(default="pickup", alias="orderType")
    cafe_id: Optional[str] = Field(default=None, alias="cafeId")
    pickup_time: Optional[str] = Field(default=None, alias="pickupTime")
    use_points: bool = Field(default=False, alias="usePoints")

    def to_payload(self) -> dict:
        """JSON-ready body with the backend's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def build_checkout_items(items: Iterable[LineItem]) -> List[CheckoutItem]:
    """
    Map cart lines to order lines, keeping cart order.

    Raises:
        EmptyCartError: no lines to check out
    """
    checkout_items = [
        CheckoutItem(
            name=item.reference.name,
            price=item.reference.price,
            quantity=item.quantity,
            product_id=item.reference.id,
        )
        for item in items
    ]
    if not checkout_items:
        raise EmptyCartError(ERROR_EMPTY_CART)
    return checkout_items


def build_checkout_request(
    items: Iterable[LineItem],
    order_type: str = "pickup",
    cafe_id: Optional[str] = None,
    pickup_time: Optional[str] = None,
    use_points: bool = False,
) -> CheckoutRequest:
    """Build the full checkout request for the current cart lines."""
    return CheckoutRequest(
        items=build_checkout_items(items),
        order_type=order_type,
        cafe_id=cafe_id,
        pickup_time=pickup_time,
        use_points=use_points,
    )
