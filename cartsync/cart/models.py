"""Cart line items and the identity key that decides when lines merge."""
import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from cartsync.catalog import (
    Customizations,
    PurchasableReference,
    reference_from_dict,
    reference_to_dict,
)

CustomizationSet = Union[Customizations, Mapping[str, Any]]

# How stored customizations are rebuilt on load
CUSTOMIZATIONS_MODEL = "model"
CUSTOMIZATIONS_MAPPING = "mapping"


def _normalize(value: Any) -> Any:
    """Plain JSON-ready form of a customization value, with unset (None) options dropped."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items() if v is not None}
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize(v) for v in value), key=_canonical_json)
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def _canonical_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def canonical_customizations(customizations: CustomizationSet) -> str:
    """Canonical serialized form used to compare customization sets."""
    return _canonical_json(_normalize(customizations))


def snapshot_customizations(customizations: Optional[CustomizationSet]) -> Optional[CustomizationSet]:
    """
    Detached copy of caller-supplied customizations, in the form they are stored.

    Mappings become plain dicts without unset options, tuples become lists and
    sets sorted lists. ``Customizations`` models are rebuilt from that form, so
    later changes by the caller cannot alter a line's identity key.
    """
    if customizations is None:
        return None
    if isinstance(customizations, Customizations):
        return Customizations.model_validate(_normalize(customizations))
    return _normalize(customizations)


def identity_key(reference_id: str, customizations: Optional[CustomizationSet] = None) -> str:
    """
    Key under which an addition merges with an existing line.

    The catalog id alone when there are no customizations, otherwise the id
    followed by the canonical customization JSON. An empty set still counts
    as customized.
    """
    if customizations is None:
        return reference_id
    return f"{reference_id}-{canonical_customizations(customizations)}"


@dataclass(frozen=True)
class LineItem:
    """Single line in the cart."""
    reference: PurchasableReference
    quantity: int
    customizations: Optional[CustomizationSet] = None

    @property
    def key(self) -> str:
        return identity_key(self.reference.id, self.customizations)

    @property
    def total_price(self):
        """Unit price times quantity, no rounding."""
        return self.reference.price * self.quantity

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        data = {
            "product": reference_to_dict(self.reference),
            "quantity": self.quantity,
            "customizations": (
                None if self.customizations is None else _normalize(self.customizations)
            ),
        }
        if isinstance(self.customizations, Customizations):
            data["customizations_type"] = CUSTOMIZATIONS_MODEL
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "LineItem":
        """
        Create from a stored dictionary.

        Raises:
            KeyError: required field missing
            TypeError / ValueError: field has the wrong shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"Line item must be an object, got {type(data).__name__}")

        quantity = data["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError(f"Line item quantity must be an integer, got {quantity!r}")

        customizations = data.get("customizations")
        if customizations is not None and not isinstance(customizations, dict):
            raise TypeError("Line item customizations must be an object or null")

        customizations_type = data.get("customizations_type", CUSTOMIZATIONS_MAPPING)
        if customizations_type == CUSTOMIZATIONS_MODEL:
            if customizations is None:
                raise ValueError("Customizations model stored without options")
            customizations = Customizations.model_validate(customizations)
        elif customizations_type != CUSTOMIZATIONS_MAPPING:
            raise ValueError(f"Unknown customizations type: {customizations_type!r}")

        return cls(
            reference=reference_from_dict(data["product"]),
            quantity=quantity,
            customizations=customizations,
        )
