"""Typed value objects and record contracts shared across catalog, pricing and config.

Value objects validate on construction so that malformed products or tiers fail at the
boundary where they are built, never halfway through pricing a basket.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Tuple, TypedDict

from .errors import InvalidDeliveryTiersError, InvalidProductError
from .money import ZERO, to_money


class ProductRecord(TypedDict):
    """Raw product entry as it appears in configuration."""

    code: str
    name: str
    price: Any


class TierRecord(TypedDict):
    """Raw delivery tier entry: charge ``cost`` when the subtotal reaches ``threshold``."""

    threshold: Any
    cost: Any


class OfferRecord(TypedDict):
    """Raw offer entry; ``type`` selects the offer class from ``OFFER_TYPES``."""

    type: str
    product_code: str


@dataclass(frozen=True)
class Product:
    """Immutable catalog entry.

    Invariant:
    - ``code`` is a non-empty string.
    - ``price`` is a ``Decimal`` greater than or equal to zero.
    """

    code: str
    name: str
    price: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not self.code.strip():
            raise InvalidProductError(f"Product code must be a non-empty string, got {self.code!r}")
        if not isinstance(self.name, str):
            raise InvalidProductError(
                f"Product {self.code!r} name must be a string, got {type(self.name).__name__}"
            )
        try:
            price = to_money(self.price)
        except ValueError as exc:
            raise InvalidProductError(f"Product {self.code!r} has invalid price: {exc}") from exc
        if price < ZERO:
            raise InvalidProductError(f"Product {self.code!r} price must not be negative, got {price}")
        # frozen dataclass: normalise the price in place
        object.__setattr__(self, "price", price)

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "name": self.name, "price": str(self.price)}


@dataclass(frozen=True, order=True)
class DeliveryTier:
    """Delivery charge applied to subtotals at or above ``threshold``."""

    threshold: Decimal
    cost: Decimal

    def __post_init__(self) -> None:
        for field_name in ("threshold", "cost"):
            try:
                value = to_money(getattr(self, field_name))
            except ValueError as exc:
                raise InvalidDeliveryTiersError(f"Invalid delivery tier {field_name}: {exc}") from exc
            if value < ZERO:
                raise InvalidDeliveryTiersError(
                    f"Delivery tier {field_name} must not be negative, got {value}"
                )
            object.__setattr__(self, field_name, value)

    @classmethod
    def from_record(cls, record: Any) -> "DeliveryTier":
        if isinstance(record, DeliveryTier):
            return record
        if not isinstance(record, dict) or "threshold" not in record or "cost" not in record:
            raise InvalidDeliveryTiersError(
                f"Delivery tier must be a mapping with 'threshold' and 'cost', got {record!r}"
            )
        return cls(threshold=record["threshold"], cost=record["cost"])


@dataclass(frozen=True)
class BasketSummary:
    """Every stage of one basket total computation, unrounded."""

    items: Tuple[Product, ...]
    subtotal: Decimal
    discount: Decimal
    discounted_subtotal: Decimal
    delivery: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "subtotal": str(self.subtotal),
            "discount": str(self.discount),
            "discounted_subtotal": str(self.discounted_subtotal),
            "delivery": str(self.delivery),
            "total": str(self.total),
        }
