"""Offer rules: discounts computed from a basket's line items.

Offers are stateless. Each call to ``discount`` works from the item sequence it is
handed, so one offer instance can serve any number of baskets.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, Sequence, Type

from .errors import InvalidOfferError
from .money import ZERO
from .schema import validate_offer_record
from .types import Product

__all__ = ["Offer", "BuyOneGetSecondHalfPrice", "OFFER_TYPES", "build_offer"]


class Offer(ABC):
    """Discount rule keyed to a single product code."""

    type_name: str = ""

    def __init__(self, product_code: str):
        if not isinstance(product_code, str) or not product_code.strip():
            raise InvalidOfferError(f"Offer product_code must be a non-empty string, got {product_code!r}")
        self.product_code = product_code

    @abstractmethod
    def discount(self, items: Sequence[Product]) -> Decimal:
        """Return the amount to take off the subtotal of ``items``."""

    def matching(self, items: Sequence[Product]) -> list[Product]:
        return [item for item in items if item.code == self.product_code]

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.product_code == other.product_code  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.product_code))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(product_code={self.product_code!r})"


class BuyOneGetSecondHalfPrice(Offer):
    """Every second unit of ``product_code`` is half price.

    Units are counted, not paired positionally: ``n`` units give ``n // 2`` half-price
    units regardless of the order they were added in.
    """

    type_name = "buy_one_get_second_half_price"

    def discount(self, items: Sequence[Product]) -> Decimal:
        matching = self.matching(items)
        pairs = len(matching) // 2
        if not pairs:
            return ZERO
        return pairs * (matching[0].price / 2)


OFFER_TYPES: Dict[str, Type[Offer]] = {
    BuyOneGetSecondHalfPrice.type_name: BuyOneGetSecondHalfPrice,
}


def build_offer(record: Any) -> Offer:
    """Build an offer from a ``{type, product_code}`` record."""

    if isinstance(record, Offer):
        return record
    record = validate_offer_record(record)
    offer_cls = OFFER_TYPES.get(record["type"])
    if offer_cls is None:
        known = ", ".join(sorted(OFFER_TYPES))
        raise InvalidOfferError(f"Unknown offer type {record['type']!r} (known: {known})")
    return offer_cls(product_code=record["product_code"])
