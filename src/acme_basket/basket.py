"""Basket aggregation and the checkout total pipeline.

Pipeline (recomputed on every call, never cached):
subtotal -> minus offer discounts (floored at zero) -> plus delivery for the discounted
subtotal.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List, Tuple

from .catalog import Catalog
from .delivery import DeliveryRule
from .money import ZERO
from .offers import Offer
from .types import BasketSummary, Product

logger = logging.getLogger(__name__)

__all__ = ["Basket"]


class Basket:
    """Items for one checkout.

    The catalog, delivery rule and offers are borrowed shared configuration; the basket
    only owns its item list, and ``add`` is the only way to change it.
    """

    def __init__(self, catalog: Catalog, delivery_rule: DeliveryRule, offers: Iterable[Offer] = ()):
        self.catalog = catalog
        self.delivery_rule = delivery_rule
        self.offers: Tuple[Offer, ...] = tuple(offers)
        self._items: List[Product] = []

    def add(self, code: str) -> Product:
        """Resolve ``code`` through the catalog and append the product.

        Raises:
            NotFoundError: if the catalog has no product with ``code``. The basket is
                left unchanged.
        """
        product = self.catalog.find(code)
        self._items.append(product)
        logger.debug("Added %s to basket (%d items)", product.code, len(self._items))
        return product

    def items(self) -> Tuple[Product, ...]:
        return tuple(self._items)

    def subtotal(self) -> Decimal:
        return sum((item.price for item in self._items), ZERO)

    def discount(self) -> Decimal:
        items = self.items()
        return sum((offer.discount(items) for offer in self.offers), ZERO)

    def delivery_cost(self) -> Decimal:
        return self.summary().delivery

    def summary(self) -> BasketSummary:
        items = self.items()
        subtotal = sum((item.price for item in items), ZERO)
        discount = sum((offer.discount(items) for offer in self.offers), ZERO)
        discounted = max(subtotal - discount, ZERO)
        delivery = self.delivery_rule.cost_for(discounted)
        return BasketSummary(
            items=items,
            subtotal=subtotal,
            discount=discount,
            discounted_subtotal=discounted,
            delivery=delivery,
            total=discounted + delivery,
        )

    def total(self) -> Decimal:
        return self.summary().total

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Basket(items={[item.code for item in self._items]!r})"
