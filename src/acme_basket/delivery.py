"""Delivery charge rules mapping a (discounted) subtotal to a delivery cost."""

from __future__ import annotations

import bisect
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Iterable, Tuple

from .errors import InvalidDeliveryTiersError, NoMatchingTierError
from .money import ZERO, to_money
from .types import DeliveryTier

__all__ = ["DeliveryRule", "TieredDeliveryRule"]


class DeliveryRule(ABC):
    @abstractmethod
    def cost_for(self, amount: Decimal) -> Decimal:
        """Return the delivery charge for a basket worth ``amount``."""


class TieredDeliveryRule(DeliveryRule):
    """Step function over subtotal thresholds.

    The tier with the greatest threshold at or below the amount wins; thresholds are
    inclusive lower bounds. Tiers are sorted on construction, so callers may pass them
    in any order, but exactly one of them must start at zero so every non-negative
    subtotal is covered.
    """

    def __init__(self, tiers: Iterable[Any]):
        parsed = sorted(DeliveryTier.from_record(tier) for tier in tiers)
        if not parsed:
            raise InvalidDeliveryTiersError("At least one delivery tier is required")
        thresholds = [tier.threshold for tier in parsed]
        duplicates = sorted({str(value) for value in thresholds if thresholds.count(value) > 1})
        if duplicates:
            raise InvalidDeliveryTiersError(f"Duplicate delivery tier threshold(s): {', '.join(duplicates)}")
        if thresholds[0] != ZERO:
            raise InvalidDeliveryTiersError(
                f"Delivery tiers must include a zero threshold; lowest is {thresholds[0]}"
            )
        self._tiers: Tuple[DeliveryTier, ...] = tuple(parsed)
        self._thresholds: Tuple[Decimal, ...] = tuple(thresholds)

    @property
    def tiers(self) -> Tuple[DeliveryTier, ...]:
        return self._tiers

    def tier_for(self, amount: Any) -> DeliveryTier:
        try:
            value = to_money(amount)
        except ValueError:
            raise NoMatchingTierError(amount) from None
        index = bisect.bisect_right(self._thresholds, value) - 1
        if index < 0:
            raise NoMatchingTierError(value)
        return self._tiers[index]

    def cost_for(self, amount: Any) -> Decimal:
        return self.tier_for(amount).cost

    def __repr__(self) -> str:
        tiers = ", ".join(f"{tier.threshold}->{tier.cost}" for tier in self._tiers)
        return f"TieredDeliveryRule([{tiers}])"
