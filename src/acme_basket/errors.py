"""Structured basket pricing error taxonomy.

Every failure raised by this package carries a stable ``error_code`` and ``category``
so callers (and the CLI) can report it without parsing messages.
"""

from __future__ import annotations


class BasketError(Exception):
    """Base class for all basket pricing exceptions."""

    def __init__(self, error_code: str, category: str, explanation: str, actionable: bool = True):
        self.error_code = error_code
        self.category = category
        self.explanation = explanation
        self.actionable = actionable
        super().__init__(f"[{self.category}:{self.error_code}] {self.explanation}")

    def __str__(self) -> str:
        return f"[{self.category}:{self.error_code}] {self.explanation}"


class NotFoundError(BasketError, KeyError):
    """Raised when a product code is not present in the catalog."""

    def __init__(self, code: str):
        self.code = code
        super().__init__("PRODUCT_NOT_FOUND", "CATALOG", f"Unknown product code: {code!r}")


class DuplicateCodeError(BasketError):
    def __init__(self, code: str):
        self.code = code
        super().__init__("DUPLICATE_CODE", "CATALOG", f"Duplicate product code in catalog: {code!r}")


class InvalidProductError(BasketError):
    def __init__(self, explanation: str):
        super().__init__("INVALID_PRODUCT", "CATALOG", explanation)


class NoMatchingTierError(BasketError):
    """Raised when no delivery tier threshold is at or below the priced amount."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__("NO_MATCHING_TIER", "DELIVERY", f"No delivery tier covers amount {amount}")


class InvalidDeliveryTiersError(BasketError):
    def __init__(self, explanation: str):
        super().__init__("INVALID_DELIVERY_TIERS", "DELIVERY", explanation)


class InvalidOfferError(BasketError):
    def __init__(self, explanation: str):
        super().__init__("INVALID_OFFER", "OFFER", explanation)


class ConfigurationError(BasketError):
    def __init__(self, explanation: str, actionable: bool = True):
        super().__init__("INVALID_CONFIG", "CONFIG", explanation, actionable)
