"""Acme Widget Co basket pricing: catalog lookup, offers and tiered delivery."""

__version__ = "0.1.0"

from .basket import Basket
from .catalog import Catalog
from .delivery import DeliveryRule, TieredDeliveryRule
from .errors import (
    BasketError,
    ConfigurationError,
    DuplicateCodeError,
    InvalidDeliveryTiersError,
    InvalidOfferError,
    InvalidProductError,
    NoMatchingTierError,
    NotFoundError,
)
from .offers import BuyOneGetSecondHalfPrice, Offer
from .types import BasketSummary, DeliveryTier, Product

__all__ = [
    "__version__",
    "Basket",
    "BasketError",
    "BasketSummary",
    "BuyOneGetSecondHalfPrice",
    "Catalog",
    "ConfigurationError",
    "DeliveryRule",
    "DeliveryTier",
    "DuplicateCodeError",
    "InvalidDeliveryTiersError",
    "InvalidOfferError",
    "InvalidProductError",
    "NoMatchingTierError",
    "NotFoundError",
    "Offer",
    "Product",
    "TieredDeliveryRule",
]
