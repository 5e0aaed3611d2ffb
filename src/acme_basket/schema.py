"""Centralized strict schema validation for pricing configuration records."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from .errors import ConfigurationError
from .types import DeliveryTier, OfferRecord, Product


class ValidationError(ConfigurationError):
    """Raised when a configuration record violates the strict schema contract."""


_PRODUCT_FIELDS: tuple[str, ...] = ("code", "name", "price")
_TIER_FIELDS: tuple[str, ...] = ("threshold", "cost")
_OFFER_FIELDS: tuple[str, ...] = ("type", "product_code")


def _require_fields(kind: str, record: Any, fields: tuple[str, ...]) -> Dict[str, Any]:
    if not isinstance(record, dict):
        raise ValidationError(f"{kind} entry must be a table/object, got {type(record).__name__}")
    for field_name in fields:
        if field_name not in record:
            raise ValidationError(f"{kind} entry missing required field '{field_name}'")
    unknown = sorted(set(record) - set(fields))
    if unknown:
        raise ValidationError(f"{kind} entry has unknown field(s): {', '.join(unknown)}")
    return record


def _require_string(kind: str, record: Dict[str, Any], field_name: str) -> str:
    value = record[field_name]
    if not isinstance(value, str):
        actual = type(value).__name__
        raise ValidationError(f"Invalid {kind} field '{field_name}': expected str, got {actual}")
    if not value.strip():
        raise ValidationError(f"Invalid {kind} field '{field_name}': must be non-empty string")
    return value


def validate_product_record(record: Any) -> Product:
    """Validate a raw product record and build the ``Product`` it describes.

    ``Product`` values pass through unchanged.
    """

    if isinstance(record, Product):
        return record
    record = _require_fields("Product", record, _PRODUCT_FIELDS)
    code = _require_string("product", record, "code")
    name = _require_string("product", record, "name")
    if isinstance(record["price"], bool) or not isinstance(record["price"], (Decimal, int, float, str)):
        actual = type(record["price"]).__name__
        raise ValidationError(f"Invalid product field 'price' for {code!r}: expected number, got {actual}")
    return Product(code=code, name=name, price=record["price"])


def validate_tier_records(records: Any) -> List[DeliveryTier]:
    if not isinstance(records, list) or not records:
        raise ValidationError("delivery_tiers must be a non-empty list of {threshold, cost} tables")
    return [DeliveryTier.from_record(_require_fields("Delivery tier", record, _TIER_FIELDS)) for record in records]


def validate_offer_record(record: Any) -> OfferRecord:
    record = _require_fields("Offer", record, _OFFER_FIELDS)
    _require_string("offer", record, "type")
    _require_string("offer", record, "product_code")
    return record  # type: ignore[return-value]
