from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .basket import Basket
from .catalog import Catalog
from .delivery import DeliveryRule, TieredDeliveryRule
from .errors import ConfigurationError
from .money import ROUNDING_MODES
from .offers import Offer, build_offer
from .schema import validate_tier_records

logger = logging.getLogger(__name__)


DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {"code": "R01", "name": "Red Widget", "price": "32.95"},
    {"code": "G01", "name": "Green Widget", "price": "24.95"},
    {"code": "B01", "name": "Blue Widget", "price": "7.95"},
]

DEFAULT_DELIVERY_TIERS: List[Dict[str, Any]] = [
    {"threshold": "0", "cost": "4.95"},
    {"threshold": "50", "cost": "2.95"},
    {"threshold": "90", "cost": "0"},
]

DEFAULT_OFFERS: List[Dict[str, Any]] = [
    {"type": "buy_one_get_second_half_price", "product_code": "R01"},
]

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Config:
    currency_symbol: str = "$"
    rounding: str = "ROUND_DOWN"
    log_level: str = "WARNING"
    products: List[Dict[str, Any]] = field(default_factory=lambda: [dict(p) for p in DEFAULT_PRODUCTS])
    delivery_tiers: List[Dict[str, Any]] = field(default_factory=lambda: [dict(t) for t in DEFAULT_DELIVERY_TIERS])
    offers: List[Dict[str, Any]] = field(default_factory=lambda: [dict(o) for o in DEFAULT_OFFERS])


@dataclass(frozen=True)
class PricingSetup:
    """Shared, read-only pricing configuration handed to every basket."""

    catalog: Catalog
    delivery_rule: DeliveryRule
    offers: Tuple[Offer, ...]

    def new_basket(self) -> Basket:
        return Basket(catalog=self.catalog, delivery_rule=self.delivery_rule, offers=self.offers)


_ENV_PREFIX = "ACME_BASKET_"
_TOOL_KEY = "acme_basket"


def _find_pyproject(start_dir: Path) -> Path | None:
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / "pyproject.toml"
        if candidate.exists():
            return candidate
    return None


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Could not parse {path}: {exc}") from exc


def _to_rounding(value: Any, default: str) -> str:
    normalized = str(value).strip().upper()
    if not normalized.startswith("ROUND_"):
        normalized = f"ROUND_{normalized}"
    if normalized in ROUNDING_MODES:
        return normalized
    logger.warning("Unknown rounding mode %r; falling back to %s", value, default)
    return default


def _to_log_level(value: Any, default: str) -> str:
    normalized = str(value).strip().upper()
    if normalized in _LOG_LEVELS:
        return normalized
    logger.warning("Unknown log level %r; falling back to %s", value, default)
    return default


def _to_records(raw: Dict[str, Any], key: str, default: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    value = raw.get(key)
    if value is None:
        return [dict(item) for item in default]
    if not isinstance(value, list):
        raise ConfigurationError(f"[tool.{_TOOL_KEY}] {key} must be a list, got {type(value).__name__}")
    return list(value)


def _from_sources(raw: Dict[str, Any]) -> Config:
    currency_symbol = os.getenv(f"{_ENV_PREFIX}CURRENCY_SYMBOL", raw.get("currency_symbol", "$"))
    rounding = _to_rounding(os.getenv(f"{_ENV_PREFIX}ROUNDING", raw.get("rounding", "ROUND_DOWN")), "ROUND_DOWN")
    log_level = _to_log_level(os.getenv(f"{_ENV_PREFIX}LOG_LEVEL", raw.get("log_level", "WARNING")), "WARNING")

    return Config(
        currency_symbol=str(currency_symbol),
        rounding=rounding,
        log_level=log_level,
        products=_to_records(raw, "products", DEFAULT_PRODUCTS),
        delivery_tiers=_to_records(raw, "delivery_tiers", DEFAULT_DELIVERY_TIERS),
        offers=_to_records(raw, "offers", DEFAULT_OFFERS),
    )


@lru_cache(maxsize=32)
def load_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    root = Path(start_dir or os.getcwd()).resolve()
    pyproject = _find_pyproject(root)
    if pyproject is None:
        return _from_sources({})

    parsed = _load_toml(pyproject)
    tool = parsed.get("tool", {}) if isinstance(parsed, dict) else {}
    section = tool.get(_TOOL_KEY, {}) if isinstance(tool, dict) else {}
    return _from_sources(section if isinstance(section, dict) else {})


def get_config() -> Config:
    return load_config(os.getcwd())


def refresh_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    load_config.cache_clear()
    return load_config(start_dir)


def build_pricing(config: Config | None = None) -> PricingSetup:
    """Build the shared catalog, delivery rule and offers described by ``config``.

    Raises:
        BasketError: any catalog, tier or offer validation failure.
    """

    config = config or get_config()
    catalog = Catalog.from_records(config.products)
    delivery_rule = TieredDeliveryRule(validate_tier_records(config.delivery_tiers))
    offers = tuple(build_offer(record) for record in config.offers)
    for offer in offers:
        if offer.product_code not in catalog:
            logger.warning("Offer %r targets a product code missing from the catalog", offer)
    return PricingSetup(catalog=catalog, delivery_rule=delivery_rule, offers=offers)
