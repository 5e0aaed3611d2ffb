from decimal import Decimal

import pytest

from acme_basket import Basket, BuyOneGetSecondHalfPrice, Catalog, Product, TieredDeliveryRule


@pytest.fixture(autouse=True)
def clear_basket_env(monkeypatch):
    for key in [
        "ACME_BASKET_CURRENCY_SYMBOL",
        "ACME_BASKET_ROUNDING",
        "ACME_BASKET_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def catalog():
    return Catalog(
        [
            Product(code="R01", name="Red Widget", price=Decimal("32.95")),
            Product(code="G01", name="Green Widget", price=Decimal("24.95")),
            Product(code="B01", name="Blue Widget", price=Decimal("7.95")),
        ]
    )


@pytest.fixture
def delivery_rule():
    return TieredDeliveryRule(
        [
            {"threshold": 0, "cost": "4.95"},
            {"threshold": 50, "cost": "2.95"},
            {"threshold": 90, "cost": 0},
        ]
    )


@pytest.fixture
def offers():
    return [BuyOneGetSecondHalfPrice(product_code="R01")]


@pytest.fixture
def new_basket(catalog, delivery_rule, offers):
    """Factory for fresh baskets sharing one catalog/offer/delivery configuration."""

    def _make(*codes):
        basket = Basket(catalog=catalog, delivery_rule=delivery_rule, offers=offers)
        for code in codes:
            basket.add(code)
        return basket

    return _make
