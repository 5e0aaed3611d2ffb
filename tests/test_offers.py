import itertools
from decimal import Decimal

import pytest

from acme_basket import BuyOneGetSecondHalfPrice, InvalidOfferError, Product
from acme_basket.offers import OFFER_TYPES, build_offer

RED = Product(code="R01", name="Red Widget", price=Decimal("32.95"))
BLUE = Product(code="B01", name="Blue Widget", price=Decimal("7.95"))


@pytest.mark.parametrize(
    "units, expected",
    [
        (0, Decimal("0")),
        (1, Decimal("0")),
        (2, Decimal("16.475")),
        (3, Decimal("16.475")),
        (4, Decimal("32.95")),
        (5, Decimal("32.95")),
    ],
)
def test_every_second_unit_is_half_price(units, expected):
    offer = BuyOneGetSecondHalfPrice(product_code="R01")

    assert offer.discount([RED] * units) == expected


def test_discount_ignores_other_products():
    offer = BuyOneGetSecondHalfPrice(product_code="R01")

    assert offer.discount([BLUE, BLUE, BLUE]) == Decimal("0")
    assert offer.discount([BLUE, RED, BLUE]) == Decimal("0")


def test_discount_is_order_independent():
    offer = BuyOneGetSecondHalfPrice(product_code="R01")
    items = [BLUE, RED, BLUE, RED, RED]

    discounts = {offer.discount(list(permutation)) for permutation in itertools.permutations(items)}

    assert discounts == {Decimal("16.475")}


def test_offer_is_stateless_across_calls():
    offer = BuyOneGetSecondHalfPrice(product_code="R01")

    assert offer.discount([RED, RED]) == offer.discount([RED, RED])
    assert offer.discount([RED]) == Decimal("0")


def test_offer_requires_product_code():
    with pytest.raises(InvalidOfferError):
        BuyOneGetSecondHalfPrice(product_code="")


def test_build_offer_from_record():
    offer = build_offer({"type": "buy_one_get_second_half_price", "product_code": "G01"})

    assert offer == BuyOneGetSecondHalfPrice(product_code="G01")
    assert "buy_one_get_second_half_price" in OFFER_TYPES


def test_build_offer_unknown_type():
    with pytest.raises(InvalidOfferError, match="Unknown offer type 'three_for_two'"):
        build_offer({"type": "three_for_two", "product_code": "R01"})
