import textwrap
from decimal import Decimal

import pytest

from acme_basket import BuyOneGetSecondHalfPrice, ConfigurationError, DuplicateCodeError, InvalidOfferError
from acme_basket.config import Config, build_pricing, refresh_config


def test_defaults_without_pyproject(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = refresh_config(tmp_path)

    assert cfg.currency_symbol == "$"
    assert cfg.rounding == "ROUND_DOWN"
    assert [product["code"] for product in cfg.products] == ["R01", "G01", "B01"]


def test_config_loads_from_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        textwrap.dedent(
            """
            [tool.acme_basket]
            currency_symbol = "£"
            rounding = "half_up"

            [[tool.acme_basket.products]]
            code = "S01"
            name = "Sprocket"
            price = "12.50"

            [[tool.acme_basket.delivery_tiers]]
            threshold = 0
            cost = "3.00"

            [[tool.acme_basket.delivery_tiers]]
            threshold = 20
            cost = 0

            [[tool.acme_basket.offers]]
            type = "buy_one_get_second_half_price"
            product_code = "S01"
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    cfg = refresh_config()
    pricing = build_pricing(cfg)
    basket = pricing.new_basket()
    basket.add("S01")
    basket.add("S01")

    assert cfg.currency_symbol == "£"
    assert cfg.rounding == "ROUND_HALF_UP"
    assert pricing.offers == (BuyOneGetSecondHalfPrice(product_code="S01"),)
    assert basket.total() == Decimal("21.75")


def test_env_overrides_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text('[tool.acme_basket]\nrounding = "ROUND_DOWN"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ACME_BASKET_ROUNDING", "ROUND_HALF_EVEN")
    monkeypatch.setenv("ACME_BASKET_LOG_LEVEL", "debug")

    cfg = refresh_config()

    assert cfg.rounding == "ROUND_HALF_EVEN"
    assert cfg.log_level == "DEBUG"


def test_unknown_rounding_falls_back_with_warning(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ACME_BASKET_ROUNDING", "sideways")

    cfg = refresh_config(tmp_path)

    assert cfg.rounding == "ROUND_DOWN"
    assert "Unknown rounding mode" in caplog.text


def test_products_must_be_a_list(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text('[tool.acme_basket]\nproducts = "R01"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigurationError, match="products must be a list"):
        refresh_config()


def test_build_pricing_defaults_match_acme_catalog():
    pricing = build_pricing(Config())

    assert pricing.catalog.codes() == ("R01", "G01", "B01")
    assert pricing.delivery_rule.cost_for(Decimal("50")) == Decimal("2.95")
    assert pricing.offers == (BuyOneGetSecondHalfPrice(product_code="R01"),)


def test_new_baskets_share_pricing_setup():
    pricing = build_pricing(Config())
    first = pricing.new_basket()
    second = pricing.new_basket()

    first.add("R01")

    assert first.catalog is second.catalog
    assert second.items() == ()


def test_build_pricing_propagates_catalog_errors():
    cfg = Config(
        products=[
            {"code": "R01", "name": "Red Widget", "price": "1"},
            {"code": "R01", "name": "Red Widget", "price": "2"},
        ]
    )

    with pytest.raises(DuplicateCodeError):
        build_pricing(cfg)


def test_build_pricing_rejects_unknown_offer_type():
    with pytest.raises(InvalidOfferError):
        build_pricing(Config(offers=[{"type": "free_lunch", "product_code": "R01"}]))


def test_offer_for_missing_product_logs_warning(caplog):
    build_pricing(Config(offers=[{"type": "buy_one_get_second_half_price", "product_code": "Z99"}]))

    assert "missing from the catalog" in caplog.text


def test_build_pricing_accepts_decimal_prices():
    pricing = build_pricing(Config(products=[{"code": "R01", "name": "Red Widget", "price": Decimal("32.95")}]))

    assert pricing.catalog.find("R01").price == Decimal("32.95")
