import pytest

from errors import PricingError
from pricing import (
    badge, display_pricing, effective_price, is_on_sale, normalize_pricing, round_half_up, to_listing_item,
    validate_pricing,
)


def test_legacy_original_price_marks_sale(make_product):
    assert is_on_sale(make_product(price=79000, original_price=99000)) is True
    assert is_on_sale(make_product(price=79000)) is False


def test_sale_price_marks_sale(make_product):
    product = make_product(price=79000, sale_price=59000)
    assert is_on_sale(product) is True
    assert effective_price(product) == 59000


def test_display_pricing_with_original_price(catalog):
    assert display_pricing(catalog.require("1")) == (89000, 120000, 26)


def test_display_pricing_with_sale_price(make_product):
    assert display_pricing(make_product(price=100000, sale_price=75000)) == (75000, 100000, 25)


def test_display_pricing_without_discount(make_product):
    assert display_pricing(make_product(price=29000)) == (29000, None, None)


@pytest.mark.parametrize("sale_price, original_price", [(60000, None), (50000, None), (None, 40000), (None, 50000)])
def test_validate_pricing_rejects_non_discounts(sale_price, original_price):
    with pytest.raises(PricingError):
        validate_pricing(50000, sale_price, original_price)


def test_validate_pricing_accepts_discounts():
    validate_pricing(50000, 40000, None)
    validate_pricing(50000, None, 60000)
    validate_pricing(50000, None, None)


def test_normalize_pricing_drops_empty_references():
    fields = normalize_pricing({"price": 50000, "sale_price": 0, "original_price": 50000})
    assert fields["sale_price"] is None
    assert fields["original_price"] is None


def test_badge_priority(catalog):
    assert badge(catalog.require("3")) == "LIMITED"
    assert badge(catalog.require("8")) == "HOT"
    assert badge(catalog.require("2")) == "BEST"
    assert badge(catalog.require("7")) is None


def test_listing_item(catalog):
    item = to_listing_item(catalog.require("7"))
    assert item.price == 79000
    assert item.original_price == 99000
    assert item.discount == 20
    assert item.is_sale is True
    assert item.image == catalog.require("7").images[0]


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(8.33) == 8
