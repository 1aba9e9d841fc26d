"""
Price rules shared by the catalog, listing cards and the cart.

`price` is the list price. A product can be discounted two ways:
`sale_price` below `price`, or the legacy `original_price` above `price`.
"""

import math
from typing import Optional, Tuple

from errors import PricingError
from schemas import ListingItem, Product

BADGE_ORDER = (
    ("is_limited", "LIMITED"),
    ("is_hot", "HOT"),
    ("is_new", "NEW"),
    ("is_best", "BEST"),
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def effective_price(product: Product) -> int:
    """What the customer actually pays."""
    return product.sale_price or product.price


def is_on_sale(product: Product) -> bool:
    return bool(
        product.is_sale
        or product.sale_price
        or (product.original_price and product.original_price > product.price)
    )


def validate_pricing(price: int, sale_price: Optional[int], original_price: Optional[int]) -> None:
    if sale_price and sale_price >= price:
        raise PricingError(f"Sale price {sale_price} must be lower than the list price {price}")
    if original_price and original_price <= price:
        raise PricingError(f"Original price {original_price} must be higher than the list price {price}")


def normalize_pricing(fields: dict) -> dict:
    """Drop reference prices that carry no discount (zero or equal to price)."""
    price = fields["price"]
    for key in ("sale_price", "original_price"):
        value = fields.get(key)
        if not value or value == price:
            fields[key] = None
    return fields


def has_discount(fields: dict) -> bool:
    return bool(fields.get("sale_price") or fields.get("original_price"))


def display_pricing(product: Product) -> Tuple[int, Optional[int], Optional[int]]:
    """Return (display price, crossed-out reference price, discount percent)."""
    display = product.sale_price or product.price
    reference = product.original_price or product.price
    if display < reference:
        return display, reference, round_half_up((reference - display) / reference * 100)
    return display, None, None


def badge(product: Product) -> Optional[str]:
    for flag, label in BADGE_ORDER:
        if getattr(product, flag):
            return label
    return None


def to_listing_item(product: Product) -> ListingItem:
    price, original_price, discount = display_pricing(product)
    return ListingItem(
        id=product.id,
        name=product.name,
        price=price,
        original_price=original_price,
        discount=discount,
        image=product.image,
        category=product.category,
        rating=product.rating,
        review_count=product.review_count,
        is_new=product.is_new,
        is_sale=is_on_sale(product),
        is_best=product.is_best,
        badge=badge(product),
        description=product.description,
    )
