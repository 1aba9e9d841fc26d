"""
Per-variant (color x size) inventory.

A product can carry stock three ways: a single `stock` figure, a per-size
breakdown (`size_stocks`) and a per-color-per-size breakdown
(`color_size_stocks`, which wins when present). `color_size_availability`
switches individual variants off without touching the stock on hand.
"""

import copy
from typing import Dict, List, Optional

from errors import InvalidProduct
from pricing import round_half_up
from schemas import ColorSizeAvailability, ColorSizeStocks, Product, ProductPatch, VariantStock


# --------------- Queries ------------------------------------------------

def total_stock(color_size_stocks: ColorSizeStocks) -> int:
    return sum(sum(by_size.values()) for by_size in color_size_stocks.values())


def is_declared(product: Product, color: str, size: str) -> bool:
    if product.sizes and size not in product.sizes:
        return False
    if product.colors and color not in product.colors:
        return False
    return True


def variant_stock(product: Product, color: str, size: str) -> int:
    """Raw units on hand for one variant, ignoring availability."""
    if not is_declared(product, color, size):
        return 0
    by_size = (product.color_size_stocks or {}).get(color)
    if by_size is not None and size in by_size:
        return by_size[size]
    if product.size_stocks and size in product.size_stocks:
        return product.size_stocks[size]
    if not product.sizes:
        return product.stock
    # even split does not always re-sum to `stock`
    return round_half_up(product.stock / len(product.sizes))


def is_variant_available(product: Product, color: str, size: str) -> bool:
    return (product.color_size_availability or {}).get(color, {}).get(size, True)


def purchasable_stock(product: Product, color: str, size: str) -> int:
    if not is_variant_available(product, color, size):
        return 0
    return variant_stock(product, color, size)


def variant_info(product: Product, color: str, size: str) -> VariantStock:
    available = is_declared(product, color, size) and is_variant_available(product, color, size)
    return VariantStock(
        product_id=product.id,
        color=color,
        size=size,
        stock=variant_stock(product, color, size),
        available=available,
        purchasable=purchasable_stock(product, color, size),
    )


# --------------- Save-time reconciliation --------------------------------

def reconcile(fields: dict) -> dict:
    """Prune undeclared labels, fill missing variants and recompute `stock`.

    Works on a plain dict of product fields so the catalog can run it
    before validating the merged result.
    """
    sizes = fields.get("sizes") or []
    colors = fields.get("colors") or []

    if fields.get("size_stocks") is not None:
        current = fields["size_stocks"]
        fields["size_stocks"] = {size: current.get(size, 0) for size in sizes}

    if fields.get("color_size_stocks") is not None:
        current = fields["color_size_stocks"]
        fields["color_size_stocks"] = {
            color: {size: current.get(color, {}).get(size, 0) for size in sizes}
            for color in colors
        }

    if fields.get("color_size_stocks"):
        fields["stock"] = total_stock(fields["color_size_stocks"])
    elif fields.get("size_stocks"):
        fields["stock"] = sum(fields["size_stocks"].values())

    if fields.get("color_size_availability") is not None or colors:
        current = fields.get("color_size_availability") or {}
        fields["color_size_availability"] = {
            color: {size: current.get(color, {}).get(size, True) for size in sizes}
            for color in colors
        }
    return fields


# --------------- Admin form editing --------------------------------------

class VariantEditor:
    """Pending variant edits for one product form.

    Nothing here touches the catalog; `patch()` produces the fields to
    save and `discard()` throws the pending edits away.
    """

    def __init__(self, sizes: Optional[List[str]] = None, colors: Optional[List[str]] = None,
                 size_stocks: Optional[Dict[str, int]] = None,
                 color_size_stocks: Optional[ColorSizeStocks] = None,
                 color_size_availability: Optional[ColorSizeAvailability] = None):
        self._initial = (
            list(sizes or []),
            list(colors or []),
            dict(size_stocks or {}),
            copy.deepcopy(color_size_stocks or {}),
            copy.deepcopy(color_size_availability or {}),
        )
        self.discard()

    @classmethod
    def from_product(cls, product: Product) -> "VariantEditor":
        sizes, colors = product.sizes, product.colors
        size_stocks = {
            size: (product.size_stocks or {}).get(size, round_half_up(product.stock / len(sizes)))
            for size in sizes
        }
        if product.color_size_stocks:
            color_size_stocks = product.color_size_stocks
        else:
            per_variant = round_half_up(product.stock / (len(colors) * len(sizes))) if colors and sizes else 0
            color_size_stocks = {color: {size: per_variant for size in sizes} for color in colors}
        availability = {
            color: {size: is_variant_available(product, color, size) for size in sizes}
            for color in colors
        }
        return cls(sizes, colors, size_stocks, color_size_stocks, availability)

    def discard(self) -> None:
        sizes, colors, size_stocks, stocks, availability = self._initial
        self.sizes = list(sizes)
        self.colors = list(colors)
        self.size_stocks = dict(size_stocks)
        self.color_size_stocks = copy.deepcopy(stocks)
        self.color_size_availability = copy.deepcopy(availability)

    # sizes

    def add_size(self, size: str, stock: int = 0) -> None:
        if size in self.sizes:
            raise InvalidProduct(f"Size '{size}' is already declared")
        self.sizes.append(size)
        self.size_stocks[size] = stock
        for color in self.colors:
            self.color_size_stocks.setdefault(color, {})[size] = 0
            self.color_size_availability.setdefault(color, {})[size] = True

    def remove_size(self, size: str) -> None:
        if size not in self.sizes:
            return
        self.sizes.remove(size)
        self.size_stocks.pop(size, None)
        for by_size in self.color_size_stocks.values():
            by_size.pop(size, None)
        for by_size in self.color_size_availability.values():
            by_size.pop(size, None)

    def rename_size(self, old: str, new: str) -> None:
        if old not in self.sizes or old == new:
            return
        if new in self.sizes:
            raise InvalidProduct(f"Size '{new}' is already declared")
        self.sizes[self.sizes.index(old)] = new
        if old in self.size_stocks:
            self.size_stocks[new] = self.size_stocks.pop(old)
        for mapping in (self.color_size_stocks, self.color_size_availability):
            for by_size in mapping.values():
                if old in by_size:
                    by_size[new] = by_size.pop(old)

    def set_size_stock(self, size: str, stock: int) -> None:
        self._check(size=size, stock=stock)
        self.size_stocks[size] = stock

    # colors

    def add_color(self, color: str) -> None:
        if color in self.colors:
            raise InvalidProduct(f"Color '{color}' is already declared")
        self.colors.append(color)
        self.color_size_stocks[color] = {size: 0 for size in self.sizes}
        self.color_size_availability[color] = {size: True for size in self.sizes}

    def remove_color(self, color: str) -> None:
        if color not in self.colors:
            return
        self.colors.remove(color)
        self.color_size_stocks.pop(color, None)
        self.color_size_availability.pop(color, None)

    def rename_color(self, old: str, new: str) -> None:
        if old not in self.colors or old == new:
            return
        if new in self.colors:
            raise InvalidProduct(f"Color '{new}' is already declared")
        self.colors[self.colors.index(old)] = new
        for mapping in (self.color_size_stocks, self.color_size_availability):
            if old in mapping:
                mapping[new] = mapping.pop(old)

    # variants

    def set_stock(self, color: str, size: str, stock: int) -> None:
        self._check(color=color, size=size, stock=stock)
        self.color_size_stocks.setdefault(color, {})[size] = stock

    def set_available(self, color: str, size: str, available: bool) -> None:
        self._check(color=color, size=size)
        self.color_size_availability.setdefault(color, {})[size] = available

    @property
    def total_stock(self) -> int:
        if self.colors:
            return total_stock(self.color_size_stocks)
        return sum(self.size_stocks.get(size, 0) for size in self.sizes)

    def patch(self) -> ProductPatch:
        tracks_colors = bool(self.colors)
        return ProductPatch(
            sizes=list(self.sizes),
            colors=list(self.colors),
            stock=self.total_stock,
            size_stocks=None if tracks_colors else dict(self.size_stocks),
            color_size_stocks=copy.deepcopy(self.color_size_stocks) if tracks_colors else None,
            color_size_availability=copy.deepcopy(self.color_size_availability) if tracks_colors else None,
        )

    def _check(self, color: Optional[str] = None, size: Optional[str] = None,
               stock: Optional[int] = None) -> None:
        if size is not None and size not in self.sizes:
            raise InvalidProduct(f"Unknown size '{size}'")
        if color is not None and color not in self.colors:
            raise InvalidProduct(f"Unknown color '{color}'")
        if stock is not None and stock < 0:
            raise InvalidProduct("Stock cannot be negative")
