"""
Cart: order lines keyed by (product_id, size, color).

Adding the same variant again bumps the quantity of the existing line.
Totals are always derived from the lines, never stored on their own.
"""

import logging
from typing import List, Optional

from errors import MalformedSnapshot
from inventory import purchasable_stock
from pricing import display_pricing
from schemas import CartItem, CartSnapshot, Product
from sync import SyncedStore

logger = logging.getLogger(__name__)


def calculate_totals(items: List[CartItem]):
    total = sum(item.price * item.quantity for item in items)
    item_count = sum(item.quantity for item in items)
    return total, item_count


class CartStore(SyncedStore):
    snapshot_model = CartSnapshot

    def __init__(self, items: Optional[List[CartItem]] = None):
        super().__init__()
        self._items: List[CartItem] = list(items or [])

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def total(self) -> int:
        return calculate_totals(self._items)[0]

    @property
    def item_count(self) -> int:
        return calculate_totals(self._items)[1]

    def __len__(self) -> int:
        return len(self._items)

    def _index(self, product_id: str, size: str, color: str) -> int:
        for i, item in enumerate(self._items):
            if item.key == (product_id, size, color):
                return i
        return -1

    def get_line(self, product_id: str, size: str = "", color: str = "") -> Optional[CartItem]:
        i = self._index(product_id, size, color)
        return self._items[i] if i > -1 else None

    def add_item(self, product: Product, size: str = "", color: str = "") -> CartItem:
        """Add one unit. The unit price is frozen at this moment."""
        i = self._index(product.id, size, color)
        if i > -1:
            line = self._items[i]
            line = line.model_copy(update={"quantity": line.quantity + 1})
            self._items[i] = line
        else:
            price, original_price, _ = display_pricing(product)
            line = CartItem(
                product_id=product.id,
                name=product.name,
                price=price,
                original_price=original_price,
                image=product.image,
                size=size,
                color=color,
                quantity=1,
                stock=purchasable_stock(product, color, size),
            )
            self._items.append(line)
        logger.info("Cart add %s/%s/%s -> qty %d", product.id, size, color, line.quantity)
        self._changed()
        return line

    def remove_item(self, product_id: str, size: str = "", color: str = "") -> bool:
        i = self._index(product_id, size, color)
        if i == -1:
            return False
        del self._items[i]
        logger.info("Cart remove %s/%s/%s", product_id, size, color)
        self._changed()
        return True

    def update_quantity(self, product_id: str, size: str, color: str, quantity: int) -> Optional[CartItem]:
        """Set the quantity exactly. Zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id, size, color)
            return None
        i = self._index(product_id, size, color)
        if i == -1:
            return None
        line = self._items[i].model_copy(update={"quantity": quantity})
        self._items[i] = line
        self._changed()
        return line

    def clear(self) -> None:
        self._items = []
        logger.info("Cart cleared")
        self._changed()

    # snapshots

    def snapshot(self) -> CartSnapshot:
        total, item_count = calculate_totals(self._items)
        return CartSnapshot(items=list(self._items), total=total, item_count=item_count)

    def _apply(self, snapshot: CartSnapshot) -> None:
        keys = [item.key for item in snapshot.items]
        if len(keys) != len(set(keys)):
            raise MalformedSnapshot("Cart snapshot repeats a line")
        # totals in the payload are ignored; they are derived from the lines
        self._items = list(snapshot.items)
