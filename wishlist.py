"""
Wishlist: a set of favorited products keyed by product id.
"""

import logging
import uuid
from typing import Dict, List, Optional

from pricing import display_pricing, is_on_sale
from schemas import Product, WishlistItem, WishlistSnapshot, utcnow
from sync import SyncedStore

logger = logging.getLogger(__name__)


class WishlistStore(SyncedStore):
    snapshot_model = WishlistSnapshot

    def __init__(self, items: Optional[List[WishlistItem]] = None):
        super().__init__()
        self._items: Dict[str, WishlistItem] = {}
        for item in items or []:
            self._items.setdefault(item.product_id, item)

    @property
    def items(self) -> List[WishlistItem]:
        return list(self._items.values())

    @property
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_member(self, product_id: str) -> bool:
        return product_id in self._items

    def get(self, product_id: str) -> Optional[WishlistItem]:
        return self._items.get(product_id)

    def add(self, product: Product) -> WishlistItem:
        """Add a product. Re-adding returns the existing entry unchanged."""
        existing = self._items.get(product.id)
        if existing is not None:
            return existing
        price, original_price, _ = display_pricing(product)
        entry = WishlistItem(
            id=uuid.uuid4().hex,
            product_id=product.id,
            name=product.name,
            price=price,
            original_price=original_price,
            image=product.image,
            rating=product.rating,
            review_count=product.review_count,
            is_new=product.is_new,
            is_sale=is_on_sale(product),
            is_best=product.is_best,
            added_at=utcnow(),
        )
        self._items[product.id] = entry
        logger.info("Wishlist add %s", product.id)
        self._changed()
        return entry

    def remove(self, entry_id: str) -> bool:
        for product_id, item in self._items.items():
            if item.id == entry_id:
                return self.remove_by_product_id(product_id)
        return False

    def remove_by_product_id(self, product_id: str) -> bool:
        if self._items.pop(product_id, None) is None:
            return False
        logger.info("Wishlist remove %s", product_id)
        self._changed()
        return True

    def toggle(self, product: Product) -> bool:
        """Flip membership; returns True when the product is now wishlisted."""
        if self.is_member(product.id):
            self.remove_by_product_id(product.id)
            return False
        self.add(product)
        return True

    def clear(self) -> None:
        self._items = {}
        self._changed()

    # snapshots

    def snapshot(self) -> WishlistSnapshot:
        return WishlistSnapshot(items=self.items)

    def _apply(self, snapshot: WishlistSnapshot) -> None:
        items: Dict[str, WishlistItem] = {}
        for item in snapshot.items:
            items.setdefault(item.product_id, item)
        self._items = items
