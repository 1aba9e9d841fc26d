"""
Storefront: the query/command surface the pages and the admin UI call.

The catalog is shared; carts and wishlists belong to a session. Sessions of
the same client persist into one snapshot storage and hear about each
other's changes through the sync channel.
"""

import logging
import threading
import uuid
from functools import partial, wraps
from typing import Iterable, List, Optional, Union

from cart import CartStore
from catalog import CatalogStore
from config import ADMIN_PAGE_SIZE, CART_STORE_KEY, PAGE_SIZE, WISHLIST_STORE_KEY
from database import SnapshotStorage, db, load_snapshot, save_snapshot
from filters import query_admin, query_products
from inventory import VariantEditor, variant_info
from pricing import to_listing_item
from schemas import (
    AdminSortField, CartItem, CartLineView, CartView, CatalogStats, FilterCriteria, ListingItem,
    Product, ProductDraft, ProductPage, ProductPatch, SortOrder, VariantStock, WishlistEntryView,
    WishlistItem, WishlistView,
)
from sync import SyncChannel, SyncedStore
from wishlist import WishlistStore

logger = logging.getLogger(__name__)


def serialized(method):
    """Run a facade command under the storefront lock."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class Session:
    """One open client session (a browser tab) with its own cart and wishlist."""

    def __init__(self, storage: SnapshotStorage, channel: SyncChannel, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.storage = storage
        self.channel = channel
        self.cart = CartStore()
        self.wishlist = WishlistStore()
        self._unsubscribe = []
        for key, store in ((CART_STORE_KEY, self.cart), (WISHLIST_STORE_KEY, self.wishlist)):
            self._attach(key, store)

    def _attach(self, key: str, store: SyncedStore) -> None:
        raw = load_snapshot(key, self.storage)
        if raw is not None:
            store.restore(raw)
        store.on_change(partial(self._persist, key))
        self._unsubscribe.append(self.channel.subscribe(key, self.id, store.restore))

    def _persist(self, key: str, snapshot) -> None:
        raw = save_snapshot(key, snapshot, self.storage)
        self.channel.publish(key, self.id, raw)

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []


class Storefront:
    def __init__(self, products: Optional[Iterable[Union[Product, dict]]] = None,
                 storage: Optional[SnapshotStorage] = None, channel: Optional[SyncChannel] = None,
                 page_size: int = PAGE_SIZE, admin_page_size: int = ADMIN_PAGE_SIZE):
        self.catalog = CatalogStore(products)
        self.storage = storage or db
        self.channel = channel or SyncChannel()
        self.page_size = page_size
        self.admin_page_size = admin_page_size
        # routes run in a threadpool; commands are applied one at a time
        self._lock = threading.RLock()
        self.session = self.open_session()

    def open_session(self, session_id: Optional[str] = None) -> Session:
        session = Session(self.storage, self.channel, session_id)
        logger.info("Opened session %s", session.id)
        return session

    @property
    def cart(self) -> CartStore:
        return self.session.cart

    @property
    def wishlist(self) -> WishlistStore:
        return self.session.wishlist

    # --------------- Catalog queries -------------------------------------

    def list_products(self, include_inactive: bool = False) -> List[Product]:
        return self.catalog.list_products(include_inactive)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.catalog.get_product_by_id(product_id)

    def browse(self, criteria: Optional[FilterCriteria] = None, page: int = 1,
               page_size: Optional[int] = None) -> ProductPage:
        return query_products(self.catalog.list_products(include_inactive=True), criteria or FilterCriteria(),
                              page, page_size or self.page_size)

    def browse_admin(self, criteria: Optional[FilterCriteria] = None, page: int = 1,
                     page_size: Optional[int] = None, sort_field: AdminSortField = "created_at",
                     sort_order: SortOrder = "desc") -> ProductPage:
        return query_admin(self.catalog.list_products(include_inactive=True), criteria or FilterCriteria(),
                           page, page_size or self.admin_page_size, sort_field, sort_order)

    def variant(self, product_id: str, color: str, size: str) -> VariantStock:
        return variant_info(self.catalog.require(product_id), color, size)

    def stats(self) -> CatalogStats:
        return self.catalog.stats()

    def category_names(self) -> List[str]:
        return self.catalog.category_names()

    def sub_categories(self, category: str) -> List[str]:
        return self.catalog.sub_categories(category)

    # --------------- Catalog commands ------------------------------------

    @serialized
    def add_product(self, draft: ProductDraft) -> Product:
        return self.catalog.add_product(draft)

    @serialized
    def update_product(self, product_id: str, patch: ProductPatch) -> Product:
        return self.catalog.update_product(product_id, patch)

    @serialized
    def delete_product(self, product_id: str) -> Product:
        # cart and wishlist lines are left in place and read as orphans
        return self.catalog.delete_product(product_id)

    @serialized
    def save_product(self, form: ProductPatch, editor: VariantEditor,
                     product_id: Optional[str] = None) -> Product:
        return self.catalog.save_product(form, editor, product_id)

    def edit_variants(self, product_id: Optional[str] = None) -> VariantEditor:
        if product_id is None:
            return VariantEditor()
        return VariantEditor.from_product(self.catalog.require(product_id))

    # --------------- Cart ------------------------------------------------

    @serialized
    def add_to_cart(self, product_id: str, size: str = "", color: str = "") -> CartItem:
        return self.cart.add_item(self.catalog.require(product_id), size, color)

    @serialized
    def remove_from_cart(self, product_id: str, size: str = "", color: str = "") -> bool:
        return self.cart.remove_item(product_id, size, color)

    @serialized
    def update_cart_quantity(self, product_id: str, size: str, color: str, quantity: int) -> Optional[CartItem]:
        return self.cart.update_quantity(product_id, size, color, quantity)

    @serialized
    def clear_cart(self) -> None:
        self.cart.clear()

    @serialized
    def cart_view(self) -> CartView:
        lines = []
        for item in self.cart.items:
            product = self.catalog.get_product_by_id(item.product_id)
            lines.append(CartLineView(
                item=item,
                subtotal=item.price * item.quantity,
                product=to_listing_item(product) if product else None,
            ))
        return CartView(items=lines, total=self.cart.total, item_count=self.cart.item_count)

    # --------------- Wishlist --------------------------------------------

    @serialized
    def add_to_wishlist(self, product_id: str) -> WishlistItem:
        return self.wishlist.add(self.catalog.require(product_id))

    @serialized
    def remove_from_wishlist(self, entry_id: str) -> bool:
        return self.wishlist.remove(entry_id)

    @serialized
    def remove_from_wishlist_by_product(self, product_id: str) -> bool:
        return self.wishlist.remove_by_product_id(product_id)

    @serialized
    def toggle_wishlist(self, product_id: str) -> bool:
        """Flip membership. Removing works even when the product is gone."""
        if self.wishlist.is_member(product_id):
            self.wishlist.remove_by_product_id(product_id)
            return False
        self.wishlist.add(self.catalog.require(product_id))
        return True

    def in_wishlist(self, product_id: str) -> bool:
        return self.wishlist.is_member(product_id)

    @serialized
    def wishlist_view(self) -> WishlistView:
        entries = []
        for item in self.wishlist.items:
            product = self.catalog.get_product_by_id(item.product_id)
            entries.append(WishlistEntryView(item=item, product=to_listing_item(product) if product else None))
        return WishlistView(items=entries, count=self.wishlist.count)

    def listing(self, page: ProductPage) -> List[ListingItem]:
        return [to_listing_item(p) for p in page.items]
