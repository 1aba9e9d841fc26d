"""
Catalog store: the single source of truth for products.

Every command validates the complete new record first and only then
swaps it in, so a rejected command leaves the catalog untouched.
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from errors import DuplicateProduct, InvalidProduct, ProductNotFound, StoreError
from inventory import VariantEditor, reconcile
from pricing import effective_price, has_discount, normalize_pricing, validate_pricing
from schemas import CatalogStats, Product, ProductDraft, ProductPatch, utcnow

logger = logging.getLogger(__name__)

PRICING_FIELDS = {"price", "sale_price", "original_price"}


def _build(fields: dict) -> Product:
    try:
        return Product.model_validate(fields)
    except ValidationError as e:
        raise InvalidProduct(str(e)) from e


def _prepare(fields: dict) -> dict:
    """Apply the save-time rules: price checks and variant bookkeeping."""
    if fields.get("price") is None:
        raise InvalidProduct("Price is required")
    normalize_pricing(fields)
    validate_pricing(fields["price"], fields.get("sale_price"), fields.get("original_price"))
    return reconcile(fields)


class CatalogStore:
    def __init__(self, products: Optional[Iterable[Union[Product, dict]]] = None):
        self._products: Dict[str, Product] = {}
        if products:
            self.load(products)

    def load(self, products: Iterable[Union[Product, dict]]) -> int:
        """Replace the catalog with externally supplied records."""
        loaded: Dict[str, Product] = {}
        for raw in products:
            fields = raw.model_dump() if isinstance(raw, Product) else dict(raw)
            product = _build(reconcile(fields))
            loaded[product.id] = product
        self._products = loaded
        logger.info("Loaded %d products", len(loaded))
        return len(loaded)

    # --------------- Queries ---------------------------------------------

    def list_products(self, include_inactive: bool = False) -> List[Product]:
        if include_inactive:
            return list(self._products.values())
        return [p for p in self._products.values() if p.is_active]

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def require(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._products

    def category_names(self) -> List[str]:
        return list(dict.fromkeys(p.category for p in self._products.values()))

    def sub_categories(self, category: str) -> List[str]:
        return list(dict.fromkeys(
            p.sub_category for p in self._products.values()
            if p.category == category and p.sub_category
        ))

    def stats(self) -> CatalogStats:
        products = self._products.values()
        return CatalogStats(
            active_products=sum(1 for p in products if p.is_active),
            featured_products=sum(1 for p in products if p.is_featured),
            total_stock=sum(p.stock for p in products),
            inventory_value=sum(effective_price(p) * p.stock for p in products),
        )

    # --------------- Commands --------------------------------------------

    def add_product(self, draft: ProductDraft) -> Product:
        if any(p.name == draft.name for p in self._products.values()):
            logger.warning("Rejected duplicate product name: %s", draft.name)
            raise DuplicateProduct(draft.name)

        fields = _prepare(draft.model_dump())
        fields["is_sale"] = fields["is_sale"] or has_discount(fields)
        now = utcnow()
        fields.update(id=uuid.uuid4().hex, created_at=now, updated_at=now)
        product = _build(fields)

        self._products[product.id] = product
        logger.info("Added product %s (%s)", product.id, product.name)
        return product

    def update_product(self, product_id: str, patch: ProductPatch) -> Product:
        current = self._products.get(product_id)
        if current is None:
            logger.warning("Update of unknown product %s", product_id)
            raise ProductNotFound(product_id)

        changes = patch.changes()
        fields = _prepare({**current.model_dump(), **changes})
        if PRICING_FIELDS & changes.keys() and "is_sale" not in changes:
            fields["is_sale"] = has_discount(fields)
        fields.update(id=current.id, created_at=current.created_at, updated_at=utcnow())
        product = _build(fields)

        self._products[product_id] = product
        logger.info("Updated product %s: %s", product_id, sorted(changes))
        return product

    def delete_product(self, product_id: str) -> Product:
        product = self._products.pop(product_id, None)
        if product is None:
            logger.warning("Delete of unknown product %s", product_id)
            raise ProductNotFound(product_id)
        logger.info("Deleted product %s (%s)", product_id, product.name)
        return product

    def save_product(self, form: ProductPatch, editor: VariantEditor,
                     product_id: Optional[str] = None) -> Product:
        """Admin form save: form fields plus pending variant edits.

        A rejected save discards the editor's pending edits.
        """
        changes = {**form.changes(), **editor.patch().changes()}
        try:
            if product_id is None:
                try:
                    draft = ProductDraft(**changes)
                except ValidationError as e:
                    raise InvalidProduct(str(e)) from e
                return self.add_product(draft)
            return self.update_product(product_id, ProductPatch(**changes))
        except StoreError:
            editor.discard()
            raise
