"""
Store Schemas

Pydantic models for every entity the storefront keeps in memory:
- Product / ProductDraft / ProductPatch -> catalog store
- CartItem / CartSnapshot -> cart store
- WishlistItem / WishlistSnapshot -> wishlist store
- FilterCriteria / ProductPage -> listing views

Prices are integer currency units (no fractional subunits).
Stock maps are keyed by color then size.
"""
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


SortKey = Literal["popular", "price-low", "price-high", "newest", "rating", "review"]
AdminSortField = Literal["name", "price", "rating", "created_at"]
SortOrder = Literal["asc", "desc"]

StockMap = Dict[str, int]
ColorSizeStocks = Dict[str, Dict[str, int]]
ColorSizeAvailability = Dict[str, Dict[str, bool]]


def _unique(labels: List[str]) -> List[str]:
    seen = []
    for label in labels:
        if label not in seen:
            seen.append(label)
    return seen


# ---------- Catalog ----------

class ProductDraft(BaseModel):
    name: str
    description: str = ""
    price: int = Field(..., ge=0, description="List price")
    sale_price: Optional[int] = Field(None, ge=0, description="Selling price when discounted")
    original_price: Optional[int] = Field(None, ge=0, description="Legacy pre-discount reference price")
    category: str = Field(..., description="Internal category code, e.g. top | bottom | dress | outer")
    sub_category: Optional[str] = None
    brand: Optional[str] = None
    collection: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    stock: int = Field(0, ge=0)
    size_stocks: Optional[StockMap] = None
    color_size_stocks: Optional[ColorSizeStocks] = None
    color_size_availability: Optional[ColorSizeAvailability] = None
    in_stock: Optional[bool] = Field(None, description="Explicit out-of-stock marker when False")
    is_active: bool = True
    is_new: bool = False
    is_sale: bool = False
    is_best: bool = False
    is_featured: bool = False
    is_limited: bool = False
    is_hot: bool = False
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    tags: List[str] = Field(default_factory=list)

    @field_validator("sizes", "colors", "tags")
    @classmethod
    def dedupe_labels(cls, v: List[str]) -> List[str]:
        return _unique(v)


class Product(ProductDraft):
    id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def image(self) -> Optional[str]:
        return self.images[0] if self.images else None


class ProductPatch(BaseModel):
    """Partial update. Only the fields explicitly set are merged."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)
    sale_price: Optional[int] = Field(None, ge=0)
    original_price: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None
    sub_category: Optional[str] = None
    brand: Optional[str] = None
    collection: Optional[str] = None
    images: Optional[List[str]] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0)
    size_stocks: Optional[StockMap] = None
    color_size_stocks: Optional[ColorSizeStocks] = None
    color_size_availability: Optional[ColorSizeAvailability] = None
    in_stock: Optional[bool] = None
    is_active: Optional[bool] = None
    is_new: Optional[bool] = None
    is_sale: Optional[bool] = None
    is_best: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_limited: Optional[bool] = None
    is_hot: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CatalogStats(BaseModel):
    active_products: int
    featured_products: int
    total_stock: int
    inventory_value: int


class VariantStock(BaseModel):
    product_id: str
    color: str
    size: str
    stock: int = Field(..., description="Units on hand, ignoring availability")
    available: bool
    purchasable: int = Field(..., description="Zero when the variant is disabled")


# ---------- Listing ----------

class FilterCriteria(BaseModel):
    search: str = ""
    categories: List[str] = Field(default_factory=list)
    sub_category: Optional[str] = None
    collection: Optional[str] = None
    brands: List[str] = Field(default_factory=list)
    price_range: Optional[Tuple[int, int]] = None
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    ratings: List[float] = Field(default_factory=list)
    in_stock: bool = False
    on_sale: bool = False
    is_new: bool = False
    is_best: bool = False
    sort_by: SortKey = "popular"


class ProductPage(BaseModel):
    items: List[Product]
    page: int
    page_size: int
    total: int
    total_pages: int


class ListingItem(BaseModel):
    """Card view of a product as shown in storefront grids."""
    id: str
    name: str
    price: int
    original_price: Optional[int] = None
    discount: Optional[int] = None
    image: Optional[str] = None
    category: str
    rating: float
    review_count: int
    is_new: bool
    is_sale: bool
    is_best: bool
    badge: Optional[str] = None
    description: str = ""


# ---------- Cart ----------

class CartItem(BaseModel):
    product_id: str
    name: str
    price: int = Field(..., ge=0, description="Unit price captured when the line was added")
    original_price: Optional[int] = None
    image: Optional[str] = None
    size: str = ""
    color: str = ""
    quantity: int = Field(1, ge=1)
    stock: int = Field(0, ge=0)

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.product_id, self.size, self.color)


class CartSnapshot(BaseModel):
    items: List[CartItem] = Field(default_factory=list)
    total: int = 0
    item_count: int = 0


# ---------- Wishlist ----------

class WishlistItem(BaseModel):
    id: str
    product_id: str
    name: str
    price: int
    original_price: Optional[int] = None
    image: Optional[str] = None
    rating: float = 0
    review_count: int = 0
    is_new: bool = False
    is_sale: bool = False
    is_best: bool = False
    added_at: datetime = Field(default_factory=utcnow)


class WishlistSnapshot(BaseModel):
    items: List[WishlistItem] = Field(default_factory=list)


# ---------- Read views ----------

class CartLineView(BaseModel):
    item: CartItem
    subtotal: int
    product: Optional[ListingItem] = Field(None, description="Live product; None when it was deleted")


class CartView(BaseModel):
    items: List[CartLineView]
    total: int
    item_count: int


class WishlistEntryView(BaseModel):
    item: WishlistItem
    product: Optional[ListingItem] = None


class WishlistView(BaseModel):
    items: List[WishlistEntryView]
    count: int
