"""
Product filtering, sorting and pagination.

Everything here is a pure function of (products, criteria, page): no
store is read or written, so views can be recomputed on every request.
Stages run in a fixed order and each one can only narrow the working set.
"""

import math
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from config import DEFAULT_PRICE_RANGE, PAGE_SIZE
from errors import InvalidCriteria
from pricing import is_on_sale
from schemas import AdminSortField, FilterCriteria, Product, ProductPage, SortKey, SortOrder

# Localized category labels -> internal category codes.
CATEGORY_LABELS: Dict[str, str] = {
    "상의": "top",
    "하의": "bottom",
    "아우터": "outer",
    "드레스": "dress",
    "원피스": "dress",
    "신발": "shoes",
    "가방": "bag",
    "액세서리": "accessory",
    "언더웨어": "underwear",
    "Tops": "top",
    "Bottoms": "bottom",
    "Outerwear": "outer",
    "Dresses": "dress",
    "Shoes": "shoes",
    "Bags": "bag",
    "Accessories": "accessory",
    "Underwear": "underwear",
}

SORT_KEYS: Dict[str, Callable[[Product], object]] = {
    "price-low": lambda p: p.price,
    "price-high": lambda p: -p.price,
    "newest": lambda p: not p.is_new,
    "rating": lambda p: -p.rating,
    "review": lambda p: -p.review_count,
    "popular": lambda p: not p.is_best,
}

ADMIN_SORT_KEYS: Dict[str, Callable[[Product], object]] = {
    "name": lambda p: p.name,
    "price": lambda p: p.price,
    "rating": lambda p: p.rating,
    "created_at": lambda p: p.created_at,
}


def normalize_category(label: str) -> str:
    """Unknown labels are taken to be internal codes already."""
    return CATEGORY_LABELS.get(label, label)


def _matches_search(product: Product, term: str) -> bool:
    fields = [product.name, product.description, product.category, product.brand or "", *product.tags]
    return any(term in field.lower() for field in fields)


def filter_products(products: Iterable[Product], criteria: FilterCriteria,
                    include_inactive: bool = False) -> List[Product]:
    result = list(products)

    if not include_inactive:
        result = [p for p in result if p.is_active]

    term = criteria.search.strip().lower()
    if term:
        result = [p for p in result if _matches_search(p, term)]

    if criteria.categories:
        codes = {normalize_category(c) for c in criteria.categories}
        result = [p for p in result if p.category in codes]

    if criteria.sub_category:
        result = [p for p in result if p.sub_category == criteria.sub_category]

    if criteria.collection:
        result = [p for p in result if p.collection == criteria.collection]

    if criteria.brands:
        result = [p for p in result if p.brand in criteria.brands]

    if criteria.price_range is not None:
        low, high = criteria.price_range
        result = [p for p in result if low <= p.price <= high]

    if criteria.sizes:
        result = [p for p in result if any(s in p.sizes for s in criteria.sizes)]

    if criteria.colors:
        result = [p for p in result if any(c in p.colors for c in criteria.colors)]

    if criteria.ratings:
        result = [p for p in result if any(p.rating >= r for r in criteria.ratings)]

    if criteria.in_stock:
        result = [p for p in result if p.in_stock is not False]
    if criteria.on_sale:
        result = [p for p in result if is_on_sale(p)]
    if criteria.is_new:
        result = [p for p in result if p.is_new]
    if criteria.is_best:
        result = [p for p in result if p.is_best]

    return result


def sort_products(products: Iterable[Product], sort_by: SortKey = "popular") -> List[Product]:
    return sorted(products, key=SORT_KEYS.get(sort_by, SORT_KEYS["popular"]))


def sort_admin(products: Iterable[Product], field: AdminSortField = "created_at",
               order: SortOrder = "desc") -> List[Product]:
    return sorted(products, key=ADMIN_SORT_KEYS[field], reverse=order == "desc")


def paginate(items: List[Product], page: int = 1, page_size: int = PAGE_SIZE) -> ProductPage:
    """Slice one 1-based page. Out-of-range pages come back empty."""
    page_size = max(1, page_size)
    total = len(items)
    total_pages = math.ceil(total / page_size)
    if 1 <= page <= total_pages:
        start = (page - 1) * page_size
        page_items = items[start:start + page_size]
    else:
        page_items = []
    return ProductPage(items=page_items, page=page, page_size=page_size, total=total, total_pages=total_pages)


def query_products(products: Iterable[Product], criteria: FilterCriteria, page: int = 1,
                   page_size: int = PAGE_SIZE, include_inactive: bool = False) -> ProductPage:
    matched = filter_products(products, criteria, include_inactive=include_inactive)
    return paginate(sort_products(matched, criteria.sort_by), page, page_size)


def query_admin(products: Iterable[Product], criteria: FilterCriteria, page: int = 1,
                page_size: int = PAGE_SIZE, sort_field: AdminSortField = "created_at",
                sort_order: SortOrder = "desc") -> ProductPage:
    matched = filter_products(products, criteria, include_inactive=True)
    return paginate(sort_admin(matched, sort_field, sort_order), page, page_size)


# --------------- Query string <-> criteria --------------------------------

def _split(value: Optional[str]) -> List[str]:
    return [v for v in (value or "").split(",") if v]


def criteria_from_params(params: Mapping[str, str],
                         default_range: Tuple[int, int] = DEFAULT_PRICE_RANGE) -> FilterCriteria:
    """Build criteria from listing URL parameters (categories=top,dress&priceMax=100000...).

    A missing bound of a half-open price filter is taken from `default_range`.
    """
    fields = {
        "search": params.get("q", ""),
        "categories": _split(params.get("categories")),
        "brands": _split(params.get("brands")),
        "sizes": _split(params.get("sizes")),
        "colors": _split(params.get("colors")),
        "ratings": _split(params.get("ratings")),
        "sort_by": params.get("sortBy") or "popular",
        "in_stock": params.get("inStock") == "true",
        "on_sale": params.get("onSale") == "true",
        "is_new": params.get("isNew") == "true",
        "is_best": params.get("isBest") == "true",
        "sub_category": params.get("subCategory") or None,
        "collection": params.get("collection") or None,
    }
    if params.get("priceMin") or params.get("priceMax"):
        fields["price_range"] = (
            params.get("priceMin") or default_range[0],
            params.get("priceMax") or default_range[1],
        )
    try:
        return FilterCriteria.model_validate(fields)
    except ValidationError as e:
        raise InvalidCriteria(str(e)) from e


def criteria_to_params(criteria: FilterCriteria) -> Dict[str, str]:
    """Inverse of criteria_from_params; default values are left out."""
    params: Dict[str, str] = {}
    if criteria.search.strip():
        params["q"] = criteria.search
    for key in ("categories", "brands", "sizes", "colors"):
        values = getattr(criteria, key)
        if values:
            params[key] = ",".join(values)
    if criteria.ratings:
        params["ratings"] = ",".join(f"{r:g}" for r in criteria.ratings)
    if criteria.price_range is not None:
        low, high = criteria.price_range
        if low != DEFAULT_PRICE_RANGE[0]:
            params["priceMin"] = str(low)
        if high != DEFAULT_PRICE_RANGE[1]:
            params["priceMax"] = str(high)
    if criteria.sort_by != "popular":
        params["sortBy"] = criteria.sort_by
    for flag, key in (("in_stock", "inStock"), ("on_sale", "onSale"), ("is_new", "isNew"), ("is_best", "isBest")):
        if getattr(criteria, flag):
            params[key] = "true"
    if criteria.sub_category:
        params["subCategory"] = criteria.sub_category
    if criteria.collection:
        params["collection"] = criteria.collection
    return params


# --------------- Listing state --------------------------------------------

class ProductListing:
    """Criteria plus current page for one product grid.

    Any change to the criteria sends the grid back to page 1.
    """

    def __init__(self, criteria: Optional[FilterCriteria] = None, page_size: int = PAGE_SIZE,
                 include_inactive: bool = False):
        self.criteria = criteria or FilterCriteria()
        self.page_size = page_size
        self.include_inactive = include_inactive
        self.page = 1

    def update(self, **changes) -> FilterCriteria:
        try:
            self.criteria = FilterCriteria.model_validate({**self.criteria.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidCriteria(str(e)) from e
        self.page = 1
        return self.criteria

    def reset(self) -> None:
        self.criteria = FilterCriteria()
        self.page = 1

    def set_page(self, page: int) -> None:
        self.page = page

    def view(self, products: Iterable[Product]) -> ProductPage:
        return query_products(products, self.criteria, self.page, self.page_size, self.include_inactive)
