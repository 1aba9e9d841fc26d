import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import ADMIN_PRICE_RANGE, LOG_LEVEL, PORT, SEED_SAMPLE_DATA
from errors import DuplicateProduct, InvalidCriteria, InvalidProduct, ProductNotFound, StoreError
from filters import criteria_from_params
from sample_data import SAMPLE_PRODUCTS
from schemas import AdminSortField, ProductDraft, ProductPatch, SortOrder
from storefront import Storefront

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("storefront.api")

# App setup
app = FastAPI(title="Storefront API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = Storefront(SAMPLE_PRODUCTS if SEED_SAMPLE_DATA else None)


def get_store() -> Storefront:
    return store


# Error mapping
@app.exception_handler(ProductNotFound)
async def product_not_found_handler(request: Request, exc: ProductNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DuplicateProduct)
async def duplicate_product_handler(request: Request, exc: DuplicateProduct):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(InvalidProduct)
@app.exception_handler(InvalidCriteria)
async def bad_request_handler(request: Request, exc: StoreError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Schemas (request/response)
class CartLineIn(BaseModel):
    product_id: str
    size: str = ""
    color: str = ""


class CartQuantityIn(CartLineIn):
    quantity: int


class WishlistIn(BaseModel):
    product_id: str


# Health and helpers
@app.get("/")
def root():
    return {"message": "Storefront API running"}


@app.get("/test")
def test_store(sf: Storefront = Depends(get_store)):
    return {
        "backend": "✅ Running",
        "storage": sf.storage.path or "memory",
        "products": len(sf.catalog),
        "snapshots": sf.storage.keys(),
    }


# Products
@app.get("/products")
def list_products(request: Request, page: int = 1, page_size: Optional[int] = Query(None, ge=1),
                  sf: Storefront = Depends(get_store)):
    result = sf.browse(criteria_from_params(request.query_params), page, page_size)
    return {
        "items": sf.listing(result),
        "page": result.page,
        "page_size": result.page_size,
        "total": result.total,
        "total_pages": result.total_pages,
    }


@app.get("/products/{product_id}")
def get_product(product_id: str, sf: Storefront = Depends(get_store)):
    product = sf.get_product(product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


@app.get("/products/{product_id}/variants")
def get_variant(product_id: str, color: str = "", size: str = "", sf: Storefront = Depends(get_store)):
    return sf.variant(product_id, color, size)


@app.post("/products", status_code=201)
def create_product(payload: ProductDraft, sf: Storefront = Depends(get_store)):
    return sf.add_product(payload)


@app.put("/products/{product_id}")
def update_product(product_id: str, payload: ProductPatch, sf: Storefront = Depends(get_store)):
    return sf.update_product(product_id, payload)


@app.delete("/products/{product_id}")
def delete_product(product_id: str, sf: Storefront = Depends(get_store)):
    sf.delete_product(product_id)
    return {"id": product_id, "deleted": True}


@app.get("/categories")
def list_categories(sf: Storefront = Depends(get_store)):
    return {"categories": sf.category_names()}


@app.get("/categories/{category}/sub-categories")
def list_sub_categories(category: str, sf: Storefront = Depends(get_store)):
    return {"category": category, "sub_categories": sf.sub_categories(category)}


# Admin
@app.get("/admin/products")
def admin_products(request: Request, page: int = 1, page_size: Optional[int] = Query(None, ge=1),
                   sort_field: AdminSortField = "created_at", sort_order: SortOrder = "desc",
                   sf: Storefront = Depends(get_store)):
    criteria = criteria_from_params(request.query_params, ADMIN_PRICE_RANGE)
    return sf.browse_admin(criteria, page, page_size, sort_field, sort_order)


@app.get("/admin/stats")
def admin_stats(sf: Storefront = Depends(get_store)):
    return sf.stats()


@app.post("/admin/seed")
def seed_products(sf: Storefront = Depends(get_store)):
    if len(sf.catalog) > 0:
        return {"seeded": False, "message": "Products already exist"}
    count = sf.catalog.load(SAMPLE_PRODUCTS)
    return {"seeded": True, "count": count}


# Cart
@app.get("/cart")
def get_cart(sf: Storefront = Depends(get_store)):
    return sf.cart_view()


@app.post("/cart/add")
def cart_add(item: CartLineIn, sf: Storefront = Depends(get_store)):
    sf.add_to_cart(item.product_id, item.size, item.color)
    return sf.cart_view()


@app.post("/cart/update")
def cart_update(item: CartQuantityIn, sf: Storefront = Depends(get_store)):
    sf.update_cart_quantity(item.product_id, item.size, item.color, item.quantity)
    return sf.cart_view()


@app.post("/cart/remove")
def cart_remove(item: CartLineIn, sf: Storefront = Depends(get_store)):
    sf.remove_from_cart(item.product_id, item.size, item.color)
    return sf.cart_view()


@app.delete("/cart")
def cart_clear(sf: Storefront = Depends(get_store)):
    sf.clear_cart()
    return sf.cart_view()


# Wishlist
@app.get("/wishlist")
def get_wishlist(sf: Storefront = Depends(get_store)):
    return sf.wishlist_view()


@app.post("/wishlist/add")
def wishlist_add(item: WishlistIn, sf: Storefront = Depends(get_store)):
    return sf.add_to_wishlist(item.product_id)


@app.post("/wishlist/toggle")
def wishlist_toggle(item: WishlistIn, sf: Storefront = Depends(get_store)):
    return {"product_id": item.product_id, "wishlisted": sf.toggle_wishlist(item.product_id)}


@app.get("/wishlist/products/{product_id}")
def wishlist_member(product_id: str, sf: Storefront = Depends(get_store)):
    return {"product_id": product_id, "wishlisted": sf.in_wishlist(product_id)}


@app.delete("/wishlist/products/{product_id}")
def wishlist_remove_product(product_id: str, sf: Storefront = Depends(get_store)):
    return {"product_id": product_id, "removed": sf.remove_from_wishlist_by_product(product_id)}


@app.delete("/wishlist/{entry_id}")
def wishlist_remove(entry_id: str, sf: Storefront = Depends(get_store)):
    return {"id": entry_id, "removed": sf.remove_from_wishlist(entry_id)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
