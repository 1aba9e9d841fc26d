def test_health(client):
    assert client.get("/").json() == {"message": "Storefront API running"}
    body = client.get("/test").json()
    assert body["products"] == 10
    assert body["storage"] == "memory"


def test_product_listing_query(client):
    res = client.get("/products", params={"categories": "top", "priceMax": "100000", "sortBy": "price-low"})
    assert res.status_code == 200
    body = res.json()
    assert [item["id"] for item in body["items"]] == ["6", "1", "4"]
    assert body["items"][1]["original_price"] == 120000
    assert body["items"][1]["discount"] == 26
    assert body["total"] == 3


def test_listing_pagination_bounds(client):
    body = client.get("/products", params={"page": 5, "page_size": 4}).json()
    assert body["items"] == []
    assert body["total"] == 9
    assert body["total_pages"] == 3


def test_bad_sort_key_is_400(client):
    assert client.get("/products", params={"sortBy": "cheapest"}).status_code == 400


def test_get_product_and_variant(client):
    assert client.get("/products/3").json()["name"] == "LUMINA Floral Dress"
    assert client.get("/products/nope").status_code == 404
    variant = client.get("/products/1/variants", params={"color": "Navy", "size": "XL"}).json()
    assert variant == {"product_id": "1", "color": "Navy", "size": "XL", "stock": 1, "available": False,
                       "purchasable": 0}


def test_create_update_delete_product(client):
    res = client.post("/products", json={"name": "Wool Coat", "price": 259000, "original_price": 299000,
                                         "category": "outer", "sizes": ["M"], "size_stocks": {"M": 4}})
    assert res.status_code == 201
    product = res.json()
    assert product["is_sale"] is True
    assert product["stock"] == 4

    res = client.put(f"/products/{product['id']}", json={"is_featured": True})
    assert res.json()["is_featured"] is True

    assert client.delete(f"/products/{product['id']}").json() == {"id": product["id"], "deleted": True}
    assert client.get(f"/products/{product['id']}").status_code == 404


def test_rejected_saves(client):
    bad_price = client.post("/products", json={"name": "Bad", "price": 50000, "sale_price": 60000,
                                               "category": "top"})
    assert bad_price.status_code == 400
    duplicate = client.post("/products", json={"name": "LUMINA Slim Pants", "price": 1, "category": "bottom"})
    assert duplicate.status_code == 409
    missing = client.put("/products/nope", json={"name": "x"})
    assert missing.status_code == 404
    assert client.get("/test").json()["products"] == 10


def test_admin_views(client):
    page = client.get("/admin/products", params={"sort_field": "price", "sort_order": "desc"}).json()
    assert page["total"] == 10
    assert page["page_size"] == 12
    assert page["items"][0]["id"] == "9"

    stats = client.get("/admin/stats").json()
    assert stats["active_products"] == 9
    assert stats["total_stock"] == 420

    assert client.post("/admin/seed").json()["seeded"] is False


def test_categories(client):
    assert client.get("/categories").json() == {"categories": ["top", "bottom", "dress", "outer"]}
    assert client.get("/categories/bottom/sub-categories").json()["sub_categories"] == ["pants", "skirt"]


def test_cart_flow(client):
    line = {"product_id": "6", "size": "M", "color": "Black"}
    client.post("/cart/add", json=line)
    cart = client.post("/cart/add", json=line).json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["item"]["quantity"] == 2
    assert cart["items"][0]["subtotal"] == 58000

    cart = client.post("/cart/update", json={**line, "quantity": 1}).json()
    assert cart["total"] == 29000

    cart = client.post("/cart/update", json={**line, "quantity": 0}).json()
    assert cart["items"] == []

    assert client.post("/cart/add", json={"product_id": "nope"}).status_code == 404

    client.post("/cart/add", json=line)
    assert client.delete("/cart").json()["item_count"] == 0


def test_wishlist_flow(client):
    assert client.post("/wishlist/toggle", json={"product_id": "3"}).json()["wishlisted"] is True
    assert client.get("/wishlist/products/3").json()["wishlisted"] is True

    entry = client.post("/wishlist/add", json={"product_id": "8"}).json()
    assert client.get("/wishlist").json()["count"] == 2

    assert client.delete(f"/wishlist/{entry['id']}").json()["removed"] is True
    assert client.delete("/wishlist/products/3").json()["removed"] is True
    assert client.get("/wishlist").json()["count"] == 0


def test_null_price_update_is_400(client):
    res = client.put("/products/1", json={"price": None})
    assert res.status_code == 400
    assert client.get("/products/1").json()["price"] == 89000
