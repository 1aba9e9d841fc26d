"""
Sample catalog the storefront starts with when SEED_SAMPLE_DATA is on.
Shaped exactly like a Product record, the way an external loader would supply it.
"""

IMG = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w=800"


def _images(*photo_ids):
    return [IMG.format(pid, pid) for pid in photo_ids]


SAMPLE_PRODUCTS = [
    {
        "id": "1",
        "name": "LUMINA Classic Blouse",
        "description": "A refined classic blouse that looks elegant anywhere.",
        "price": 89000,
        "original_price": 120000,
        "category": "top",
        "sub_category": "blouse",
        "brand": "LUMINA",
        "collection": "basic",
        "images": _images(2065195, 1805411, 1021693),
        "sizes": ["XS", "S", "M", "L", "XL"],
        "colors": ["White", "Black", "Navy"],
        "stock": 50,
        "color_size_stocks": {
            "White": {"XS": 3, "S": 4, "M": 5, "L": 3, "XL": 2},
            "Black": {"XS": 3, "S": 4, "M": 5, "L": 4, "XL": 2},
            "Navy": {"XS": 2, "S": 4, "M": 5, "L": 3, "XL": 1},
        },
        "color_size_availability": {
            "Navy": {"XL": False},
        },
        "is_active": True,
        "is_new": True,
        "is_sale": True,
        "rating": 4.8,
        "review_count": 127,
        "tags": ["classic", "office", "date"],
        "created_at": "2024-01-15T00:00:00Z",
        "updated_at": "2024-01-15T00:00:00Z",
    },
    {
        "id": "2",
        "name": "LUMINA Slim Pants",
        "description": "Comfortable slim pants with a sharp silhouette.",
        "price": 129000,
        "category": "bottom",
        "sub_category": "pants",
        "brand": "LUMINA",
        "collection": "basic",
        "images": _images(1926769, 852860),
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Beige", "Black", "Gray"],
        "stock": 35,
        "color_size_stocks": {
            "Beige": {"S": 2, "M": 3, "L": 3, "XL": 2},
            "Black": {"S": 3, "M": 4, "L": 3, "XL": 2},
            "Gray": {"S": 3, "M": 5, "L": 4, "XL": 1},
        },
        "color_size_availability": {
            "Gray": {"XL": False},
        },
        "is_active": True,
        "is_best": True,
        "is_featured": True,
        "rating": 4.9,
        "review_count": 89,
        "tags": ["slim", "office", "casual"],
        "created_at": "2024-01-10T00:00:00Z",
        "updated_at": "2024-01-10T00:00:00Z",
    },
    {
        "id": "3",
        "name": "LUMINA Floral Dress",
        "description": "A romantic floral mini dress for spring days.",
        "price": 159000,
        "original_price": 199000,
        "category": "dress",
        "sub_category": "mini dress",
        "brand": "LUMINA",
        "collection": "special",
        "images": _images(2584269, 1926769, 2703907),
        "sizes": ["XS", "S", "M", "L"],
        "colors": ["Blue", "Pink"],
        "stock": 25,
        "color_size_stocks": {
            "Blue": {"XS": 2, "S": 4, "M": 3, "L": 2},
            "Pink": {"XS": 3, "S": 4, "M": 4, "L": 3},
        },
        "is_active": True,
        "is_new": True,
        "is_sale": True,
        "is_limited": True,
        "is_hot": True,
        "rating": 4.7,
        "review_count": 156,
        "tags": ["floral", "date", "party"],
        "created_at": "2024-01-20T00:00:00Z",
        "updated_at": "2024-01-20T00:00:00Z",
    },
    {
        "id": "4",
        "name": "LUMINA Knit Cardigan",
        "description": "Soft knit cardigan, warm and stylish.",
        "price": 99000,
        "category": "top",
        "sub_category": "knit",
        "brand": "LUMINA",
        "collection": "basic",
        "images": _images(2703907, 6811705),
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Ivory", "Gray", "Beige"],
        "stock": 40,
        "color_size_stocks": {
            "Ivory": {"S": 3, "M": 4, "L": 4, "XL": 3},
            "Gray": {"S": 3, "M": 4, "L": 4, "XL": 2},
            "Beige": {"S": 2, "M": 4, "L": 4, "XL": 3},
        },
        "is_active": True,
        "is_best": True,
        "is_featured": True,
        "rating": 4.6,
        "review_count": 203,
        "tags": ["knit", "casual", "layered"],
        "created_at": "2024-01-05T00:00:00Z",
        "updated_at": "2024-01-05T00:00:00Z",
    },
    {
        "id": "5",
        "name": "LUMINA Denim Skirt",
        "description": "Classic denim skirt for a casual but polished look.",
        "price": 79000,
        "original_price": 99000,
        "category": "bottom",
        "sub_category": "skirt",
        "brand": "LUMINA",
        "collection": "basic",
        "images": _images(1021694, 1805411),
        "sizes": ["XS", "S", "M", "L"],
        "colors": ["Light Blue", "Dark Blue"],
        "stock": 30,
        "color_size_stocks": {
            "Light Blue": {"XS": 3, "S": 4, "M": 5, "L": 3},
            "Dark Blue": {"XS": 3, "S": 4, "M": 5, "L": 3},
        },
        "is_active": False,
        "is_sale": True,
        "rating": 4.5,
        "review_count": 78,
        "tags": ["denim", "casual", "basic"],
        "created_at": "2024-01-12T00:00:00Z",
        "updated_at": "2024-01-12T00:00:00Z",
    },
    {
        "id": "6",
        "name": "LUMINA Basic T-Shirt",
        "description": "Comfortable and practical everyday t-shirt.",
        "price": 29000,
        "category": "top",
        "sub_category": "t-shirt",
        "brand": "LUMINA Basic",
        "collection": "basic",
        "images": _images(1926769, 852860),
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["White", "Black", "Gray"],
        "stock": 100,
        "size_stocks": {"S": 20, "M": 30, "L": 30, "XL": 20},
        "is_active": True,
        "is_best": True,
        "is_featured": True,
        "rating": 4.7,
        "review_count": 234,
        "tags": ["basic", "casual", "daily"],
        "created_at": "2024-01-08T00:00:00Z",
        "updated_at": "2024-01-08T00:00:00Z",
    },
    {
        "id": "7",
        "name": "LUMINA Wide Pants",
        "description": "Relaxed wide pants with an easy fit.",
        "price": 79000,
        "original_price": 99000,
        "category": "bottom",
        "sub_category": "pants",
        "brand": "LUMINA",
        "collection": "basic",
        "images": _images(2584269, 1926769),
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Beige", "Black", "Navy"],
        "stock": 45,
        "color_size_stocks": {
            "Beige": {"S": 3, "M": 5, "L": 4, "XL": 3},
            "Black": {"S": 4, "M": 5, "L": 4, "XL": 2},
            "Navy": {"S": 3, "M": 5, "L": 4, "XL": 3},
        },
        "is_active": True,
        "is_sale": True,
        "rating": 4.6,
        "review_count": 156,
        "tags": ["wide", "casual", "office"],
        "created_at": "2024-01-18T00:00:00Z",
        "updated_at": "2024-01-18T00:00:00Z",
    },
    {
        "id": "8",
        "name": "LUMINA Midi Dress",
        "description": "An elegant, refined midi dress.",
        "price": 139000,
        "category": "dress",
        "sub_category": "midi dress",
        "brand": "LUMINA",
        "collection": "special",
        "images": _images(2703907, 6811705),
        "sizes": ["XS", "S", "M", "L"],
        "colors": ["Black", "Navy", "Brown"],
        "stock": 30,
        "color_size_stocks": {
            "Black": {"XS": 2, "S": 3, "M": 4, "L": 2},
            "Navy": {"XS": 2, "S": 3, "M": 3, "L": 2},
            "Brown": {"XS": 2, "S": 2, "M": 3, "L": 2},
        },
        "is_active": True,
        "is_new": True,
        "is_featured": True,
        "is_hot": True,
        "rating": 4.8,
        "review_count": 89,
        "tags": ["midi", "date", "party"],
        "created_at": "2024-01-22T00:00:00Z",
        "updated_at": "2024-01-22T00:00:00Z",
    },
    {
        "id": "9",
        "name": "LUMINA Trench Coat",
        "description": "A classic trench coat that finishes any outfit.",
        "price": 199000,
        "original_price": 249000,
        "category": "outer",
        "sub_category": "coat",
        "brand": "LUMINA",
        "collection": "outer",
        "images": _images(1021693, 1805411),
        "sizes": ["S", "M", "L"],
        "colors": ["Beige", "Black", "Khaki"],
        "stock": 25,
        "color_size_stocks": {
            "Beige": {"S": 3, "M": 4, "L": 3},
            "Black": {"S": 3, "M": 3, "L": 2},
            "Khaki": {"S": 2, "M": 3, "L": 2},
        },
        "is_active": True,
        "is_sale": True,
        "is_best": True,
        "is_featured": True,
        "rating": 4.9,
        "review_count": 167,
        "tags": ["trench", "classic", "office"],
        "created_at": "2024-01-03T00:00:00Z",
        "updated_at": "2024-01-03T00:00:00Z",
    },
    {
        "id": "10",
        "name": "LUMINA Denim Jacket",
        "description": "A casual yet polished denim jacket.",
        "price": 89000,
        "category": "outer",
        "sub_category": "jacket",
        "brand": "LUMINA",
        "collection": "outer",
        "images": _images(1021694, 852860),
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Light Blue", "Dark Blue", "Black"],
        "stock": 40,
        "color_size_stocks": {
            "Light Blue": {"S": 3, "M": 4, "L": 4, "XL": 3},
            "Dark Blue": {"S": 3, "M": 4, "L": 4, "XL": 3},
            "Black": {"S": 2, "M": 4, "L": 4, "XL": 2},
        },
        "is_active": True,
        "is_hot": True,
        "rating": 4.5,
        "review_count": 123,
        "tags": ["denim", "casual", "basic"],
        "created_at": "2024-01-14T00:00:00Z",
        "updated_at": "2024-01-14T00:00:00Z",
    },
]
