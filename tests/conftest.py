import pytest
from fastapi.testclient import TestClient

from catalog import CatalogStore
from database import SnapshotStorage
from main import app, get_store
from sample_data import SAMPLE_PRODUCTS
from schemas import Product
from storefront import Storefront
from sync import SyncChannel


def _product(**overrides) -> Product:
    fields = {
        "id": "p1",
        "name": "Test Shirt",
        "price": 50000,
        "category": "top",
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Black", "White"],
        "stock": 0,
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def make_product():
    return _product


@pytest.fixture
def catalog():
    return CatalogStore(SAMPLE_PRODUCTS)


@pytest.fixture
def storage():
    return SnapshotStorage()


@pytest.fixture
def channel():
    return SyncChannel()


@pytest.fixture
def store(storage, channel):
    return Storefront(SAMPLE_PRODUCTS, storage=storage, channel=channel)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
