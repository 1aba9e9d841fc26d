"""
Exceptions raised by the store layer. All of them are local to the caller:
a raised command never leaves partial state behind.
"""


class StoreError(Exception):
    """Base class for every error reported by the stores."""


class ProductNotFound(StoreError):
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class DuplicateProduct(StoreError):
    def __init__(self, name: str):
        super().__init__(f"A product named '{name}' already exists")
        self.name = name


class InvalidProduct(StoreError, ValueError):
    """Product data rejected on save."""


class PricingError(InvalidProduct):
    """Sale / original price rule violated on save."""


class MalformedSnapshot(StoreError):
    """Persisted or synced state that does not match the expected shape."""


class InvalidCriteria(StoreError, ValueError):
    """Filter parameters that cannot be parsed."""
