import pytest

from catalog import CatalogStore
from errors import DuplicateProduct, InvalidProduct, PricingError, ProductNotFound
from inventory import VariantEditor, total_stock, variant_stock
from schemas import ProductDraft, ProductPatch


def test_load_reconciles_stock(catalog):
    assert len(catalog) == 10
    for product in catalog.list_products(include_inactive=True):
        if product.color_size_stocks:
            assert product.stock == total_stock(product.color_size_stocks)
    assert catalog.require("6").stock == 100


def test_list_products_hides_inactive(catalog):
    assert len(catalog.list_products()) == 9
    assert catalog.get_product_by_id("5") is not None
    assert catalog.get_product_by_id("nope") is None


def test_add_product_assigns_id_and_timestamps(catalog):
    product = catalog.add_product(ProductDraft(name="Linen Shirt", price=69000, category="top",
                                               sizes=["M", "M", "L"], size_stocks={"M": 3, "L": 4}))
    assert product.id in catalog
    assert product.sizes == ["M", "L"]
    assert product.stock == 7
    assert product.created_at == product.updated_at
    assert product.is_sale is False


def test_add_product_derives_sale_flag(catalog):
    product = catalog.add_product(ProductDraft(name="Silk Scarf", price=39000, sale_price=29000, category="accessory"))
    assert product.is_sale is True


def test_rejected_pricing_leaves_catalog_unchanged(catalog):
    before = catalog.list_products(include_inactive=True)
    with pytest.raises(PricingError):
        catalog.add_product(ProductDraft(name="Bad Deal", price=50000, sale_price=60000, category="top"))
    with pytest.raises(PricingError):
        catalog.update_product("6", ProductPatch(original_price=10000))
    assert catalog.list_products(include_inactive=True) == before


def test_zero_sale_price_is_treated_as_absent(catalog):
    product = catalog.update_product("6", ProductPatch(sale_price=0))
    assert product.sale_price is None


def test_duplicate_name_is_rejected(catalog):
    with pytest.raises(DuplicateProduct):
        catalog.add_product(ProductDraft(name="LUMINA Slim Pants", price=1000, category="bottom"))


def test_update_merges_and_keeps_created_at(catalog):
    original = catalog.require("6")
    updated = catalog.update_product("6", ProductPatch(sale_price=19000, is_featured=False))
    assert updated.sale_price == 19000
    assert updated.is_sale is True
    assert updated.is_featured is False
    assert updated.name == original.name
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at


def test_unknown_product_raises(catalog):
    with pytest.raises(ProductNotFound):
        catalog.update_product("missing", ProductPatch(name="x"))
    with pytest.raises(ProductNotFound):
        catalog.delete_product("missing")


def test_delete_product(catalog):
    removed = catalog.delete_product("10")
    assert removed.id == "10"
    assert "10" not in catalog
    assert len(catalog) == 9


def test_category_queries(catalog):
    assert catalog.category_names() == ["top", "bottom", "dress", "outer"]
    assert catalog.sub_categories("dress") == ["mini dress", "midi dress"]


def test_stats(catalog):
    stats = catalog.stats()
    assert stats.active_products == 9
    assert stats.featured_products == 4
    assert stats.total_stock == 420


def test_save_product_keeps_stock_sum_after_variant_edits(catalog):
    editor = VariantEditor.from_product(catalog.require("1"))
    editor.add_size("XXL")
    editor.set_stock("White", "XXL", 7)
    saved = catalog.save_product(ProductPatch(), editor, "1")
    assert saved.stock == total_stock(saved.color_size_stocks) == 57
    assert saved.color_size_stocks["Black"]["XXL"] == 0

    editor = VariantEditor.from_product(saved)
    editor.remove_color("Navy")
    saved = catalog.save_product(ProductPatch(), editor, "1")
    assert saved.colors == ["White", "Black"]
    assert saved.stock == total_stock(saved.color_size_stocks) == 42


def test_save_product_creates_from_form(catalog):
    editor = VariantEditor()
    editor.add_size("F", 12)
    saved = catalog.save_product(ProductPatch(name="Canvas Tote", price=45000, category="bag"), editor)
    assert saved.stock == 12
    assert saved.size_stocks == {"F": 12}


def test_failed_save_discards_pending_edits(catalog):
    editor = VariantEditor.from_product(catalog.require("6"))
    editor.add_size("XXL")
    with pytest.raises(PricingError):
        catalog.save_product(ProductPatch(sale_price=60000), editor, "6")
    assert "XXL" not in editor.sizes
    assert catalog.require("6").sizes == ["S", "M", "L", "XL"]


def test_incomplete_new_product_is_invalid(catalog):
    with pytest.raises(InvalidProduct):
        catalog.save_product(ProductPatch(name="No Price"), VariantEditor())


def test_empty_store():
    store = CatalogStore()
    assert len(store) == 0
    assert store.stats().inventory_value == 0


def test_null_price_in_patch_is_rejected(catalog):
    before = catalog.require("1")
    with pytest.raises(InvalidProduct):
        catalog.update_product("1", ProductPatch(price=None))
    assert catalog.require("1") == before


def test_size_added_by_patch_starts_empty(catalog):
    updated = catalog.update_product("6", ProductPatch(sizes=["S", "M", "L", "XL", "XXL"]))
    assert updated.size_stocks["XXL"] == 0
    assert variant_stock(updated, "Black", "XXL") == 0
    assert updated.stock == sum(updated.size_stocks.values()) == 100


def test_color_added_by_patch_gets_availability(catalog):
    product = catalog.require("1")
    updated = catalog.update_product("1", ProductPatch(colors=[*product.colors, "Red"],
                                                       color_size_availability=None))
    assert updated.color_size_availability["Red"] == {size: True for size in updated.sizes}
    assert updated.color_size_stocks["Red"] == {size: 0 for size in updated.sizes}
