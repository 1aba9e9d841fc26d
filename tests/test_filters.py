import pytest

from errors import InvalidCriteria
from filters import (
    ProductListing, criteria_from_params, criteria_to_params, filter_products, normalize_category, paginate,
    query_admin, query_products, sort_products,
)
from schemas import FilterCriteria


def ids(products):
    return [p.id for p in products]


def test_top_under_100k_by_price(catalog):
    criteria = FilterCriteria(categories=["top"], price_range=(0, 100000), sort_by="price-low")
    page = query_products(catalog.list_products(include_inactive=True), criteria)
    assert ids(page.items) == ["6", "1", "4"]
    assert page.total == 3


def test_localized_category_labels(catalog):
    assert normalize_category("상의") == "top"
    assert normalize_category("Dresses") == "dress"
    assert normalize_category("shoes") == "shoes"
    result = filter_products(catalog.list_products(), FilterCriteria(categories=["원피스"]))
    assert sorted(ids(result)) == ["3", "8"]


def test_inactive_products_are_hidden(catalog):
    everything = catalog.list_products(include_inactive=True)
    assert "5" not in ids(filter_products(everything, FilterCriteria()))
    assert "5" in ids(filter_products(everything, FilterCriteria(), include_inactive=True))


@pytest.mark.parametrize("extra", [
    {"search": "denim"},
    {"categories": ["bottom"]},
    {"brands": ["LUMINA"]},
    {"price_range": (50000, 150000)},
    {"sizes": ["XS"]},
    {"colors": ["Black"]},
    {"ratings": [4.8]},
    {"in_stock": True},
    {"on_sale": True},
    {"is_new": True},
    {"is_best": True},
    {"collection": "basic"},
])
def test_extra_constraint_never_grows_result(catalog, extra):
    products = catalog.list_products()
    base = FilterCriteria(colors=["Beige", "Black"])
    narrowed = base.model_copy(update=extra)
    assert set(ids(filter_products(products, narrowed))) <= set(ids(filter_products(products, base)))


def test_search_matches_tags_and_brand(catalog):
    products = catalog.list_products()
    assert sorted(ids(filter_products(products, FilterCriteria(search="PARTY")))) == ["3", "8"]
    assert ids(filter_products(products, FilterCriteria(search="lumina basic"))) == ["6"]


def test_on_sale_filter(catalog):
    result = filter_products(catalog.list_products(), FilterCriteria(on_sale=True))
    assert sorted(ids(result), key=int) == ["1", "3", "7", "9"]


def test_explicit_out_of_stock_is_filtered(catalog, make_product):
    gone = make_product(id="x", in_stock=False)
    result = filter_products([gone, *catalog.list_products()], FilterCriteria(in_stock=True))
    assert "x" not in ids(result)
    assert len(result) == 9


def test_sorting_is_stable(catalog):
    products = catalog.list_products()
    popular = sort_products(products, "popular")
    assert ids(popular)[:4] == ["2", "4", "6", "9"]
    by_price = sort_products(products, "price-high")
    assert by_price[0].id == "9"
    newest = sort_products(products, "newest")
    assert ids(newest)[:3] == ["1", "3", "8"]


@pytest.mark.parametrize("page", [0, -1, 2, 99])
def test_out_of_range_page_is_empty(catalog, page):
    result = paginate(catalog.list_products(), page=page, page_size=20)
    assert result.items == []
    assert result.total == 9
    assert result.total_pages == 1


def test_pagination_slices(catalog):
    products = catalog.list_products()
    second = paginate(products, page=2, page_size=4)
    assert ids(second.items) == ids(products[4:8])
    assert second.total_pages == 3


def test_admin_query_includes_inactive_and_sorts(catalog):
    page = query_admin(catalog.list_products(include_inactive=True), FilterCriteria(), page_size=12,
                       sort_field="price", sort_order="asc")
    assert page.total == 10
    assert page.items[0].id == "6"
    assert page.items[-1].id == "9"


def test_criteria_from_params():
    criteria = criteria_from_params({
        "q": "dress",
        "categories": "top,dress",
        "priceMax": "100000",
        "sortBy": "price-low",
        "onSale": "true",
        "ratings": "4.5",
    })
    assert criteria.search == "dress"
    assert criteria.categories == ["top", "dress"]
    assert criteria.price_range == (0, 100000)
    assert criteria.sort_by == "price-low"
    assert criteria.on_sale is True
    assert criteria.ratings == [4.5]
    assert criteria_to_params(criteria) == {
        "q": "dress",
        "categories": "top,dress",
        "ratings": "4.5",
        "priceMax": "100000",
        "sortBy": "price-low",
        "onSale": "true",
    }


def test_criteria_from_params_rejects_unknown_sort():
    with pytest.raises(InvalidCriteria):
        criteria_from_params({"sortBy": "cheapest"})


def test_listing_resets_page_on_criteria_change(catalog):
    listing = ProductListing(page_size=4)
    listing.set_page(2)
    assert len(listing.view(catalog.list_products()).items) == 4
    listing.update(categories=["dress"])
    assert listing.page == 1
    assert sorted(ids(listing.view(catalog.list_products()).items)) == ["3", "8"]
    listing.reset()
    assert listing.criteria == FilterCriteria()


def test_half_open_price_filter_uses_default_range():
    assert criteria_from_params({"priceMin": "1000"}, (0, 500000)).price_range == (1000, 500000)
    assert criteria_from_params({}).price_range is None


@pytest.mark.parametrize("price_range", [(0, 2000000), (5000, 1000000), (0, 0)])
def test_price_range_survives_query_string(price_range):
    criteria = FilterCriteria(price_range=price_range)
    assert criteria_from_params(criteria_to_params(criteria)).price_range == price_range
