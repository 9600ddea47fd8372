"""Application tests for catalogue browsing."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.catalogue.management import AddProduct
from storefront.catalogue.queries import list_products
from storefront.shared.pagination import PageRequest


def _add(title, price, category="Kitchen", description="Useful thing."):
    return current_domain.process(
        AddProduct(title=title, price=price, description=description, category=category),
        asynchronous=False,
    )


@pytest.fixture()
def catalogue():
    _add("Mug", 12.0)
    _add("Kettle", 40.0, description="Gooseneck kettle for coffee.")
    _add("Grinder", 80.0, category="Coffee", description="Burr grinder.")
    _add("Filters", 5.0, category="Coffee", description="Paper filters for pour-over.")


class TestListProducts:
    def test_default_page(self, catalogue):
        page = list_products(PageRequest())
        assert page.count == 4
        assert page.total_pages == 1

    def test_category_filter(self, catalogue):
        page = list_products(PageRequest(), category="Coffee")
        assert {p.title for p in page.items} == {"Grinder", "Filters"}

    def test_sort_by_price_ascending(self, catalogue):
        page = list_products(PageRequest(sort_by="price", sort_order="asc"))
        assert [p.price for p in page.items] == [5.0, 12.0, 40.0, 80.0]

    def test_equal_sort_values_page_without_overlap(self):
        ids = {_add(f"Spoon {n}", 3.0) for n in range(5)}

        seen = []
        for n in (1, 2, 3):
            page = list_products(PageRequest(page=n, limit=2, sort_by="price", sort_order="asc"))
            seen.extend(str(p.id) for p in page.items)

        assert len(seen) == 5
        assert set(seen) == ids

    def test_pagination(self, catalogue):
        page = list_products(PageRequest(page=2, limit=3, sort_by="price", sort_order="asc"))
        assert [p.title for p in page.items] == ["Grinder"]
        assert page.count == 4
        assert page.total_pages == 2

    def test_search_matches_title_and_description(self, catalogue):
        page = list_products(PageRequest(sort_by="title", sort_order="asc"), search="COFFEE")
        assert [p.title for p in page.items] == ["Kettle"]

        page = list_products(PageRequest(sort_by="title", sort_order="asc"), search="filter")
        assert [p.title for p in page.items] == ["Filters"]

    def test_search_combines_with_category(self, catalogue):
        page = list_products(PageRequest(), category="Kitchen", search="grinder")
        assert page.count == 0

    def test_unknown_sort_field_rejected(self, catalogue):
        with pytest.raises(ValidationError):
            list_products(PageRequest(sort_by="colour"))
