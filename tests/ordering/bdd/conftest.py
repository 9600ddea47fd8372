"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalogue.management import AddProduct, RemoveProduct
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.order.order import Order


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def shopper_id():
    return "acc-shopper"


@pytest.fixture()
def stranger_id():
    return "acc-stranger"


@pytest.fixture()
def admin_id():
    return "acc-admin"


@pytest.fixture()
def products():
    """Product ids by title."""
    return {}


@pytest.fixture()
def placed():
    """Holds the id of the order under test."""
    return {"order_id": None}


@pytest.fixture()
def error():
    """Container for the typed error a When step raised."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced {price:f}'))
def _(products, title, price):
    products[title] = current_domain.process(
        AddProduct(title=title, price=price, description=f"{title} for testing.", category="Misc"),
        asynchronous=False,
    )


@given(parsers.cfparse('the shopper\'s cart holds {quantity:d} of "{title}"'))
def _(products, shopper_id, quantity, title):
    current_domain.process(
        AddToCart(owner_id=shopper_id, product_id=products[title], quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('"{title}" is removed from the catalogue'))
def _(products, title):
    current_domain.process(RemoveProduct(product_id=products[title]), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def _(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then("no error was raised")
def _(error):
    assert error["exc"] is None
