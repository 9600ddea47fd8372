"""Application tests for product administration commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.management import AddProduct, RemoveProduct, UpdateProduct
from storefront.catalogue.product import Product


def _add_product(**overrides):
    fields = {"title": "Mug", "price": 12.0, "description": "Stoneware mug.", "category": "Kitchen"}
    fields.update(overrides)
    return current_domain.process(AddProduct(**fields), asynchronous=False)


class TestAddProductCommand:
    def test_persists(self):
        product_id = _add_product()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.title == "Mug"
        assert product.image_url == ""

    def test_missing_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProduct(title="Mug", description="Stoneware mug.", category="Kitchen")

    def test_negative_price_not_persisted(self):
        with pytest.raises(ValidationError):
            _add_product(price=-3.0)
        assert current_domain.repository_for(Product)._dao.query.all().total == 0


class TestUpdateProductCommand:
    def test_persists(self):
        product_id = _add_product()
        current_domain.process(
            UpdateProduct(
                product_id=product_id,
                title="Big Mug",
                price=14.0,
                description="Larger stoneware mug.",
                category="Kitchen",
                image_url="https://cdn.example.com/mug.jpg",
            ),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.title == "Big Mug"
        assert product.price == 14.0
        assert product.image_url == "https://cdn.example.com/mug.jpg"

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateProduct(product_id="missing", title="X", price=1.0, description="X", category="X"),
                asynchronous=False,
            )


class TestRemoveProductCommand:
    def test_removes(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveProduct(product_id="missing"), asynchronous=False)
