"""Application tests for order status updates."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.management import AddProduct
from storefront.errors import CannotCancelCompleted, Forbidden, InvalidStatus
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.order.checkout import PlaceOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import UpdateOrderStatus

OWNER = "acc-owner"
ADMIN = "acc-admin"


def _process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def order_id():
    product_id = _process(AddProduct(title="Mug", price=10.0, description="Stoneware.", category="Kitchen"))
    _process(AddToCart(owner_id=OWNER, product_id=product_id, quantity=1))
    return _process(PlaceOrder(owner_id=OWNER))


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


def _update(order_id, status, actor_id=OWNER, admin=False):
    return _process(UpdateOrderStatus(order_id=order_id, status=status, actor_id=actor_id, actor_is_admin=admin))


class TestAdminUpdates:
    def test_complete(self, order_id):
        assert _update(order_id, "completed", actor_id=ADMIN, admin=True) is True
        assert _status(order_id) == "completed"

    def test_status_is_normalized(self, order_id):
        _update(order_id, " Completed ", actor_id=ADMIN, admin=True)
        assert _status(order_id) == "completed"

    def test_invalid_status(self, order_id):
        with pytest.raises(InvalidStatus):
            _update(order_id, "shipped", actor_id=ADMIN, admin=True)
        assert _status(order_id) == "pending"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update("missing", "completed", actor_id=ADMIN, admin=True)


class TestOwnerUpdates:
    def test_cancel(self, order_id):
        _update(order_id, "cancelled")
        assert _status(order_id) == "cancelled"

    def test_cancel_again_is_a_no_op(self, order_id):
        _update(order_id, "cancelled")
        updated_at = current_domain.repository_for(Order).get(order_id).updated_at

        assert _update(order_id, "cancelled") is False
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "cancelled"
        assert order.updated_at == updated_at

    def test_cannot_cancel_completed(self, order_id):
        _update(order_id, "completed", actor_id=ADMIN, admin=True)
        with pytest.raises(CannotCancelCompleted):
            _update(order_id, "cancelled")
        assert _status(order_id) == "completed"

    def test_other_owner_forbidden(self, order_id):
        with pytest.raises(Forbidden):
            _update(order_id, "cancelled", actor_id="acc-stranger")
        assert _status(order_id) == "pending"

    def test_status_required(self, order_id):
        with pytest.raises(ValidationError):
            UpdateOrderStatus(order_id=order_id, actor_id=OWNER)
