"""Tests for order placement and the Order aggregate's snapshots."""

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.order.events import OrderPlaced
from storefront.ordering.order.order import Order, OrderStatus


def _snapshot(product_id="prod-001", price=10.0, title="Mug"):
    return {
        "product_id": product_id,
        "title": title,
        "price": price,
        "description": "Stoneware.",
        "category": "Kitchen",
        "image_url": "",
    }


class TestPlace:
    def test_single_line(self):
        order = Order.place(owner_id="acc-1", lines=[(2, _snapshot(price=10.0))])

        assert order.status == OrderStatus.PENDING.value
        assert order.total == 20.0
        assert len(order.items) == 1
        item = order.items[0]
        assert item.product_id == "prod-001"
        assert item.quantity == 2
        assert item.product.price == 10.0
        assert item.line_total == 20.0

    def test_total_sums_lines(self):
        order = Order.place(
            owner_id="acc-1",
            lines=[(3, _snapshot("prod-001", 2.5)), (1, _snapshot("prod-002", 7.25))],
        )
        assert order.total == pytest.approx(14.75)
        assert order.total == sum(i.product.price * i.quantity for i in order.items)

    def test_timestamps(self):
        order = Order.place(owner_id="acc-1", lines=[(1, _snapshot())])
        assert order.created_at is not None
        assert order.updated_at == order.created_at

    def test_raises_event(self):
        order = Order.place(owner_id="acc-1", lines=[(1, _snapshot()), (2, _snapshot("prod-002"))])
        event = next(e for e in order._events if isinstance(e, OrderPlaced))
        assert event.item_count == 2
        assert event.total == 30.0

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(owner_id="acc-1", lines=[])
        assert "items" in exc.value.messages

    def test_snapshot_is_a_copy(self):
        snapshot = _snapshot(price=10.0)
        order = Order.place(owner_id="acc-1", lines=[(1, snapshot)])
        snapshot["price"] = 99.0
        assert order.items[0].product.price == 10.0
        assert order.total == 10.0
