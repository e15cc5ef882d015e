"""Tests for the Cart aggregate: line management and derived totals."""

import pytest

from ordering.cart.cart import Cart
from ordering.cart.events import (
    CartCleared,
    CartCreated,
    CartIdentityChanged,
    CartItemAdded,
    CartItemDecreased,
    CartItemRemoved,
)


def _make_cart(user_id="user-001"):
    return Cart.create(user_id=user_id)


def _add(cart, product_id="prod-001", name="Stockfish Middle", unit_price=1000, image=""):
    cart.add_item(product_id=product_id, name=name, unit_price=unit_price, image=image)


class TestCartCreation:
    def test_new_cart_is_empty(self):
        cart = _make_cart()
        assert cart.is_empty
        assert cart.total_items() == 0
        assert cart.total_price() == 0

    def test_create_raises_event(self):
        cart = _make_cart()
        assert len(cart._events) == 1
        assert isinstance(cart._events[0], CartCreated)
        assert cart._events[0].cart_id == str(cart.id)

    def test_guest_cart_has_no_user(self):
        cart = Cart.create()
        assert cart.user_id is None


class TestAddItem:
    def test_add_new_product_creates_line_with_quantity_one(self):
        cart = _make_cart()
        _add(cart)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 1

    def test_add_existing_product_increments_quantity(self):
        cart = _make_cart()
        _add(cart)
        _add(cart)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2

    def test_add_existing_product_keeps_original_price_and_image(self):
        cart = _make_cart()
        _add(cart, unit_price=1000, image="/a.jpg")
        _add(cart, unit_price=9999, image="/b.jpg")
        line = cart.line_for("prod-001")
        assert line.unit_price == 1000
        assert line.image == "/a.jpg"

    def test_different_products_get_separate_lines(self):
        cart = _make_cart()
        _add(cart, "prod-001")
        _add(cart, "prod-002")
        assert [str(line.product_id) for line in cart.ordered_lines] == ["prod-001", "prod-002"]

    def test_add_raises_event_with_new_quantity(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        _add(cart)
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartItemAdded)
        assert event.quantity == 2


class TestDecreaseItem:
    def test_decrease_reduces_quantity(self):
        cart = _make_cart()
        _add(cart)
        _add(cart)
        cart.decrease_item("prod-001")
        assert cart.line_for("prod-001").quantity == 1

    def test_decrease_at_quantity_one_removes_line(self):
        cart = _make_cart()
        _add(cart)
        cart.decrease_item("prod-001")
        assert cart.line_for("prod-001") is None
        assert cart.is_empty

    def test_add_then_decrease_twice_leaves_cart_empty(self):
        cart = _make_cart()
        _add(cart)
        cart.decrease_item("prod-001")
        cart.decrease_item("prod-001")
        assert cart.is_empty
        assert cart.total_items() == 0

    def test_decrease_unknown_product_is_ignored(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        cart.decrease_item("missing")
        assert cart.total_items() == 1
        assert cart._events == []

    def test_decrease_raises_event_with_remaining_quantity(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        cart.decrease_item("prod-001")
        event = cart._events[0]
        assert isinstance(event, CartItemDecreased)
        assert event.quantity == 0


class TestRemoveAndClear:
    def test_remove_drops_line_regardless_of_quantity(self):
        cart = _make_cart()
        for _ in range(5):
            _add(cart)
        cart.remove_item("prod-001")
        assert cart.is_empty

    def test_remove_raises_event(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        cart.remove_item("prod-001")
        assert isinstance(cart._events[0], CartItemRemoved)

    def test_remove_unknown_product_is_ignored(self):
        cart = _make_cart()
        _add(cart)
        cart.remove_item("missing")
        assert len(cart.lines) == 1

    def test_clear_empties_cart(self):
        cart = _make_cart()
        _add(cart, "prod-001")
        _add(cart, "prod-002")
        cart.clear()
        assert cart.is_empty

    def test_clear_records_reason(self):
        cart = _make_cart()
        cart._events.clear()
        cart.clear(reason="manual-handoff")
        event = cart._events[0]
        assert isinstance(event, CartCleared)
        assert event.reason == "manual-handoff"


class TestIdentityChange:
    def test_sign_in_clears_and_rebinds(self):
        cart = Cart.create()
        _add(cart)
        cart.reset_for_identity("user-002")
        assert cart.is_empty
        assert cart.user_id == "user-002"

    def test_sign_out_clears_and_unbinds(self):
        cart = _make_cart()
        _add(cart)
        cart.reset_for_identity(None)
        assert cart.is_empty
        assert cart.user_id is None

    def test_identity_change_raises_event(self):
        cart = _make_cart("user-001")
        cart._events.clear()
        cart.reset_for_identity("user-002")
        event = cart._events[0]
        assert isinstance(event, CartIdentityChanged)
        assert event.previous_user_id == "user-001"
        assert event.user_id == "user-002"


class TestTotals:
    def test_totals_fold_over_lines(self):
        cart = _make_cart()
        _add(cart, "prod-001", unit_price=1000)
        _add(cart, "prod-001", unit_price=1000)
        _add(cart, "prod-002", unit_price=2500)
        assert cart.total_items() == 3
        assert cart.total_price() == 4500

    def test_totals_use_exact_decimal_arithmetic(self):
        cart = _make_cart()
        _add(cart, "prod-001", unit_price=0.1)
        _add(cart, "prod-002", unit_price=0.2)
        assert cart.total_price() == 0.3

    def test_totals_recomputed_after_each_mutation(self):
        cart = _make_cart()
        _add(cart, unit_price=1500)
        _add(cart, unit_price=1500)
        assert cart.total_price() == 3000
        cart.decrease_item("prod-001")
        assert cart.total_price() == 1500


PRICES = {"prod-001": 1000, "prod-002": 2500, "prod-003": 750}

SEQUENCES = [
    [("add", "prod-001")],
    [("add", "prod-001"), ("decrease", "prod-001")],
    [("add", "prod-001"), ("add", "prod-001"), ("add", "prod-002"), ("decrease", "prod-001")],
    [("decrease", "prod-001"), ("remove", "prod-002"), ("add", "prod-003")],
    [("add", "prod-001"), ("add", "prod-002"), ("remove", "prod-001"), ("add", "prod-001"), ("decrease", "prod-002")],
    [("add", "prod-003")] * 4 + [("decrease", "prod-003")] * 5 + [("add", "prod-002")],
    [("add", "prod-001"), ("add", "prod-002"), ("clear", None), ("add", "prod-002"), ("add", "prod-002")],
]


class TestOperationSequences:
    """Whatever the sequence, totals agree with the lines and no line drops below one."""

    @pytest.mark.parametrize("operations", SEQUENCES)
    def test_totals_match_lines_after_any_sequence(self, operations):
        cart = _make_cart()
        expected = {}
        for operation, product_id in operations:
            if operation == "add":
                _add(cart, product_id, unit_price=PRICES[product_id])
                expected[product_id] = expected.get(product_id, 0) + 1
            elif operation == "decrease":
                cart.decrease_item(product_id)
                if product_id in expected:
                    expected[product_id] -= 1
                    if expected[product_id] == 0:
                        del expected[product_id]
            elif operation == "remove":
                cart.remove_item(product_id)
                expected.pop(product_id, None)
            else:
                cart.clear()
                expected.clear()

            assert all(line.quantity >= 1 for line in cart.lines)
            assert cart.total_items() == sum(line.quantity for line in cart.lines)
            assert {str(line.product_id): line.quantity for line in cart.lines} == expected
            assert cart.total_price() == sum(PRICES[pid] * quantity for pid, quantity in expected.items())
