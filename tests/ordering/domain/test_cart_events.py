"""Tests for the events raised by ShoppingCart operations."""

from ordering.cart.cart import ShoppingCart
from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityIncreased,
    CartItemRemoved,
    CartQuantityUpdated,
)


def _cart_with_line():
    cart = ShoppingCart.create()
    line = cart.add_line(product_id=1, quantity=1, size="M")
    cart.collect_events()
    return cart, line


class TestAddEvents:
    def test_new_line_raises_item_added(self):
        cart = ShoppingCart.create()
        cart.add_line(product_id=1, quantity=2)
        [event] = cart.collect_events()
        assert isinstance(event, CartItemAdded)
        assert event.cart_id == cart.id
        assert event.line_id == 1
        assert event.quantity == 2
        assert event.title == "Added to Cart"

    def test_merge_raises_quantity_increased(self):
        cart, line = _cart_with_line()
        cart.add_line(product_id=1, quantity=2, size="M")
        [event] = cart.collect_events()
        assert isinstance(event, CartItemQuantityIncreased)
        assert event.line_id == line.id
        assert event.added_quantity == 2
        assert event.new_quantity == 3
        assert event.title == "Cart Updated"


class TestRemoveEvents:
    def test_remove_raises_item_removed(self):
        cart, line = _cart_with_line()
        cart.remove_line(line.id)
        [event] = cart.collect_events()
        assert isinstance(event, CartItemRemoved)
        assert event.was_present is True
        assert event.title == "Item Removed"

    def test_remove_unknown_still_notifies(self):
        cart, _ = _cart_with_line()
        cart.remove_line(99)
        [event] = cart.collect_events()
        assert isinstance(event, CartItemRemoved)
        assert event.was_present is False

    def test_non_positive_update_raises_removal(self):
        cart, line = _cart_with_line()
        cart.update_line_quantity(line.id, 0)
        [event] = cart.collect_events()
        assert isinstance(event, CartItemRemoved)


class TestUpdateEvents:
    def test_update_raises_quantity_updated(self):
        cart, line = _cart_with_line()
        cart.update_line_quantity(line.id, 4)
        [event] = cart.collect_events()
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 4

    def test_update_unknown_line_raises_nothing(self):
        cart, _ = _cart_with_line()
        cart.update_line_quantity(99, 4)
        assert cart.collect_events() == []


class TestClearEvents:
    def test_clear_raises_cart_cleared(self):
        cart, _ = _cart_with_line()
        cart.clear()
        [event] = cart.collect_events()
        assert isinstance(event, CartCleared)
        assert event.removed_count == 1
        assert event.description == "All items removed from cart"


class TestCollectEvents:
    def test_collect_drains_pending_events(self):
        cart = ShoppingCart.create()
        cart.add_line(product_id=1)
        cart.add_line(product_id=2)
        assert len(cart.collect_events()) == 2
        assert cart.collect_events() == []
