"""Domain events for the ShoppingCart aggregate.

Each event carries a short ``title`` and ``description`` so UI listeners can
show a transient notification without knowing the event types. The state
change is the contract; the wording is advisory.
"""

from protean.fields import Boolean, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A new line was appended to the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Integer(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True)
    title = String(default="Added to Cart")
    description = String(default="Item added to your cart successfully")


@ordering.event(part_of="ShoppingCart")
class CartItemQuantityIncreased:
    """An add matched an existing line, so its quantity grew instead."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Integer(required=True)
    product_id = Integer(required=True)
    added_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    title = String(default="Cart Updated")
    description = String(default="Item quantity increased in cart")


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart line was replaced. No toast accompanies it."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    title = String()
    description = String()


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the shopping cart.

    ``was_present`` is False when the id did not match any line; the shopper
    is still told the item is gone.
    """

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Integer(required=True)
    was_present = Boolean(default=True)
    title = String(default="Item Removed")
    description = String(default="Item removed from cart")


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed from the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    removed_count = Integer(required=True)
    title = String(default="Cart Cleared")
    description = String(default="All items removed from cart")
