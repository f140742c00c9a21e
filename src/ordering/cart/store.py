"""CartStore — the single owner of the shopper's cart state.

UI code reads ``lines``, ``is_open`` and the totals, and changes the cart only
through the operations below. Every mutation runs to completion inside the
ordering domain context before the store hands the resulting events to
subscribers, so listeners always observe the post-mutation state.
"""

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from protean.core.event import BaseEvent
from pydantic import ValidationError

from ordering.cart.cart import CartLine, ShoppingCart
from ordering.cart.items import AddToCart
from ordering.domain import ordering
from ordering.pricing.calculators import OrderSummary, PricingRules, cart_subtotal, summarize
from shared.catalogue import ProductSnapshot

logger = structlog.get_logger(__name__)

Listener = Callable[[BaseEvent], None]
ProductLookup = Mapping[int, Any] | Callable[[int], Any]


class CartStore:
    def __init__(self, rules: PricingRules | None = None, cart: ShoppingCart | None = None):
        self.rules = rules or PricingRules.from_settings()
        if cart is None:
            with ordering.domain_context():
                cart = ShoppingCart.create()
        self._cart = cart
        self._listeners: list[Listener] = []

    # -------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------
    @property
    def cart_id(self) -> str:
        return str(self._cart.id)

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._cart.lines)

    @property
    def is_open(self) -> bool:
        return self._cart.is_open

    @property
    def item_count(self) -> int:
        return self._cart.item_count

    @property
    def total_quantity(self) -> int:
        return self._cart.total_quantity

    def get_cart_total(self) -> float:
        """Cart subtotal in the base currency."""
        return cart_subtotal(self._cart.lines, self.rules.fallback_price)

    def summary(self, rules: PricingRules | None = None) -> OrderSummary:
        return summarize(self._cart.lines, rules or self.rules)

    # -------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every cart event. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        for event in self._cart.collect_events():
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception(
                        "Cart listener failed",
                        cart_id=self.cart_id,
                        event_type=type(event).__name__,
                    )

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_to_cart(self, item: AddToCart | Mapping[str, Any]) -> CartLine:
        if not isinstance(item, AddToCart):
            item = AddToCart.model_validate(item)

        with ordering.domain_context():
            line = self._cart.add_line(
                product_id=item.product_id,
                quantity=item.quantity,
                size=item.size,
                color=item.color,
                customizations=item.customizations,
                product=item.product,
            )
        logger.info(
            "Cart line added",
            cart_id=self.cart_id,
            line_id=line.id,
            product_id=line.product_id,
            quantity=line.quantity,
        )
        self._publish()
        return line

    def remove_from_cart(self, line_id: int) -> bool:
        with ordering.domain_context():
            removed = self._cart.remove_line(line_id)
        logger.info("Cart line removed", cart_id=self.cart_id, line_id=line_id, removed=removed)
        self._publish()
        return removed

    def update_quantity(self, line_id: int, quantity: int) -> bool:
        with ordering.domain_context():
            changed = self._cart.update_line_quantity(line_id, quantity)
        logger.debug(
            "Cart line quantity updated",
            cart_id=self.cart_id,
            line_id=line_id,
            quantity=quantity,
            changed=changed,
        )
        self._publish()
        return changed

    def clear_cart(self) -> None:
        with ordering.domain_context():
            removed_count = self._cart.clear()
        logger.info("Cart cleared", cart_id=self.cart_id, removed_count=removed_count)
        self._publish()

    def toggle_cart(self) -> bool:
        with ordering.domain_context():
            return self._cart.toggle()

    def attach_products(self, lookup: ProductLookup) -> int:
        """Refresh product snapshots on cart lines from ``lookup``.

        ``lookup`` maps a product id to a ``ProductSnapshot``, a mapping with
        snapshot fields, or anything with a ``to_snapshot()`` method. Lines
        whose product is unknown keep the snapshot they have.
        """
        attached = 0
        with ordering.domain_context():
            for line in list(self._cart.lines):
                found = lookup(line.product_id) if callable(lookup) else lookup.get(line.product_id)
                snapshot = self._as_snapshot(found)
                if snapshot is None:
                    continue
                self._cart.attach_product(line.id, snapshot)
                attached += 1

        logger.debug("Attached product snapshots", cart_id=self.cart_id, attached=attached)
        return attached

    @staticmethod
    def _as_snapshot(found: Any) -> ProductSnapshot | None:
        if found is None or isinstance(found, ProductSnapshot):
            return found
        if hasattr(found, "to_snapshot"):
            return found.to_snapshot()
        try:
            return ProductSnapshot.model_validate(found)
        except ValidationError:
            logger.warning("Ignoring unusable product data", product=repr(found))
            return None
