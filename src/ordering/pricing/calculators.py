"""Pricing calculators for cart lines and order summaries.

Everything here is a pure function of the cart lines and a ``PricingRules``
instance. All amounts are in the base currency; display conversion belongs to
the currency service.

The cart subtotal is the only figure the cart itself exposes. Shipping, bulk
discount and tax are layered on top by checkout-style surfaces through
``summarize``.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from ordering.cart.cart import CartLine
from shared.catalogue import parse_price
from shared.config import Settings, get_settings


@dataclass(frozen=True)
class PricingRules:
    fallback_price: float = 45.0  # Used when a line has no usable product price
    flat_shipping_fee: float = 15.0
    free_shipping_threshold: float = 150.0  # Shipping is free strictly above this subtotal
    bulk_discount_min_quantity: int = 10
    bulk_discount_rate: float = 0.10
    tax_rate: float = 0.08

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PricingRules":
        settings = settings or get_settings()
        return cls(
            fallback_price=settings.fallback_price,
            flat_shipping_fee=settings.flat_shipping_fee,
            free_shipping_threshold=settings.free_shipping_threshold,
            bulk_discount_min_quantity=settings.bulk_discount_min_quantity,
            bulk_discount_rate=settings.bulk_discount_rate,
            tax_rate=settings.tax_rate,
        )


DEFAULT_RULES = PricingRules()


class OrderSummary(NamedTuple):
    """Breakdown shown on the cart and checkout pages."""

    subtotal: float
    bulk_discount: float
    shipping: float
    tax: float
    total: float
    total_quantity: int


def round_money(amount: float, places: int = 2) -> float:
    return round(amount, places)


def effective_price(line: CartLine, fallback_price: float = DEFAULT_RULES.fallback_price) -> float:
    """Unit price for a line: its product's base price, or the fallback."""
    if line.product is not None:
        price = parse_price(line.product.base_price)
        if price is not None:
            return price
    return fallback_price


def line_subtotal(line: CartLine, fallback_price: float = DEFAULT_RULES.fallback_price) -> float:
    return effective_price(line, fallback_price) * max(1, line.quantity)


def cart_subtotal(lines: Iterable[CartLine], fallback_price: float = DEFAULT_RULES.fallback_price) -> float:
    return sum((line_subtotal(line, fallback_price) for line in lines), 0.0)


def shipping_for(subtotal: float, rules: PricingRules = DEFAULT_RULES) -> float:
    return 0.0 if subtotal > rules.free_shipping_threshold else rules.flat_shipping_fee


def bulk_discount_for(subtotal: float, total_quantity: int, rules: PricingRules = DEFAULT_RULES) -> float:
    if total_quantity >= rules.bulk_discount_min_quantity:
        return subtotal * rules.bulk_discount_rate
    return 0.0


def tax_for(subtotal: float, discount: float, rules: PricingRules = DEFAULT_RULES) -> float:
    return (subtotal - discount) * rules.tax_rate


def summarize(lines: Iterable[CartLine], rules: PricingRules = DEFAULT_RULES) -> OrderSummary:
    """Full order breakdown. An empty cart costs nothing, shipping included."""
    lines = list(lines)
    if not lines:
        return OrderSummary(subtotal=0.0, bulk_discount=0.0, shipping=0.0, tax=0.0, total=0.0, total_quantity=0)

    total_quantity = sum(max(1, line.quantity) for line in lines)
    subtotal = cart_subtotal(lines, rules.fallback_price)
    discount = bulk_discount_for(subtotal, total_quantity, rules)
    shipping = shipping_for(subtotal, rules)
    tax = tax_for(subtotal, discount, rules)

    return OrderSummary(
        subtotal=round_money(subtotal),
        bulk_discount=round_money(discount),
        shipping=round_money(shipping),
        tax=round_money(tax),
        total=round_money(subtotal - discount + shipping + tax),
        total_quantity=total_quantity,
    )
