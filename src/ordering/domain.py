"""Ordering bounded context — Shopping Cart and pricing.

The cart is a standard (not event sourced) aggregate that lives in memory for
one shopper session. Its events are handed to in-process listeners by the
CartStore rather than published through a broker.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
