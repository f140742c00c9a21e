"""Storefront composition root.

Builds the cart, currency and personalization services for one shopper
session and wires them to a single key-value store. The ordering domain is
initialized once at import; every other service is created per call, so each
call returns an independent set of services.

Usage:
    storefront = create_storefront()
    storefront.cart.add_to_cart({"productId": 1, "size": "M"})
    storefront.currency.format(storefront.cart.get_cart_total())
"""

from dataclasses import dataclass

import structlog

from catalogue.personalization.preferences import PreferenceTracker
from catalogue.personalization.scorer import PersonalizationScorer
from catalogue.shared.currency import CurrencyService
from ordering.cart.store import CartStore
from ordering.domain import ordering
from ordering.pricing.calculators import PricingRules
from shared.config import Settings, get_settings
from shared.logging import configure_logging
from shared.storage import InMemoryStore, JsonFileStore, KeyValueStore

ordering.init()

logger = structlog.get_logger(__name__)


@dataclass
class Storefront:
    cart: CartStore
    currency: CurrencyService
    preferences: PreferenceTracker
    personalization: PersonalizationScorer
    storage: KeyValueStore

    def formatted_total(self) -> str:
        """Cart subtotal in the shopper's display currency."""
        return self.currency.format(self.cart.get_cart_total())


def build_storage(settings: Settings) -> KeyValueStore:
    if settings.storage_path:
        return JsonFileStore(settings.storage_path)
    return InMemoryStore()


def create_storefront(
    settings: Settings | None = None,
    storage: KeyValueStore | None = None,
    setup_logging: bool = False,
) -> Storefront:
    settings = settings or get_settings()
    if setup_logging:
        configure_logging()

    storage = storage if storage is not None else build_storage(settings)
    tracker = PreferenceTracker(storage)

    storefront = Storefront(
        cart=CartStore(rules=PricingRules.from_settings(settings)),
        currency=CurrencyService(storage),
        preferences=tracker,
        personalization=PersonalizationScorer(tracker),
        storage=storage,
    )
    logger.info(
        "Storefront ready",
        environment=settings.environment,
        storage=type(storage).__name__,
        currency=storefront.currency.currency,
    )
    return storefront
