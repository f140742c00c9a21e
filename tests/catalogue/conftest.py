from datetime import UTC, datetime

import pytest
from catalogue.personalization.preferences import PreferenceTracker
from catalogue.personalization.scorer import PersonalizationScorer
from catalogue.product.product import CatalogueProduct


class FrozenClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 10, 19, 9, 30, tzinfo=UTC))


@pytest.fixture
def tracker(memory_store, clock):
    return PreferenceTracker(memory_store, clock=clock)


@pytest.fixture
def scorer(tracker):
    return PersonalizationScorer(tracker, jitter=lambda: 0.0)


@pytest.fixture
def catalogue_products():
    return [
        CatalogueProduct(id=1, name="Classic Tee", description="Soft cotton t-shirt", category_id=1, base_price="25.00"),
        CatalogueProduct(id=2, name="Team Hoodie", description="Fleece hoodie for cold games", category_id=2, base_price="55.00"),
        CatalogueProduct(id=3, name="Training Shorts", category_id=3, base_price="30.00", is_on_sale=True),
        CatalogueProduct(id=4, name="Zip Hoodie", description="Lightweight zip-up", category_id=2, base_price="60.00"),
        CatalogueProduct(id=5, name="Snapback Cap", category_id=4, base_price="20.00"),
    ]
