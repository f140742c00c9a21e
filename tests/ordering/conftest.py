import pytest
from ordering.cart.store import CartStore
from ordering.pricing.calculators import PricingRules
from protean.integrations.pytest import DomainFixture
from shared.catalogue import ProductSnapshot


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture
def rules():
    return PricingRules()


@pytest.fixture
def store(rules):
    return CartStore(rules=rules)


@pytest.fixture
def events(store):
    """Events published by ``store``, in order."""
    received = []
    store.subscribe(received.append)
    return received


@pytest.fixture
def snapshot():
    def _make(price="20.00", name="Team Jersey"):
        return ProductSnapshot(name=name, base_price=price, image_url=f"https://cdn.example.com/{name}.png")

    return _make
