"""End-to-end tests for a wired storefront session."""

from app import create_storefront
from shared.config import Settings
from shared.storage import InMemoryStore, JsonFileStore


class TestStorefrontWiring:
    def test_defaults_to_in_memory_storage(self):
        storefront = create_storefront(Settings())
        assert isinstance(storefront.storage, InMemoryStore)

    def test_storage_path_selects_file_store(self, tmp_path):
        storefront = create_storefront(Settings(storage_path=str(tmp_path / "prefs.json")))
        assert isinstance(storefront.storage, JsonFileStore)

    def test_pricing_rules_follow_settings(self):
        storefront = create_storefront(Settings(fallback_price=12.0))
        storefront.cart.add_to_cart({"productId": 1, "quantity": 2})
        assert storefront.cart.get_cart_total() == 24.0


class TestShopperSession:
    def test_cart_total_in_display_currency(self):
        storefront = create_storefront(Settings(), storage=InMemoryStore())
        storefront.cart.add_to_cart({"productId": 1, "quantity": 2, "product": {"base_price": "20"}})
        storefront.cart.add_to_cart({"productId": 2, "quantity": 1, "product": {"base_price": "15"}})

        assert storefront.formatted_total() == "A$55.00"
        storefront.currency.set_currency("USD")
        assert storefront.formatted_total() == "$36.30"
        assert storefront.cart.get_cart_total() == 55

    def test_currency_and_history_survive_a_reload(self, tmp_path):
        settings = Settings(storage_path=str(tmp_path / "prefs.json"))

        session = create_storefront(settings)
        session.currency.set_currency("EUR")
        session.preferences.track_product_view(4, category_id=2)
        session.cart.add_to_cart({"productId": 4})

        reloaded = create_storefront(settings)

        assert reloaded.currency.currency == "EUR"
        assert reloaded.preferences.load().viewed_categories == [2]
        assert reloaded.cart.lines == ()

    def test_two_sessions_hold_independent_carts(self):
        storage = InMemoryStore()
        first = create_storefront(Settings(), storage=storage)
        second = create_storefront(Settings(), storage=storage)

        first.cart.add_to_cart({"productId": 1})

        assert second.cart.lines == ()
