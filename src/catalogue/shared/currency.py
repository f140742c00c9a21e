"""Display currency conversion for base-currency (AUD) prices.

All prices are stored in the base currency. This module only converts and
formats amounts for display. Rates are static, approximate figures and carry
no guarantee of real-time exchange-rate accuracy.
"""

from typing import NamedTuple

import structlog

from shared.errors import StorageError
from shared.storage import KeyValueStore

logger = structlog.get_logger(__name__)

BASE_CURRENCY = "AUD"
CURRENCY_STORAGE_KEY = "strongwill-currency"


class CurrencyConfig(NamedTuple):
    code: str
    symbol: str
    name: str
    rate: float  # Multiplier from the base currency


CURRENCIES: dict[str, CurrencyConfig] = {
    "AUD": CurrencyConfig(code="AUD", symbol="A$", name="Australian Dollar", rate=1.0),
    "EUR": CurrencyConfig(code="EUR", symbol="€", name="Euro", rate=0.61),
    "USD": CurrencyConfig(code="USD", symbol="$", name="US Dollar", rate=0.66),
}


def is_supported(code) -> bool:
    return isinstance(code, str) and code in CURRENCIES


class CurrencyService:
    """Holds the shopper's display currency and formats prices in it.

    The selection is restored from ``storage`` on construction and written
    back on every successful ``set_currency``.
    """

    def __init__(self, storage: KeyValueStore):
        self._storage = storage
        self._currency = self._restore()

    def _restore(self) -> str:
        try:
            saved = self._storage.get(CURRENCY_STORAGE_KEY)
        except StorageError as exc:
            logger.warning("Could not read currency preference", error=str(exc))
            return BASE_CURRENCY

        if saved is None:
            return BASE_CURRENCY
        if not is_supported(saved):
            logger.warning("Ignoring unsupported stored currency", currency=saved)
            return BASE_CURRENCY
        return saved

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def config(self) -> CurrencyConfig:
        return CURRENCIES[self._currency]

    @property
    def available_currencies(self) -> list[str]:
        return list(CURRENCIES)

    @staticmethod
    def config_for(code: str) -> CurrencyConfig | None:
        return CURRENCIES.get(code) if is_supported(code) else None

    def set_currency(self, code) -> bool:
        """Switch the display currency.

        Returns False and keeps the current selection when ``code`` is not a
        supported currency.
        """
        if not is_supported(code):
            logger.warning("Rejected unsupported currency", currency=code, current=self._currency)
            return False

        self._currency = code
        try:
            self._storage.set(CURRENCY_STORAGE_KEY, code)
        except StorageError as exc:
            logger.warning("Could not persist currency preference", currency=code, error=str(exc))

        logger.info("Display currency changed", currency=code)
        return True

    def convert(self, amount: float) -> float:
        return amount * self.config.rate

    def format(self, amount: float) -> str:
        config = self.config
        return f"{config.symbol}{self.convert(amount):.2f}"
