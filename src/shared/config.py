"""Environment-driven settings for the storefront core."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

import structlog

logger = structlog.get_logger(__name__)


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(key: str, default: float) -> float:
    v = _get_env(key)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        logger.warning("Ignoring malformed setting", key=key, value=v, default=default)
        return default


def _get_int(key: str, default: int) -> int:
    v = _get_env(key)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        logger.warning("Ignoring malformed setting", key=key, value=v, default=default)
        return default


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    storage_path: str | None = None

    # Pricing
    fallback_price: float = 45.0
    flat_shipping_fee: float = 15.0
    free_shipping_threshold: float = 150.0
    bulk_discount_min_quantity: int = 10
    bulk_discount_rate: float = 0.10
    tax_rate: float = 0.08

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            environment=(_get_env("STOREFRONT_ENV", "ENVIRONMENT", "ENV", default="development") or "").lower(),
            storage_path=_get_env("STOREFRONT_STORAGE_PATH"),
            fallback_price=_get_float("FALLBACK_PRICE", cls.fallback_price),
            flat_shipping_fee=_get_float("FLAT_SHIPPING_FEE", cls.flat_shipping_fee),
            free_shipping_threshold=_get_float("FREE_SHIPPING_THRESHOLD", cls.free_shipping_threshold),
            bulk_discount_min_quantity=_get_int("BULK_DISCOUNT_MIN_QUANTITY", cls.bulk_discount_min_quantity),
            bulk_discount_rate=_get_float("BULK_DISCOUNT_RATE", cls.bulk_discount_rate),
            tax_rate=_get_float("TAX_RATE", cls.tax_rate),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process, read from the environment on first use."""
    return Settings.from_env()
