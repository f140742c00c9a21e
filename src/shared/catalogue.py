"""Cross-context contract for catalogue product data.

The ordering context never looks products up itself. Whatever supplies
product data (the catalogue, a test, a cached API response) hands it over as
a ``ProductSnapshot`` that gets attached to cart lines.
"""

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator


class ProductSnapshot(BaseModel):
    """Denormalized product details attached to a cart line."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    base_price: str | None = None  # Decimal string, base currency
    image_url: str | None = None

    @field_validator("base_price", mode="before")
    @classmethod
    def _price_as_string(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int | float | Decimal):
            return str(value)
        return None


def parse_price(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price
