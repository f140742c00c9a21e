"""Cart item commands accepted by the CartStore."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ordering.cart.cart import blank_to_none, normalize_quantity
from shared.catalogue import ProductSnapshot


class AddToCart(BaseModel):
    """Put a product configuration in the cart.

    ``quantity`` defaults to 1; missing, zero, negative or non-numeric values
    are clamped to 1. Empty strings for the discriminating attributes mean
    "not given".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: int = Field(alias="productId")
    quantity: int = 1
    size: str | None = None
    color: str | None = None
    customizations: str | None = None
    product: ProductSnapshot | None = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _clamp_quantity(cls, value):
        return normalize_quantity(value)

    @field_validator("size", "color", "customizations", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        return blank_to_none(value)
