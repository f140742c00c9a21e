"""Catalogue product as seen by storefront surfaces.

Product data arrives already resolved from the catalogue collaborator. This
model keeps only what recommendation surfaces and cart lines read.
"""

from pydantic import BaseModel, ConfigDict, Field

from shared.catalogue import ProductSnapshot, parse_price


class CatalogueProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str | None = None
    category_id: int | None = None
    base_price: str = Field(default="0")  # Decimal string, base currency
    image_url: str | None = None
    is_on_sale: bool = False

    @property
    def price(self) -> float | None:
        return parse_price(self.base_price)

    def to_snapshot(self) -> ProductSnapshot:
        """Denormalized copy for attaching to a cart line."""
        return ProductSnapshot(name=self.name, base_price=self.base_price, image_url=self.image_url)
