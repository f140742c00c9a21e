"""Shopping Cart aggregate — process-local cart owned by the CartStore.

The cart lives for the duration of the shopper's session and is never
persisted by the core. Lines are identified by a small integer drawn from a
monotonic counter, and at most one line exists per purchasable configuration
(product, size, color, customizations).
"""

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, HasMany, Integer, String, Text, ValueObject

from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityIncreased,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.domain import ordering
from shared.catalogue import ProductSnapshot

LineKey = tuple[int, str | None, str | None, str | None]


def normalize_quantity(quantity) -> int:
    """Clamp any incoming quantity to a whole number of at least 1."""
    if isinstance(quantity, bool):
        return 1
    try:
        value = int(quantity)
    except (TypeError, ValueError, OverflowError):
        return 1
    return value if value >= 1 else 1


def blank_to_none(value: str | None) -> str | None:
    return None if value == "" else value


@ordering.value_object(part_of="ShoppingCart")
class LineProduct:
    """Product details captured on a cart line for display and pricing."""

    name = String(max_length=255)
    base_price = String()  # Decimal string, base currency
    image_url = Text()

    @classmethod
    def from_snapshot(cls, snapshot: ProductSnapshot | None) -> "LineProduct | None":
        if snapshot is None:
            return None
        values = snapshot.model_dump(exclude_none=True)
        return cls(**values) if values else None


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    id = Integer(identifier=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1, default=1)
    size = String()
    color = String()
    customizations = Text()  # Opaque serialized design payload
    product = ValueObject(LineProduct)

    @property
    def key(self) -> LineKey:
        return (self.product_id, self.size, self.color, self.customizations)


@ordering.aggregate
class ShoppingCart:
    lines = HasMany(CartLine)
    is_open = Boolean(default=False)
    next_line_id = Integer(default=1, min_value=1)

    @invariant.post
    def one_line_per_configuration(self):
        keys = [line.key for line in self.lines]
        if len(keys) != len(set(keys)):
            raise ValidationError({"lines": ["Cart holds more than one line for the same configuration"]})

    @invariant.post
    def line_ids_are_never_reused(self):
        ids = [line.id for line in self.lines]
        if len(ids) != len(set(ids)):
            raise ValidationError({"lines": ["Cart line ids must be unique"]})
        if ids and max(ids) >= self.next_line_id:
            raise ValidationError({"next_line_id": ["Next line id must be above every existing line id"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, lines=None, is_open=False):
        """Start a cart, optionally restoring lines from an earlier session.

        The counter is placed past the highest restored id so ids are never
        handed out twice.
        """
        lines = list(lines or [])
        next_line_id = max((line.id for line in lines), default=0) + 1
        return cls(lines=lines, is_open=is_open, next_line_id=next_line_id)

    def collect_events(self) -> list:
        """Return pending events and forget them."""
        events = list(self._events)
        self._events.clear()
        return events

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return len(self.lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    def find_line(self, line_id) -> CartLine | None:
        return next((line for line in self.lines if line.id == line_id), None)

    def find_match(self, key: LineKey) -> CartLine | None:
        return next((line for line in self.lines if line.key == key), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_line(
        self,
        product_id: int,
        quantity=1,
        size: str | None = None,
        color: str | None = None,
        customizations: str | None = None,
        product: ProductSnapshot | None = None,
    ) -> CartLine:
        """Add a configuration to the cart, merging with a matching line."""
        candidate = CartLine(
            id=self.next_line_id,
            product_id=product_id,
            quantity=normalize_quantity(quantity),
            size=blank_to_none(size),
            color=blank_to_none(color),
            customizations=blank_to_none(customizations),
            product=LineProduct.from_snapshot(product),
        )

        existing = self.find_match(candidate.key)
        if existing is not None:
            existing.quantity += candidate.quantity
            self.raise_(
                CartItemQuantityIncreased(
                    cart_id=str(self.id),
                    line_id=existing.id,
                    product_id=existing.product_id,
                    added_quantity=candidate.quantity,
                    new_quantity=existing.quantity,
                )
            )
            return existing

        with atomic_change(self):
            self.next_line_id += 1
            self.add_lines(candidate)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                line_id=candidate.id,
                product_id=candidate.product_id,
                quantity=candidate.quantity,
            )
        )
        return candidate

    def remove_line(self, line_id) -> bool:
        """Remove a line by id. Unknown ids are ignored."""
        line = self.find_line(line_id)
        if line is not None:
            self.remove_lines(line)

        self.raise_(CartItemRemoved(cart_id=str(self.id), line_id=line_id, was_present=line is not None))
        return line is not None

    def update_line_quantity(self, line_id, quantity) -> bool:
        """Replace a line's quantity; zero or negative removes the line."""
        try:
            requested = float(quantity)
        except (TypeError, ValueError, OverflowError):
            requested = 1.0
        if requested <= 0:
            return self.remove_line(line_id)

        line = self.find_line(line_id)
        if line is None:
            return False

        previous_quantity = line.quantity
        line.quantity = normalize_quantity(quantity)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                line_id=line.id,
                previous_quantity=previous_quantity,
                new_quantity=line.quantity,
            )
        )
        return True

    def clear(self) -> int:
        removed_count = len(self.lines)
        for line in list(self.lines):
            self.remove_lines(line)
        self.raise_(CartCleared(cart_id=str(self.id), removed_count=removed_count))
        return removed_count

    def toggle(self) -> bool:
        self.is_open = not self.is_open
        return self.is_open

    def attach_product(self, line_id, product: ProductSnapshot) -> None:
        line = self.find_line(line_id)
        details = LineProduct.from_snapshot(product)
        if line is not None and details is not None:
            line.product = details
