"""Cart aggregate: the customer's in-progress selection of products.

Each mutation is written back as a whole straight away; there is no
batching.
A line exists only while its quantity is at least one: decreasing a line
at quantity one removes it.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartCleared,
    CartCreated,
    CartIdentityChanged,
    CartItemAdded,
    CartItemDecreased,
    CartItemRemoved,
)
from ordering.domain import ordering


@ordering.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    unit_price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)


@ordering.aggregate
class Cart:
    user_id = String(max_length=255)  # Empty for anonymous carts
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def lines_must_be_unique_per_product(self):
        product_ids = [str(line.product_id) for line in self.lines]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"lines": ["A product can appear on only one cart line"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id=None):
        now = datetime.now(UTC)
        cart = cls(user_id=user_id, created_at=now, updated_at=now)
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=user_id))
        return cart

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    @property
    def ordered_lines(self) -> list:
        return sorted(self.lines, key=lambda line: line.position)

    def line_for(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def add_item(self, product_id, name, unit_price, image=""):
        """Add one unit of a product.

        An existing line is incremented and keeps its original price and
        image; otherwise a new line is appended with quantity 1.
        """
        line = self.line_for(product_id)
        if line is not None:
            line.quantity += 1
        else:
            position = max((other.position for other in self.lines), default=-1) + 1
            line = CartLine(
                product_id=product_id,
                name=name,
                unit_price=unit_price,
                image=image,
                quantity=1,
                position=position,
            )
            self.add_lines(line)

        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemAdded(cart_id=str(self.id), product_id=str(product_id), quantity=line.quantity))

    def decrease_item(self, product_id):
        """Take one unit off a line, removing the line when it reaches zero. Unknown ids are ignored."""
        line = self.line_for(product_id)
        if line is None:
            return

        if line.quantity <= 1:
            self.remove_lines(line)
            remaining = 0
        else:
            line.quantity -= 1
            remaining = line.quantity

        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemDecreased(cart_id=str(self.id), product_id=str(product_id), quantity=remaining))

    def remove_item(self, product_id):
        """Drop a line whatever its quantity. Unknown ids are ignored."""
        line = self.line_for(product_id)
        if line is None:
            return

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def _drop_all_lines(self) -> None:
        for line in list(self.lines):
            self.remove_lines(line)

    def clear(self, reason="customer"):
        self._drop_all_lines()
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), reason=reason))

    def reset_for_identity(self, user_id):
        """Sign-in or sign-out: empty the cart and bind it to the new identity."""
        previous = self.user_id
        self._drop_all_lines()
        self.user_id = user_id
        self.updated_at = datetime.now(UTC)
        self.raise_(CartIdentityChanged(cart_id=str(self.id), previous_user_id=previous, user_id=user_id))

    # -------------------------------------------------------------------
    # Derived totals (recomputed on every read)
    # -------------------------------------------------------------------
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    def total_price(self) -> float:
        total = sum((Decimal(str(line.unit_price)) * line.quantity for line in self.lines), Decimal("0"))
        return float(total)

    @property
    def is_empty(self) -> bool:
        return not self.lines
