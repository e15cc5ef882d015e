"""Saved product (wishlist entry) aggregate.

A denormalised snapshot of the product at save time, scoped to one user.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue

SAVED_LIMIT = 1000


@catalogue.aggregate
class SavedProduct:
    user_id: String(required=True, max_length=255)
    product_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    image: String(max_length=500)
    category: String(max_length=100)
    saved_at: DateTime(default=lambda: datetime.now(UTC))


@catalogue.repository(part_of=SavedProduct)
class SavedProductRepository:
    def for_user(self, user_id: str) -> list[SavedProduct]:
        return self._dao.query.filter(user_id=user_id).order_by("-saved_at").limit(SAVED_LIMIT).all().items

    def entry(self, user_id: str, product_id: str) -> SavedProduct | None:
        return self._dao.query.filter(user_id=user_id, product_id=product_id).all().first
