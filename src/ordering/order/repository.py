"""Order repository."""

from datetime import datetime

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus, PaymentMethod

# Admin listings read every order; a bound keeps one query from running away
ORDER_LIMIT = 10000


@ordering.repository(part_of=Order)
class OrderRepository:
    def all_newest_first(self, limit: int = 0) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(limit or ORDER_LIMIT).all().items

    def for_user(self, user_id: str) -> list[Order]:
        return self._dao.query.filter(user_id=user_id).order_by("-created_at").limit(ORDER_LIMIT).all().items

    def created_since(self, since: datetime) -> list[Order]:
        return (
            self._dao.query.filter(created_at__gte=since).order_by("-created_at").limit(ORDER_LIMIT).all().items
        )

    def by_payment_session(self, session_id: str) -> Order | None:
        return self._dao.query.filter(payment_session_id=session_id).all().first

    def stale_pending(self, cutoff: datetime) -> list[Order]:
        return (
            self._dao.query.filter(
                status=OrderStatus.PENDING.value,
                payment_method=PaymentMethod.HOSTED_GATEWAY.value,
                created_at__lt=cutoff,
            )
            .order_by("created_at")
            .limit(ORDER_LIMIT)
            .all()
            .items
        )

    def claim_payment(self, order_id: str, session_id: str | None, paid_at: datetime) -> bool:
        """Conditionally move a pending order to paid in the store.

        The write only matches while the stored status is still ``pending``,
        so when two confirmations race exactly one of them gets True.
        """
        changes = {"status": OrderStatus.PAID.value, "paid_at": paid_at, "updated_at": paid_at}
        if session_id:
            changes["payment_session_id"] = session_id
        claimed = self._dao.query.filter(id=order_id, status=OrderStatus.PENDING.value).update_all(**changes)
        return claimed == 1
