"""Maintenance: cancel hosted-gateway orders that never completed payment.

A checkout that wrote its order but never got a payment session (or whose
customer abandoned the hosted page) leaves a ``pending`` order behind. Run
periodically via ``manage.py expire-orders`` or the admin endpoint.
"""

from datetime import UTC, datetime, timedelta

from protean import handle
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order
from ordering.settings import stale_order_hours


@ordering.command(part_of="Order")
class ExpireStaleOrders:
    older_than_hours = Integer(min_value=0)
    now = DateTime()


@ordering.command_handler(part_of=Order)
class ExpireStaleOrdersHandler:
    @handle(ExpireStaleOrders)
    def expire_stale_orders(self, command):
        """Returns the ids of the expired orders."""
        hours = command.older_than_hours if command.older_than_hours is not None else stale_order_hours()
        cutoff = (command.now or datetime.now(UTC)) - timedelta(hours=hours)

        repo = current_domain.repository_for(Order)
        expired = []
        for order in repo.stale_pending(cutoff):
            order.expire()
            repo.add(order)
            expired.append(str(order.id))
            logger.info(
                "stale_order_expired",
                order_id=order.id,
                created_at=order.created_at.isoformat(),
                had_payment_session=bool(order.payment_session_id),
            )

        logger.info("stale_order_sweep_finished", cutoff=cutoff.isoformat(), expired=len(expired))
        return expired
