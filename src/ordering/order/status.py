"""Admin order management: status override and tracking codes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class AssignTrackingCode:
    order_id = Identifier(required=True)
    tracking_code = String(required=True, max_length=100)


@ordering.command_handler(part_of=Order)
class ManageOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        """Set the status directly. Any status may follow any other."""
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.update_status(command.status)
        repo.add(order)

        logger.info(
            "order_status_updated",
            order_id=order.id,
            previous_status=previous,
            status=order.status,
        )

    @handle(AssignTrackingCode)
    def assign_tracking_code(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.assign_tracking_code(command.tracking_code)
        repo.add(order)

        logger.info("tracking_code_assigned", order_id=order.id, tracking_code=order.tracking_code)
