"""Order read paths for the admin back office and the customer profile."""

from protean.utils.globals import current_domain

from ordering.order.order import Order


def get_order(order_id: str) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def list_all_orders(limit: int = 0) -> list[Order]:
    """Every order, newest first."""
    return current_domain.repository_for(Order).all_newest_first(limit=limit)


def list_customer_orders(user_id: str) -> list[Order]:
    return current_domain.repository_for(Order).for_user(user_id)
