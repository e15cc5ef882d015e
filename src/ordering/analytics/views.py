"""Admin views: load the full order and product sets, then reduce them."""

from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from ordering.analytics.stats import (
    DashboardStats,
    RevenuePoint,
    SalesAnalytics,
    dashboard_stats,
    export_orders_csv,
    low_stock_products,
    revenue_by_date,
    sales_analytics,
)
from ordering.order.order import Order, OrderStatus


def _all_products() -> list[Product]:
    # Products live in the catalogue context
    with catalogue.domain_context():
        return current_domain.repository_for(Product).all()


def _all_orders() -> list[Order]:
    return current_domain.repository_for(Order).all_newest_first()


def dashboard() -> DashboardStats:
    return dashboard_stats(_all_orders(), _all_products())


def low_stock(threshold: int) -> list[Product]:
    return low_stock_products(_all_products(), threshold=threshold)


def revenue(days: int = 30, now: datetime | None = None) -> list[RevenuePoint]:
    now = now or datetime.now(UTC)
    since = datetime.combine(now.date() - timedelta(days=days - 1), datetime.min.time(), tzinfo=now.tzinfo)
    orders = current_domain.repository_for(Order).created_since(since)
    return revenue_by_date(orders, days=days, now=now)


def sales(now: datetime | None = None) -> SalesAnalytics:
    orders = [
        order
        for order in _all_orders()
        if order.status in (OrderStatus.PAID.value, OrderStatus.SHIPPED.value)
    ]
    return sales_analytics(orders, now=now or datetime.now(UTC))


def orders_csv() -> str:
    return export_orders_csv(_all_orders())
