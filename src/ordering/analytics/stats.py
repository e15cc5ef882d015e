"""Admin aggregation views: pure reductions over order and product records.

Nothing here is stored: each view re-reads the full collections and reduces
them in memory. Date buckets are keyed by UTC calendar day (YYYY-MM-DD) and
always sorted chronologically before any slicing.
"""

import csv
import io
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ordering.order.order import Order, OrderStatus

LOW_STOCK_THRESHOLD = 5
SALES_STATUSES = (OrderStatus.PAID.value, OrderStatus.SHIPPED.value)
EXPORT_HEADERS = ["Order ID", "Email", "Total", "Status", "Tracking", "Date"]


def _round(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DashboardStats:
    total_orders: int
    total_revenue: int
    total_products: int
    pending_orders: int
    processing_orders: int
    delivered_orders: int
    total_stock: int
    items_sold: int
    out_of_stock_products: int


def dashboard_stats(orders: Iterable[Order], products: Iterable) -> DashboardStats:
    orders = list(orders)
    products = list(products)

    by_status = defaultdict(int)
    for order in orders:
        by_status[order.status] += 1

    return DashboardStats(
        total_orders=len(orders),
        total_revenue=_round(sum(order.total for order in orders)),
        total_products=len(products),
        pending_orders=by_status[OrderStatus.PENDING.value],
        processing_orders=by_status[OrderStatus.PROCESSING.value],
        delivered_orders=by_status[OrderStatus.DELIVERED.value],
        total_stock=sum(product.stock or 0 for product in products),
        items_sold=sum(order.item_count for order in orders),
        out_of_stock_products=sum(1 for product in products if product.is_out_of_stock),
    )


def low_stock_products(products: Iterable, threshold: int = LOW_STOCK_THRESHOLD) -> list:
    """Products with a tracked stock level at or below ``threshold``, lowest first."""
    tracked = [product for product in products if product.stock is not None and product.stock <= threshold]
    return sorted(tracked, key=lambda product: (product.stock, product.name))


# ---------------------------------------------------------------------------
# Revenue series
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RevenuePoint:
    day: date
    revenue: int
    orders: int

    @property
    def label(self) -> str:
        return f"{self.day:%b} {self.day.day}"


def revenue_by_date(orders: Iterable[Order], days: int, now: datetime) -> list[RevenuePoint]:
    """Daily revenue for the last ``days`` days, oldest first.

    Every day in the window is present; days without orders carry zero.
    """
    today = now.date()
    first_day = today - timedelta(days=days - 1)

    revenue = defaultdict(float)
    counts = defaultdict(int)
    for order in orders:
        day = order.created_at.date()
        if first_day <= day <= today and order.total:
            revenue[day] += order.total
            counts[day] += 1

    return [
        RevenuePoint(day=day, revenue=_round(revenue[day]), orders=counts[day])
        for day in (first_day + timedelta(days=offset) for offset in range(days))
    ]


@dataclass(frozen=True)
class WeekOverWeek:
    current_week: int
    previous_week: int
    change_percent: float


def week_over_week(series: list[RevenuePoint]) -> WeekOverWeek:
    """Compare the last seven entries of a series with the seven before them."""
    ordered = sorted(series, key=lambda point: point.day)
    current = sum(point.revenue for point in ordered[-7:])
    previous = sum(point.revenue for point in ordered[-14:-7])

    if previous == 0:
        change = 100.0 if current > 0 else 0.0
    else:
        change = round((current - previous) / previous * 100, 1)
    return WeekOverWeek(current_week=current, previous_week=previous, change_percent=change)


# ---------------------------------------------------------------------------
# Sales analytics
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SalesAnalytics:
    weekly_revenue: float
    monthly_revenue: float
    weekly_orders: int
    monthly_orders: int
    chart: list[tuple[date, float]]


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def sales_analytics(orders: Iterable[Order], now: datetime) -> SalesAnalytics:
    """Revenue from paid and shipped orders this week (from Sunday) and this month."""
    today = now.date()
    week_start = start_of_week(today)
    month_start = today.replace(day=1)

    weekly_revenue = monthly_revenue = 0.0
    weekly_orders = monthly_orders = 0
    chart = defaultdict(float)

    for order in orders:
        if order.status not in SALES_STATUSES:
            continue
        day = order.created_at.date()
        chart[day] += order.total
        if day >= week_start:
            weekly_revenue += order.total
            weekly_orders += 1
        if day >= month_start:
            monthly_revenue += order.total
            monthly_orders += 1

    return SalesAnalytics(
        weekly_revenue=weekly_revenue,
        monthly_revenue=monthly_revenue,
        weekly_orders=weekly_orders,
        monthly_orders=monthly_orders,
        chart=sorted(chart.items()),
    )


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------
def export_orders_csv(orders: Iterable[Order]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for order in orders:
        writer.writerow(
            [
                order.id,
                order.email,
                f"{order.total:g}",
                order.status,
                order.tracking_code,
                order.created_at.date().isoformat(),
            ]
        )
    return buffer.getvalue()
