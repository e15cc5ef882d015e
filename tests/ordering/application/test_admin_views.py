"""Application tests for the admin views over both contexts."""

from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.management import AddProduct
from ordering.analytics import views
from ordering.order.order import Order


def _add_products(*products):
    with catalogue.domain_context():
        for fields in products:
            current_domain.process(AddProduct(category="packaged-foods", **fields), asynchronous=False)


def _pay(order):
    order.mark_paid("cs_test_1")
    current_domain.repository_for(Order).add(order)


class TestDashboard:
    def test_scans_orders_and_products(self, saved_order):
        saved_order()
        _pay(saved_order())
        _add_products({"name": "Milo", "price": 4500})

        stats = views.dashboard()

        assert stats.total_orders == 2
        assert stats.total_products == 1
        assert stats.pending_orders == 1
        assert stats.total_revenue == 2 * 5225


class TestRevenue:
    def test_series_covers_requested_days(self, saved_order):
        saved_order()
        saved_order(age=timedelta(days=2))
        saved_order(age=timedelta(days=45))

        series = views.revenue(days=30, now=datetime.now(UTC))

        assert len(series) == 30
        assert series == sorted(series, key=lambda point: point.day)
        assert sum(point.orders for point in series) == 2
        assert series[-1].revenue == 5225


class TestSales:
    def test_counts_paid_orders_this_week(self, saved_order):
        _pay(saved_order())
        saved_order()

        analytics = views.sales(now=datetime.now(UTC))

        assert analytics.weekly_orders == 1
        assert analytics.weekly_revenue == 5225


class TestLowStock:
    def test_lists_low_stock_products(self):
        _add_products(
            {"name": "Milo", "price": 4500, "stock": 2},
            {"name": "Nido", "price": 9000, "stock": 20},
        )
        assert [product.name for product in views.low_stock(threshold=5)] == ["Milo"]

    def test_stock_at_threshold_is_listed(self):
        _add_products(
            {"name": "Milo", "price": 4500, "stock": 5},
            {"name": "Nido", "price": 9000, "stock": 6},
        )
        assert [product.name for product in views.low_stock(threshold=5)] == ["Milo"]


class TestCsvExport:
    def test_exports_every_order(self, saved_order):
        first = saved_order()
        second = saved_order()

        lines = views.orders_csv().strip().splitlines()

        assert lines[0] == "Order ID,Email,Total,Status,Tracking,Date"
        assert len(lines) == 3
        assert {line.split(",")[0] for line in lines[1:]} == {str(first.id), str(second.id)}
