"""Integration tests for customer order views and the admin back office."""

from datetime import timedelta

import pytest
from protean.utils.globals import current_domain

from ordering.order.order import Order
from ordering.order.queries import get_order


class TestCustomerOrderEndpoints:
    def test_list_own_orders(self, client, saved_order):
        mine = saved_order(user_id="user-001")
        saved_order(user_id="user-002")

        response = client.get("/orders", params={"user_id": "user-001"})

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [str(mine.id)]

    def test_order_detail(self, client, saved_order):
        order = saved_order()
        body = client.get(f"/orders/{order.id}").json()
        assert body["email"] == "ada@example.com"
        assert body["items"][0]["quantity"] == 3
        assert body["shipping_address"] == "12 Marina Road, Lagos, Lagos 100001"

    def test_unknown_order_is_404(self, client):
        assert client.get("/orders/nope").status_code == 404

    def test_invoice_is_html(self, client, saved_order):
        order = saved_order()
        response = client.get(f"/orders/{order.id}/invoice")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "INVOICE" in response.text


class TestAdminOrders:
    def test_list_all_orders_newest_first(self, client, saved_order):
        old = saved_order(age=timedelta(days=3))
        new = saved_order()
        body = client.get("/admin/orders").json()
        assert [order["id"] for order in body] == [str(new.id), str(old.id)]

    def test_status_update_is_visible_to_customer(self, client, saved_order):
        order = saved_order(user_id="user-001")
        response = client.put(f"/admin/orders/{order.id}/status", json={"status": "shipped"})
        assert response.status_code == 200

        [customer_view] = client.get("/orders", params={"user_id": "user-001"}).json()
        assert customer_view["status"] == "shipped"

    def test_unknown_status_is_400(self, client, saved_order):
        order = saved_order()
        response = client.put(f"/admin/orders/{order.id}/status", json={"status": "lost"})
        assert response.status_code == 400
        assert "status" in response.json()["error"]

    def test_assign_tracking_code(self, client, saved_order):
        order = saved_order()
        response = client.put(f"/admin/orders/{order.id}/tracking", json={"tracking_code": "TRK-9"})
        assert response.status_code == 200
        assert response.json()["tracking_code"] == "TRK-9"

    def test_export_csv(self, client, saved_order):
        order = saved_order()
        response = client.get("/admin/orders/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        assert str(order.id) in response.text

    def test_expire_stale_orders(self, client, saved_order):
        stale = saved_order(age=timedelta(hours=72))
        response = client.post("/admin/maintenance/expire-orders", json={})
        assert response.status_code == 200
        assert response.json()["expired_order_ids"] == [str(stale.id)]
        assert get_order(stale.id).status == "cancelled"


class TestAdminReports:
    def test_dashboard(self, client, saved_order):
        saved_order()
        body = client.get("/admin/dashboard").json()
        assert body["total_orders"] == 1
        assert body["pending_orders"] == 1
        assert body["total_revenue"] == 5225

    def test_revenue_series_with_comparison(self, client, saved_order):
        saved_order()
        body = client.get("/admin/revenue", params={"days": 14}).json()
        assert body["days"] == 14
        assert len(body["series"]) == 14
        dates = [point["date"] for point in body["series"]]
        assert dates == sorted(dates)
        assert body["current_week"] == 5225
        assert body["previous_week"] == 0
        assert body["change_percent"] == 100.0

    def test_sales(self, client, saved_order):
        order = saved_order()
        order.mark_paid("cs_test_1")
        current_domain.repository_for(Order).add(order)

        body = client.get("/admin/sales").json()

        assert body["weekly_orders"] == 1
        assert body["monthly_revenue"] == 5225
        assert len(body["chart_data"]) == 1

    def test_low_stock(self, client):
        client.post("/products", json={"name": "Milo", "price": 4500, "category": "packaged-foods", "stock": 1})
        body = client.get("/admin/low-stock").json()
        assert [product["name"] for product in body] == ["Milo"]


class TestAdminAccess:
    @pytest.fixture()
    def secret(self, monkeypatch):
        monkeypatch.setenv("ADMIN_SECRET", "s3cret")
        return "s3cret"

    def test_missing_secret_header_is_401(self, client, secret):
        assert client.get("/admin/orders").status_code == 401

    def test_wrong_secret_is_401(self, client, secret):
        assert client.get("/admin/orders", headers={"X-Admin-Secret": "nope"}).status_code == 401

    def test_correct_secret_is_allowed(self, client, secret):
        assert client.get("/admin/orders", headers={"X-Admin-Secret": secret}).status_code == 200

    def test_production_without_secret_is_403(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert client.get("/admin/dashboard").status_code == 403

    def test_customer_routes_need_no_secret(self, client, secret, saved_order):
        order = saved_order()
        assert client.get(f"/orders/{order.id}").status_code == 200
