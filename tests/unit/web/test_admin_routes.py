"""
Tests du back-office : session, roles et actions sur commandes et vouchers.
"""

import pytest

from kalanara.core.entities import Order
from kalanara.core.value_objects import AdminRole


@pytest.fixture
def pending_order(container, web_service) -> Order:
    return container.order_repository().save(
        Order(
            customer_name="Budi Santoso",
            customer_email="budi@example.com",
            customer_phone="08198765432",
            service_id=web_service.id,
            total_amount=web_service.price,
            payment_order_id="KSP-1700000000000-ADM001",
            recipient_name="Siti Rahma",
            recipient_email="siti@example.com",
        )
    )


class TestSession:
    """Tests de /admin/login, /admin/me et /admin/logout."""

    def test_login_sets_httponly_cookie(self, client, container) -> None:
        container.admin_user_service().create_user(
            "owner@kalanara.test", "Owner", AdminRole.SUPER_ADMIN, "pw-123456"
        )

        response = client.post(
            "/admin/login", json={"email": "owner@kalanara.test", "password": "pw-123456"}
        )

        assert response.status_code == 200
        assert "password_hash" not in response.json()
        cookie = response.headers["set-cookie"]
        assert "kalanara_session=" in cookie
        assert "HttpOnly" in cookie

    def test_bad_credentials(self, client) -> None:
        response = client.post("/admin/login", json={"email": "x@kalanara.test", "password": "nope"})
        assert response.status_code == 401

    def test_me_and_logout(self, client, login) -> None:
        login(AdminRole.MANAGER)
        assert client.get("/admin/me").json()["role"] == "MANAGER"

        client.post("/admin/logout")
        assert client.get("/admin/me").status_code == 401

    def test_forged_cookie_rejected(self, client) -> None:
        client.cookies.set("kalanara_session", "not-a-jwt")
        assert client.get("/api/admin/dashboard").status_code == 401


class TestRoleChecks:
    """Tests des restrictions par role."""

    def test_dashboard_requires_session(self, client) -> None:
        assert client.get("/api/admin/dashboard").status_code == 401

    def test_staff_reads_dashboard(self, client, login) -> None:
        login(AdminRole.STAFF)
        body = client.get("/api/admin/dashboard").json()
        assert len(body["revenue_data"]) == 7

    def test_staff_cannot_mark_paid(self, client, login, pending_order) -> None:
        login(AdminRole.STAFF)
        response = client.post(f"/api/admin/orders/{pending_order.id}/mark-paid")
        assert response.status_code == 403

    def test_manager_cannot_manage_users(self, client, login) -> None:
        login(AdminRole.MANAGER)
        assert client.get("/api/admin/users").status_code == 403

    def test_deactivated_account_loses_session(self, client, login, container) -> None:
        login(AdminRole.MANAGER)
        manager = container.admin_user_repository().get_by_email("manager@kalanara.test")
        container.admin_user_service().deactivate(manager.id)

        assert client.get("/api/admin/dashboard").status_code == 401

    def test_demotion_applies_to_open_session(
        self, client, login, container, pending_order
    ) -> None:
        login(AdminRole.MANAGER)
        manager = container.admin_user_repository().get_by_email("manager@kalanara.test")
        container.admin_user_service().change_role(manager.id, AdminRole.STAFF)

        assert client.get("/admin/me").json()["role"] == "STAFF"
        response = client.post(f"/api/admin/orders/{pending_order.id}/mark-paid")
        assert response.status_code == 403


class TestOrderAdmin:
    """Tests de /api/admin/orders."""

    def test_mark_paid_issues_voucher(self, client, login, pending_order, mock_email_sender) -> None:
        login(AdminRole.MANAGER)

        response = client.post(f"/api/admin/orders/{pending_order.id}/mark-paid")

        assert response.status_code == 200
        body = response.json()
        assert body["order"]["payment_status"] == "PAID"
        assert len(body["voucher_code"]) == 5
        assert body["email_sent"] is True
        mock_email_sender.send.assert_awaited_once()

    def test_list_and_stats(self, client, login, pending_order) -> None:
        login(AdminRole.STAFF)

        assert len(client.get("/api/admin/orders").json()) == 1
        assert client.get("/api/admin/orders", params={"status": "PAID"}).json() == []
        stats = client.get("/api/admin/orders/stats").json()
        assert stats["pending_orders"] == 1
        assert stats["total_revenue"] == 0

    def test_unknown_order(self, client, login) -> None:
        login(AdminRole.STAFF)
        assert client.get("/api/admin/orders/missing").status_code == 404


class TestVoucherAdmin:
    """Tests de /api/admin/vouchers."""

    def test_extend(self, client, login, paid_voucher) -> None:
        login(AdminRole.MANAGER)
        response = client.post(f"/api/admin/vouchers/{paid_voucher.id}/extend", json={"days": 30})
        assert response.status_code == 200
        assert response.json()["expiry_date"] > paid_voucher.expiry_date.isoformat()

    def test_extend_rejects_zero_days(self, client, login, paid_voucher) -> None:
        login(AdminRole.MANAGER)
        response = client.post(f"/api/admin/vouchers/{paid_voucher.id}/extend", json={"days": 0})
        assert response.status_code == 422

    def test_void_then_redeem(self, client, login, paid_voucher) -> None:
        login(AdminRole.MANAGER)

        assert client.post(f"/api/admin/vouchers/{paid_voucher.id}/void").json()["status"] == "EXPIRED"
        response = client.post(f"/api/admin/vouchers/{paid_voucher.code}/redeem")

        assert response.status_code == 409
        assert response.json()["error"] == "VoucherExpired"

    def test_list_by_status(self, client, login, paid_voucher) -> None:
        login(AdminRole.STAFF)
        active = client.get("/api/admin/vouchers", params={"status": "ACTIVE"}).json()
        assert [v["code"] for v in active] == [paid_voucher.code]


class TestCatalogAndUsersAdmin:
    """Tests des soins, avis, comptes et parametres."""

    def test_service_lifecycle(self, client, login) -> None:
        login(AdminRole.MANAGER)

        created = client.post(
            "/api/admin/services",
            json={"name": "Hot Stone", "duration": 60, "price": 300000, "category": "BODY_TREATMENT"},
        )
        assert created.status_code == 201
        service_id = created.json()["id"]

        patched = client.patch(f"/api/admin/services/{service_id}", json={"price": 320000})
        assert patched.json()["price"] == 320000

        assert client.delete(f"/api/admin/services/{service_id}").status_code == 204
        assert client.get("/api/services").json() == []
        assert client.get("/api/admin/services").json()[0]["is_active"] is False

    def test_invalid_service(self, client, login) -> None:
        login(AdminRole.MANAGER)
        response = client.post("/api/admin/services", json={"name": "X", "duration": 0, "price": 1})
        assert response.status_code == 400
        assert response.json()["error"] == "Catalog"

    def test_create_user_returns_temporary_password(self, client, login) -> None:
        login(AdminRole.SUPER_ADMIN)

        response = client.post("/api/admin/users", json={"email": "new@kalanara.test", "role": "STAFF"})

        assert response.status_code == 201
        assert response.json()["temporary_password"]
        assert response.json()["user"]["role"] == "STAFF"

    def test_last_super_admin_protected(self, client, login) -> None:
        login(AdminRole.SUPER_ADMIN)
        me = client.get("/admin/me").json()
        response = client.patch(f"/api/admin/users/{me['id']}/role", json={"role": "STAFF"})
        assert response.status_code == 400

    def test_settings_hide_secrets(self, client, login) -> None:
        login(AdminRole.MANAGER)
        body = client.get("/api/admin/settings").json()
        assert body["payment_enabled"] is True
        assert "session_secret" not in body
        assert "midtrans_server_key" not in body

    def test_delete_unknown_review(self, client, login) -> None:
        login(AdminRole.MANAGER)
        assert client.delete("/api/admin/reviews/missing").status_code == 400
