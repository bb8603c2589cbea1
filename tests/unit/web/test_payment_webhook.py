"""
Tests du webhook Midtrans de bout en bout.

La passerelle reelle (MidtransSnapClient) verifie la signature avec la
cle serveur de test ; seul l'envoi d'e-mails reste mocke.
"""

import pytest
from fastapi.testclient import TestClient

from kalanara.adapters.payment.signature import compute_signature
from kalanara.core.entities import Order, Service
from kalanara.core.value_objects import PaymentStatus
from kalanara.web.app import create_app

SERVER_KEY = "SB-Mid-server-test"
NOTIFICATION_URL = "/api/payments/notification"


@pytest.fixture
def webhook_client(container):
    container.payment_gateway.reset_override()
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def pending_order(container, webhook_client) -> Order:
    service = container.service_repository().save(
        Service(name="Radiant Glow Facial", duration=75, price=400000)
    )
    return container.order_repository().save(
        Order(
            customer_name="Budi Santoso",
            customer_email="budi@example.com",
            customer_phone="08198765432",
            service_id=service.id,
            total_amount=service.price,
            payment_order_id="KSP-1700000000000-HOOK01",
            recipient_name="Siti Rahma",
            recipient_email="siti@example.com",
        )
    )


def signed_notification(order: Order, transaction_status: str = "settlement", **overrides) -> dict:
    payload = {
        "order_id": order.payment_order_id,
        "transaction_status": transaction_status,
        "transaction_id": "trx-hook-1",
        "status_code": "200",
        "gross_amount": "400000.00",
        "payment_type": "gopay",
        "transaction_time": "2026-03-10 16:30:00",
    }
    payload.update(overrides)
    payload["signature_key"] = compute_signature(
        payload["order_id"], payload["status_code"], payload["gross_amount"], SERVER_KEY
    )
    return payload


class TestPaymentWebhook:
    """Tests de POST /api/payments/notification."""

    def test_settlement_marks_paid_and_issues_voucher(
        self, webhook_client, container, pending_order, mock_email_sender
    ) -> None:
        response = webhook_client.post(NOTIFICATION_URL, json=signed_notification(pending_order))

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "Notification processed"}
        order = container.order_repository().get_by_id(pending_order.id)
        assert order.payment_status is PaymentStatus.PAID
        voucher = container.voucher_repository().get_by_order_id(order.id)
        assert voucher is not None
        assert order.voucher_id == voucher.id
        mock_email_sender.send.assert_awaited_once()

    def test_replayed_notification(self, webhook_client, container, pending_order) -> None:
        payload = signed_notification(pending_order)

        webhook_client.post(NOTIFICATION_URL, json=payload)
        response = webhook_client.post(NOTIFICATION_URL, json=payload)

        assert response.json()["message"] == "Already processed"
        assert len(container.voucher_repository().list_all()) == 1

    def test_tampered_amount_rejected(self, webhook_client, container, pending_order) -> None:
        payload = signed_notification(pending_order)
        payload["gross_amount"] = "1000.00"

        response = webhook_client.post(NOTIFICATION_URL, json=payload)

        assert response.status_code == 200
        assert response.json()["message"] == "Invalid signature"
        order = container.order_repository().get_by_id(pending_order.id)
        assert order.payment_status is PaymentStatus.PENDING

    def test_expire_marks_failed(self, webhook_client, container, pending_order) -> None:
        webhook_client.post(
            NOTIFICATION_URL, json=signed_notification(pending_order, "expire", status_code="407")
        )
        order = container.order_repository().get_by_id(pending_order.id)
        assert order.payment_status is PaymentStatus.FAILED

    def test_unknown_order(self, webhook_client, pending_order) -> None:
        payload = signed_notification(pending_order, order_id="KSP-0-NOPE")
        assert webhook_client.post(NOTIFICATION_URL, json=payload).json()["message"] == "Order not found"

    def test_malformed_body(self, webhook_client) -> None:
        response = webhook_client.post(
            NOTIFICATION_URL, content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Invalid notification structure"

    def test_missing_server_key(self, container, test_settings) -> None:
        container.payment_gateway.reset_override()
        container.config.override(test_settings.model_copy(update={"midtrans_server_key": None}))
        with TestClient(create_app(container)) as client:
            response = client.post(
                NOTIFICATION_URL,
                json={
                    "order_id": "KSP-1",
                    "transaction_status": "settlement",
                    "transaction_id": "t",
                    "status_code": "200",
                    "signature_key": "s",
                    "gross_amount": "1.00",
                    "payment_type": "qris",
                },
            )

        assert response.status_code == 500
        assert response.json()["status"] == "error"
