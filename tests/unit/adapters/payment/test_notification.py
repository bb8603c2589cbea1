"""
Tests du parsing des notifications Midtrans et du mapping des statuts.
"""

import pytest

from kalanara.adapters.payment.notification import (
    is_failed_payment,
    is_successful_payment,
    map_transaction_status,
    parse_notification,
)
from kalanara.core.value_objects import PaymentStatus

VALID_PAYLOAD = {
    "order_id": "KSP-1700000000000-ABC123",
    "transaction_status": "settlement",
    "transaction_id": "trx-001",
    "status_code": "200",
    "signature_key": "sig",
    "gross_amount": "450000.00",
    "payment_type": "qris",
    "transaction_time": "2026-03-10 16:30:00",
    "merchant_id": "G123",
    "currency": "IDR",
}


def with_status(transaction_status: str, fraud_status=None):
    payload = dict(VALID_PAYLOAD, transaction_status=transaction_status)
    if fraud_status:
        payload["fraud_status"] = fraud_status
    return parse_notification(payload)


class TestParseNotification:
    """Tests pour parse_notification."""

    def test_valid_payload(self) -> None:
        notification = parse_notification(VALID_PAYLOAD)
        assert notification.order_id == "KSP-1700000000000-ABC123"
        assert notification.gross_amount == "450000.00"
        assert notification.fraud_status is None

    @pytest.mark.parametrize(
        "field",
        ["order_id", "transaction_status", "transaction_id", "status_code",
         "signature_key", "gross_amount", "payment_type"],
    )
    def test_missing_required_field(self, field) -> None:
        payload = {k: v for k, v in VALID_PAYLOAD.items() if k != field}
        assert parse_notification(payload) is None

    def test_non_string_amount_rejected(self) -> None:
        assert parse_notification(dict(VALID_PAYLOAD, gross_amount=450000)) is None

    @pytest.mark.parametrize("payload", [None, [], "settlement"])
    def test_not_an_object(self, payload) -> None:
        assert parse_notification(payload) is None


class TestStatusMapping:
    """Tests du mapping transaction_status -> PaymentStatus."""

    def test_settlement(self) -> None:
        assert map_transaction_status(with_status("settlement")) is PaymentStatus.PAID

    def test_capture_accept(self) -> None:
        assert map_transaction_status(with_status("capture", "accept")) is PaymentStatus.PAID

    def test_capture_challenge(self) -> None:
        assert map_transaction_status(with_status("capture", "challenge")) is PaymentStatus.PENDING

    @pytest.mark.parametrize("status", ["deny", "cancel", "expire"])
    def test_failures(self, status) -> None:
        assert is_failed_payment(status)
        assert map_transaction_status(with_status(status)) is PaymentStatus.FAILED

    @pytest.mark.parametrize("status", ["pending", "refund", "authorize"])
    def test_other_statuses_stay_pending(self, status) -> None:
        assert not is_successful_payment(status, None)
        assert map_transaction_status(with_status(status)) is PaymentStatus.PENDING
