"""
Tests du VoucherService : emission, expiration paresseuse, utilisation.

L'horloge est figee (FakeClock) pour controler les regles d'expiration.
"""

from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from kalanara.core.errors import (
    OrderNotPaidError,
    VoucherAlreadyRedeemedError,
    VoucherExpiredError,
    VoucherIssueError,
    VoucherNotActiveError,
    VoucherNotFoundError,
)
from kalanara.core.value_objects import PaymentStatus, VoucherStatus


@pytest.fixture
def paid_order(make_order):
    return make_order(status=PaymentStatus.PAID)


@pytest.fixture
def voucher(voucher_service, paid_order):
    return voucher_service.issue_for_order(paid_order)


class TestIssueForOrder:
    """Tests pour issue_for_order."""

    def test_issues_active_voucher(self, voucher_service, paid_order, spa_service) -> None:
        voucher = voucher_service.issue_for_order(paid_order)

        assert voucher.status is VoucherStatus.ACTIVE
        assert len(voucher.code) == 5
        assert voucher.order_id == paid_order.id
        assert voucher.service_id == spa_service.id
        assert voucher.recipient_name == "Siti Rahma"
        assert voucher.sender_name == "Budi Santoso"
        assert voucher.amount == paid_order.total_amount

    def test_expiry_is_twelve_months_after_issue(self, voucher_service, paid_order) -> None:
        voucher = voucher_service.issue_for_order(paid_order)
        assert voucher.expiry_date == date(2027, 3, 10)

    def test_voucher_linked_back_to_order(self, voucher_service, paid_order, order_repo) -> None:
        voucher = voucher_service.issue_for_order(paid_order)
        assert order_repo.get_by_id(paid_order.id).voucher_id == voucher.id

    def test_idempotent(self, voucher_service, paid_order, voucher_repo) -> None:
        """Un second appel retourne le meme voucher sans en creer d'autre."""
        first = voucher_service.issue_for_order(paid_order)
        second = voucher_service.issue_for_order(paid_order)

        assert first.id == second.id
        assert len(voucher_repo.list_all()) == 1

    def test_refuses_unpaid_order(self, voucher_service, make_order) -> None:
        with pytest.raises(OrderNotPaidError):
            voucher_service.issue_for_order(make_order(status=PaymentStatus.PENDING))

    def test_recipient_email_falls_back_to_customer(self, voucher_service, make_order) -> None:
        order = make_order(status=PaymentStatus.PAID, recipient_email=None)
        voucher = voucher_service.issue_for_order(order)
        assert voucher.recipient_email == "budi@example.com"

    def test_requires_existing_service(self, voucher_service, make_order) -> None:
        order = make_order(status=PaymentStatus.PAID, service_id="missing")
        with pytest.raises(VoucherIssueError):
            voucher_service.issue_for_order(order)

    def test_concurrent_issue_returns_existing_voucher(
        self, voucher_service, paid_order, voucher_repo
    ) -> None:
        """Si l'insertion echoue parce qu'un voucher vient d'etre cree, il est retourne."""
        existing = voucher_service.issue_for_order(paid_order)

        with patch.object(voucher_repo, "get_by_order_id", side_effect=[None, existing]):
            with patch.object(voucher_repo, "save", side_effect=IntegrityError("", {}, Exception())):
                result = voucher_service.issue_for_order(paid_order)

        assert result.id == existing.id

    def test_codes_unique_over_many_orders(self, voucher_service, make_order) -> None:
        codes = {
            voucher_service.issue_for_order(make_order(status=PaymentStatus.PAID)).code
            for _ in range(30)
        }
        assert len(codes) == 30


class TestLookupAndExpiry:
    """Tests de consultation et d'expiration paresseuse."""

    def test_verify_unknown_code(self, voucher_service) -> None:
        with pytest.raises(VoucherNotFoundError):
            voucher_service.verify("NOPE1")

    def test_verify_is_case_insensitive(self, voucher_service, voucher) -> None:
        view = voucher_service.verify(voucher.code.lower())

        assert view.voucher.id == voucher.id
        assert view.status is VoucherStatus.ACTIVE
        assert view.is_redeemable is True
        assert view.service.name == "Royal Javanese Massage"

    def test_valid_on_expiry_day(self, voucher_service, voucher, clock) -> None:
        """Le dernier jour de validite est inclus."""
        clock.advance(days=365)  # 2027-03-10
        assert voucher_service.verify(voucher.code).status is VoucherStatus.ACTIVE

    def test_expired_persisted_on_lookup(self, voucher_service, voucher, voucher_repo, clock) -> None:
        clock.advance(days=366)

        view = voucher_service.verify(voucher.code)

        assert view.status is VoucherStatus.EXPIRED
        assert view.is_redeemable is False
        assert voucher_repo.get_by_id(voucher.id).status is VoucherStatus.EXPIRED

    def test_list_vouchers_filters_by_effective_status(
        self, voucher_service, make_order, clock
    ) -> None:
        first = voucher_service.issue_for_order(make_order(status=PaymentStatus.PAID))
        clock.advance(days=30)
        voucher_service.issue_for_order(make_order(status=PaymentStatus.PAID))
        clock.advance(days=340)  # le premier est expire, pas le second

        expired = voucher_service.list_vouchers(VoucherStatus.EXPIRED)
        active = voucher_service.list_vouchers(VoucherStatus.ACTIVE)

        assert [v.id for v in expired] == [first.id]
        assert len(active) == 1

    def test_get_by_id_unknown(self, voucher_service) -> None:
        with pytest.raises(VoucherNotFoundError):
            voucher_service.get_by_id("missing")


class TestRedeem:
    """Tests pour redeem."""

    def test_redeem_active_voucher(self, voucher_service, voucher, clock) -> None:
        redeemed = voucher_service.redeem(voucher.code)

        assert redeemed.status is VoucherStatus.REDEEMED
        assert redeemed.redeemed_at == clock()

    def test_second_redeem_rejected(self, voucher_service, voucher) -> None:
        voucher_service.redeem(voucher.code)
        with pytest.raises(VoucherAlreadyRedeemedError):
            voucher_service.redeem(voucher.code)

    def test_redeem_past_expiry_rejected(self, voucher_service, voucher, clock) -> None:
        clock.advance(days=366)
        with pytest.raises(VoucherExpiredError):
            voucher_service.redeem(voucher.code)

    def test_redeem_unknown_code(self, voucher_service) -> None:
        with pytest.raises(VoucherNotFoundError):
            voucher_service.redeem("ZZZZZ")

    def test_lost_race_reports_already_redeemed(
        self, voucher_service, voucher, voucher_repo
    ) -> None:
        """Une requete concurrente a utilise le voucher entre lecture et mise a jour."""
        original = voucher_repo.transition_status

        def concurrent_redeem(voucher_id, expected, new, redeemed_at=None):
            original(voucher_id, expected, new, redeemed_at=redeemed_at)
            return False

        with patch.object(voucher_repo, "transition_status", side_effect=concurrent_redeem):
            with pytest.raises(VoucherAlreadyRedeemedError):
                voucher_service.redeem(voucher.code)

    def test_redeemed_voucher_never_becomes_expired(
        self, voucher_service, voucher, voucher_repo, clock
    ) -> None:
        """Transitions monotones : REDEEMED reste REDEEMED apres la date."""
        voucher_service.redeem(voucher.code)
        clock.advance(days=400)

        assert voucher_service.verify(voucher.code).status is VoucherStatus.REDEEMED
        assert voucher_repo.get_by_id(voucher.id).status is VoucherStatus.REDEEMED


class TestExtendAndVoid:
    """Tests des actions du back-office."""

    def test_extend_active(self, voucher_service, voucher) -> None:
        extended = voucher_service.extend(voucher.id, 30)
        assert extended.expiry_date == date(2027, 4, 9)

    def test_extend_rejects_non_positive_days(self, voucher_service, voucher) -> None:
        with pytest.raises(ValueError):
            voucher_service.extend(voucher.id, 0)

    def test_extend_redeemed_rejected(self, voucher_service, voucher) -> None:
        voucher_service.redeem(voucher.code)
        with pytest.raises(VoucherNotActiveError):
            voucher_service.extend(voucher.id, 30)

    def test_void_makes_voucher_unusable(self, voucher_service, voucher) -> None:
        voided = voucher_service.void(voucher.id)

        assert voided.status is VoucherStatus.EXPIRED
        with pytest.raises(VoucherExpiredError):
            voucher_service.redeem(voucher.code)

    def test_void_twice_rejected(self, voucher_service, voucher) -> None:
        voucher_service.void(voucher.id)
        with pytest.raises(VoucherNotActiveError):
            voucher_service.void(voucher.id)
