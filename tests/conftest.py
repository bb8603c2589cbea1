"""
Fixtures pytest partagees pour les tests Kalanara.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire et repositories SQLModel
- Horloge figee (FakeClock) pour les regles d'expiration
- Mocks de la passerelle de paiement et de l'envoi d'e-mails
- Services metier cables sur ces dependances
"""

from datetime import datetime, timedelta
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from kalanara.config import Settings
from kalanara.core.entities import Order, Service
from kalanara.core.ports.payment import IEmailSender, IPaymentGateway, PaymentSession
from kalanara.core.value_objects import (
    DeliveryMethod,
    PaymentStatus,
    SendTo,
    ServiceCategory,
)
from kalanara.infrastructure.persistence import create_db_engine, init_db, make_session_factory
from kalanara.infrastructure.persistence.repositories import (
    SQLModelAdminUserRepository,
    SQLModelOrderRepository,
    SQLModelReviewRepository,
    SQLModelServiceRepository,
    SQLModelVoucherRepository,
)
from kalanara.services.delivery import VoucherDeliveryService
from kalanara.services.orders import OrderService
from kalanara.services.vouchers import VoucherService

APP_URL = "https://kalanara.test"
SERVER_KEY = "SB-Mid-server-test"


class FakeClock:
    """Horloge UTC figee, avancable a la main."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.now = self.now + timedelta(days=days, hours=hours)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 9, 30))


@pytest.fixture
def test_settings() -> Settings:
    """Settings de test, sans lecture du fichier .env."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        app_url=APP_URL,
        midtrans_server_key=SERVER_KEY,
        midtrans_client_key="SB-Mid-client-test",
        resend_api_key="re_test",
        session_secret="test-secret-with-enough-entropy-0123456789",
    )


# --- Persistance ------------------------------------------------------------


@pytest.fixture
def engine():
    """Base SQLite en memoire, tables creees."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def service_repo(session_factory) -> SQLModelServiceRepository:
    return SQLModelServiceRepository(session_factory)


@pytest.fixture
def order_repo(session_factory) -> SQLModelOrderRepository:
    return SQLModelOrderRepository(session_factory)


@pytest.fixture
def voucher_repo(session_factory) -> SQLModelVoucherRepository:
    return SQLModelVoucherRepository(session_factory)


@pytest.fixture
def review_repo(session_factory) -> SQLModelReviewRepository:
    return SQLModelReviewRepository(session_factory)


@pytest.fixture
def admin_user_repo(session_factory) -> SQLModelAdminUserRepository:
    return SQLModelAdminUserRepository(session_factory)


@pytest.fixture
def spa_service(service_repo) -> Service:
    """Soin actif du catalogue."""
    return service_repo.save(
        Service(
            name="Royal Javanese Massage",
            description="Traditional massage",
            duration=90,
            price=450000,
            category=ServiceCategory.MASSAGE,
        )
    )


@pytest.fixture
def make_order(order_repo, spa_service, clock) -> Callable[..., Order]:
    """Fabrique de commandes persistees (PENDING par defaut)."""
    counter = {"n": 0}

    def _make(
        status: PaymentStatus = PaymentStatus.PENDING,
        delivery_method: DeliveryMethod = DeliveryMethod.EMAIL,
        send_to: SendTo = SendTo.RECIPIENT,
        recipient_phone: Optional[str] = "081234567890",
        **overrides,
    ) -> Order:
        counter["n"] += 1
        fields = dict(
            customer_name="Budi Santoso",
            customer_email="budi@example.com",
            customer_phone="08198765432",
            service_id=spa_service.id,
            total_amount=spa_service.price,
            payment_status=status,
            payment_order_id=f"KSP-1700000000000-TEST{counter['n']:02d}",
            recipient_name="Siti Rahma",
            recipient_email="siti@example.com",
            recipient_phone=recipient_phone,
            sender_message="Happy birthday!",
            delivery_method=delivery_method,
            send_to=send_to,
            created_at=clock(),
        )
        fields.update(overrides)
        return order_repo.save(Order(**fields))

    return _make


# --- Services externes ------------------------------------------------------


@pytest.fixture
def mock_gateway() -> MagicMock:
    """
    Mock de IPaymentGateway.

    Signature valide et jeton Snap par defaut ; configurer dans chaque
    test pour des comportements specifiques.
    """
    mock = MagicMock(spec=IPaymentGateway)
    mock.is_configured = True
    mock.create_transaction = AsyncMock(
        return_value=PaymentSession(token="snap-token-123", redirect_url="https://snap.test/123")
    )
    mock.verify_signature.return_value = True
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_email_sender() -> MagicMock:
    mock = MagicMock(spec=IEmailSender)
    mock.enabled = True
    mock.send = AsyncMock(return_value="email_123")
    mock.close = AsyncMock()
    return mock


# --- Services metier --------------------------------------------------------


@pytest.fixture
def voucher_service(voucher_repo, order_repo, service_repo, clock) -> VoucherService:
    return VoucherService(
        voucher_repo=voucher_repo,
        order_repo=order_repo,
        service_repo=service_repo,
        clock=clock,
    )


@pytest.fixture
def delivery_service(mock_email_sender, service_repo) -> VoucherDeliveryService:
    return VoucherDeliveryService(
        email_sender=mock_email_sender,
        service_repo=service_repo,
        app_url=APP_URL,
    )


@pytest.fixture
def order_service(
    order_repo, service_repo, mock_gateway, voucher_service, delivery_service, clock
) -> OrderService:
    return OrderService(
        order_repo=order_repo,
        service_repo=service_repo,
        payment_gateway=mock_gateway,
        voucher_service=voucher_service,
        delivery_service=delivery_service,
        app_url=APP_URL,
        clock=clock,
    )
