"""
Fixtures des tests de l'API web.

Le Container est surcharge : Settings de test (SQLite en memoire),
passerelle de paiement et envoi d'e-mails mockes.
"""

from collections.abc import Callable

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from kalanara.container import Container
from kalanara.core.entities import Order, Service
from kalanara.core.value_objects import AdminRole, PaymentStatus, ServiceCategory
from kalanara.web.app import create_app

ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
def container(test_settings, mock_gateway, mock_email_sender) -> Container:
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.payment_gateway.override(providers.Object(mock_gateway))
    container.email_sender.override(providers.Object(mock_email_sender))
    yield container
    container.reset_singletons()


@pytest.fixture
def client(container) -> TestClient:
    """Client HTTPS (le cookie de session est marque Secure)."""
    with TestClient(create_app(container), base_url="https://testserver") as test_client:
        yield test_client


@pytest.fixture
def web_service(container, client) -> Service:
    return container.service_repository().save(
        Service(
            name="Royal Javanese Massage",
            duration=90,
            price=450000,
            category=ServiceCategory.MASSAGE,
        )
    )


@pytest.fixture
def paid_voucher(container, web_service):
    """Voucher ACTIVE emis pour une commande payee."""
    order = container.order_repository().save(
        Order(
            customer_name="Budi Santoso",
            customer_email="budi@example.com",
            customer_phone="08198765432",
            service_id=web_service.id,
            total_amount=web_service.price,
            payment_status=PaymentStatus.PAID,
            payment_order_id="KSP-1700000000000-WEB001",
            recipient_name="Siti Rahma",
            recipient_email="siti@example.com",
            recipient_phone="081234567890",
        )
    )
    return container.voucher_service().issue_for_order(order)


@pytest.fixture
def login(container, client) -> Callable[[AdminRole], None]:
    """Cree un compte du role donne et ouvre une session sur le client."""

    def _login(role: AdminRole = AdminRole.SUPER_ADMIN) -> None:
        email = f"{role.value.lower()}@kalanara.test"
        if container.admin_user_repository().get_by_email(email) is None:
            container.admin_user_service().create_user(email, role.value.title(), role, ADMIN_PASSWORD)
        response = client.post("/admin/login", json={"email": email, "password": ADMIN_PASSWORD})
        assert response.status_code == 200

    return _login
