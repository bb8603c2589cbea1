"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Inclut l'engine SQLModel, les repositories, les clients Midtrans/Resend
et les services metier.
"""

from dependency_injector import containers, providers

from .adapters.email import ResendEmailSender
from .adapters.payment import MidtransConfig, MidtransSnapClient
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db, make_session_factory
from .infrastructure.persistence.repositories import (
    SQLModelAdminUserRepository,
    SQLModelOrderRepository,
    SQLModelReviewRepository,
    SQLModelServiceRepository,
    SQLModelVoucherRepository,
)
from .services.admin_users import AdminUserService
from .services.catalog import CatalogService
from .services.dashboard import DashboardService
from .services.delivery import VoucherDeliveryService
from .services.orders import OrderService
from .services.reviews import ReviewService
from .services.vouchers import VoucherService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        voucher_service = container.voucher_service()

    Pour les tests, la configuration est surchargee :
        container.config.override(Settings(database_url="sqlite://"))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine partage par toutes les sessions
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine)

    # Fabrique de sessions courtes (une par operation de repository)
    session_factory = providers.Singleton(make_session_factory, engine)

    # Repositories - sans etat, la session est ouverte a chaque operation
    service_repository = providers.Singleton(SQLModelServiceRepository, session_factory=session_factory)
    order_repository = providers.Singleton(SQLModelOrderRepository, session_factory=session_factory)
    voucher_repository = providers.Singleton(SQLModelVoucherRepository, session_factory=session_factory)
    review_repository = providers.Singleton(SQLModelReviewRepository, session_factory=session_factory)
    admin_user_repository = providers.Singleton(
        SQLModelAdminUserRepository, session_factory=session_factory
    )

    # Clients externes - Singleton (client httpx partage, cree a la demande)
    # Sans cle, les clients sont crees mais desactives : is_configured / enabled
    midtrans_config = providers.Singleton(MidtransConfig.from_settings, config)
    payment_gateway = providers.Singleton(MidtransSnapClient, config=midtrans_config)
    email_sender = providers.Singleton(
        ResendEmailSender,
        api_key=config.provided.resend_api_key,
        sender=config.provided.email_from,
    )

    # Services metier
    catalog_service = providers.Factory(CatalogService, service_repo=service_repository)

    voucher_service = providers.Factory(
        VoucherService,
        voucher_repo=voucher_repository,
        order_repo=order_repository,
        service_repo=service_repository,
        code_length=config.provided.voucher_code_length,
        max_code_attempts=config.provided.voucher_code_max_attempts,
        validity_months=config.provided.voucher_validity_months,
    )

    delivery_service = providers.Factory(
        VoucherDeliveryService,
        email_sender=email_sender,
        service_repo=service_repository,
        app_url=config.provided.app_url,
    )

    order_service = providers.Factory(
        OrderService,
        order_repo=order_repository,
        service_repo=service_repository,
        payment_gateway=payment_gateway,
        voucher_service=voucher_service,
        delivery_service=delivery_service,
        app_url=config.provided.app_url,
    )

    review_service = providers.Factory(
        ReviewService,
        review_repo=review_repository,
        voucher_repo=voucher_repository,
    )

    admin_user_service = providers.Factory(AdminUserService, user_repo=admin_user_repository)

    dashboard_service = providers.Factory(
        DashboardService,
        order_repo=order_repository,
        voucher_repo=voucher_repository,
        service_repo=service_repository,
        review_repo=review_repository,
    )
