"""
Application FastAPI de Kalanara.

Initialise l'application web avec le Container DI, enregistre la
traduction des erreurs metier et monte les routes.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from .. import __version__
from ..container import Container
from .errors import register_exception_handlers
from .routes.admin import router as admin_router
from .routes.auth import router as auth_router
from .routes.payments import router as payments_router
from .routes.storefront import router as storefront_router
from .routes.verify import router as verify_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au demarrage et ferme les clients HTTP a l'arret."""
    container: Container = getattr(app.state, "container", None) or Container()
    container.database.init()
    app.state.container = container
    logger.info("Application demarree", version=__version__)
    yield
    await container.payment_gateway().close()
    await container.email_sender().close()
    container.shutdown_resources()


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container pre-configure (tests) ; sinon cree au demarrage
    """
    application = FastAPI(title="Kalanara Spa Vouchers", version=__version__, lifespan=lifespan)
    if container is not None:
        application.state.container = container

    register_exception_handlers(application)

    application.include_router(storefront_router)
    application.include_router(verify_router)
    application.include_router(payments_router)
    application.include_router(auth_router)
    application.include_router(admin_router)

    @application.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": __version__}

    return application


app = create_app()
