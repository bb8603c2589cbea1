"""
Traduction des erreurs metier en reponses HTTP JSON.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.errors import (
    AdminUserError,
    AuthenticationError,
    CatalogError,
    InvalidCheckoutError,
    KalanaraError,
    OrderNotFoundError,
    OrderNotPaidError,
    OrderStatusError,
    PaymentGatewayError,
    ReviewError,
    ServiceUnavailableError,
    VoucherAlreadyRedeemedError,
    VoucherCodeExhaustedError,
    VoucherError,
    VoucherExpiredError,
    VoucherNotActiveError,
    VoucherNotFoundError,
)

# Ordre significatif : la premiere classe correspondante l'emporte
_STATUS_BY_ERROR: tuple[tuple[type[KalanaraError], int], ...] = (
    (VoucherNotFoundError, status.HTTP_404_NOT_FOUND),
    (OrderNotFoundError, status.HTTP_404_NOT_FOUND),
    (VoucherExpiredError, status.HTTP_409_CONFLICT),
    (VoucherAlreadyRedeemedError, status.HTTP_409_CONFLICT),
    (VoucherNotActiveError, status.HTTP_409_CONFLICT),
    (OrderStatusError, status.HTTP_409_CONFLICT),
    (OrderNotPaidError, status.HTTP_409_CONFLICT),
    (VoucherCodeExhaustedError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (VoucherError, status.HTTP_400_BAD_REQUEST),
    (InvalidCheckoutError, status.HTTP_400_BAD_REQUEST),
    (ServiceUnavailableError, status.HTTP_400_BAD_REQUEST),
    (CatalogError, status.HTTP_400_BAD_REQUEST),
    (ReviewError, status.HTTP_400_BAD_REQUEST),
    (AdminUserError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (PaymentGatewayError, status.HTTP_502_BAD_GATEWAY),
)


def status_for(error: KalanaraError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_type_name(error: KalanaraError) -> str:
    """Nom court exploitable par le client (ex : VoucherExpired)."""
    return type(error).__name__.removesuffix("Error")


async def kalanara_error_handler(request: Request, exc: KalanaraError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("Erreur metier", path=request.url.path, error=str(exc))
    else:
        logger.debug("Requete refusee", path=request.url.path, status=code, error=str(exc))
    return JSONResponse(
        status_code=code,
        content={"error": error_type_name(exc), "detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KalanaraError, kalanara_error_handler)
