"""
Routes publiques de la boutique.

Catalogue, checkout Midtrans, page voucher et depot d'avis.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status

from ...services.orders import CheckoutRequest
from ..schemas import (
    CheckoutOut,
    CheckoutPayload,
    PaymentConfigOut,
    ReviewOut,
    ReviewPayload,
    ServiceOut,
    VoucherDetailOut,
    WhatsAppOut,
)

router = APIRouter(prefix="/api", tags=["storefront"])


@router.get("/services", response_model=list[ServiceOut])
def list_services(request: Request):
    """Soins en vente."""
    container = request.app.state.container
    return container.catalog_service().list_active()


@router.get("/services/{service_id}", response_model=ServiceOut)
def get_service(service_id: str, request: Request):
    container = request.app.state.container
    return container.catalog_service().get_active(service_id)


@router.post("/checkout", response_model=CheckoutOut)
async def checkout(payload: CheckoutPayload, request: Request):
    """Cree la commande PENDING et retourne le jeton Snap."""
    container = request.app.state.container
    result = await container.order_service().create_checkout(
        CheckoutRequest(**payload.model_dump())
    )
    return CheckoutOut(
        order_id=result.order_id,
        payment_order_id=result.payment_order_id,
        token=result.token,
        redirect_url=result.redirect_url,
    )


@router.get("/config/payment", response_model=PaymentConfigOut)
def payment_config(request: Request):
    """Parametres publics d'initialisation de snap.js."""
    container = request.app.state.container
    config = container.midtrans_config()
    return PaymentConfigOut(
        enabled=container.config().payment_enabled,
        client_key=config.client_key,
        snap_url=config.snap_url,
        is_production=config.is_production,
    )


@router.get("/vouchers/{voucher_id}", response_model=VoucherDetailOut)
def get_voucher(voucher_id: str, request: Request):
    container = request.app.state.container
    return VoucherDetailOut.model_validate(container.voucher_service().get_view(voucher_id))


@router.get("/vouchers/{voucher_id}/whatsapp", response_model=WhatsAppOut)
def voucher_whatsapp(voucher_id: str, request: Request, phone: Optional[str] = None):
    """Lien wa.me pre-rempli pour partager le voucher."""
    container = request.app.state.container
    voucher = container.voucher_service().get_by_id(voucher_id)
    try:
        url = container.delivery_service().whatsapp_url(voucher, phone=phone)
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return WhatsAppOut(url=url)


@router.post("/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(payload: ReviewPayload, request: Request):
    container = request.app.state.container
    return container.review_service().create_review(
        voucher_id=payload.voucher_id,
        rating=payload.rating,
        comment=payload.comment,
        customer_name=payload.customer_name,
    )
