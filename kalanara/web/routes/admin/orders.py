"""
Commandes : liste, detail et confirmation manuelle du paiement.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from ....core.value_objects import AdminRole, PaymentStatus
from ...schemas import MarkPaidOut, OrderOut, OrderStatsOut
from ...security import require_roles

router = APIRouter(prefix="/orders", tags=["admin"])

_MANAGERS = require_roles(AdminRole.SUPER_ADMIN, AdminRole.MANAGER)


@router.get("", response_model=list[OrderOut])
def list_orders(request: Request, status: Optional[PaymentStatus] = None):
    container = request.app.state.container
    return container.order_service().list_orders(status)


@router.get("/stats", response_model=OrderStatsOut)
def order_stats(request: Request):
    container = request.app.state.container
    return container.order_service().order_stats()


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, request: Request):
    container = request.app.state.container
    return container.order_service().get_order(order_id)


@router.post("/{order_id}/mark-paid", response_model=MarkPaidOut, dependencies=[Depends(_MANAGERS)])
async def mark_paid(order_id: str, request: Request):
    """Confirme le paiement hors webhook, emet et livre le voucher."""
    container = request.app.state.container
    order, voucher, report = await container.order_service().mark_paid(order_id)
    return MarkPaidOut(
        order=OrderOut.model_validate(order),
        voucher_code=voucher.code,
        email_sent=report.email_sent,
        whatsapp_url=report.whatsapp_url,
        errors=report.errors,
    )
