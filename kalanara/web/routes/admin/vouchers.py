"""
Vouchers : liste, utilisation, prolongation et annulation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ....core.value_objects import AdminRole, VoucherStatus
from ...schemas import ExtendPayload, VoucherOut
from ...security import require_roles

router = APIRouter(prefix="/vouchers", tags=["admin"])

_MANAGERS = require_roles(AdminRole.SUPER_ADMIN, AdminRole.MANAGER)


@router.get("", response_model=list[VoucherOut])
def list_vouchers(request: Request, status: Optional[VoucherStatus] = None):
    """Vouchers, filtres par statut effectif."""
    container = request.app.state.container
    return container.voucher_service().list_vouchers(status)


@router.post("/{code}/redeem", response_model=VoucherOut)
def redeem(code: str, request: Request):
    container = request.app.state.container
    return container.voucher_service().redeem(code)


@router.post("/{voucher_id}/extend", response_model=VoucherOut, dependencies=[Depends(_MANAGERS)])
def extend(voucher_id: str, payload: ExtendPayload, request: Request):
    container = request.app.state.container
    try:
        return container.voucher_service().extend(voucher_id, payload.days)
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/{voucher_id}/void", response_model=VoucherOut, dependencies=[Depends(_MANAGERS)])
def void(voucher_id: str, request: Request):
    container = request.app.state.container
    return container.voucher_service().void(voucher_id)
