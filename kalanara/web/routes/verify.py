"""
Verification des vouchers par code.

La consultation est publique ; l'utilisation (redeem) demande une session
du back-office, quel que soit le role.
"""

from fastapi import APIRouter, Depends, Request

from ..schemas import RedeemOut, VoucherDetailOut, VoucherOut
from ..security import SessionUser, require_roles

router = APIRouter(prefix="/api/verify", tags=["verify"])


@router.get("/{code}", response_model=VoucherDetailOut)
def verify_voucher(code: str, request: Request):
    container = request.app.state.container
    return VoucherDetailOut.model_validate(container.voucher_service().verify(code))


@router.post("/{code}/redeem", response_model=RedeemOut)
def redeem_voucher(
    code: str,
    request: Request,
    user: SessionUser = Depends(require_roles()),
):
    container = request.app.state.container
    voucher = container.voucher_service().redeem(code)
    return RedeemOut(
        success=True,
        message=f"Voucher {voucher.code} redeemed successfully!",
        voucher=VoucherOut.model_validate(voucher),
    )
