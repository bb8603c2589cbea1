"""Configuration courante, en lecture seule et sans secrets."""

from fastapi import APIRouter, Depends, Request

from ....core.value_objects import AdminRole
from ...schemas import SettingsOut
from ...security import require_roles

router = APIRouter(tags=["admin"])


@router.get(
    "/settings",
    response_model=SettingsOut,
    dependencies=[Depends(require_roles(AdminRole.SUPER_ADMIN, AdminRole.MANAGER))],
)
def read_settings(request: Request):
    settings = request.app.state.container.config()
    return SettingsOut(
        app_url=settings.app_url,
        voucher_code_length=settings.voucher_code_length,
        voucher_validity_months=settings.voucher_validity_months,
        payment_enabled=settings.payment_enabled,
        midtrans_is_production=settings.midtrans_is_production,
        email_enabled=settings.email_enabled,
        email_from=settings.email_from,
        session_ttl_minutes=settings.session_ttl_minutes,
    )
