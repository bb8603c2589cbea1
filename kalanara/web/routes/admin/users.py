"""
Comptes du back-office (SUPER_ADMIN uniquement).
"""

from fastapi import APIRouter, Depends, Request, status

from ....core.value_objects import AdminRole
from ...schemas import AdminUserCreate, AdminUserCreated, AdminUserOut, RoleUpdate
from ...security import require_roles

router = APIRouter(
    prefix="/users",
    tags=["admin"],
    dependencies=[Depends(require_roles(AdminRole.SUPER_ADMIN))],
)


@router.get("", response_model=list[AdminUserOut])
def list_users(request: Request):
    container = request.app.state.container
    return container.admin_user_service().list_users()


@router.post("", response_model=AdminUserCreated, status_code=status.HTTP_201_CREATED)
def create_user(payload: AdminUserCreate, request: Request):
    """Cree un compte ; sans mot de passe, un mot de passe temporaire est retourne."""
    container = request.app.state.container
    user, temporary_password = container.admin_user_service().create_user(
        email=payload.email,
        name=payload.name,
        role=payload.role,
        password=payload.password,
    )
    return AdminUserCreated(
        user=AdminUserOut.model_validate(user),
        temporary_password=temporary_password,
    )


@router.patch("/{user_id}/role", response_model=AdminUserOut)
def change_role(user_id: str, payload: RoleUpdate, request: Request):
    container = request.app.state.container
    return container.admin_user_service().change_role(user_id, payload.role)


@router.post("/{user_id}/deactivate", response_model=AdminUserOut)
def deactivate_user(user_id: str, request: Request):
    container = request.app.state.container
    return container.admin_user_service().deactivate(user_id)
