"""
Catalogue : administration des soins.
"""

from fastapi import APIRouter, Depends, Request, status

from ....core.entities import Service
from ....core.value_objects import AdminRole
from ...schemas import ServiceCreate, ServiceOut, ServiceUpdate
from ...security import require_roles

router = APIRouter(prefix="/services", tags=["admin"])

_MANAGERS = require_roles(AdminRole.SUPER_ADMIN, AdminRole.MANAGER)


@router.get("", response_model=list[ServiceOut])
def list_services(request: Request):
    """Tous les soins, y compris ceux retires de la vente."""
    container = request.app.state.container
    return container.catalog_service().list_all()


@router.post(
    "",
    response_model=ServiceOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(_MANAGERS)],
)
def create_service(payload: ServiceCreate, request: Request):
    container = request.app.state.container
    return container.catalog_service().create(Service(**payload.model_dump()))


@router.patch("/{service_id}", response_model=ServiceOut, dependencies=[Depends(_MANAGERS)])
def update_service(service_id: str, payload: ServiceUpdate, request: Request):
    container = request.app.state.container
    return container.catalog_service().update(service_id, **payload.model_dump(exclude_unset=True))


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(_MANAGERS)],
)
def deactivate_service(service_id: str, request: Request):
    """Suppression logique : le soin est retire de la boutique."""
    container = request.app.state.container
    container.catalog_service().deactivate(service_id)
