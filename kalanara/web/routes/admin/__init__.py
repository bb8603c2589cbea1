"""
Routes du back-office (/api/admin/...).

Toutes les routes exigent une session ; les actions sensibles sont
reservees aux roles SUPER_ADMIN et MANAGER, la gestion des comptes au
seul SUPER_ADMIN.
"""

from fastapi import APIRouter, Depends

from ...security import require_roles
from .dashboard import router as dashboard_router
from .orders import router as orders_router
from .reviews import router as reviews_router
from .services import router as services_router
from .settings import router as settings_router
from .users import router as users_router
from .vouchers import router as vouchers_router

router = APIRouter(prefix="/api/admin", dependencies=[Depends(require_roles())])

router.include_router(dashboard_router)
router.include_router(orders_router)
router.include_router(vouchers_router)
router.include_router(services_router)
router.include_router(reviews_router)
router.include_router(users_router)
router.include_router(settings_router)
