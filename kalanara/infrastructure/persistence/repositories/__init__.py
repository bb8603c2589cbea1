"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans kalanara/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une fabrique de sessions via injection de dependances
  (une session courte par operation)
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from kalanara.infrastructure.persistence.repositories.admin_user_repository import (
    SQLModelAdminUserRepository,
)
from kalanara.infrastructure.persistence.repositories.order_repository import (
    SQLModelOrderRepository,
)
from kalanara.infrastructure.persistence.repositories.review_repository import (
    SQLModelReviewRepository,
)
from kalanara.infrastructure.persistence.repositories.service_repository import (
    SQLModelServiceRepository,
)
from kalanara.infrastructure.persistence.repositories.voucher_repository import (
    SQLModelVoucherRepository,
)

__all__ = [
    "SQLModelAdminUserRepository",
    "SQLModelOrderRepository",
    "SQLModelReviewRepository",
    "SQLModelServiceRepository",
    "SQLModelVoucherRepository",
]
