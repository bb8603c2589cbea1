"""
Implementation SQLModel du repository AdminUser.
"""

from typing import Optional

from sqlmodel import col, select

from kalanara.core.entities import AdminUser
from kalanara.core.ports.repositories import IAdminUserRepository
from kalanara.core.value_objects import AdminRole
from kalanara.infrastructure.persistence.database import SessionFactory
from kalanara.infrastructure.persistence.models import AdminUserModel


class SQLModelAdminUserRepository(IAdminUserRepository):
    """Repository SQLModel pour les comptes du back-office."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def _to_entity(self, model: AdminUserModel) -> AdminUser:
        return AdminUser(
            id=model.id,
            email=model.email,
            name=model.name,
            role=AdminRole(model.role),
            password_hash=model.password_hash,
            is_active=model.is_active,
            created_at=model.created_at,
        )

    def get_by_id(self, user_id: str) -> Optional[AdminUser]:
        with self._session_factory() as session:
            model = session.get(AdminUserModel, user_id)
            return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        statement = select(AdminUserModel).where(
            AdminUserModel.email == email.strip().lower()
        )
        with self._session_factory() as session:
            model = session.exec(statement).first()
            return self._to_entity(model) if model else None

    def list_all(self) -> list[AdminUser]:
        statement = select(AdminUserModel).order_by(col(AdminUserModel.created_at).desc())
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def save(self, user: AdminUser) -> AdminUser:
        """Sauvegarde un compte (insertion ou mise a jour). L'e-mail est normalise."""
        with self._session_factory() as session:
            existing = session.get(AdminUserModel, user.id) if user.id else None
            if existing:
                existing.email = user.email.strip().lower()
                existing.name = user.name
                existing.role = user.role.value
                existing.password_hash = user.password_hash
                existing.is_active = user.is_active
                model = existing
            else:
                model = AdminUserModel(
                    email=user.email.strip().lower(),
                    name=user.name,
                    role=user.role.value,
                    password_hash=user.password_hash,
                    is_active=user.is_active,
                )
                if user.id:
                    model.id = user.id
            session.add(model)
            session.commit()
            session.refresh(model)
            return self._to_entity(model)
