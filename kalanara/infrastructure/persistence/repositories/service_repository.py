"""
Implementation SQLModel du repository Service.

Implemente l'interface IServiceRepository pour le catalogue de soins.
"""

from typing import Optional

from sqlmodel import select

from kalanara.core.entities import Service
from kalanara.core.ports.repositories import IServiceRepository
from kalanara.core.value_objects import ServiceCategory
from kalanara.infrastructure.persistence.database import SessionFactory
from kalanara.infrastructure.persistence.models import ServiceModel
from kalanara.utils.clock import utcnow


class SQLModelServiceRepository(IServiceRepository):
    """
    Repository SQLModel pour les soins.

    Implemente IServiceRepository avec conversion bidirectionnelle
    entre l'entite Service (domaine) et ServiceModel (persistance).
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """
        Initialise le repository avec une fabrique de sessions.

        Args :
            session_factory : Callable retournant une nouvelle Session SQLModel
        """
        self._session_factory = session_factory

    def _to_entity(self, model: ServiceModel) -> Service:
        return Service(
            id=model.id,
            name=model.name,
            description=model.description,
            duration=model.duration,
            price=model.price,
            category=ServiceCategory(model.category),
            image_url=model.image_url,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def get_by_id(self, service_id: str) -> Optional[Service]:
        """Recupere un soin par son ID."""
        with self._session_factory() as session:
            model = session.get(ServiceModel, service_id)
            return self._to_entity(model) if model else None

    def list_active(self) -> list[Service]:
        """Liste les soins en vente, par date de creation croissante."""
        statement = (
            select(ServiceModel)
            .where(ServiceModel.is_active == True)  # noqa: E712
            .order_by(ServiceModel.created_at)
        )
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def list_all(self) -> list[Service]:
        """Liste tous les soins, y compris ceux retires de la vente."""
        statement = select(ServiceModel).order_by(ServiceModel.created_at)
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def save(self, service: Service) -> Service:
        """Sauvegarde un soin (insertion ou mise a jour)."""
        with self._session_factory() as session:
            existing = session.get(ServiceModel, service.id) if service.id else None
            if existing:
                # Mise a jour
                existing.name = service.name
                existing.description = service.description
                existing.duration = service.duration
                existing.price = service.price
                existing.category = service.category.value
                existing.image_url = service.image_url
                existing.is_active = service.is_active
                existing.updated_at = utcnow()
                model = existing
            else:
                # Insertion
                model = ServiceModel(
                    name=service.name,
                    description=service.description,
                    duration=service.duration,
                    price=service.price,
                    category=service.category.value,
                    image_url=service.image_url,
                    is_active=service.is_active,
                )
                if service.id:
                    model.id = service.id
            session.add(model)
            session.commit()
            session.refresh(model)
            return self._to_entity(model)

    def deactivate(self, service_id: str) -> bool:
        """Suppression logique : le soin n'apparait plus dans la boutique."""
        with self._session_factory() as session:
            model = session.get(ServiceModel, service_id)
            if model is None:
                return False
            model.is_active = False
            model.updated_at = utcnow()
            session.add(model)
            session.commit()
            return True
