"""
Service de catalogue : soins vendus sous forme de voucher.

Un soin n'est jamais supprime physiquement (les vouchers emis y font
reference) : deactivate le retire seulement de la boutique.
"""

from dataclasses import replace
from typing import Any

from loguru import logger

from kalanara.core.entities import Service
from kalanara.core.errors import CatalogError, ServiceUnavailableError
from kalanara.core.ports.repositories import IServiceRepository
from kalanara.core.value_objects import ServiceCategory

# Catalogue initial (commande seed-services)
DEFAULT_SERVICES: tuple[Service, ...] = (
    Service(
        name="Royal Javanese Massage",
        description="A holistic treatment using traditional techniques to relieve "
        "muscle tension and improve blood circulation.",
        duration=90,
        price=450000,
        category=ServiceCategory.MASSAGE,
    ),
    Service(
        name="Zen Harmony Couple Package",
        description="A romantic getaway for two. Includes full body massage, "
        "scrub, and a flower bath.",
        duration=120,
        price=850000,
        category=ServiceCategory.PACKAGE,
    ),
    Service(
        name="Deep Tissue Restoration",
        description="Intense massage targeting deep muscle layers to release chronic tension.",
        duration=60,
        price=350000,
        category=ServiceCategory.MASSAGE,
    ),
    Service(
        name="Radiant Glow Facial",
        description="Rejuvenate your skin with organic ingredients and gentle acupressure.",
        duration=75,
        price=400000,
        category=ServiceCategory.FACIAL,
    ),
)

_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "duration", "price", "category", "image_url", "is_active"}
)


def validate_service(service: Service) -> None:
    """
    Raises:
        CatalogError: Nom vide, duree ou prix non positifs
    """
    if not service.name or not service.name.strip():
        raise CatalogError("Le nom du soin est obligatoire")
    if service.duration <= 0:
        raise CatalogError("La duree doit etre positive")
    if service.price <= 0:
        raise CatalogError("Le prix doit etre positif")


class CatalogService:
    """Lecture et administration du catalogue de soins."""

    def __init__(self, service_repo: IServiceRepository) -> None:
        self._services = service_repo

    def list_active(self) -> list[Service]:
        return self._services.list_active()

    def list_all(self) -> list[Service]:
        return self._services.list_all()

    def get(self, service_id: str) -> Service:
        """Raises: ServiceUnavailableError si le soin n'existe pas"""
        service = self._services.get_by_id(service_id)
        if service is None:
            raise ServiceUnavailableError(service_id, "Soin introuvable")
        return service

    def get_active(self, service_id: str) -> Service:
        """Soin visible en boutique (les soins retires sont traites comme absents)."""
        service = self.get(service_id)
        if not service.is_active:
            raise ServiceUnavailableError(service_id, "Soin introuvable")
        return service

    def create(self, service: Service) -> Service:
        validate_service(service)
        created = self._services.save(replace(service, id=None, name=service.name.strip()))
        logger.info("Soin cree", service_id=created.id, name=created.name)
        return created

    def update(self, service_id: str, **changes: Any) -> Service:
        """
        Met a jour les champs fournis d'un soin.

        Raises:
            ServiceUnavailableError: Soin inconnu
            CatalogError: Champ inconnu ou valeur invalide
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise CatalogError(f"Champs non modifiables : {', '.join(sorted(unknown))}")
        if "category" in changes and changes["category"] is not None:
            try:
                changes["category"] = ServiceCategory(changes["category"])
            except ValueError as exc:
                raise CatalogError(f"Categorie inconnue : {changes['category']}") from exc

        updated = replace(self.get(service_id), **changes)
        validate_service(updated)
        saved = self._services.save(updated)
        logger.info("Soin modifie", service_id=service_id, fields=sorted(changes))
        return saved

    def deactivate(self, service_id: str) -> None:
        """Raises: ServiceUnavailableError"""
        if not self._services.deactivate(service_id):
            raise ServiceUnavailableError(service_id, "Soin introuvable")
        logger.info("Soin retire de la vente", service_id=service_id)

    def seed_defaults(self) -> list[Service]:
        """Cree le catalogue initial si aucun soin n'existe encore."""
        if self._services.list_all():
            return []
        return [self.create(service) for service in DEFAULT_SERVICES]
