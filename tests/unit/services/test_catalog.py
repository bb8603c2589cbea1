"""
Tests du CatalogService.
"""

import pytest

from kalanara.core.entities import Service
from kalanara.core.errors import CatalogError, ServiceUnavailableError
from kalanara.core.value_objects import ServiceCategory
from kalanara.services.catalog import DEFAULT_SERVICES, CatalogService


@pytest.fixture
def catalog(service_repo) -> CatalogService:
    return CatalogService(service_repo)


class TestCatalogService:
    """Tests du catalogue de soins."""

    def test_create(self, catalog) -> None:
        created = catalog.create(
            Service(name="  Hot Stone  ", duration=60, price=300000, category=ServiceCategory.BODY_TREATMENT)
        )
        assert created.id is not None
        assert created.name == "Hot Stone"
        assert catalog.get(created.id).category is ServiceCategory.BODY_TREATMENT

    @pytest.mark.parametrize(
        "fields",
        [
            {"name": "", "duration": 60, "price": 1000},
            {"name": "Spa", "duration": 0, "price": 1000},
            {"name": "Spa", "duration": 60, "price": -5},
        ],
    )
    def test_create_invalid(self, catalog, fields) -> None:
        with pytest.raises(CatalogError):
            catalog.create(Service(**fields))

    def test_update(self, catalog, spa_service) -> None:
        updated = catalog.update(spa_service.id, price=500000, category="FACIAL")
        assert updated.price == 500000
        assert updated.category is ServiceCategory.FACIAL

    def test_update_unknown_field(self, catalog, spa_service) -> None:
        with pytest.raises(CatalogError):
            catalog.update(spa_service.id, id="other")

    def test_update_bad_category(self, catalog, spa_service) -> None:
        with pytest.raises(CatalogError):
            catalog.update(spa_service.id, category="SAUNA")

    def test_deactivate_hides_from_storefront(self, catalog, spa_service) -> None:
        catalog.deactivate(spa_service.id)

        assert catalog.list_active() == []
        assert len(catalog.list_all()) == 1
        with pytest.raises(ServiceUnavailableError):
            catalog.get_active(spa_service.id)

    def test_deactivate_unknown(self, catalog) -> None:
        with pytest.raises(ServiceUnavailableError):
            catalog.deactivate("missing")

    def test_seed_defaults_on_empty_catalog(self, catalog) -> None:
        created = catalog.seed_defaults()

        assert [s.name for s in created] == [s.name for s in DEFAULT_SERVICES]
        assert catalog.seed_defaults() == []
        assert len(catalog.list_all()) == 4
