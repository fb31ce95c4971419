import logging

from sqlalchemy.orm import Session

from tenant_api.core.exceptions import NotFoundException
from tenant_api.models.property import Property
from tenant_api.repositories.property_repository import PropertyRepository
from tenant_api.schemas.property_schemas import PropertyCreate, PropertyResponse, PropertyUpdate

logger = logging.getLogger(__name__)


class PropertyService:
    """Service for property management and occupancy figures"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PropertyRepository(db)

    def _to_response(self, property_: Property, tenant_count: int) -> PropertyResponse:
        return PropertyResponse(
            id=property_.id,
            name=property_.name,
            address=property_.address,
            map_link=property_.map_link,
            manager_owner_name=property_.manager_owner_name,
            number_of_units=property_.number_of_units,
            current_tenants_count=tenant_count,
            vacancies_count=property_.number_of_units - tenant_count,
        )

    def _get(self, property_id: int) -> Property:
        property_ = self.repo.get_by_id(property_id)
        if not property_:
            raise NotFoundException("Property not found", error_code="PROPERTY_NOT_FOUND")
        return property_

    def list_properties(self) -> list[PropertyResponse]:
        counts = self.repo.tenant_counts()
        return [self._to_response(p, counts.get(p.id, 0)) for p in self.repo.get_all()]

    def get_property(self, property_id: int) -> PropertyResponse:
        property_ = self._get(property_id)
        return self._to_response(property_, len(property_.tenants))

    def create_property(self, data: PropertyCreate) -> PropertyResponse:
        property_ = self.repo.create(Property(**data.model_dump()))
        logger.info("Created property %s (%s)", property_.id, property_.name)
        return self._to_response(property_, 0)

    def update_property(self, property_id: int, data: PropertyUpdate) -> PropertyResponse:
        property_ = self._get(property_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(property_, field, value)
        property_ = self.repo.update(property_)
        return self._to_response(property_, len(property_.tenants))

    def delete_property(self, property_id: int) -> None:
        property_ = self._get(property_id)
        self.repo.delete(property_)
        logger.info("Deleted property %s", property_id)
