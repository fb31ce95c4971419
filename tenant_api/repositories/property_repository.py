from sqlalchemy import func
from sqlalchemy.orm import Session

from tenant_api.models.property import Property
from tenant_api.models.tenant import Tenant


class PropertyRepository:
    """Repository for Property model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> list[Property]:
        return self.db.query(Property).order_by(Property.name.asc(), Property.id.asc()).all()

    def get_by_id(self, property_id: int) -> Property | None:
        return self.db.query(Property).filter(Property.id == property_id).first()

    def tenant_counts(self) -> dict[int, int]:
        """Number of linked tenants per property id"""
        rows = (
            self.db.query(Tenant.property_id, func.count(Tenant.id))
            .filter(Tenant.property_id.isnot(None))
            .group_by(Tenant.property_id)
            .all()
        )
        return {property_id: count for property_id, count in rows}

    def count(self) -> int:
        return self.db.query(Property).count()

    def create(self, property_: Property) -> Property:
        self.db.add(property_)
        self.db.commit()
        self.db.refresh(property_)
        return property_

    def update(self, property_: Property) -> Property:
        self.db.commit()
        self.db.refresh(property_)
        return property_

    def delete(self, property_: Property) -> None:
        """Delete property; the ORM clears property_id on linked tenants"""
        self.db.delete(property_)
        self.db.commit()
