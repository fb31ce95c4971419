"""Property model for managed buildings."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from tenant_api.models.tenant import Tenant


class Property(Base, TimestampMixin):
    """
    A managed building with a fixed number of rentable units.

    Occupancy is derived from the tenants linked to the property,
    not stored.
    """

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    map_link: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    manager_owner_name: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_units: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Tenants are unlinked, not deleted, when a property goes away
    tenants: Mapped[list["Tenant"]] = relationship("Tenant", back_populates="assigned_property")

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name='{self.name}')>"
