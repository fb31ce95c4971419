"""Tenant model: a renter's profile linked one-to-one with a user."""

from datetime import date, timedelta
from decimal import Decimal
from enum import Enum as PyEnum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.models.base import Base, TimestampMixin
from tenant_api.models.maintenance_request import RequestStatus
from tenant_api.models.payment import PaymentStatus

if TYPE_CHECKING:
    from tenant_api.models.lease_agreement import LeaseAgreement
    from tenant_api.models.maintenance_request import MaintenanceRequest
    from tenant_api.models.payment import Payment
    from tenant_api.models.property import Property
    from tenant_api.models.user import User


class TenantStatus(str, PyEnum):
    """Tenant status enumeration"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    TERMINATED = "TERMINATED"
    SUSPENDED = "SUSPENDED"


class Tenant(Base, TimestampMixin):
    """
    Renter profile.

    Each user has at most one tenant profile (unique user_id). Leases,
    payments and maintenance requests hang off the tenant and are
    deleted with it; the user account survives.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    property_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    property_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    unit_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    rent_amount: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    security_deposit: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=10, scale=2), nullable=True
    )
    lease_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    lease_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[TenantStatus] = mapped_column(
        Enum(TenantStatus, native_enum=False), nullable=False, default=TenantStatus.PENDING
    )
    emergency_contact_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    emergency_contact_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    emergency_contact_relationship: Mapped[str | None] = mapped_column(String(50), nullable=True)
    move_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    move_out_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="tenant")
    assigned_property: Mapped[Optional["Property"]] = relationship("Property", back_populates="tenants")
    lease_agreements: Mapped[list["LeaseAgreement"]] = relationship(
        "LeaseAgreement",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    maintenance_requests: Mapped[list["MaintenanceRequest"]] = relationship(
        "MaintenanceRequest",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    @property
    def full_address(self) -> str | None:
        if self.property_address and self.unit_number:
            return f"{self.property_address}, Unit {self.unit_number}"
        return self.property_address

    @property
    def current_lease(self) -> "LeaseAgreement | None":
        for lease in self.lease_agreements:
            if lease.is_active():
                return lease
        return None

    def has_active_lease(self) -> bool:
        return self.current_lease is not None

    @property
    def total_paid(self) -> Decimal:
        return sum(
            (p.amount for p in self.payments if p.status == PaymentStatus.COMPLETED),
            Decimal("0"),
        )

    @property
    def pending_maintenance_count(self) -> int:
        open_statuses = (RequestStatus.PENDING, RequestStatus.IN_PROGRESS)
        return sum(1 for r in self.maintenance_requests if r.status in open_statuses)

    def is_lease_expiring_soon(self, days: int = 30) -> bool:
        if self.lease_end_date is None:
            return False
        today = date.today()
        return today <= self.lease_end_date <= today + timedelta(days=days)

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, user_id={self.user_id}, status={self.status.value})>"
