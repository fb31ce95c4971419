from datetime import date, timedelta
from decimal import Decimal
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.core.exceptions import InvalidStatusTransition
from tenant_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from tenant_api.models.tenant import Tenant


class LeaseStatus(str, PyEnum):
    """Lease agreement status enumeration"""

    DRAFT = "DRAFT"
    PENDING_SIGNATURE = "PENDING_SIGNATURE"
    SIGNED = "SIGNED"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    TERMINATED = "TERMINATED"
    CANCELLED = "CANCELLED"


TERMINAL_LEASE_STATUSES = (LeaseStatus.EXPIRED, LeaseStatus.TERMINATED, LeaseStatus.CANCELLED)


class LeaseAgreement(Base, TimestampMixin):
    """
    Contract governing a tenancy's term and rent.

    Lifecycle: DRAFT -> PENDING_SIGNATURE -> SIGNED (both parties) -> ACTIVE,
    then EXPIRED/TERMINATED. Any non-terminal lease can be CANCELLED.
    """

    __tablename__ = "lease_agreements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    security_deposit: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=10, scale=2), nullable=True
    )
    status: Mapped[LeaseStatus] = mapped_column(
        Enum(LeaseStatus, native_enum=False), nullable=False, default=LeaseStatus.DRAFT
    )
    is_renewal: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    previous_lease_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    renewal_notice_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    renewal_notice_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    tenant_signed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    admin_signed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    lease_terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    special_conditions: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="lease_agreements")

    # Predicates

    def is_active(self) -> bool:
        return self.status == LeaseStatus.ACTIVE and not self.is_expired()

    def is_expired(self) -> bool:
        return self.end_date < date.today()

    def is_expiring_soon(self, days: int = 30) -> bool:
        today = date.today()
        return self.is_active() and self.end_date <= today + timedelta(days=days)

    def is_fully_signed(self) -> bool:
        return self.tenant_signed_date is not None and self.admin_signed_date is not None

    def can_be_activated(self) -> bool:
        return self.status == LeaseStatus.SIGNED and self.is_fully_signed() and not self.is_expired()

    # Transitions

    def _check_signable(self) -> None:
        if self.status not in (LeaseStatus.DRAFT, LeaseStatus.PENDING_SIGNATURE):
            raise InvalidStatusTransition(f"Cannot sign a lease in status {self.status.value}")

    def _update_signed_status(self) -> None:
        if self.is_fully_signed():
            self.status = LeaseStatus.SIGNED

    def sign_by_tenant(self) -> None:
        self._check_signable()
        self.tenant_signed_date = date.today()
        self._update_signed_status()

    def sign_by_admin(self) -> None:
        self._check_signable()
        self.admin_signed_date = date.today()
        self._update_signed_status()

    def send_for_signature(self) -> None:
        if self.status != LeaseStatus.DRAFT:
            raise InvalidStatusTransition("Only draft leases can be sent for signature")
        self.status = LeaseStatus.PENDING_SIGNATURE

    def activate(self) -> None:
        if not self.can_be_activated():
            raise InvalidStatusTransition("Lease must be fully signed and not expired to activate")
        self.status = LeaseStatus.ACTIVE

    def terminate(self, reason: str | None = None) -> None:
        if self.status not in (LeaseStatus.ACTIVE, LeaseStatus.SIGNED):
            raise InvalidStatusTransition(f"Cannot terminate a lease in status {self.status.value}")
        self.status = LeaseStatus.TERMINATED
        self._append_note("Terminated", reason)

    def cancel(self, reason: str | None = None) -> None:
        if self.status in TERMINAL_LEASE_STATUSES:
            raise InvalidStatusTransition(f"Cannot cancel a lease in status {self.status.value}")
        self.status = LeaseStatus.CANCELLED
        self._append_note("Cancelled", reason)

    def mark_as_renewal(self, previous_lease_id: int) -> None:
        self.is_renewal = True
        self.previous_lease_id = previous_lease_id

    def send_renewal_notice(self) -> None:
        self.renewal_notice_sent = True
        self.renewal_notice_date = date.today()

    def _append_note(self, label: str, reason: str | None) -> None:
        if not reason:
            return
        entry = f"{label}: {reason}"
        self.notes = f"{self.notes}\n{entry}" if self.notes else entry

    def __repr__(self) -> str:
        return f"<LeaseAgreement(id={self.id}, tenant_id={self.tenant_id}, status={self.status.value})>"
