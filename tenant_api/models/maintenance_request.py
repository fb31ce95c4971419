"""Maintenance request model and its status machine."""

from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.core.exceptions import InvalidStatusTransition, ValidationException
from tenant_api.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from tenant_api.models.maintenance_request_file import MaintenanceRequestFile
    from tenant_api.models.tenant import Tenant


class RequestStatus(str, PyEnum):
    """Maintenance request status enumeration"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ON_HOLD = "ON_HOLD"


class Priority(str, PyEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"
    EMERGENCY = "EMERGENCY"


class Category(str, PyEnum):
    PLUMBING = "PLUMBING"
    ELECTRICAL = "ELECTRICAL"
    HVAC = "HVAC"
    APPLIANCES = "APPLIANCES"
    FLOORING = "FLOORING"
    PAINTING = "PAINTING"
    DOORS_WINDOWS = "DOORS_WINDOWS"
    SECURITY = "SECURITY"
    PEST_CONTROL = "PEST_CONTROL"
    CLEANING = "CLEANING"
    LANDSCAPING = "LANDSCAPING"
    OTHER = "OTHER"


HOLDABLE_STATUSES = (
    RequestStatus.PENDING,
    RequestStatus.APPROVED,
    RequestStatus.ASSIGNED,
    RequestStatus.IN_PROGRESS,
)

MIN_RATING = 1
MAX_RATING = 5


class MaintenanceRequest(Base, TimestampMixin):
    """
    Repair/maintenance ticket filed by a tenant.

    Status changes go through the transition methods below, which raise
    InvalidStatusTransition when a guard is not met:

        PENDING/APPROVED --assign--> ASSIGNED --start--> IN_PROGRESS
        IN_PROGRESS --complete--> COMPLETED
        PENDING --approve--> APPROVED
        open states --hold--> ON_HOLD --resume--> APPROVED
        any --cancel--> CANCELLED
    """

    __tablename__ = "maintenance_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, native_enum=False),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    priority: Mapped[Priority] = mapped_column(
        Enum(Priority, native_enum=False), nullable=False, default=Priority.MEDIUM
    )
    category: Mapped[Category] = mapped_column(Enum(Category, native_enum=False), nullable=False)
    location_details: Mapped[str | None] = mapped_column(String(500), nullable=True)
    preferred_contact_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    preferred_time: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tenant_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    estimated_cost: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    actual_cost: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(100), nullable=True)
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    scheduled_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    tenant_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    tenant_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    resolution_summary: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="maintenance_requests")
    attachments: Mapped[list["MaintenanceRequestFile"]] = relationship(
        "MaintenanceRequestFile",
        back_populates="maintenance_request",
        cascade="all, delete-orphan",
    )

    # Guards

    def can_be_assigned(self) -> bool:
        return self.status in (RequestStatus.PENDING, RequestStatus.APPROVED)

    def can_be_started(self) -> bool:
        return self.status == RequestStatus.ASSIGNED and bool(self.assigned_to)

    def can_be_completed(self) -> bool:
        return self.status == RequestStatus.IN_PROGRESS

    def is_completed(self) -> bool:
        return self.status == RequestStatus.COMPLETED

    def is_overdue(self) -> bool:
        return (
            self.scheduled_date is not None
            and self.scheduled_date < utcnow()
            and self.status not in (RequestStatus.COMPLETED, RequestStatus.CANCELLED)
        )

    @property
    def resolution_time_hours(self) -> float | None:
        if self.completed_at is None or self.created_at is None:
            return None
        return (self.completed_at - self.created_at).total_seconds() / 3600

    # Transitions

    def approve(self) -> None:
        if self.status != RequestStatus.PENDING:
            raise InvalidStatusTransition(f"Cannot approve a request in status {self.status.value}")
        self.status = RequestStatus.APPROVED

    def assign_to(self, assignee: str, scheduled_date: datetime | None = None) -> None:
        if not self.can_be_assigned():
            raise InvalidStatusTransition(f"Cannot assign a request in status {self.status.value}")
        if not assignee:
            raise ValidationException("Assignee is required", error_code="ASSIGNEE_REQUIRED")
        self.assigned_to = assignee
        self.assigned_at = utcnow()
        if scheduled_date is not None:
            self.scheduled_date = scheduled_date
        self.status = RequestStatus.ASSIGNED

    def start(self) -> None:
        if not self.can_be_started():
            raise InvalidStatusTransition("Request must be assigned before work can start")
        self.started_at = utcnow()
        self.status = RequestStatus.IN_PROGRESS

    def complete(self, resolution_summary: str | None = None, actual_cost: Decimal | None = None) -> None:
        if not self.can_be_completed():
            raise InvalidStatusTransition("Only requests in progress can be completed")
        self.completed_at = utcnow()
        if resolution_summary is not None:
            self.resolution_summary = resolution_summary
        if actual_cost is not None:
            self.actual_cost = actual_cost
        self.status = RequestStatus.COMPLETED

    def cancel(self, reason: str | None = None) -> None:
        self.status = RequestStatus.CANCELLED
        if reason:
            self._append_admin_note(f"Cancelled: {reason}")

    def put_on_hold(self, reason: str | None = None) -> None:
        if self.status not in HOLDABLE_STATUSES:
            raise InvalidStatusTransition(f"Cannot put a request in status {self.status.value} on hold")
        self.status = RequestStatus.ON_HOLD
        if reason:
            self._append_admin_note(f"On hold: {reason}")

    def resume(self) -> None:
        if self.status != RequestStatus.ON_HOLD:
            raise InvalidStatusTransition("Only requests on hold can be resumed")
        self.status = RequestStatus.APPROVED

    def transition_to(self, target: RequestStatus, **kwargs) -> None:
        """Apply the transition method that leads to target."""
        if target == self.status:
            return
        if target == RequestStatus.APPROVED:
            if self.status == RequestStatus.ON_HOLD:
                self.resume()
            else:
                self.approve()
        elif target == RequestStatus.ASSIGNED:
            self.assign_to(kwargs.get("assigned_to") or self.assigned_to, kwargs.get("scheduled_date"))
        elif target == RequestStatus.IN_PROGRESS:
            self.start()
        elif target == RequestStatus.COMPLETED:
            self.complete(kwargs.get("resolution_summary"), kwargs.get("actual_cost"))
        elif target == RequestStatus.CANCELLED:
            self.cancel(kwargs.get("reason"))
        elif target == RequestStatus.ON_HOLD:
            self.put_on_hold(kwargs.get("reason"))
        else:
            raise InvalidStatusTransition(
                f"Cannot move a request from {self.status.value} to {target.value}"
            )

    def add_feedback(self, tenant_feedback: str | None = None, rating: int | None = None) -> None:
        """Record tenant feedback; fields left as None keep their stored value"""
        if self.status != RequestStatus.COMPLETED:
            raise ValidationException(
                "Can only provide feedback on completed requests", error_code="INVALID_STATUS"
            )
        if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationException(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}", error_code="INVALID_RATING"
            )
        if tenant_feedback is not None:
            self.tenant_feedback = tenant_feedback
        if rating is not None:
            self.tenant_rating = rating

    def _append_admin_note(self, entry: str) -> None:
        self.admin_notes = f"{self.admin_notes}\n{entry}" if self.admin_notes else entry

    def __repr__(self) -> str:
        return f"<MaintenanceRequest(id={self.id}, title='{self.title}', status={self.status.value})>"
