from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.core.exceptions import InvalidStatusTransition, ValidationException
from tenant_api.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from tenant_api.models.tenant import Tenant


class PaymentStatus(str, PyEnum):
    """Payment status enumeration"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class PaymentType(str, PyEnum):
    RENT = "RENT"
    SECURITY_DEPOSIT = "SECURITY_DEPOSIT"
    LATE_FEE = "LATE_FEE"
    UTILITY = "UTILITY"
    MAINTENANCE = "MAINTENANCE"
    OTHER = "OTHER"


class PaymentMethod(str, PyEnum):
    CASH = "CASH"
    CHECK = "CHECK"
    BANK_TRANSFER = "BANK_TRANSFER"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    ONLINE_PAYMENT = "ONLINE_PAYMENT"
    MOBILE_PAYMENT = "MOBILE_PAYMENT"


CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


class Payment(Base, TimestampMixin):
    """
    Money owed or received from a tenant.

    total_amount is kept in sync as amount + late_fee - discount_amount
    whenever fees or discounts are applied.
    """

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, native_enum=False), nullable=False, default=PaymentStatus.PENDING
    )
    payment_type: Mapped[PaymentType] = mapped_column(
        Enum(PaymentType, native_enum=False), nullable=False, default=PaymentType.RENT
    )
    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        Enum(PaymentMethod, native_enum=False), nullable=True
    )
    transaction_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    reference_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    late_fee: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False, default=ZERO)
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2), nullable=False, default=ZERO
    )
    total_amount: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    payment_period_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_period_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="payments")

    def calculate_total(self) -> Decimal:
        late_fee = Decimal(self.late_fee or ZERO)
        discount = Decimal(self.discount_amount or ZERO)
        return Decimal(self.amount) + late_fee - discount

    def refresh_total(self) -> None:
        self.total_amount = self.calculate_total()

    def is_overdue(self) -> bool:
        return self.status == PaymentStatus.PENDING and self.due_date < date.today()

    @property
    def days_overdue(self) -> int:
        if not self.is_overdue():
            return 0
        return (date.today() - self.due_date).days

    def can_be_modified(self) -> bool:
        return self.status in (PaymentStatus.PENDING, PaymentStatus.PARTIAL)

    def _ensure_modifiable(self) -> None:
        if not self.can_be_modified():
            raise InvalidStatusTransition(f"Cannot modify a payment in status {self.status.value}")

    def calculate_late_fee(self, rate: Decimal, grace_days: int = 0) -> Decimal:
        """Late fee for the current overdue days; zero inside the grace period."""
        if self.days_overdue <= grace_days:
            return ZERO
        return (Decimal(self.amount) * Decimal(rate)).quantize(CENTS, rounding=ROUND_HALF_UP)

    def apply_late_fee(self, fee: Decimal) -> None:
        self._ensure_modifiable()
        if fee < 0:
            raise ValidationException("Late fee cannot be negative")
        self.late_fee = fee
        self.refresh_total()

    def apply_discount(self, discount: Decimal) -> None:
        self._ensure_modifiable()
        if discount < 0:
            raise ValidationException("Discount cannot be negative")
        self.discount_amount = discount
        self.refresh_total()

    def mark_as_paid(
        self,
        method: PaymentMethod,
        transaction_id: str | None = None,
        processed_by: str | None = None,
    ) -> None:
        self._ensure_modifiable()
        self.status = PaymentStatus.COMPLETED
        self.payment_method = method
        self.transaction_id = transaction_id
        self.processed_by = processed_by
        self.payment_date = date.today()
        self.processed_at = utcnow()
        self.refresh_total()

    def mark_as_failed(self, reason: str | None = None) -> None:
        self._ensure_modifiable()
        self.status = PaymentStatus.FAILED
        self._append_note("Failed", reason)

    def cancel(self, reason: str | None = None) -> None:
        self._ensure_modifiable()
        self.status = PaymentStatus.CANCELLED
        self._append_note("Cancelled", reason)

    def _append_note(self, label: str, reason: str | None) -> None:
        if not reason:
            return
        entry = f"{label}: {reason}"
        self.notes = f"{self.notes}\n{entry}" if self.notes else entry

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, tenant_id={self.tenant_id}, amount={self.amount}, status={self.status.value})>"
