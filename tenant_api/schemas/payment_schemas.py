from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from tenant_api.models.payment import Payment, PaymentMethod, PaymentStatus, PaymentType
from tenant_api.schemas.common_schemas import CamelModel


class PaymentCreate(CamelModel):
    """Schema for recording a payment due from a tenant"""

    tenant_id: int
    amount: Decimal = Field(..., gt=0)
    due_date: date
    payment_type: PaymentType = PaymentType.RENT
    late_fee: Decimal = Field(default=Decimal("0.00"), ge=0)
    discount_amount: Decimal = Field(default=Decimal("0.00"), ge=0)
    payment_period_start: date | None = None
    payment_period_end: date | None = None
    reference_number: str | None = Field(None, max_length=100)
    notes: str | None = None


class MarkPaidRequest(CamelModel):
    payment_method: PaymentMethod
    transaction_id: str | None = Field(None, max_length=100)


class PaymentResponse(CamelModel):
    id: int
    tenant_id: int
    amount: float
    late_fee: float
    discount_amount: float
    total_amount: float | None = None
    due_date: date
    payment_date: date | None = None
    status: PaymentStatus
    payment_type: PaymentType
    payment_method: PaymentMethod | None = None
    transaction_id: str | None = None
    reference_number: str | None = None
    payment_period_start: date | None = None
    payment_period_end: date | None = None
    notes: str | None = None
    processed_by: str | None = None
    processed_at: datetime | None = None
    created_at: datetime


class PaymentHistoryItem(CamelModel):
    """One row of the admin payment history"""

    id: int
    tenant_name: str
    amount: float
    total_amount: float | None = None
    due_date: date
    payment_date: date | None = None
    status: PaymentStatus
    payment_type: PaymentType
    payment_method: PaymentMethod | None = None
    property_address: str | None = None
    unit_number: str | None = None

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentHistoryItem":
        tenant = payment.tenant
        return cls(
            id=payment.id,
            tenant_name=tenant.user.full_name,
            amount=payment.amount,
            total_amount=payment.total_amount,
            due_date=payment.due_date,
            payment_date=payment.payment_date,
            status=payment.status,
            payment_type=payment.payment_type,
            payment_method=payment.payment_method,
            property_address=tenant.property_address,
            unit_number=tenant.unit_number,
        )


class PaymentHistoryPage(CamelModel):
    """Page object: content plus totals, page number is zero-based"""

    content: list[PaymentHistoryItem]
    total_elements: int
    total_pages: int
    number: int
    size: int
