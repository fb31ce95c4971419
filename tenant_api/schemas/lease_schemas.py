from datetime import date, datetime
from decimal import Decimal

from pydantic import Field, model_validator

from tenant_api.models.lease_agreement import LeaseStatus
from tenant_api.schemas.common_schemas import CamelModel


class LeaseCreate(CamelModel):
    """Schema for drafting a lease"""

    tenant_id: int
    start_date: date
    end_date: date
    monthly_rent: Decimal = Field(..., gt=0)
    security_deposit: Decimal | None = Field(None, ge=0)
    lease_terms: str | None = None
    special_conditions: str | None = None
    notes: str | None = None
    previous_lease_id: int | None = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class LeaseTerminateRequest(CamelModel):
    reason: str | None = None


class LeaseResponse(CamelModel):
    id: int
    tenant_id: int
    start_date: date
    end_date: date
    monthly_rent: float
    security_deposit: float | None = None
    status: LeaseStatus
    is_renewal: bool
    previous_lease_id: int | None = None
    renewal_notice_sent: bool
    renewal_notice_date: date | None = None
    tenant_signed_date: date | None = None
    admin_signed_date: date | None = None
    lease_terms: str | None = None
    special_conditions: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
