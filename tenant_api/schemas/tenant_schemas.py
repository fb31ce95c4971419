from datetime import date, datetime
from decimal import Decimal

from pydantic import EmailStr, Field

from tenant_api.models.tenant import TenantStatus
from tenant_api.schemas.auth_schemas import PHONE_PATTERN, UserInfo
from tenant_api.schemas.common_schemas import CamelModel, PageInfo


class TenantProfileCreate(CamelModel):
    """Schema for a tenant creating their own profile"""

    property_address: str | None = Field(None, max_length=500)
    unit_number: str | None = Field(None, max_length=20)
    property_id: int | None = None
    emergency_contact_name: str | None = Field(None, max_length=100)
    emergency_contact_phone: str | None = Field(None, max_length=20)
    emergency_contact_relationship: str | None = Field(None, max_length=50)
    move_in_date: date | None = None


class TenantUpdate(CamelModel):
    """Admin update of a tenant and its user account"""

    first_name: str | None = Field(None, min_length=2, max_length=50)
    last_name: str | None = Field(None, min_length=2, max_length=50)
    email: EmailStr | None = None
    phone_number: str | None = Field(None, pattern=PHONE_PATTERN)
    property_address: str | None = Field(None, max_length=500)
    unit_number: str | None = Field(None, max_length=20)
    property_id: int | None = None
    rent_amount: Decimal | None = Field(None, ge=0)
    security_deposit: Decimal | None = Field(None, ge=0)
    lease_start_date: date | None = None
    lease_end_date: date | None = None
    status: TenantStatus | None = None
    notes: str | None = None


class TenantResponse(CamelModel):
    id: int
    user: UserInfo
    property_id: int | None = None
    property_address: str | None = None
    unit_number: str | None = None
    full_address: str | None = None
    status: TenantStatus
    rent_amount: float | None = None
    security_deposit: float | None = None
    lease_start_date: date | None = None
    lease_end_date: date | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    move_in_date: date | None = None
    move_out_date: date | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class TenantPageResponse(PageInfo):
    tenants: list[TenantResponse]
