from datetime import datetime
from decimal import Decimal

from pydantic import Field

from tenant_api.models.maintenance_request import Category, MaintenanceRequest, Priority, RequestStatus
from tenant_api.models.maintenance_request_file import AttachmentType, MaintenanceRequestFile
from tenant_api.schemas.common_schemas import CamelModel, PageInfo


class MaintenanceRequestCreate(CamelModel):
    """Schema for a tenant filing a new request"""

    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    category: Category
    priority: Priority = Priority.MEDIUM
    location_details: str | None = Field(None, max_length=500)
    preferred_contact_method: str | None = Field(None, max_length=50)
    preferred_time: str | None = Field(None, max_length=100)
    tenant_available: bool = True


class StatusUpdateRequest(CamelModel):
    """
    Admin update of a request.

    A status change is applied through the request's transition rules;
    the remaining fields are written as given.
    """

    status: RequestStatus | None = None
    assigned_to: str | None = Field(None, max_length=100)
    admin_notes: str | None = None
    scheduled_date: datetime | None = None
    estimated_cost: Decimal | None = Field(None, ge=0)
    actual_cost: Decimal | None = Field(None, ge=0)
    resolution_summary: str | None = None
    reason: str | None = None


class AssignRequest(CamelModel):
    assigned_to: str = Field(..., min_length=1, max_length=100)
    scheduled_date: datetime | None = None


class CompleteRequest(CamelModel):
    resolution_summary: str | None = None
    actual_cost: Decimal | None = Field(None, ge=0)


class CancelRequest(CamelModel):
    reason: str | None = None


class FeedbackRequest(CamelModel):
    # Range is checked by the request itself so the error carries INVALID_RATING
    tenant_feedback: str | None = Field(None, max_length=1000)
    rating: int | None = None


class FileResponse(CamelModel):
    id: int
    original_filename: str
    file_type: AttachmentType
    content_type: str | None = None
    file_size: int
    formatted_file_size: str
    description: str | None = None
    uploaded_at: datetime
    download_url: str
    thumbnail_url: str | None = None
    view_url: str

    @classmethod
    def from_entity(cls, attachment: MaintenanceRequestFile) -> "FileResponse":
        return cls(
            id=attachment.id,
            original_filename=attachment.original_file_name,
            file_type=attachment.attachment_type,
            content_type=attachment.content_type,
            file_size=attachment.file_size,
            formatted_file_size=attachment.formatted_file_size,
            description=attachment.description,
            uploaded_at=attachment.uploaded_at,
            download_url=attachment.download_url,
            thumbnail_url=attachment.thumbnail_url,
            view_url=attachment.view_url,
        )


class RequestTenantInfo(CamelModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    property_address: str | None = None
    unit_number: str | None = None


class MaintenanceRequestResponse(CamelModel):
    id: int
    title: str
    description: str
    category: Category
    priority: Priority
    status: RequestStatus
    location_details: str | None = None
    preferred_contact_method: str | None = None
    preferred_time: str | None = None
    tenant_available: bool
    estimated_cost: float | None = None
    actual_cost: float | None = None
    assigned_to: str | None = None
    assigned_at: datetime | None = None
    scheduled_date: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    admin_notes: str | None = None
    tenant_feedback: str | None = None
    rating: int | None = None
    resolution_summary: str | None = None
    created_at: datetime
    updated_at: datetime
    tenant: RequestTenantInfo
    files: list[FileResponse] = []

    @classmethod
    def from_entity(cls, request: MaintenanceRequest) -> "MaintenanceRequestResponse":
        tenant = request.tenant
        return cls(
            id=request.id,
            title=request.title,
            description=request.description,
            category=request.category,
            priority=request.priority,
            status=request.status,
            location_details=request.location_details,
            preferred_contact_method=request.preferred_contact_method,
            preferred_time=request.preferred_time,
            tenant_available=request.tenant_available,
            estimated_cost=request.estimated_cost,
            actual_cost=request.actual_cost,
            assigned_to=request.assigned_to,
            assigned_at=request.assigned_at,
            scheduled_date=request.scheduled_date,
            started_at=request.started_at,
            completed_at=request.completed_at,
            admin_notes=request.admin_notes,
            tenant_feedback=request.tenant_feedback,
            rating=request.tenant_rating,
            resolution_summary=request.resolution_summary,
            created_at=request.created_at,
            updated_at=request.updated_at,
            tenant=RequestTenantInfo(
                id=tenant.id,
                name=tenant.user.full_name,
                email=tenant.user.email,
                phone=tenant.user.phone_number or tenant.emergency_contact_phone,
                property_address=tenant.property_address,
                unit_number=tenant.unit_number,
            ),
            files=[FileResponse.from_entity(f) for f in request.attachments],
        )


class MaintenancePageResponse(PageInfo):
    requests: list[MaintenanceRequestResponse]
