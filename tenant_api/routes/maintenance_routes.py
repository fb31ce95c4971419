from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from tenant_api.core.pagination import PageRequest
from tenant_api.database import get_db
from tenant_api.dependencies import get_current_user, page_params, require_admin, require_tenant
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.maintenance_request import Priority, RequestStatus
from tenant_api.schemas.common_schemas import MessageResponse
from tenant_api.schemas.maintenance_schemas import (
    AssignRequest,
    CancelRequest,
    CompleteRequest,
    FeedbackRequest,
    FileResponse,
    MaintenanceRequestCreate,
    MaintenanceRequestResponse,
    MaintenancePageResponse,
    StatusUpdateRequest,
)
from tenant_api.services.maintenance_service import MaintenanceService

router = APIRouter()


def _page_response(requests, total: int, page_request: PageRequest) -> MaintenancePageResponse:
    return MaintenancePageResponse(
        requests=[MaintenanceRequestResponse.from_entity(r) for r in requests],
        current_page=page_request.page,
        total_items=total,
        total_pages=page_request.total_pages(total),
        page_size=page_request.size,
    )


@router.get("", response_model=MaintenancePageResponse)
def list_requests(
    status_filter: RequestStatus | None = Query(None, alias="status"),
    priority: Priority | None = Query(None),
    page_request: PageRequest = Depends(page_params),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All maintenance requests, optionally filtered by status and priority (admin)"""
    service = MaintenanceService(db)
    requests, total = service.list_requests(page_request, status=status_filter, priority=priority)
    return _page_response(requests, total, page_request)


@router.get("/my-requests", response_model=MaintenancePageResponse)
def my_requests(
    page_request: PageRequest = Depends(page_params),
    ctx: AuthContext = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    service = MaintenanceService(db)
    requests, total = service.list_for_caller(ctx, page_request)
    return _page_response(requests, total, page_request)


@router.get("/{request_id}", response_model=MaintenanceRequestResponse)
def get_request(
    request_id: int, ctx: AuthContext = Depends(get_current_user), db: Session = Depends(get_db)
):
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.get_accessible_request(request_id, ctx))


@router.post("", response_model=MaintenanceRequestResponse, status_code=status.HTTP_201_CREATED)
def create_request(
    data: MaintenanceRequestCreate,
    ctx: AuthContext = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    """File a new request; the caller needs a tenant profile"""
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.create_request(ctx, data))


@router.put("/{request_id}/status", response_model=MaintenanceRequestResponse)
def update_status(
    request_id: int,
    data: StatusUpdateRequest,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.update_status(request_id, data))


@router.post("/{request_id}/assign", response_model=MaintenanceRequestResponse)
def assign_request(
    request_id: int,
    data: AssignRequest,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.assign(request_id, data))


@router.post("/{request_id}/start", response_model=MaintenanceRequestResponse)
def start_request(
    request_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.start(request_id))


@router.post("/{request_id}/complete", response_model=MaintenanceRequestResponse)
def complete_request(
    request_id: int,
    data: CompleteRequest,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.complete(request_id, data))


@router.post("/{request_id}/cancel", response_model=MaintenanceRequestResponse)
def cancel_request(
    request_id: int,
    data: CancelRequest,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.cancel(request_id, data.reason))


@router.put("/{request_id}/feedback", response_model=MaintenanceRequestResponse)
def add_feedback(
    request_id: int,
    data: FeedbackRequest,
    ctx: AuthContext = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    """Rate a completed request (owner only)"""
    service = MaintenanceService(db)
    return MaintenanceRequestResponse.from_entity(service.add_feedback(request_id, ctx, data))


@router.post("/{request_id}/files", response_model=list[FileResponse], status_code=status.HTTP_201_CREATED)
def upload_files(
    request_id: int,
    files: list[UploadFile] = File(...),
    ctx: AuthContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Attach one or more files (multipart field 'files')"""
    service = MaintenanceService(db)
    attachments = service.attach_files(request_id, ctx, files)
    return [FileResponse.from_entity(a) for a in attachments]


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_request(
    request_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    """Delete a request together with its stored files"""
    service = MaintenanceService(db)
    service.delete_request(request_id)
    return MessageResponse(message="Maintenance request deleted successfully")
