import logging

from fastapi import UploadFile
from sqlalchemy.orm import Session

from tenant_api.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from tenant_api.core.pagination import PageRequest
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.maintenance_request import MaintenanceRequest, Priority, RequestStatus
from tenant_api.models.maintenance_request_file import MaintenanceRequestFile
from tenant_api.repositories.maintenance_request_file_repository import MaintenanceRequestFileRepository
from tenant_api.repositories.maintenance_request_repository import MaintenanceRequestRepository
from tenant_api.repositories.tenant_repository import TenantRepository
from tenant_api.schemas.maintenance_schemas import (
    AssignRequest,
    CompleteRequest,
    FeedbackRequest,
    MaintenanceRequestCreate,
    StatusUpdateRequest,
)
from tenant_api.services.file_storage_service import FileStorageService

logger = logging.getLogger(__name__)


class MaintenanceService:
    """Service for maintenance requests, their transitions and attachments"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MaintenanceRequestRepository(db)
        self.file_repo = MaintenanceRequestFileRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.storage = FileStorageService()

    # Queries

    def list_requests(
        self,
        page_request: PageRequest,
        status: RequestStatus | None = None,
        priority: Priority | None = None,
    ) -> tuple[list[MaintenanceRequest], int]:
        return self.repo.get_with_filters(page_request, status=status, priority=priority)

    def list_for_caller(
        self, ctx: AuthContext, page_request: PageRequest
    ) -> tuple[list[MaintenanceRequest], int]:
        tenant = self._require_tenant_profile(ctx)
        return self.repo.get_with_filters(page_request, tenant_id=tenant.id)

    def get_request(self, request_id: int) -> MaintenanceRequest:
        """
        Get maintenance request by ID.

        Raises:
            NotFoundException: If the request doesn't exist
        """
        request = self.repo.get_by_id(request_id)
        if not request:
            raise NotFoundException("Maintenance request not found", error_code="REQUEST_NOT_FOUND")
        return request

    def get_accessible_request(self, request_id: int, ctx: AuthContext) -> MaintenanceRequest:
        """Get a request the caller may see: admins see all, tenants their own"""
        request = self.get_request(request_id)
        if not ctx.is_admin() and not ctx.owns_tenant(request.tenant_id):
            raise ForbiddenException("Access denied")
        return request

    def _require_tenant_profile(self, ctx: AuthContext):
        tenant = self.tenant_repo.get_by_user_id(ctx.user.id)
        if tenant is None:
            raise ForbiddenException("Tenant profile not found", error_code="TENANT_NOT_FOUND")
        return tenant

    # Commands

    def create_request(self, ctx: AuthContext, data: MaintenanceRequestCreate) -> MaintenanceRequest:
        """
        File a new PENDING request for the caller's tenant profile.

        Raises:
            ForbiddenException: TENANT_NOT_FOUND if the caller has no tenant profile
        """
        tenant = self._require_tenant_profile(ctx)
        request = MaintenanceRequest(
            tenant_id=tenant.id,
            status=RequestStatus.PENDING,
            **data.model_dump(),
        )
        request = self.repo.create(request)
        logger.info("Maintenance request %s created by %s", request.id, ctx.user.email)
        return request

    def update_status(self, request_id: int, data: StatusUpdateRequest) -> MaintenanceRequest:
        """Apply an admin status change through the transition rules, then plain fields"""
        request = self.get_request(request_id)
        previous = request.status

        if data.status is not None:
            request.transition_to(
                data.status,
                assigned_to=data.assigned_to,
                scheduled_date=data.scheduled_date,
                resolution_summary=data.resolution_summary,
                actual_cost=data.actual_cost,
                reason=data.reason,
            )

        if data.assigned_to is not None:
            request.assigned_to = data.assigned_to
        if data.admin_notes is not None:
            request.admin_notes = data.admin_notes
        if data.scheduled_date is not None:
            request.scheduled_date = data.scheduled_date
        if data.estimated_cost is not None:
            request.estimated_cost = data.estimated_cost
        if data.actual_cost is not None:
            request.actual_cost = data.actual_cost

        request = self.repo.update(request)
        logger.info(
            "Maintenance request %s updated: %s -> %s",
            request.id,
            previous.value,
            request.status.value,
        )
        return request

    def assign(self, request_id: int, data: AssignRequest) -> MaintenanceRequest:
        request = self.get_request(request_id)
        request.assign_to(data.assigned_to, data.scheduled_date)
        logger.info("Maintenance request %s assigned to %s", request_id, data.assigned_to)
        return self.repo.update(request)

    def start(self, request_id: int) -> MaintenanceRequest:
        request = self.get_request(request_id)
        request.start()
        logger.info("Maintenance request %s started", request_id)
        return self.repo.update(request)

    def complete(self, request_id: int, data: CompleteRequest) -> MaintenanceRequest:
        request = self.get_request(request_id)
        request.complete(data.resolution_summary, data.actual_cost)
        logger.info("Maintenance request %s completed", request_id)
        return self.repo.update(request)

    def cancel(self, request_id: int, reason: str | None = None) -> MaintenanceRequest:
        request = self.get_request(request_id)
        request.cancel(reason)
        logger.info("Maintenance request %s cancelled", request_id)
        return self.repo.update(request)

    def add_feedback(self, request_id: int, ctx: AuthContext, data: FeedbackRequest) -> MaintenanceRequest:
        """
        Record tenant feedback on a completed request.

        Raises:
            ForbiddenException: The caller does not own the request
            ValidationException: INVALID_STATUS outside COMPLETED, INVALID_RATING outside 1..5
        """
        request = self.get_request(request_id)
        if not ctx.owns_tenant(request.tenant_id):
            raise ForbiddenException("Access denied")

        request.add_feedback(**data.model_dump(exclude_unset=True))
        return self.repo.update(request)

    def attach_files(
        self, request_id: int, ctx: AuthContext, uploads: list[UploadFile]
    ) -> list[MaintenanceRequestFile]:
        """Store uploads on disk and link them to the request"""
        request = self.get_accessible_request(request_id, ctx)
        uploads = [u for u in uploads if u.filename]
        if not uploads:
            raise ValidationException("No files provided", error_code="INVALID_FILE")

        stored: list[MaintenanceRequestFile] = []
        try:
            for upload in uploads:
                attachment = self.storage.store(upload)
                stored.append(attachment)
                attachment.maintenance_request_id = request.id
                self.file_repo.create_no_commit(attachment)
        except Exception:
            for attachment in stored:
                self.storage.delete(attachment)
            self.db.rollback()
            raise

        self.db.commit()
        for attachment in stored:
            self.db.refresh(attachment)
        logger.info("Attached %d file(s) to maintenance request %s", len(stored), request.id)
        return stored

    def delete_request(self, request_id: int) -> None:
        """Delete a request, its attachment rows and their stored files"""
        request = self.get_request(request_id)
        for attachment in request.attachments:
            self.storage.delete(attachment)
        self.repo.delete(request)
        logger.info("Maintenance request %s deleted", request_id)

    # Attachments

    def get_accessible_file(self, file_id: int, ctx: AuthContext) -> MaintenanceRequestFile:
        attachment = self.file_repo.get_by_id(file_id)
        if attachment is None:
            raise NotFoundException("File not found", error_code="FILE_NOT_FOUND")

        request = attachment.maintenance_request
        if not ctx.is_admin() and (request is None or not ctx.owns_tenant(request.tenant_id)):
            raise ForbiddenException("Access denied")
        return attachment
