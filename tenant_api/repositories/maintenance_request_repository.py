from sqlalchemy.orm import Session

from tenant_api.core.pagination import PageRequest, apply_page
from tenant_api.models.maintenance_request import MaintenanceRequest, Priority, RequestStatus

SORTABLE_FIELDS = {
    "id",
    "created_at",
    "updated_at",
    "status",
    "priority",
    "category",
    "title",
    "scheduled_date",
    "completed_at",
}


class MaintenanceRequestRepository:
    """Repository for MaintenanceRequest data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, request_id: int) -> MaintenanceRequest | None:
        return self.db.query(MaintenanceRequest).filter(MaintenanceRequest.id == request_id).first()

    def get_with_filters(
        self,
        page_request: PageRequest,
        status: RequestStatus | None = None,
        priority: Priority | None = None,
        tenant_id: int | None = None,
    ) -> tuple[list[MaintenanceRequest], int]:
        """
        Get maintenance requests with optional filters.

        Args:
            page_request: Page, size and sort column
            status: Optional status filter
            priority: Optional priority filter
            tenant_id: Restrict to one tenant's requests

        Returns:
            Tuple of (requests on the page, total count)
        """
        query = self.db.query(MaintenanceRequest)

        if tenant_id is not None:
            query = query.filter(MaintenanceRequest.tenant_id == tenant_id)

        if status is not None:
            query = query.filter(MaintenanceRequest.status == status)

        if priority is not None:
            query = query.filter(MaintenanceRequest.priority == priority)

        return apply_page(query, MaintenanceRequest, page_request, SORTABLE_FIELDS)

    def get_recent_by_tenant(self, tenant_id: int, limit: int = 5) -> list[MaintenanceRequest]:
        return (
            self.db.query(MaintenanceRequest)
            .filter(MaintenanceRequest.tenant_id == tenant_id)
            .order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.id.desc())
            .limit(limit)
            .all()
        )

    def count_by_status(self, status: RequestStatus, tenant_id: int | None = None) -> int:
        query = self.db.query(MaintenanceRequest).filter(MaintenanceRequest.status == status)
        if tenant_id is not None:
            query = query.filter(MaintenanceRequest.tenant_id == tenant_id)
        return query.count()

    def create(self, request: MaintenanceRequest) -> MaintenanceRequest:
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)
        return request

    def update(self, request: MaintenanceRequest) -> MaintenanceRequest:
        self.db.commit()
        self.db.refresh(request)
        return request

    def delete(self, request: MaintenanceRequest) -> None:
        """Delete request (cascades to attachment rows)"""
        self.db.delete(request)
        self.db.commit()
