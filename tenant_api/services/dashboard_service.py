from sqlalchemy.orm import Session

from tenant_api.models.auth_context import AuthContext
from tenant_api.models.maintenance_request import RequestStatus
from tenant_api.repositories.maintenance_request_repository import MaintenanceRequestRepository
from tenant_api.repositories.property_repository import PropertyRepository
from tenant_api.repositories.tenant_repository import TenantRepository
from tenant_api.schemas.dashboard_schemas import (
    AdminDashboardResponse,
    MaintenanceData,
    ProfileData,
    TenantDashboardResponse,
)
from tenant_api.schemas.maintenance_schemas import MaintenanceRequestResponse
from tenant_api.services.tenant_service import TenantService

RECENT_REQUESTS_LIMIT = 5


class DashboardService:
    """Summary figures for the admin and tenant home screens"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.property_repo = PropertyRepository(db)
        self.maintenance_repo = MaintenanceRequestRepository(db)

    def admin_summary(self) -> AdminDashboardResponse:
        return AdminDashboardResponse(
            total_tenants=self.tenant_repo.count(),
            pending_maintenance_requests=self.maintenance_repo.count_by_status(RequestStatus.PENDING),
            total_properties=self.property_repo.count(),
        )

    def tenant_summary(self, ctx: AuthContext) -> TenantDashboardResponse:
        """Profile plus maintenance counts; 404 TENANT_NOT_FOUND without a profile"""
        tenant = TenantService(self.db).get_for_user(ctx.user)
        count = self.maintenance_repo.count_by_status
        recent = self.maintenance_repo.get_recent_by_tenant(tenant.id, RECENT_REQUESTS_LIMIT)

        return TenantDashboardResponse(
            profile=ProfileData(
                name=ctx.user.full_name,
                email=ctx.user.email,
                property_address=tenant.property_address,
            ),
            maintenance=MaintenanceData(
                active_requests=count(RequestStatus.IN_PROGRESS, tenant.id),
                pending_requests=count(RequestStatus.PENDING, tenant.id),
                completed_requests=count(RequestStatus.COMPLETED, tenant.id),
                recent_requests=[MaintenanceRequestResponse.from_entity(r) for r in recent],
            ),
        )
