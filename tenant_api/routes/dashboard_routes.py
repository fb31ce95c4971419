from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tenant_api.database import get_db
from tenant_api.dependencies import require_admin, require_tenant
from tenant_api.models.auth_context import AuthContext
from tenant_api.schemas.dashboard_schemas import AdminDashboardResponse, TenantDashboardResponse
from tenant_api.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/admin", response_model=AdminDashboardResponse)
def admin_dashboard(ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)):
    service = DashboardService(db)
    return service.admin_summary()


@router.get("/tenant", response_model=TenantDashboardResponse)
def tenant_dashboard(ctx: AuthContext = Depends(require_tenant), db: Session = Depends(get_db)):
    service = DashboardService(db)
    return service.tenant_summary(ctx)
