from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tenant_api.core.pagination import PageRequest
from tenant_api.database import get_db
from tenant_api.dependencies import page_params, require_admin, require_tenant
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.tenant import TenantStatus
from tenant_api.schemas.tenant_schemas import (
    TenantPageResponse,
    TenantProfileCreate,
    TenantResponse,
    TenantUpdate,
)
from tenant_api.services.tenant_service import TenantService

router = APIRouter()


@router.get("", response_model=TenantPageResponse)
def list_tenants(
    status_filter: TenantStatus | None = Query(None, alias="status"),
    page_request: PageRequest = Depends(page_params),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """List tenants one page at a time (admin)"""
    service = TenantService(db)
    tenants, total = service.list_tenants(page_request, status_filter)
    return TenantPageResponse(
        tenants=tenants,
        current_page=page_request.page,
        total_items=total,
        total_pages=page_request.total_pages(total),
        page_size=page_request.size,
    )


@router.get("/me", response_model=TenantResponse)
def get_my_profile(ctx: AuthContext = Depends(require_tenant), db: Session = Depends(get_db)):
    service = TenantService(db)
    return service.get_for_user(ctx.user)


@router.post("/me", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_my_profile(
    data: TenantProfileCreate,
    ctx: AuthContext = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    """Create the caller's tenant profile (once per user)"""
    service = TenantService(db)
    return service.create_profile(ctx.user, data)


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = TenantService(db)
    return service.get_tenant(tenant_id)


@router.put("/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: int,
    data: TenantUpdate,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Update tenant fields and the linked user's contact details"""
    service = TenantService(db)
    return service.update_tenant(tenant_id, data)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tenant(
    tenant_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    """Delete tenant with its leases, payments and maintenance requests"""
    service = TenantService(db)
    service.delete_tenant(tenant_id)
    return None
