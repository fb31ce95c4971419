from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tenant_api.database import get_db
from tenant_api.dependencies import get_current_user, require_admin, require_tenant
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.lease_agreement import LeaseStatus
from tenant_api.schemas.lease_schemas import LeaseCreate, LeaseResponse, LeaseTerminateRequest
from tenant_api.services.lease_service import LeaseService

admin_router = APIRouter()
router = APIRouter()


@admin_router.get("", response_model=list[LeaseResponse])
def list_leases(
    status_filter: LeaseStatus | None = Query(None, alias="status"),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = LeaseService(db)
    return service.list_leases(status_filter)


@admin_router.post("", response_model=LeaseResponse, status_code=status.HTTP_201_CREATED)
def create_lease(
    data: LeaseCreate, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    """Draft a lease for a tenant"""
    service = LeaseService(db)
    return service.create_lease(data)


@admin_router.post("/{lease_id}/send", response_model=LeaseResponse)
def send_for_signature(
    lease_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = LeaseService(db)
    return service.send_for_signature(lease_id)


@admin_router.post("/{lease_id}/activate", response_model=LeaseResponse)
def activate_lease(
    lease_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = LeaseService(db)
    return service.activate(lease_id)


@admin_router.post("/{lease_id}/terminate", response_model=LeaseResponse)
def terminate_lease(
    lease_id: int,
    data: LeaseTerminateRequest,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = LeaseService(db)
    return service.terminate(lease_id, data.reason)


@router.get("/my-leases", response_model=list[LeaseResponse])
def my_leases(ctx: AuthContext = Depends(require_tenant), db: Session = Depends(get_db)):
    service = LeaseService(db)
    return service.list_for_caller(ctx)


@router.post("/{lease_id}/sign", response_model=LeaseResponse)
def sign_lease(
    lease_id: int, ctx: AuthContext = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Sign as the caller: tenants sign their own lease, admins countersign"""
    service = LeaseService(db)
    return service.sign(lease_id, ctx)
