from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tenant_api.core.pagination import MAX_PAGE_SIZE, PageRequest
from tenant_api.database import get_db
from tenant_api.dependencies import require_admin, require_tenant
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.payment import PaymentStatus
from tenant_api.schemas.payment_schemas import (
    MarkPaidRequest,
    PaymentCreate,
    PaymentHistoryItem,
    PaymentHistoryPage,
    PaymentResponse,
)
from tenant_api.services.payment_service import PaymentService

admin_router = APIRouter()
router = APIRouter()


@admin_router.get("/history", response_model=PaymentHistoryPage)
def payment_history(
    tenant_name: str | None = Query(None, alias="tenantName"),
    status_filter: PaymentStatus | None = Query(None, alias="status"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    sort: str | None = Query(None, description="field,direction e.g. paymentDate,desc"),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Filtered payment history across all tenants (admin)"""
    page_request = PageRequest.from_sort_param(page, size, sort, default_field="payment_date")
    service = PaymentService(db)
    payments, total = service.get_history(
        page_request,
        tenant_name=tenant_name,
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
    )
    return PaymentHistoryPage(
        content=[PaymentHistoryItem.from_entity(p) for p in payments],
        total_elements=total,
        total_pages=page_request.total_pages(total),
        number=page_request.page,
        size=page_request.size,
    )


@admin_router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    data: PaymentCreate, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = PaymentService(db)
    return service.create_payment(data)


@admin_router.post("/{payment_id}/mark-paid", response_model=PaymentResponse)
def mark_paid(
    payment_id: int,
    data: MarkPaidRequest,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = PaymentService(db)
    return service.mark_paid(payment_id, data, ctx)


@router.get("/my-payments", response_model=list[PaymentResponse])
def my_payments(ctx: AuthContext = Depends(require_tenant), db: Session = Depends(get_db)):
    """The caller's payments, newest due date first"""
    service = PaymentService(db)
    return service.list_for_caller(ctx)
