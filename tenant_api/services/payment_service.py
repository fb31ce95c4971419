import logging
from datetime import date

from sqlalchemy.orm import Session

from tenant_api.core.exceptions import NotFoundException
from tenant_api.core.pagination import PageRequest
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.payment import Payment, PaymentStatus
from tenant_api.repositories.payment_repository import PaymentRepository
from tenant_api.repositories.tenant_repository import TenantRepository
from tenant_api.schemas.payment_schemas import MarkPaidRequest, PaymentCreate

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for payment records and history"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentRepository(db)
        self.tenant_repo = TenantRepository(db)

    def get_history(
        self,
        page_request: PageRequest,
        tenant_name: str | None = None,
        status: PaymentStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> tuple[list[Payment], int]:
        return self.repo.get_history(
            page_request,
            tenant_name=tenant_name,
            status=status,
            start_date=start_date,
            end_date=end_date,
        )

    def list_for_caller(self, ctx: AuthContext) -> list[Payment]:
        tenant = self.tenant_repo.get_by_user_id(ctx.user.id)
        if tenant is None:
            return []
        return self.repo.get_by_tenant(tenant.id)

    def create_payment(self, data: PaymentCreate) -> Payment:
        """Record a PENDING payment due from a tenant"""
        if self.tenant_repo.get_by_id(data.tenant_id) is None:
            raise NotFoundException("Tenant not found", error_code="TENANT_NOT_FOUND")

        payment = Payment(status=PaymentStatus.PENDING, **data.model_dump())
        payment.refresh_total()
        payment = self.repo.create(payment)
        logger.info("Recorded payment %s for tenant %s", payment.id, payment.tenant_id)
        return payment

    def mark_paid(self, payment_id: int, data: MarkPaidRequest, ctx: AuthContext) -> Payment:
        """
        Complete a payment.

        Raises:
            NotFoundException: Unknown payment
            InvalidStatusTransition: The payment is no longer PENDING/PARTIAL
        """
        payment = self.repo.get_by_id(payment_id)
        if payment is None:
            raise NotFoundException("Payment not found", error_code="PAYMENT_NOT_FOUND")

        payment.mark_as_paid(data.payment_method, data.transaction_id, processed_by=ctx.user.email)
        payment = self.repo.update(payment)
        logger.info("Payment %s marked as paid by %s", payment_id, ctx.user.email)
        return payment
