from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from tenant_api.core.pagination import PageRequest, apply_page
from tenant_api.models.payment import Payment, PaymentStatus
from tenant_api.models.tenant import Tenant
from tenant_api.models.user import User

SORTABLE_FIELDS = {
    "id",
    "created_at",
    "amount",
    "total_amount",
    "due_date",
    "payment_date",
    "status",
    "payment_type",
}


class PaymentRepository:
    """Repository for Payment data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, payment_id: int) -> Payment | None:
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def get_by_tenant(self, tenant_id: int) -> list[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.tenant_id == tenant_id)
            .order_by(Payment.due_date.desc(), Payment.id.desc())
            .all()
        )

    def get_history(
        self,
        page_request: PageRequest,
        tenant_name: str | None = None,
        status: PaymentStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> tuple[list[Payment], int]:
        """
        Payment history across all tenants.

        Args:
            page_request: Page, size and sort column
            tenant_name: Case-insensitive partial match on first or last name
            status: Optional status filter
            start_date: Earliest payment date (inclusive)
            end_date: Latest payment date (inclusive)

        Returns:
            Tuple of (payments on the page, total count)
        """
        query = self.db.query(Payment).join(Tenant, Payment.tenant_id == Tenant.id).join(
            User, Tenant.user_id == User.id
        )

        if tenant_name:
            pattern = f"%{tenant_name}%"
            query = query.filter(or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))

        if status is not None:
            query = query.filter(Payment.status == status)

        if start_date is not None:
            query = query.filter(Payment.payment_date >= start_date)

        if end_date is not None:
            query = query.filter(Payment.payment_date <= end_date)

        return apply_page(query, Payment, page_request, SORTABLE_FIELDS)

    def create(self, payment: Payment) -> Payment:
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)
        return payment

    def update(self, payment: Payment) -> Payment:
        self.db.commit()
        self.db.refresh(payment)
        return payment
