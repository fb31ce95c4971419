from sqlalchemy.orm import Session

from tenant_api.core.pagination import PageRequest, apply_page
from tenant_api.models.tenant import Tenant, TenantStatus

SORTABLE_FIELDS = {
    "id",
    "created_at",
    "updated_at",
    "status",
    "property_address",
    "unit_number",
    "rent_amount",
    "lease_start_date",
    "lease_end_date",
}


class TenantRepository:
    """Repository for Tenant profile operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: int) -> Tenant | None:
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_user_id(self, user_id: int) -> Tenant | None:
        """Get the tenant profile owned by a user, if any"""
        return self.db.query(Tenant).filter(Tenant.user_id == user_id).first()

    def exists_by_user_id(self, user_id: int) -> bool:
        return self.get_by_user_id(user_id) is not None

    def list_paginated(
        self, page_request: PageRequest, status: TenantStatus | None = None
    ) -> tuple[list[Tenant], int]:
        """
        List tenants one page at a time.

        Args:
            page_request: Page, size and sort column
            status: Optional status filter

        Returns:
            Tuple of (tenants on the page, total count)
        """
        query = self.db.query(Tenant)
        if status is not None:
            query = query.filter(Tenant.status == status)
        return apply_page(query, Tenant, page_request, SORTABLE_FIELDS)

    def count(self) -> int:
        return self.db.query(Tenant).count()

    def create(self, tenant: Tenant) -> Tenant:
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def create_no_commit(self, tenant: Tenant) -> Tenant:
        """Add a tenant without committing (caller commits with the user)"""
        self.db.add(tenant)
        self.db.flush()
        return tenant

    def update(self, tenant: Tenant) -> Tenant:
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def delete(self, tenant: Tenant) -> None:
        """Delete tenant (cascades to leases, payments and maintenance requests)"""
        self.db.delete(tenant)
        self.db.commit()
