import logging

from sqlalchemy.orm import Session

from tenant_api.core.exceptions import ForbiddenException, NotFoundException
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.lease_agreement import LeaseAgreement, LeaseStatus
from tenant_api.repositories.lease_agreement_repository import LeaseAgreementRepository
from tenant_api.repositories.tenant_repository import TenantRepository
from tenant_api.schemas.lease_schemas import LeaseCreate

logger = logging.getLogger(__name__)


class LeaseService:
    """Service for lease drafting, signing and lifecycle"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LeaseAgreementRepository(db)
        self.tenant_repo = TenantRepository(db)

    def list_leases(self, status: LeaseStatus | None = None) -> list[LeaseAgreement]:
        return self.repo.get_all(status)

    def list_for_caller(self, ctx: AuthContext) -> list[LeaseAgreement]:
        tenant = self.tenant_repo.get_by_user_id(ctx.user.id)
        if tenant is None:
            return []
        return self.repo.get_by_tenant(tenant.id)

    def get_lease(self, lease_id: int) -> LeaseAgreement:
        lease = self.repo.get_by_id(lease_id)
        if not lease:
            raise NotFoundException("Lease agreement not found", error_code="LEASE_NOT_FOUND")
        return lease

    def create_lease(self, data: LeaseCreate) -> LeaseAgreement:
        """Draft a lease for an existing tenant"""
        if self.tenant_repo.get_by_id(data.tenant_id) is None:
            raise NotFoundException("Tenant not found", error_code="TENANT_NOT_FOUND")

        fields = data.model_dump(exclude={"previous_lease_id"})
        lease = LeaseAgreement(status=LeaseStatus.DRAFT, **fields)
        if data.previous_lease_id is not None:
            self.get_lease(data.previous_lease_id)
            lease.mark_as_renewal(data.previous_lease_id)

        lease = self.repo.create(lease)
        logger.info("Drafted lease %s for tenant %s", lease.id, lease.tenant_id)
        return lease

    def send_for_signature(self, lease_id: int) -> LeaseAgreement:
        lease = self.get_lease(lease_id)
        lease.send_for_signature()
        logger.info("Lease %s sent for signature", lease_id)
        return self.repo.update(lease)

    def sign(self, lease_id: int, ctx: AuthContext) -> LeaseAgreement:
        """Sign as the caller's role: admins countersign, tenants sign their own lease"""
        lease = self.get_lease(lease_id)
        if ctx.is_admin():
            lease.sign_by_admin()
        elif ctx.owns_tenant(lease.tenant_id):
            lease.sign_by_tenant()
        else:
            raise ForbiddenException("Access denied")

        logger.info("Lease %s signed by %s (status %s)", lease_id, ctx.user.email, lease.status.value)
        return self.repo.update(lease)

    def activate(self, lease_id: int) -> LeaseAgreement:
        lease = self.get_lease(lease_id)
        lease.activate()
        logger.info("Lease %s activated", lease_id)
        return self.repo.update(lease)

    def terminate(self, lease_id: int, reason: str | None = None) -> LeaseAgreement:
        lease = self.get_lease(lease_id)
        lease.terminate(reason)
        logger.info("Lease %s terminated", lease_id)
        return self.repo.update(lease)
