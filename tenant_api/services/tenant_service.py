import logging

from sqlalchemy.orm import Session

from tenant_api.core.exceptions import ConflictException, NotFoundException, ValidationException
from tenant_api.core.pagination import PageRequest
from tenant_api.models.tenant import Tenant, TenantStatus
from tenant_api.models.user import User
from tenant_api.repositories.property_repository import PropertyRepository
from tenant_api.repositories.tenant_repository import TenantRepository
from tenant_api.repositories.user_repository import UserRepository
from tenant_api.schemas.tenant_schemas import TenantProfileCreate, TenantUpdate

logger = logging.getLogger(__name__)

USER_FIELDS = ("first_name", "last_name", "email", "phone_number")
REQUIRED_FIELDS = ("first_name", "last_name", "email", "status")


class TenantService:
    """Service for tenant profile business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TenantRepository(db)
        self.user_repo = UserRepository(db)
        self.property_repo = PropertyRepository(db)

    def list_tenants(
        self, page_request: PageRequest, status: TenantStatus | None = None
    ) -> tuple[list[Tenant], int]:
        return self.repo.list_paginated(page_request, status)

    def get_tenant(self, tenant_id: int) -> Tenant:
        """
        Get tenant by ID.

        Raises:
            NotFoundException: If tenant doesn't exist
        """
        tenant = self.repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundException("Tenant not found", error_code="TENANT_NOT_FOUND")
        return tenant

    def get_for_user(self, user: User) -> Tenant:
        """Get the caller's own profile (404 TENANT_NOT_FOUND when missing)"""
        tenant = self.repo.get_by_user_id(user.id)
        if not tenant:
            raise NotFoundException("Tenant profile not found", error_code="TENANT_NOT_FOUND")
        return tenant

    def _check_property(self, property_id: int | None) -> None:
        if property_id is not None and self.property_repo.get_by_id(property_id) is None:
            raise NotFoundException("Property not found", error_code="PROPERTY_NOT_FOUND")

    def create_profile(self, user: User, data: TenantProfileCreate) -> Tenant:
        """
        Create the caller's tenant profile.

        Raises:
            ValidationException: If the user already has a profile
        """
        if self.repo.exists_by_user_id(user.id):
            raise ValidationException(
                "Tenant profile already exists for this user", error_code="TENANT_EXISTS"
            )
        self._check_property(data.property_id)

        tenant = Tenant(user_id=user.id, status=TenantStatus.PENDING, **data.model_dump())
        tenant = self.repo.create(tenant)
        logger.info("Created tenant profile %s for user %s", tenant.id, user.email)
        return tenant

    def update_tenant(self, tenant_id: int, data: TenantUpdate) -> Tenant:
        """Update tenant fields and the linked user's contact details"""
        tenant = self.get_tenant(tenant_id)
        changes = data.model_dump(exclude_unset=True)

        new_email = changes.get("email")
        if new_email and new_email.lower() != tenant.user.email.lower():
            if self.user_repo.exists_by_email(new_email):
                raise ConflictException(
                    "Email address is already registered", error_code="EMAIL_ALREADY_EXISTS"
                )
            changes["email"] = new_email.lower()

        if "property_id" in changes:
            self._check_property(changes["property_id"])

        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            target = tenant.user if field in USER_FIELDS else tenant
            setattr(target, field, value)

        tenant = self.repo.update(tenant)
        logger.info("Updated tenant %s", tenant.id)
        return tenant

    def delete_tenant(self, tenant_id: int) -> None:
        """Delete tenant with its leases, payments and requests; the user is kept"""
        tenant = self.get_tenant(tenant_id)
        self.repo.delete(tenant)
        logger.info("Deleted tenant %s", tenant_id)
