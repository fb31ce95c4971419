import os

# Settings are read at import time; provide test values before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-hs512-signing-0123456789abcdef")

import pytest
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from tenant_api.database import get_db
from tenant_api.models.base import Base
from tenant_api.config import settings
from tenant_api.core.security import hash_password
# Import all model classes to ensure they're registered with SQLAlchemy
from tenant_api.models.user import User, UserRole
from tenant_api.models.property import Property
from tenant_api.models.tenant import Tenant, TenantStatus
from tenant_api.models.lease_agreement import LeaseAgreement
from tenant_api.models.maintenance_request import MaintenanceRequest, Category, Priority, RequestStatus
from tenant_api.models.maintenance_request_file import MaintenanceRequestFile
from tenant_api.models.payment import Payment
# Import FastAPI app AFTER model imports
from tenant_api.main import app

TEST_PASSWORD = "Secret123!"

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point UPLOAD_DIR at a per-test temporary directory"""
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


def create_test_token(
    email: str = "tenant@example.com",
    token_type: str = "access",
    expired: bool = False,
    secret: str | None = None,
) -> str:
    """
    Generate a JWT for testing.

    Args:
        email: Value of the 'sub' claim
        token_type: 'access' or 'refresh'
        expired: If True, create expired token
        secret: Signing key override (defaults to SECRET_KEY)

    Returns:
        Encoded JWT token
    """
    now = datetime.now(UTC)
    if expired:
        exp = now - timedelta(minutes=5)
    else:
        exp = now + timedelta(minutes=15)

    payload = {"sub": email, "type": token_type, "exp": exp, "iat": now - timedelta(minutes=20)}

    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers_for(user: User) -> dict:
    """Authorization headers carrying a valid access token for user"""
    return {"Authorization": f"Bearer {create_test_token(email=user.email)}"}


def create_user(
    db,
    email: str,
    role: UserRole = UserRole.TENANT,
    first_name: str = "Test",
    last_name: str = "User",
    is_active: bool = True,
) -> User:
    user = User(
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        first_name=first_name,
        last_name=last_name,
        phone_number="5551234567",
        role=role,
        is_active=is_active,
        email_verified=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_tenant_profile(db, user: User, **fields) -> Tenant:
    values = {
        "property_address": "12 Elm Street",
        "unit_number": "4B",
        "status": TenantStatus.ACTIVE,
        "rent_amount": Decimal("1200.00"),
    }
    values.update(fields)
    tenant = Tenant(user_id=user.id, **values)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def create_maintenance_request(db, tenant: Tenant, **fields) -> MaintenanceRequest:
    values = {
        "title": "Leaking kitchen tap",
        "description": "The tap drips constantly",
        "category": Category.PLUMBING,
        "priority": Priority.MEDIUM,
        "status": RequestStatus.PENDING,
    }
    values.update(fields)
    request = MaintenanceRequest(tenant_id=tenant.id, **values)
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


@pytest.fixture
def admin_user(db_session):
    return create_user(db_session, "admin@example.com", role=UserRole.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def tenant_user(db_session):
    return create_user(db_session, "tenant@example.com", first_name="Tom", last_name="Renter")


@pytest.fixture
def tenant_profile(db_session, tenant_user):
    return create_tenant_profile(db_session, tenant_user)


@pytest.fixture
def other_tenant_user(db_session):
    return create_user(db_session, "other@example.com", first_name="Olga", last_name="Other")


@pytest.fixture
def other_tenant_profile(db_session, other_tenant_user):
    return create_tenant_profile(db_session, other_tenant_user, property_address="99 Oak Avenue", unit_number="1")


@pytest.fixture
def admin_headers(admin_user):
    """Authorization headers for the admin"""
    return auth_headers_for(admin_user)


@pytest.fixture
def tenant_headers(tenant_user):
    """Authorization headers for the tenant user"""
    return auth_headers_for(tenant_user)


@pytest.fixture
def other_tenant_headers(other_tenant_user):
    return auth_headers_for(other_tenant_user)


@pytest.fixture
def maintenance_request(db_session, tenant_profile):
    return create_maintenance_request(db_session, tenant_profile)


@pytest.fixture
def sample_property(db_session):
    property_ = Property(
        name="Elm Court",
        address="12 Elm Street",
        manager_owner_name="Pat Manager",
        number_of_units=10,
    )
    db_session.add(property_)
    db_session.commit()
    db_session.refresh(property_)
    return property_


@pytest.fixture
def draft_lease(db_session, tenant_profile):
    lease = LeaseAgreement(
        tenant_id=tenant_profile.id,
        start_date=date.today() - timedelta(days=1),
        end_date=date.today() + timedelta(days=364),
        monthly_rent=Decimal("1200.00"),
    )
    db_session.add(lease)
    db_session.commit()
    db_session.refresh(lease)
    return lease


@pytest.fixture
def pending_payment(db_session, tenant_profile):
    payment = Payment(
        tenant_id=tenant_profile.id,
        amount=Decimal("1200.00"),
        due_date=date.today() + timedelta(days=5),
    )
    payment.refresh_total()
    db_session.add(payment)
    db_session.commit()
    db_session.refresh(payment)
    return payment
