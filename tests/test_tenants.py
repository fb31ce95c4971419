from datetime import date, timedelta
from decimal import Decimal

from tenant_api.models.lease_agreement import LeaseAgreement
from tenant_api.models.maintenance_request import MaintenanceRequest
from tenant_api.models.payment import Payment
from tenant_api.models.tenant import Tenant, TenantStatus
from tenant_api.models.user import User
from tests.conftest import create_maintenance_request, create_tenant_profile, create_user


class TestListTenants:
    """Tests for GET /api/tenants"""

    def test_list_empty(self, client, admin_headers):
        response = client.get("/api/tenants", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["tenants"] == []
        assert body["totalItems"] == 0
        assert body["totalPages"] == 0
        assert body["currentPage"] == 0
        assert body["pageSize"] == 10

    def test_list_includes_user_details(self, client, admin_headers, tenant_profile):
        response = client.get("/api/tenants", headers=admin_headers)

        assert response.status_code == 200
        tenants = response.json()["tenants"]
        assert len(tenants) == 1
        assert tenants[0]["id"] == tenant_profile.id
        assert tenants[0]["user"]["email"] == "tenant@example.com"
        assert tenants[0]["fullAddress"] == "12 Elm Street, Unit 4B"
        assert tenants[0]["rentAmount"] == 1200.0

    def test_pagination(self, client, db_session, admin_headers):
        """Pages are zero-based and sized by the size parameter"""
        for i in range(5):
            user = create_user(db_session, f"renter{i}@example.com")
            create_tenant_profile(db_session, user, unit_number=f"{i}")

        response = client.get(
            "/api/tenants",
            headers=admin_headers,
            params={"page": 1, "size": 2, "sortBy": "unitNumber", "sortDir": "asc"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["totalItems"] == 5
        assert body["totalPages"] == 3
        assert body["currentPage"] == 1
        assert [t["unitNumber"] for t in body["tenants"]] == ["2", "3"]

    def test_status_filter(self, client, db_session, admin_headers, tenant_profile):
        user = create_user(db_session, "pending@example.com")
        create_tenant_profile(db_session, user, status=TenantStatus.PENDING)

        response = client.get("/api/tenants", headers=admin_headers, params={"status": "PENDING"})

        assert response.status_code == 200
        tenants = response.json()["tenants"]
        assert len(tenants) == 1
        assert tenants[0]["status"] == "PENDING"

    def test_unknown_sort_field(self, client, admin_headers):
        response = client.get("/api/tenants", headers=admin_headers, params={"sortBy": "passwordHash"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_SORT"

    def test_bad_sort_direction(self, client, admin_headers):
        response = client.get("/api/tenants", headers=admin_headers, params={"sortDir": "sideways"})
        assert response.status_code == 400

    def test_page_size_limit(self, client, admin_headers):
        response = client.get("/api/tenants", headers=admin_headers, params={"size": 500})
        assert response.status_code == 422


class TestOwnProfile:
    """Tests for /api/tenants/me"""

    def test_get_own_profile(self, client, tenant_headers, tenant_profile):
        response = client.get("/api/tenants/me", headers=tenant_headers)

        assert response.status_code == 200
        assert response.json()["id"] == tenant_profile.id
        assert response.json()["user"]["fullName"] == "Tom Renter"

    def test_get_missing_profile(self, client, tenant_headers):
        response = client.get("/api/tenants/me", headers=tenant_headers)

        assert response.status_code == 404
        assert response.json()["errorCode"] == "TENANT_NOT_FOUND"

    def test_create_profile(self, client, db_session, tenant_headers, tenant_user, sample_property):
        response = client.post(
            "/api/tenants/me",
            headers=tenant_headers,
            json={
                "propertyAddress": "12 Elm Street",
                "unitNumber": "7",
                "propertyId": sample_property.id,
                "emergencyContactName": "Mia Renter",
                "emergencyContactPhone": "5550001111",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["propertyId"] == sample_property.id
        assert body["emergencyContactName"] == "Mia Renter"

        tenant = db_session.query(Tenant).filter(Tenant.user_id == tenant_user.id).one()
        assert tenant.unit_number == "7"

    def test_create_profile_twice(self, client, tenant_headers, tenant_profile):
        response = client.post("/api/tenants/me", headers=tenant_headers, json={"unitNumber": "9"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "TENANT_EXISTS"

    def test_create_profile_unknown_property(self, client, tenant_headers):
        response = client.post("/api/tenants/me", headers=tenant_headers, json={"propertyId": 4242})

        assert response.status_code == 404
        assert response.json()["errorCode"] == "PROPERTY_NOT_FOUND"


class TestAdminTenantOperations:
    """Tests for GET/PUT/DELETE /api/tenants/{id}"""

    def test_get_tenant(self, client, admin_headers, tenant_profile):
        response = client.get(f"/api/tenants/{tenant_profile.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["unitNumber"] == "4B"

    def test_get_unknown_tenant(self, client, admin_headers):
        response = client.get("/api/tenants/999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["errorCode"] == "TENANT_NOT_FOUND"

    def test_update_tenant_and_user_fields(self, client, db_session, admin_headers, tenant_profile, tenant_user):
        response = client.put(
            f"/api/tenants/{tenant_profile.id}",
            headers=admin_headers,
            json={
                "firstName": "Thomas",
                "email": "Thomas@Example.com",
                "rentAmount": "1350.00",
                "status": "SUSPENDED",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "SUSPENDED"
        assert body["rentAmount"] == 1350.0
        assert body["user"]["firstName"] == "Thomas"
        assert body["user"]["email"] == "thomas@example.com"

        db_session.refresh(tenant_user)
        assert tenant_user.first_name == "Thomas"
        assert tenant_profile.rent_amount == Decimal("1350.00")

    def test_update_ignores_null_required_fields(self, client, admin_headers, tenant_profile):
        response = client.put(
            f"/api/tenants/{tenant_profile.id}",
            headers=admin_headers,
            json={"firstName": None, "status": None, "notes": "Quiet tenant"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["firstName"] == "Tom"
        assert response.json()["status"] == "ACTIVE"
        assert response.json()["notes"] == "Quiet tenant"

    def test_update_email_taken(self, client, admin_headers, tenant_profile, other_tenant_user):
        response = client.put(
            f"/api/tenants/{tenant_profile.id}",
            headers=admin_headers,
            json={"email": other_tenant_user.email},
        )

        assert response.status_code == 409
        assert response.json()["errorCode"] == "EMAIL_ALREADY_EXISTS"

    def test_delete_cascades_to_tenancy_records(self, client, db_session, admin_headers, tenant_profile, tenant_user):
        """Deleting a tenant removes leases, payments and requests but keeps the user"""
        create_maintenance_request(db_session, tenant_profile)
        db_session.add(
            LeaseAgreement(
                tenant_id=tenant_profile.id,
                start_date=date.today(),
                end_date=date.today() + timedelta(days=365),
                monthly_rent=Decimal("1200.00"),
            )
        )
        db_session.add(
            Payment(
                tenant_id=tenant_profile.id,
                amount=Decimal("1200.00"),
                due_date=date.today(),
                total_amount=Decimal("1200.00"),
            )
        )
        db_session.commit()
        tenant_id = tenant_profile.id

        response = client.delete(f"/api/tenants/{tenant_id}", headers=admin_headers)

        assert response.status_code == 204
        db_session.expire_all()
        assert db_session.get(Tenant, tenant_id) is None
        assert db_session.query(MaintenanceRequest).count() == 0
        assert db_session.query(LeaseAgreement).count() == 0
        assert db_session.query(Payment).count() == 0
        assert db_session.query(User).filter(User.id == tenant_user.id).count() == 1

    def test_tenant_cannot_read_other_profile(self, client, tenant_headers, other_tenant_profile):
        response = client.get(f"/api/tenants/{other_tenant_profile.id}", headers=tenant_headers)
        assert response.status_code == 403
