from datetime import date, timedelta
from decimal import Decimal

import pytest

from tenant_api.core.exceptions import InvalidStatusTransition
from tenant_api.models.payment import Payment, PaymentMethod, PaymentStatus


def add_payment(db, tenant, amount="1200.00", status=PaymentStatus.PENDING, payment_date=None, due_date=None) -> Payment:
    payment = Payment(
        tenant_id=tenant.id,
        amount=Decimal(amount),
        due_date=due_date or date.today(),
        status=status,
        payment_date=payment_date,
    )
    payment.refresh_total()
    db.add(payment)
    db.commit()
    db.refresh(payment)
    return payment


class TestCreatePayment:
    """Tests for POST /api/admin/payments"""

    def test_create_payment_computes_total(self, client, admin_headers, tenant_profile):
        response = client.post(
            "/api/admin/payments",
            headers=admin_headers,
            json={
                "tenantId": tenant_profile.id,
                "amount": "1200.00",
                "dueDate": str(date.today() + timedelta(days=10)),
                "lateFee": "50.00",
                "discountAmount": "20.00",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["paymentType"] == "RENT"
        assert body["totalAmount"] == 1230.0
        assert body["paymentDate"] is None

    def test_create_for_unknown_tenant(self, client, admin_headers):
        response = client.post(
            "/api/admin/payments",
            headers=admin_headers,
            json={"tenantId": 999, "amount": "10.00", "dueDate": str(date.today())},
        )

        assert response.status_code == 404
        assert response.json()["errorCode"] == "TENANT_NOT_FOUND"

    def test_amount_must_be_positive(self, client, admin_headers, tenant_profile):
        response = client.post(
            "/api/admin/payments",
            headers=admin_headers,
            json={"tenantId": tenant_profile.id, "amount": "0", "dueDate": str(date.today())},
        )
        assert response.status_code == 422


class TestMarkPaid:
    """Tests for POST /api/admin/payments/{id}/mark-paid"""

    def test_mark_paid(self, client, admin_headers, pending_payment):
        response = client.post(
            f"/api/admin/payments/{pending_payment.id}/mark-paid",
            headers=admin_headers,
            json={"paymentMethod": "BANK_TRANSFER", "transactionId": "TX-1001"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "COMPLETED"
        assert body["paymentMethod"] == "BANK_TRANSFER"
        assert body["transactionId"] == "TX-1001"
        assert body["paymentDate"] == str(date.today())
        assert body["processedBy"] == "admin@example.com"
        assert body["processedAt"] is not None

    def test_mark_paid_twice(self, client, admin_headers, pending_payment):
        url = f"/api/admin/payments/{pending_payment.id}/mark-paid"
        client.post(url, headers=admin_headers, json={"paymentMethod": "CASH"})

        response = client.post(url, headers=admin_headers, json={"paymentMethod": "CASH"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_STATUS_TRANSITION"

    def test_unknown_payment(self, client, admin_headers):
        response = client.post(
            "/api/admin/payments/999/mark-paid", headers=admin_headers, json={"paymentMethod": "CASH"}
        )

        assert response.status_code == 404
        assert response.json()["errorCode"] == "PAYMENT_NOT_FOUND"


class TestPaymentHistory:
    """Tests for GET /api/admin/payments/history"""

    def test_history_filters(self, client, db_session, admin_headers, tenant_profile, other_tenant_profile):
        today = date.today()
        add_payment(db_session, tenant_profile, status=PaymentStatus.COMPLETED, payment_date=today - timedelta(days=40))
        add_payment(db_session, tenant_profile, status=PaymentStatus.COMPLETED, payment_date=today - timedelta(days=5))
        add_payment(db_session, other_tenant_profile, amount="900.00", status=PaymentStatus.COMPLETED, payment_date=today)
        add_payment(db_session, other_tenant_profile, amount="900.00")

        response = client.get("/api/admin/payments/history", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["totalElements"] == 4
        assert body["number"] == 0
        assert body["size"] == 10

        # Case-insensitive partial name match
        response = client.get("/api/admin/payments/history", headers=admin_headers, params={"tenantName": "rEnT"})
        body = response.json()
        assert body["totalElements"] == 2
        assert {item["tenantName"] for item in body["content"]} == {"Tom Renter"}

        response = client.get(
            "/api/admin/payments/history",
            headers=admin_headers,
            params={"startDate": str(today - timedelta(days=10)), "endDate": str(today)},
        )
        assert response.json()["totalElements"] == 2

        response = client.get("/api/admin/payments/history", headers=admin_headers, params={"status": "PENDING"})
        content = response.json()["content"]
        assert len(content) == 1
        assert content[0]["amount"] == 900.0
        assert content[0]["unitNumber"] == "1"

    def test_history_sort_and_page(self, client, db_session, admin_headers, tenant_profile):
        for amount in ("100.00", "300.00", "200.00"):
            add_payment(db_session, tenant_profile, amount=amount)

        response = client.get(
            "/api/admin/payments/history",
            headers=admin_headers,
            params={"sort": "amount,asc", "page": 0, "size": 2},
        )

        body = response.json()
        assert [item["amount"] for item in body["content"]] == [100.0, 200.0]
        assert body["totalPages"] == 2

    def test_history_bad_sort_field(self, client, admin_headers):
        response = client.get("/api/admin/payments/history", headers=admin_headers, params={"sort": "notes,asc"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_SORT"

    def test_history_admin_only(self, client, tenant_headers):
        response = client.get("/api/admin/payments/history", headers=tenant_headers)
        assert response.status_code == 403


class TestMyPayments:
    """Tests for GET /api/payments/my-payments"""

    def test_own_payments_only(self, client, db_session, tenant_headers, tenant_profile, other_tenant_profile):
        older = add_payment(db_session, tenant_profile, due_date=date.today() - timedelta(days=30))
        newer = add_payment(db_session, tenant_profile, due_date=date.today())
        add_payment(db_session, other_tenant_profile)

        response = client.get("/api/payments/my-payments", headers=tenant_headers)

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [newer.id, older.id]

    def test_no_profile_means_no_payments(self, client, tenant_headers):
        response = client.get("/api/payments/my-payments", headers=tenant_headers)

        assert response.status_code == 200
        assert response.json() == []


class TestPaymentRules:
    """Money rules on the Payment model"""

    def _payment(self, **fields) -> Payment:
        values = {"amount": Decimal("1000.00"), "due_date": date.today(), "status": PaymentStatus.PENDING}
        values.update(fields)
        payment = Payment(**values)
        payment.refresh_total()
        return payment

    def test_late_fee_within_grace_period(self):
        payment = self._payment(due_date=date.today() - timedelta(days=3))
        assert payment.days_overdue == 3
        assert payment.calculate_late_fee(Decimal("0.05"), grace_days=5) == Decimal("0.00")

    def test_late_fee_rounds_half_up(self):
        payment = self._payment(amount=Decimal("333.33"), due_date=date.today() - timedelta(days=10))
        # 333.33 * 0.015 = 4.99995
        assert payment.calculate_late_fee(Decimal("0.015"), grace_days=5) == Decimal("5.00")

    def test_not_overdue_when_paid(self):
        payment = self._payment(due_date=date.today() - timedelta(days=10), status=PaymentStatus.COMPLETED)
        assert not payment.is_overdue()
        assert payment.days_overdue == 0

    def test_fee_and_discount_update_total(self):
        payment = self._payment()
        payment.apply_late_fee(Decimal("25.00"))
        payment.apply_discount(Decimal("10.00"))
        assert payment.total_amount == Decimal("1015.00")

    def test_failed_payment_is_frozen(self):
        payment = self._payment()
        payment.mark_as_failed("Card declined")

        assert payment.status == PaymentStatus.FAILED
        assert payment.notes == "Failed: Card declined"
        assert not payment.can_be_modified()

        with pytest.raises(InvalidStatusTransition):
            payment.mark_as_paid(PaymentMethod.CASH)

    def test_cancel_records_reason(self):
        payment = self._payment()
        payment.cancel("Duplicate invoice")

        assert payment.status == PaymentStatus.CANCELLED
        assert payment.notes == "Cancelled: Duplicate invoice"
