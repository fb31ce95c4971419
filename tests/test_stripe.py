from types import SimpleNamespace

import pytest
import stripe
from tenant_api.config import settings


@pytest.fixture
def stripe_configured(monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_dummy")


@pytest.fixture
def stripe_calls(monkeypatch, stripe_configured):
    """Record Stripe API calls instead of sending them"""
    calls = {"accounts": [], "links": []}

    def create_account(**kwargs):
        calls["accounts"].append(kwargs)
        return SimpleNamespace(id="acct_123")

    def create_link(**kwargs):
        calls["links"].append(kwargs)
        return SimpleNamespace(url=f"https://connect.stripe.com/setup/{kwargs['account']}")

    monkeypatch.setattr(stripe.Account, "create", create_account)
    monkeypatch.setattr(stripe.AccountLink, "create", create_link)
    return calls


class TestConnectAccount:
    """Tests for POST /api/stripe/create-connect-account"""

    def test_creates_account_and_link(self, client, db_session, admin_headers, admin_user, stripe_calls):
        response = client.post("/api/stripe/create-connect-account", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "onboardingUrl": "https://connect.stripe.com/setup/acct_123",
            "accountId": "acct_123",
        }

        account_call = stripe_calls["accounts"][0]
        assert account_call["type"] == "express"
        assert account_call["email"] == "admin@example.com"
        assert stripe_calls["links"][0]["type"] == "account_onboarding"

        db_session.refresh(admin_user)
        assert admin_user.stripe_account_id == "acct_123"

    def test_reuses_existing_account(self, client, db_session, admin_headers, admin_user, stripe_calls):
        admin_user.stripe_account_id = "acct_existing"
        db_session.commit()

        response = client.post("/api/stripe/create-connect-account", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["accountId"] == "acct_existing"
        assert stripe_calls["accounts"] == []
        assert stripe_calls["links"][0]["account"] == "acct_existing"

    def test_stripe_error_maps_to_502(self, client, admin_headers, monkeypatch, stripe_configured):
        def fail(**kwargs):
            raise stripe.error.StripeError("No such country")

        monkeypatch.setattr(stripe.Account, "create", fail)

        response = client.post("/api/stripe/create-connect-account", headers=admin_headers)

        assert response.status_code == 502
        assert response.json()["errorCode"] == "EXTERNAL_SERVICE_ERROR"

    def test_not_configured(self, client, admin_headers, monkeypatch):
        monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "")

        response = client.post("/api/stripe/create-connect-account", headers=admin_headers)

        assert response.status_code == 502
        assert response.json()["errorCode"] == "STRIPE_NOT_CONFIGURED"

    def test_tenant_forbidden(self, client, tenant_headers, stripe_calls):
        response = client.post("/api/stripe/create-connect-account", headers=tenant_headers)

        assert response.status_code == 403
        assert stripe_calls["accounts"] == []
