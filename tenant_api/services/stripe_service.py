import logging

import stripe
from sqlalchemy.orm import Session

from tenant_api.config import settings
from tenant_api.core.exceptions import ExternalServiceException
from tenant_api.models.user import User
from tenant_api.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class StripeService:
    """Stripe Connect onboarding for admin payout accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        if not settings.STRIPE_SECRET_KEY:
            raise ExternalServiceException("Stripe is not configured", error_code="STRIPE_NOT_CONFIGURED")
        stripe.api_key = settings.STRIPE_SECRET_KEY

    def create_connect_account(self, user: User) -> tuple[str, str]:
        """
        Create (or reuse) an Express account and an onboarding link for it.

        The account id is saved on the user before the link is requested,
        so a failed link call can be retried without creating a second account.

        Returns:
            Tuple of (account id, onboarding url)

        Raises:
            ExternalServiceException: Any Stripe API error
        """
        try:
            account_id = user.stripe_account_id
            if not account_id:
                account = stripe.Account.create(
                    type="express",
                    country=settings.STRIPE_ACCOUNT_COUNTRY,
                    email=user.email,
                    capabilities={
                        "card_payments": {"requested": True},
                        "transfers": {"requested": True},
                    },
                )
                account_id = account.id
                user.stripe_account_id = account_id
                self.user_repo.update(user)
                logger.info("Created Stripe account %s for %s", account_id, user.email)

            link = stripe.AccountLink.create(
                account=account_id,
                refresh_url=settings.STRIPE_REFRESH_URL,
                return_url=settings.STRIPE_RETURN_URL,
                type="account_onboarding",
            )
        except stripe.error.StripeError as e:
            logger.error("Stripe request failed for %s: %s", user.email, e)
            raise ExternalServiceException(f"Stripe error: {e.user_message or str(e)}")

        return account_id, link.url
