from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tenant_api.database import get_db
from tenant_api.dependencies import require_admin
from tenant_api.models.auth_context import AuthContext
from tenant_api.schemas.stripe_schemas import ConnectAccountResponse
from tenant_api.services.stripe_service import StripeService

router = APIRouter()


@router.post("/create-connect-account", response_model=ConnectAccountResponse)
def create_connect_account(
    ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    """Create the admin's Stripe Express account and return its onboarding link"""
    service = StripeService(db)
    account_id, url = service.create_connect_account(ctx.user)
    return ConnectAccountResponse(onboarding_url=url, account_id=account_id)
