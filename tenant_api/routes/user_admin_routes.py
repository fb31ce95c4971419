from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tenant_api.database import get_db
from tenant_api.dependencies import require_admin
from tenant_api.models.auth_context import AuthContext
from tenant_api.schemas.auth_schemas import UserInfo
from tenant_api.services.auth_service import AuthService

router = APIRouter()


@router.post("/{user_id}/activate", response_model=UserInfo)
def activate_user(
    user_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = AuthService(db)
    return service.set_active(user_id, True)


@router.post("/{user_id}/deactivate", response_model=UserInfo)
def deactivate_user(
    user_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    """Disable an account; existing tokens stop working on the next request"""
    service = AuthService(db)
    return service.set_active(user_id, False)
