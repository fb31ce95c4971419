from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tenant_api.database import get_db
from tenant_api.dependencies import require_admin
from tenant_api.models.auth_context import AuthContext
from tenant_api.schemas.property_schemas import PropertyCreate, PropertyResponse, PropertyUpdate
from tenant_api.services.property_service import PropertyService

router = APIRouter()


@router.get("", response_model=list[PropertyResponse])
def list_properties(ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)):
    """All properties with occupancy and vacancies"""
    service = PropertyService(db)
    return service.list_properties()


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    data: PropertyCreate, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = PropertyService(db)
    return service.create_property(data)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    service = PropertyService(db)
    return service.get_property(property_id)


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    data: PropertyUpdate,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    service = PropertyService(db)
    return service.update_property(property_id, data)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: int, ctx: AuthContext = Depends(require_admin), db: Session = Depends(get_db)
):
    """Delete property; tenants are unlinked, not deleted"""
    service = PropertyService(db)
    service.delete_property(property_id)
    return None
