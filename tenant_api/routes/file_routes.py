from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse as FileDownload
from sqlalchemy.orm import Session

from tenant_api.database import get_db
from tenant_api.dependencies import get_current_user
from tenant_api.models.auth_context import AuthContext
from tenant_api.schemas.maintenance_schemas import FileResponse
from tenant_api.services.maintenance_service import MaintenanceService

router = APIRouter()


@router.get("/{file_id}", response_model=FileResponse)
def get_file_info(
    file_id: int, ctx: AuthContext = Depends(get_current_user), db: Session = Depends(get_db)
):
    service = MaintenanceService(db)
    return FileResponse.from_entity(service.get_accessible_file(file_id, ctx))


@router.get("/{file_id}/download")
def download_file(
    file_id: int, ctx: AuthContext = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Stream the stored bytes as an attachment under the original file name"""
    service = MaintenanceService(db)
    attachment = service.get_accessible_file(file_id, ctx)
    path = service.storage.resolve(attachment)
    return FileDownload(
        path,
        media_type=attachment.content_type or "application/octet-stream",
        filename=attachment.original_file_name,
        content_disposition_type="attachment",
    )
