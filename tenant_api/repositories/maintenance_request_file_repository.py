from sqlalchemy.orm import Session

from tenant_api.models.maintenance_request_file import MaintenanceRequestFile


class MaintenanceRequestFileRepository:
    """Repository for maintenance request attachments"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, file_id: int) -> MaintenanceRequestFile | None:
        return self.db.query(MaintenanceRequestFile).filter(MaintenanceRequestFile.id == file_id).first()

    def find_orphaned_files(self) -> list[MaintenanceRequestFile]:
        """Attachments no longer linked to any request"""
        return (
            self.db.query(MaintenanceRequestFile)
            .filter(MaintenanceRequestFile.maintenance_request_id.is_(None))
            .all()
        )

    def create_no_commit(self, attachment: MaintenanceRequestFile) -> MaintenanceRequestFile:
        """Add an attachment without committing (caller commits the batch)"""
        self.db.add(attachment)
        self.db.flush()
        return attachment
