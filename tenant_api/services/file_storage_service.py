import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from tenant_api.config import settings
from tenant_api.core.exceptions import NotFoundException, ValidationException
from tenant_api.models.maintenance_request_file import AttachmentType, MaintenanceRequestFile

logger = logging.getLogger(__name__)

MAINTENANCE_SUBDIR = "maintenance"
CHUNK_SIZE = 1024 * 1024


def generate_unique_filename(original_filename: str | None) -> str:
    """uuid4 name that keeps the original extension"""
    suffix = Path(original_filename).suffix if original_filename else ""
    return f"{uuid.uuid4()}{suffix}"


class FileStorageService:
    """
    Stores maintenance attachments on local disk.

    Files land in UPLOAD_DIR/maintenance under a generated name; the
    returned MaintenanceRequestFile is not yet added to a session.
    """

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir if base_dir is not None else settings.UPLOAD_DIR)

    @property
    def maintenance_dir(self) -> Path:
        return self.base_dir / MAINTENANCE_SUBDIR

    def store(self, upload: UploadFile) -> MaintenanceRequestFile:
        """
        Write an upload to disk in chunks, never past MAX_UPLOAD_SIZE_MB.

        Raises:
            ValidationException: Empty upload or larger than MAX_UPLOAD_SIZE_MB
        """
        if not upload.filename:
            raise ValidationException("File name is required", error_code="INVALID_FILE")

        self.maintenance_dir.mkdir(parents=True, exist_ok=True)
        limit = settings.max_upload_size_bytes
        if upload.size is not None and upload.size > limit:
            raise self._too_large(upload)

        stored_name = generate_unique_filename(upload.filename)
        target = self.maintenance_dir / stored_name

        size = 0
        try:
            with open(target, "wb") as buffer:
                while chunk := upload.file.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > limit:
                        raise self._too_large(upload)
                    buffer.write(chunk)
            if size == 0:
                raise ValidationException(f"File '{upload.filename}' is empty", error_code="INVALID_FILE")
        except Exception:
            target.unlink(missing_ok=True)
            raise

        extension = Path(upload.filename).suffix.lstrip(".").lower() or None
        logger.info("Stored upload %s as %s (%d bytes)", upload.filename, stored_name, size)

        return MaintenanceRequestFile(
            file_name=stored_name,
            original_file_name=upload.filename,
            file_path=str(target),
            file_size=size,
            content_type=upload.content_type,
            file_extension=extension,
            attachment_type=AttachmentType.from_content_type(upload.content_type),
        )

    @staticmethod
    def _too_large(upload: UploadFile) -> ValidationException:
        return ValidationException(
            f"File '{upload.filename}' exceeds {settings.MAX_UPLOAD_SIZE_MB} MB",
            error_code="FILE_TOO_LARGE",
        )

    def resolve(self, attachment: MaintenanceRequestFile) -> Path:
        """Path of a stored attachment; 404 FILE_NOT_FOUND when it is gone"""
        path = Path(attachment.file_path)
        if not path.is_file():
            raise NotFoundException("File not found", error_code="FILE_NOT_FOUND")
        return path

    def delete(self, attachment: MaintenanceRequestFile) -> bool:
        """Remove a stored file; failures are logged, not raised"""
        path = Path(attachment.file_path)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not delete file %s: %s", path, e)
            return False
        return True
