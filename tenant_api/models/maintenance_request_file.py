from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from tenant_api.models.maintenance_request import MaintenanceRequest


class AttachmentType(str, PyEnum):
    IMAGE = "IMAGE"
    DOCUMENT = "DOCUMENT"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    OTHER = "OTHER"

    @classmethod
    def from_content_type(cls, content_type: str | None) -> "AttachmentType":
        if not content_type:
            return cls.OTHER
        content_type = content_type.lower()
        if content_type.startswith("image/"):
            return cls.IMAGE
        if content_type.startswith("video/"):
            return cls.VIDEO
        if content_type.startswith("audio/"):
            return cls.AUDIO
        if content_type.startswith(("application/", "text/")):
            return cls.DOCUMENT
        return cls.OTHER


_SIZE_UNITS = ("B", "KB", "MB", "GB")


class MaintenanceRequestFile(Base, TimestampMixin):
    """
    File attached to a maintenance request.

    The bytes live on disk under UPLOAD_DIR; file_name is the generated
    unique name, original_file_name what the client sent.
    """

    __tablename__ = "maintenance_request_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Nullable so attachments can outlive a detached request (see find_orphaned_files)
    maintenance_request_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("maintenance_requests.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    original_file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    file_extension: Mapped[str | None] = mapped_column(String(20), nullable=True)
    attachment_type: Mapped[AttachmentType] = mapped_column(
        Enum(AttachmentType, native_enum=False), nullable=False, default=AttachmentType.OTHER
    )
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    maintenance_request: Mapped[Optional["MaintenanceRequest"]] = relationship(
        "MaintenanceRequest", back_populates="attachments"
    )

    def is_image(self) -> bool:
        return self.attachment_type == AttachmentType.IMAGE

    @property
    def download_url(self) -> str:
        return f"/api/files/{self.id}/download"

    @property
    def view_url(self) -> str:
        return f"/api/files/{self.id}"

    @property
    def thumbnail_url(self) -> str | None:
        # Images are served as-is; there is no resizing
        return self.download_url if self.is_image() else None

    @property
    def formatted_file_size(self) -> str:
        size = float(self.file_size or 0)
        for unit in _SIZE_UNITS:
            if size < 1024 or unit == _SIZE_UNITS[-1]:
                break
            size /= 1024
        if unit == "B":
            return f"{int(size)} B"
        return f"{size:.1f} {unit}"

    def __repr__(self) -> str:
        return f"<MaintenanceRequestFile(id={self.id}, file_name='{self.file_name}')>"
