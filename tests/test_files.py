import io
from pathlib import Path

import pytest
from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from tenant_api.config import settings
from tenant_api.core.exceptions import ValidationException
from tenant_api.models.auth_context import AuthContext
from tenant_api.models.maintenance_request_file import AttachmentType, MaintenanceRequestFile
from tenant_api.models.user import UserRole
from tenant_api.repositories.maintenance_request_file_repository import MaintenanceRequestFileRepository
from tenant_api.services.file_storage_service import FileStorageService
from tenant_api.services.maintenance_service import MaintenanceService

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-body"
PDF_BYTES = b"%PDF-1.4 fake pdf"


def upload(client, request_id, headers, files):
    return client.post(f"/api/maintenance/{request_id}/files", headers=headers, files=files)


class TestUpload:
    """Tests for POST /api/maintenance/{id}/files"""

    def test_upload_multiple_files(self, client, db_session, upload_dir, tenant_headers, maintenance_request):
        response = upload(
            client,
            maintenance_request.id,
            tenant_headers,
            [
                ("files", ("photo.jpg", JPEG_BYTES, "image/jpeg")),
                ("files", ("invoice.pdf", PDF_BYTES, "application/pdf")),
            ],
        )

        assert response.status_code == 201
        files = response.json()
        assert len(files) == 2

        photo, invoice = files
        assert photo["originalFilename"] == "photo.jpg"
        assert photo["fileType"] == "IMAGE"
        assert photo["fileSize"] == len(JPEG_BYTES)
        assert photo["downloadUrl"] == f"/api/files/{photo['id']}/download"
        assert photo["thumbnailUrl"] == photo["downloadUrl"]
        assert invoice["fileType"] == "DOCUMENT"
        assert invoice["thumbnailUrl"] is None

        stored = db_session.query(MaintenanceRequestFile).all()
        assert len(stored) == 2
        for attachment in stored:
            path = Path(attachment.file_path)
            assert path.parent == upload_dir / "maintenance"
            assert path.is_file()
            # Stored under a generated name, not the client's
            assert attachment.file_name != attachment.original_file_name
        assert {a.file_extension for a in stored} == {"jpg", "pdf"}

    def test_files_listed_on_request(self, client, upload_dir, tenant_headers, maintenance_request):
        upload(client, maintenance_request.id, tenant_headers, [("files", ("photo.jpg", JPEG_BYTES, "image/jpeg"))])

        response = client.get(f"/api/maintenance/{maintenance_request.id}", headers=tenant_headers)

        assert response.status_code == 200
        files = response.json()["files"]
        assert len(files) == 1
        assert files[0]["originalFilename"] == "photo.jpg"

    def test_empty_file_rejected(self, client, db_session, upload_dir, tenant_headers, maintenance_request):
        response = upload(
            client, maintenance_request.id, tenant_headers, [("files", ("empty.txt", b"", "text/plain"))]
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_FILE"
        assert db_session.query(MaintenanceRequestFile).count() == 0

    def test_oversized_batch_rolled_back(
        self, client, db_session, upload_dir, monkeypatch, tenant_headers, maintenance_request
    ):
        """A file over the limit fails the whole batch and leaves nothing on disk"""
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 0)

        response = upload(
            client,
            maintenance_request.id,
            tenant_headers,
            [("files", ("photo.jpg", JPEG_BYTES, "image/jpeg"))],
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "FILE_TOO_LARGE"
        assert db_session.query(MaintenanceRequestFile).count() == 0
        assert list((upload_dir / "maintenance").iterdir()) == []

    def test_other_tenant_cannot_upload(
        self, client, upload_dir, other_tenant_headers, other_tenant_profile, maintenance_request
    ):
        response = upload(
            client,
            maintenance_request.id,
            other_tenant_headers,
            [("files", ("photo.jpg", JPEG_BYTES, "image/jpeg"))],
        )

        assert response.status_code == 403

    def test_admin_can_upload(self, client, upload_dir, admin_headers, maintenance_request):
        response = upload(
            client, maintenance_request.id, admin_headers, [("files", ("quote.pdf", PDF_BYTES, "application/pdf"))]
        )
        assert response.status_code == 201


class TestDownload:
    """Tests for /api/files/{id} and /api/files/{id}/download"""

    def _upload_photo(self, client, headers, request_id) -> dict:
        response = upload(client, request_id, headers, [("files", ("photo.jpg", JPEG_BYTES, "image/jpeg"))])
        return response.json()[0]

    def test_download_returns_bytes_as_attachment(self, client, upload_dir, tenant_headers, maintenance_request):
        photo = self._upload_photo(client, tenant_headers, maintenance_request.id)

        response = client.get(photo["downloadUrl"], headers=tenant_headers)

        assert response.status_code == 200
        assert response.content == JPEG_BYTES
        assert response.headers["content-type"] == "image/jpeg"
        disposition = response.headers["content-disposition"]
        assert disposition.startswith("attachment")
        assert 'filename="photo.jpg"' in disposition

    def test_file_metadata(self, client, upload_dir, admin_headers, tenant_headers, maintenance_request):
        photo = self._upload_photo(client, tenant_headers, maintenance_request.id)

        response = client.get(f"/api/files/{photo['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["formattedFileSize"] == f"{len(JPEG_BYTES)} B"
        assert response.json()["viewUrl"] == f"/api/files/{photo['id']}"

    def test_other_tenant_cannot_download(
        self, client, upload_dir, tenant_headers, other_tenant_headers, other_tenant_profile, maintenance_request
    ):
        photo = self._upload_photo(client, tenant_headers, maintenance_request.id)

        response = client.get(photo["downloadUrl"], headers=other_tenant_headers)

        assert response.status_code == 403

    def test_missing_bytes_on_disk(self, client, db_session, upload_dir, tenant_headers, maintenance_request):
        photo = self._upload_photo(client, tenant_headers, maintenance_request.id)
        Path(db_session.get(MaintenanceRequestFile, photo["id"]).file_path).unlink()

        response = client.get(photo["downloadUrl"], headers=tenant_headers)

        assert response.status_code == 404
        assert response.json()["errorCode"] == "FILE_NOT_FOUND"

    def test_unknown_file(self, client, admin_headers):
        response = client.get("/api/files/999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["errorCode"] == "FILE_NOT_FOUND"


class TestDeleteAndOrphans:
    """Deleting requests removes stored files; detached rows are findable"""

    def test_delete_request_removes_files(self, client, db_session, upload_dir, admin_headers, tenant_headers, maintenance_request):
        upload(
            client,
            maintenance_request.id,
            tenant_headers,
            [
                ("files", ("photo.jpg", JPEG_BYTES, "image/jpeg")),
                ("files", ("invoice.pdf", PDF_BYTES, "application/pdf")),
            ],
        )
        paths = [Path(a.file_path) for a in db_session.query(MaintenanceRequestFile).all()]
        assert all(p.is_file() for p in paths)

        response = client.delete(f"/api/maintenance/{maintenance_request.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Maintenance request deleted successfully"
        assert not any(p.exists() for p in paths)
        assert db_session.query(MaintenanceRequestFile).count() == 0

    def test_find_orphaned_files(self, db_session, maintenance_request):
        db_session.add_all(
            [
                MaintenanceRequestFile(
                    maintenance_request_id=maintenance_request.id,
                    file_name="linked.jpg",
                    original_file_name="linked.jpg",
                    file_path="/tmp/linked.jpg",
                    file_size=10,
                    attachment_type=AttachmentType.IMAGE,
                ),
                MaintenanceRequestFile(
                    maintenance_request_id=None,
                    file_name="stray.pdf",
                    original_file_name="stray.pdf",
                    file_path="/tmp/stray.pdf",
                    file_size=10,
                    attachment_type=AttachmentType.DOCUMENT,
                ),
            ]
        )
        db_session.commit()

        orphans = MaintenanceRequestFileRepository(db_session).find_orphaned_files()

        assert [o.file_name for o in orphans] == ["stray.pdf"]


class TestStorageLimits:
    """Disk writes stay bounded and failed batches leave nothing behind"""

    def test_oversized_stream_never_exceeds_limit_on_disk(self, upload_dir, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 1)
        sizes_before_unlink = []
        original_unlink = Path.unlink

        def recording_unlink(path, missing_ok=False):
            if path.exists():
                sizes_before_unlink.append(path.stat().st_size)
            original_unlink(path, missing_ok=missing_ok)

        monkeypatch.setattr(Path, "unlink", recording_unlink)
        big = UploadFile(io.BytesIO(b"x" * (5 * 1024 * 1024)), filename="big.bin")

        with pytest.raises(ValidationException) as exc_info:
            FileStorageService().store(big)

        assert exc_info.value.error_code == "FILE_TOO_LARGE"
        assert sizes_before_unlink
        assert max(sizes_before_unlink) <= settings.max_upload_size_bytes
        assert list((upload_dir / "maintenance").iterdir()) == []

    def test_declared_size_rejected_before_reading(self, upload_dir, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 1)
        body = io.BytesIO(b"x" * 16)
        declared = UploadFile(body, size=2 * 1024 * 1024, filename="big.bin")

        with pytest.raises(ValidationException):
            FileStorageService().store(declared)

        assert body.tell() == 0
        assert list((upload_dir / "maintenance").iterdir()) == []

    def test_database_failure_removes_stored_files(
        self, db_session, upload_dir, monkeypatch, admin_user, maintenance_request
    ):
        original_create = MaintenanceRequestFileRepository.create_no_commit
        calls = []

        def failing_create(repo, attachment):
            calls.append(attachment)
            if len(calls) == 2:
                raise SQLAlchemyError("insert failed")
            return original_create(repo, attachment)

        monkeypatch.setattr(MaintenanceRequestFileRepository, "create_no_commit", failing_create)
        service = MaintenanceService(db_session)
        ctx = AuthContext(user=admin_user, role=UserRole.ADMIN)
        uploads = [
            UploadFile(io.BytesIO(JPEG_BYTES), filename="photo.jpg"),
            UploadFile(io.BytesIO(PDF_BYTES), filename="invoice.pdf"),
        ]

        with pytest.raises(SQLAlchemyError):
            service.attach_files(maintenance_request.id, ctx, uploads)

        assert list((upload_dir / "maintenance").iterdir()) == []
        assert db_session.query(MaintenanceRequestFile).count() == 0
