"""上传服务：员工照片与文档落盘、登记以及受保护的读取。

文件保存在 ``UPLOAD_DIR/photos`` 与 ``UPLOAD_DIR/documents`` 下，对外路径为
``/uploads/<子目录>/<唯一文件名>``。
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional, Tuple

from fastapi import UploadFile

from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.core.constants import (
    DOCUMENT_MIME_TYPES,
    DOCUMENT_SUBDIR,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_PAYLOAD_TOO_LARGE,
    PHOTO_SUBDIR,
    UPLOAD_URL_PREFIX,
)
from assetbook.packages.personnel.core.enums import UploadKindEnum
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.logger import logger
from assetbook.packages.personnel.core.timezone import now as tz_now
from assetbook.packages.personnel.models import Employee, EmployeeDocument
from assetbook.packages.personnel.services.employee_service import employee_service
from assetbook.packages.personnel.storage import Storage

SUBDIRS = {
    UploadKindEnum.PHOTO: PHOTO_SUBDIR,
    UploadKindEnum.DOCUMENT: DOCUMENT_SUBDIR,
}
FILE_NOT_FOUND = "Файл не найден"


def read_limited(upload: UploadFile) -> bytes:
    """读取上传内容，超过 ``UPLOAD_MAX_BYTES`` 时返回 413。"""
    limit = get_settings().upload_max_bytes
    content = upload.file.read(limit + 1)
    if len(content) > limit:
        raise AppException("Файл слишком большой", HTTP_STATUS_PAYLOAD_TOO_LARGE)
    return content


class UploadService:
    def save_photo(
        self, storage: Storage, organization_id: int, employee_id: int, file: Optional[UploadFile]
    ) -> Tuple[str, Employee]:
        employee_service.get_editable_employee(storage, organization_id, employee_id)
        upload = self._require_file(file)
        if not (upload.content_type or "").startswith("image/"):
            raise AppException("Допускаются только изображения", HTTP_STATUS_BAD_REQUEST)

        photo_url = self._store(upload, UploadKindEnum.PHOTO)
        employee = storage.update_employee(organization_id, employee_id, {"photo": photo_url})
        logger.info("Photo uploaded for employee %s: %s", employee_id, photo_url)
        return photo_url, employee

    def save_document(
        self, storage: Storage, organization_id: int, employee_id: int, file: Optional[UploadFile]
    ) -> EmployeeDocument:
        employee_service.get_employee(storage, organization_id, employee_id)
        upload = self._require_file(file)
        content_type = upload.content_type or ""
        if content_type not in DOCUMENT_MIME_TYPES and not content_type.startswith("image/"):
            raise AppException("Недопустимый тип файла", HTTP_STATUS_BAD_REQUEST)

        path = self._store(upload, UploadKindEnum.DOCUMENT)
        document = storage.add_employee_document(
            organization_id,
            {
                "employee_id": employee_id,
                "filename": upload.filename or Path(path).name,
                "path": path,
                "upload_date": tz_now(),
            },
        )
        logger.info("Document %s uploaded for employee %s", document.id, employee_id)
        return document

    def resolve_file(self, subdir: str, filename: str) -> Path:
        """把对外路径映射回磁盘文件，拒绝越界的文件名。"""
        if subdir not in SUBDIRS.values() or Path(filename).name != filename or filename in {"", ".", ".."}:
            raise AppException(FILE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        target = get_settings().upload_directory / subdir / filename
        if not target.is_file():
            raise AppException(FILE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return target

    def remove_public_file(self, public_path: str) -> None:
        prefix = f"{UPLOAD_URL_PREFIX}/"
        if not public_path.startswith(prefix):
            return
        relative = Path(public_path[len(prefix):])
        target = get_settings().upload_directory / relative
        try:
            target.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to remove uploaded file %s", target, exc_info=True)

    @staticmethod
    def _require_file(file: Optional[UploadFile]) -> UploadFile:
        if file is None or not file.filename:
            raise AppException("Файл не загружен", HTTP_STATUS_BAD_REQUEST)
        return file

    def _store(self, upload: UploadFile, kind: UploadKindEnum) -> str:
        content = read_limited(upload)
        settings = get_settings()

        subdir = SUBDIRS[kind]
        suffix = Path(upload.filename or "").suffix.lower()
        unique_name = f"{kind.value}-{tz_now():%Y%m%d%H%M%S}-{uuid.uuid4().hex[:12]}{suffix}"
        directory = settings.upload_directory / subdir
        directory.mkdir(parents=True, exist_ok=True)
        (directory / unique_name).write_bytes(content)
        return f"{UPLOAD_URL_PREFIX}/{subdir}/{unique_name}"


upload_service = UploadService()
