"""文件上传路由：员工照片与员工文档。"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from assetbook.packages.personnel.api.schemas.uploads import DocumentUploadResponse, PhotoUploadResponse
from assetbook.packages.personnel.core.dependencies import get_storage, require_permission
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.models import User
from assetbook.packages.personnel.services.upload_service import upload_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(prefix="/upload", tags=["uploads"])

manage_employees = require_permission(PermissionEnum.MANAGE_EMPLOYEES)


@router.post("/photo/{employee_id}", response_model=PhotoUploadResponse)
def upload_photo(
    employee_id: int,
    photo: Optional[UploadFile] = File(default=None),
    current_user: User = Depends(manage_employees),
    storage: Storage = Depends(get_storage),
) -> PhotoUploadResponse:
    photo_url, employee = upload_service.save_photo(storage, current_user.organization_id, employee_id, photo)
    return PhotoUploadResponse.model_validate({"success": True, "photo_url": photo_url, "employee": employee})


@router.post("/document/{employee_id}", response_model=DocumentUploadResponse)
def upload_document(
    employee_id: int,
    document: Optional[UploadFile] = File(default=None),
    current_user: User = Depends(manage_employees),
    storage: Storage = Depends(get_storage),
) -> DocumentUploadResponse:
    saved = upload_service.save_document(storage, current_user.organization_id, employee_id, document)
    return DocumentUploadResponse.model_validate({"success": True, "document": saved})
