"""已上传文件的读取：只对已登录用户开放。"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from assetbook.packages.personnel.core.constants import UPLOAD_URL_PREFIX
from assetbook.packages.personnel.core.dependencies import get_current_user
from assetbook.packages.personnel.models import User
from assetbook.packages.personnel.services.upload_service import upload_service

router = APIRouter(prefix=UPLOAD_URL_PREFIX, tags=["files"])


@router.get("/{subdir}/{filename}")
def read_uploaded_file(
    subdir: str,
    filename: str,
    current_user: User = Depends(get_current_user),
) -> FileResponse:
    return FileResponse(upload_service.resolve_file(subdir, filename))
