"""API 汇总路由：统一挂载所有业务子路由。"""

from fastapi import APIRouter

from assetbook.packages.personnel.api.endpoints import (
    auth,
    departments,
    employees,
    files,
    inventory,
    organizations,
    system,
    transfer,
    uploads,
    users,
)
from assetbook.packages.personnel.api.schemas.common import ErrorResponse
from assetbook.packages.personnel.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_UNAUTHORIZED,
)

ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (
        HTTP_STATUS_BAD_REQUEST,
        HTTP_STATUS_UNAUTHORIZED,
        HTTP_STATUS_FORBIDDEN,
        HTTP_STATUS_NOT_FOUND,
        HTTP_STATUS_CONFLICT,
    )
}

api_router = APIRouter(responses=ERROR_RESPONSES)
api_router.include_router(system.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(organizations.router)
api_router.include_router(departments.router)
api_router.include_router(employees.router)
api_router.include_router(inventory.router)
api_router.include_router(uploads.router)
api_router.include_router(transfer.router)

# 上传文件的访问路径不带 API 前缀
files_router = files.router

__all__ = ["api_router", "files_router"]
