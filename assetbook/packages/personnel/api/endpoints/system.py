"""系统状态与一次性初始化路由。"""

from fastapi import APIRouter, Depends, Response

from assetbook.packages.personnel.api.schemas.auth import SetupRequest, SetupResponse, SystemStatusResponse
from assetbook.packages.personnel.core.constants import HTTP_STATUS_CREATED
from assetbook.packages.personnel.core.dependencies import get_storage
from assetbook.packages.personnel.services.auth_service import auth_service
from assetbook.packages.personnel.services.setup_service import setup_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(tags=["system"])


@router.get("/system-status", response_model=SystemStatusResponse)
def system_status(storage: Storage = Depends(get_storage)) -> SystemStatusResponse:
    return SystemStatusResponse(is_setup=setup_service.is_setup(storage))


@router.post(
    "/setup",
    response_model=SetupResponse,
    status_code=HTTP_STATUS_CREATED,
)
def setup_system(
    payload: SetupRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
) -> SetupResponse:
    """创建首个组织与管理员，并直接以管理员身份登录。"""
    organization, admin = setup_service.setup(
        storage,
        organization_name=payload.organization_name,
        admin_username=payload.admin_username,
        admin_password=payload.admin_password,
        admin_full_name=payload.admin_full_name,
        admin_position=payload.admin_position,
    )
    auth_service.attach_session_cookie(response, auth_service.issue_session(admin))
    return SetupResponse.model_validate(
        {"message": "Система успешно настроена", "organization": organization, "admin": admin}
    )
