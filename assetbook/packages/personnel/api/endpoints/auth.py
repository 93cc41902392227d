"""认证相关路由定义。"""

from fastapi import APIRouter, Depends, Request, Response

from assetbook.packages.personnel.api.schemas.auth import LoginRequest
from assetbook.packages.personnel.api.schemas.common import MessageResponse
from assetbook.packages.personnel.api.schemas.users import UserOut
from assetbook.packages.personnel.core.dependencies import get_current_user, get_storage
from assetbook.packages.personnel.models.user import User
from assetbook.packages.personnel.services.auth_service import auth_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=UserOut)
def login(payload: LoginRequest, response: Response, storage: Storage = Depends(get_storage)) -> User:
    """校验凭证，写入会话 Cookie 并返回当前用户（不含密码）。"""
    user, token = auth_service.login(storage, username=payload.username, password=payload.password)
    auth_service.attach_session_cookie(response, token)
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, current_user: User = Depends(get_current_user)) -> MessageResponse:
    auth_service.logout(getattr(request.state, "session_id", None))
    auth_service.clear_session_cookie(response)
    return MessageResponse(message="Выход выполнен")


@router.get("/user", response_model=UserOut)
def read_current_user(current_user: User = Depends(get_current_user)) -> User:
    return current_user
