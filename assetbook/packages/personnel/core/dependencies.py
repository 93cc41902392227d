"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator
from typing import Callable, Optional, Union

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.core.constants import (
    ACCESS_TOKEN_TYPE,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_UNAUTHORIZED,
)
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.permissions import has_permission, normalize_permission
from assetbook.packages.personnel.core.security import decode_token
from assetbook.packages.personnel.core.session import session_ttl_seconds, touch_session
from assetbook.packages.personnel.db import session as db_session
from assetbook.packages.personnel.models.user import User
from assetbook.packages.personnel.storage import DatabaseStorage, InMemoryStorage, Storage

security_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Требуется авторизация"
FORBIDDEN_MESSAGE = "Недостаточно прав"

_memory_storage: Optional[InMemoryStorage] = None


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_memory_storage() -> InMemoryStorage:
    """进程级共享的内存存储实例。"""
    global _memory_storage
    if _memory_storage is None:
        _memory_storage = InMemoryStorage()
    return _memory_storage


def reset_memory_storage() -> None:
    global _memory_storage
    _memory_storage = None


def get_storage(db: Session = Depends(get_db)) -> Storage:
    """根据 ``STORAGE_BACKEND`` 选择存储实现。"""
    if get_settings().uses_database:
        return DatabaseStorage(db)
    return get_memory_storage()


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.scheme.lower() == ACCESS_TOKEN_TYPE:
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    storage: Storage = Depends(get_storage),
) -> User:
    """从会话 Cookie 或 ``Authorization`` 头部解析当前用户，会话无效时抛出 401。"""
    request.state.session_id = None
    token = _extract_token(request, credentials)
    if not token:
        raise AppException(UNAUTHORIZED_MESSAGE, HTTP_STATUS_UNAUTHORIZED)

    payload = decode_token(token)
    if payload is None:
        raise AppException(UNAUTHORIZED_MESSAGE, HTTP_STATUS_UNAUTHORIZED)

    user_id = payload.get("user_id")
    session_id = payload.get("sid")
    if user_id is None or session_id is None:
        raise AppException(UNAUTHORIZED_MESSAGE, HTTP_STATUS_UNAUTHORIZED)

    user = storage.get_user(user_id)
    if user is None:
        raise AppException(UNAUTHORIZED_MESSAGE, HTTP_STATUS_UNAUTHORIZED)

    if not touch_session(session_id, user.id, session_ttl_seconds()):
        raise AppException(UNAUTHORIZED_MESSAGE, HTTP_STATUS_UNAUTHORIZED)

    # 记录会话 ID 以便退出登录时删除
    request.state.session_id = session_id
    return user


def require_permission(permission: Union[str, PermissionEnum]) -> Callable[..., User]:
    """构造权限门依赖：未登录 401，缺少权限 403，通过时返回当前用户。

    声明时即校验权限名，未知权限在路由定义阶段就会失败。
    """
    required = normalize_permission(permission)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not has_permission(current_user.permissions, required):
            raise AppException(FORBIDDEN_MESSAGE, HTTP_STATUS_FORBIDDEN)
        return current_user

    dependency.__name__ = f"require_{required.value}"
    return dependency
