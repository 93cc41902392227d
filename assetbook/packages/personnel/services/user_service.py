"""用户服务：组织内的用户列表、创建与修改。"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from assetbook.packages.personnel.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
)
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.permissions import invalid_permissions
from assetbook.packages.personnel.core.security import get_password_hash
from assetbook.packages.personnel.models.user import User
from assetbook.packages.personnel.storage import DuplicateKeyError, Storage

DUPLICATE_USERNAME_MESSAGE = "Пользователь с таким именем уже существует"


class UserService:
    """聚合用户相关的核心业务能力；密码总是以哈希形式落库。"""

    def list_users(self, storage: Storage, organization_id: int) -> List[User]:
        return storage.get_users(organization_id)

    def create_user(self, storage: Storage, organization_id: int, data: Dict[str, Any]) -> User:
        self._check_permissions(data.get("permissions") or [])
        payload = dict(data)
        payload["username"] = payload["username"].strip()
        payload["password"] = get_password_hash(payload["password"])
        try:
            return storage.create_user(organization_id, payload)
        except DuplicateKeyError as exc:
            raise AppException(DUPLICATE_USERNAME_MESSAGE, HTTP_STATUS_CONFLICT) from exc

    def update_user(
        self, storage: Storage, organization_id: int, user_id: int, patch: Dict[str, Any]
    ) -> User:
        payload = {key: value for key, value in patch.items() if value is not None}
        if "username" in payload:
            payload["username"] = payload["username"].strip()
        if "permissions" in payload:
            self._check_permissions(payload["permissions"])
        if "password" in payload:
            payload["password"] = get_password_hash(payload["password"])
        try:
            user: Optional[User] = storage.update_user(organization_id, user_id, payload)
        except DuplicateKeyError as exc:
            raise AppException(DUPLICATE_USERNAME_MESSAGE, HTTP_STATUS_CONFLICT) from exc
        if user is None:
            raise AppException("Пользователь не найден", HTTP_STATUS_NOT_FOUND)
        return user

    @staticmethod
    def _check_permissions(permissions: List[str]) -> None:
        unknown = invalid_permissions(permissions)
        if unknown:
            raise AppException(
                "Неверно указаны разрешения пользователя",
                HTTP_STATUS_BAD_REQUEST,
                data={"invalid": unknown},
            )


user_service = UserService()
