"""系统初始化服务：一次性创建组织与管理员（UNSET -> SET）。"""

from __future__ import annotations

from typing import Optional, Tuple

from assetbook.packages.personnel.core.constants import (
    ADMIN_ROLE,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
)
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.logger import logger
from assetbook.packages.personnel.core.security import get_password_hash
from assetbook.packages.personnel.models import Organization, User
from assetbook.packages.personnel.storage import AlreadySetupError, DuplicateKeyError, Storage

ALREADY_SETUP_MESSAGE = "Система уже настроена"
MISSING_FIELDS_MESSAGE = "Не указаны все необходимые данные"


class SetupService:
    def is_setup(self, storage: Storage) -> bool:
        return storage.is_setup()

    def setup(
        self,
        storage: Storage,
        *,
        organization_name: Optional[str],
        admin_username: Optional[str],
        admin_password: Optional[str],
        admin_full_name: Optional[str],
        admin_position: Optional[str],
    ) -> Tuple[Organization, User]:
        """创建首个组织与拥有 ``full_access`` 的管理员。

        已初始化时返回 409，不会产生新的组织或用户；字段缺失返回 400。
        """
        if storage.is_setup():
            raise AppException(ALREADY_SETUP_MESSAGE, HTTP_STATUS_CONFLICT)

        values = [organization_name, admin_username, admin_password, admin_full_name, admin_position]
        if any(not (value or "").strip() for value in values):
            raise AppException(MISSING_FIELDS_MESSAGE, HTTP_STATUS_BAD_REQUEST)

        admin_data = {
            "username": admin_username.strip(),
            "password": get_password_hash(admin_password),
            "full_name": admin_full_name.strip(),
            "position": admin_position.strip(),
            "role": ADMIN_ROLE,
            "permissions": [PermissionEnum.FULL_ACCESS.value],
        }
        try:
            organization, admin = storage.setup_system({"name": organization_name.strip()}, admin_data)
        except AlreadySetupError as exc:
            raise AppException(ALREADY_SETUP_MESSAGE, HTTP_STATUS_CONFLICT) from exc
        except DuplicateKeyError as exc:
            raise AppException("Пользователь с таким именем уже существует", HTTP_STATUS_CONFLICT) from exc

        logger.info("System setup completed: organization %s, admin %s", organization.id, admin.username)
        return organization, admin


setup_service = SetupService()
