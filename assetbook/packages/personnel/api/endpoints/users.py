"""用户管理路由：只作用于当前用户所在组织。"""

from typing import List

from fastapi import APIRouter, Depends

from assetbook.packages.personnel.api.schemas.users import UserCreate, UserOut, UserUpdate
from assetbook.packages.personnel.core.constants import HTTP_STATUS_CREATED
from assetbook.packages.personnel.core.dependencies import get_storage, require_permission
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.models.user import User
from assetbook.packages.personnel.services.user_service import user_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    current_user: User = Depends(require_permission(PermissionEnum.VIEW_EMPLOYEE_DATA)),
    storage: Storage = Depends(get_storage),
) -> List[User]:
    return user_service.list_users(storage, current_user.organization_id)


@router.post("", response_model=UserOut, status_code=HTTP_STATUS_CREATED)
def create_user(
    payload: UserCreate,
    current_user: User = Depends(require_permission(PermissionEnum.MANAGE_EMPLOYEES)),
    storage: Storage = Depends(get_storage),
) -> User:
    return user_service.create_user(storage, current_user.organization_id, payload.model_dump())


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: User = Depends(require_permission(PermissionEnum.MANAGE_EMPLOYEES)),
    storage: Storage = Depends(get_storage),
) -> User:
    patch = payload.model_dump(exclude_unset=True)
    return user_service.update_user(storage, current_user.organization_id, user_id, patch)
