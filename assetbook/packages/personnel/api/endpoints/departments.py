"""部门路由：读取只需登录，修改需要 ``manage_departments``。"""

from fastapi import APIRouter, Depends, Query, Response

from assetbook.packages.personnel.api.schemas.departments import (
    DepartmentCreate,
    DepartmentOut,
    DepartmentStats,
    DepartmentUpdate,
)
from assetbook.packages.personnel.core.constants import HTTP_STATUS_CREATED, HTTP_STATUS_NO_CONTENT
from assetbook.packages.personnel.core.dependencies import get_current_user, get_storage, require_permission
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.models import Department, User
from assetbook.packages.personnel.services.department_service import department_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(prefix="/departments", tags=["departments"])

manage_departments = require_permission(PermissionEnum.MANAGE_DEPARTMENTS)


@router.get("", response_model=None)
def list_departments(
    stats: bool = Query(default=False),
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> list:
    """``stats=true`` 时返回每个部门的员工数与财产数。"""
    if stats:
        return [
            DepartmentStats.model_validate(item)
            for item in department_service.department_stats(storage, current_user.organization_id)
        ]
    return [
        DepartmentOut.model_validate(item)
        for item in department_service.list_departments(storage, current_user.organization_id)
    ]


@router.get("/{department_id}", response_model=DepartmentOut)
def read_department(
    department_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> Department:
    return department_service.get_department(storage, current_user.organization_id, department_id)


@router.post("", response_model=DepartmentOut, status_code=HTTP_STATUS_CREATED)
def create_department(
    payload: DepartmentCreate,
    current_user: User = Depends(manage_departments),
    storage: Storage = Depends(get_storage),
) -> Department:
    return department_service.create_department(storage, current_user.organization_id, payload.model_dump())


@router.put("/{department_id}", response_model=DepartmentOut)
def update_department(
    department_id: int,
    payload: DepartmentUpdate,
    current_user: User = Depends(manage_departments),
    storage: Storage = Depends(get_storage),
) -> Department:
    return department_service.update_department(
        storage, current_user.organization_id, department_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{department_id}", status_code=HTTP_STATUS_NO_CONTENT)
def delete_department(
    department_id: int,
    current_user: User = Depends(manage_departments),
    storage: Storage = Depends(get_storage),
) -> Response:
    department_service.delete_department(storage, current_user.organization_id, department_id)
    return Response(status_code=HTTP_STATUS_NO_CONTENT)
