"""Excel 导入导出路由。"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from assetbook.packages.personnel.api.schemas.transfer import ImportResult
from assetbook.packages.personnel.core.dependencies import get_storage, require_permission
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.models import User
from assetbook.packages.personnel.services.export_service import export_service
from assetbook.packages.personnel.services.import_service import import_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(tags=["transfer"])


@router.post("/import/employees", response_model=ImportResult)
def import_employees(
    file: Optional[UploadFile] = File(default=None),
    current_user: User = Depends(require_permission(PermissionEnum.MANAGE_EMPLOYEES)),
    storage: Storage = Depends(get_storage),
) -> ImportResult:
    """逐行导入员工；单行失败不会中断整个文件。"""
    return ImportResult.model_validate(import_service.import_employees(storage, current_user.organization_id, file))


@router.post("/import/inventory", response_model=ImportResult)
def import_inventory(
    file: Optional[UploadFile] = File(default=None),
    current_user: User = Depends(require_permission(PermissionEnum.MANAGE_LIABILITY)),
    storage: Storage = Depends(get_storage),
) -> ImportResult:
    return ImportResult.model_validate(import_service.import_inventory(storage, current_user.organization_id, file))


@router.get("/export/employees")
def export_employees(
    department_id: Optional[int] = Query(default=None, alias="departmentId"),
    current_user: User = Depends(require_permission(PermissionEnum.VIEW_EMPLOYEE_DATA)),
    storage: Storage = Depends(get_storage),
) -> StreamingResponse:
    return export_service.export_employees(storage, current_user.organization_id, department_id=department_id)


@router.get("/export/inventory")
def export_inventory(
    employee_id: Optional[int] = Query(default=None, alias="employeeId"),
    department_id: Optional[int] = Query(default=None, alias="departmentId"),
    current_user: User = Depends(require_permission(PermissionEnum.MANAGE_LIABILITY)),
    storage: Storage = Depends(get_storage),
) -> StreamingResponse:
    return export_service.export_inventory(
        storage,
        current_user.organization_id,
        employee_id=employee_id,
        department_id=department_id,
    )
