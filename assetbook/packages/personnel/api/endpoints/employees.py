"""员工路由：档案维护、离职、文档列表与打印数据。"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from assetbook.packages.personnel.api.schemas.employees import (
    DismissRequest,
    EmployeeCreate,
    EmployeeDocumentOut,
    EmployeeOut,
    EmployeeUpdate,
)
from assetbook.packages.personnel.api.schemas.printing import PrintDocumentOut
from assetbook.packages.personnel.core.constants import HTTP_STATUS_CREATED, HTTP_STATUS_NO_CONTENT
from assetbook.packages.personnel.core.dependencies import get_current_user, get_storage, require_permission
from assetbook.packages.personnel.core.enums import PermissionEnum, PrintDocumentTypeEnum
from assetbook.packages.personnel.models import Employee, EmployeeDocument, User
from assetbook.packages.personnel.services.document_service import document_service
from assetbook.packages.personnel.services.employee_service import employee_service
from assetbook.packages.personnel.services.print_service import print_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(prefix="/employees", tags=["employees"])

manage_employees = require_permission(PermissionEnum.MANAGE_EMPLOYEES)


@router.get("", response_model=List[EmployeeOut])
def list_employees(
    department_id: Optional[int] = Query(default=None, alias="departmentId"),
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> List[Employee]:
    return employee_service.list_employees(storage, current_user.organization_id, department_id)


@router.get("/{employee_id}", response_model=EmployeeOut)
def read_employee(
    employee_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> Employee:
    return employee_service.get_employee(storage, current_user.organization_id, employee_id)


@router.post("", response_model=EmployeeOut, status_code=HTTP_STATUS_CREATED)
def create_employee(
    payload: EmployeeCreate,
    current_user: User = Depends(manage_employees),
    storage: Storage = Depends(get_storage),
) -> Employee:
    return employee_service.create_employee(storage, current_user.organization_id, payload.model_dump())


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    current_user: User = Depends(manage_employees),
    storage: Storage = Depends(get_storage),
) -> Employee:
    patch = payload.model_dump(exclude_unset=True)
    return employee_service.update_employee(storage, current_user.organization_id, employee_id, patch)


@router.post("/{employee_id}/dismiss", response_model=EmployeeOut)
def dismiss_employee(
    employee_id: int,
    payload: DismissRequest,
    current_user: User = Depends(manage_employees),
    storage: Storage = Depends(get_storage),
) -> Employee:
    """离职需要同时提供日期与命令号；已离职的员工不能再次离职。"""
    return employee_service.dismiss_employee(
        storage,
        current_user.organization_id,
        employee_id,
        dismissal_date=payload.dismissal_date,
        dismissal_order_number=payload.dismissal_order_number,
    )


@router.get("/{employee_id}/documents", response_model=List[EmployeeDocumentOut])
def list_employee_documents(
    employee_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> List[EmployeeDocument]:
    return document_service.list_documents(storage, current_user.organization_id, employee_id)


@router.delete("/documents/{document_id}", status_code=HTTP_STATUS_NO_CONTENT)
def delete_employee_document(
    document_id: int,
    current_user: User = Depends(manage_employees),
    storage: Storage = Depends(get_storage),
) -> Response:
    document_service.delete_document(storage, current_user.organization_id, document_id)
    return Response(status_code=HTTP_STATUS_NO_CONTENT)


@router.get("/{employee_id}/print/{document_type}", response_model=PrintDocumentOut)
def print_employee_document(
    employee_id: int,
    document_type: PrintDocumentTypeEnum,
    current_user: User = Depends(require_permission(PermissionEnum.PRINT_DOCUMENTS)),
    storage: Storage = Depends(get_storage),
) -> PrintDocumentOut:
    data = print_service.build_document(storage, current_user.organization_id, employee_id, document_type)
    return PrintDocumentOut.model_validate(data)
