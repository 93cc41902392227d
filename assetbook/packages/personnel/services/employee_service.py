"""员工服务：员工档案维护与离职处理。"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from assetbook.packages.personnel.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
)
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.logger import logger
from assetbook.packages.personnel.models import Employee
from assetbook.packages.personnel.services.department_service import DEPARTMENT_NOT_FOUND
from assetbook.packages.personnel.storage import Storage

EMPLOYEE_NOT_FOUND = "Сотрудник не найден"
NULLABLE_FIELDS = frozenset({"photo", "material_liability_document"})


class EmployeeService:
    """员工从不删除；离职只能通过 ``dismiss`` 完成且不可撤销。"""

    def list_employees(
        self, storage: Storage, organization_id: int, department_id: Optional[int] = None
    ) -> List[Employee]:
        return storage.get_employees(organization_id, department_id)

    def get_employee(self, storage: Storage, organization_id: int, employee_id: int) -> Employee:
        employee = storage.get_employee(organization_id, employee_id)
        if employee is None:
            raise AppException(EMPLOYEE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return employee

    def get_editable_employee(self, storage: Storage, organization_id: int, employee_id: int) -> Employee:
        """返回可修改的员工；已离职员工的档案冻结。"""
        employee = self.get_employee(storage, organization_id, employee_id)
        if employee.dismissed:
            raise AppException("Сотрудник уволен, изменение данных невозможно", HTTP_STATUS_CONFLICT)
        return employee

    def create_employee(self, storage: Storage, organization_id: int, data: Dict[str, Any]) -> Employee:
        self._ensure_department(storage, organization_id, data["department_id"])
        employee = storage.create_employee(organization_id, data)
        logger.info("Employee %s created in organization %s", employee.id, organization_id)
        return employee

    def update_employee(
        self, storage: Storage, organization_id: int, employee_id: int, patch: Dict[str, Any]
    ) -> Employee:
        self.get_editable_employee(storage, organization_id, employee_id)
        patch = {key: value for key, value in patch.items() if value is not None or key in NULLABLE_FIELDS}
        if patch.get("department_id") is not None:
            self._ensure_department(storage, organization_id, patch["department_id"])
        updated = storage.update_employee(organization_id, employee_id, patch)
        if updated is None:
            raise AppException(EMPLOYEE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return updated

    def dismiss_employee(
        self,
        storage: Storage,
        organization_id: int,
        employee_id: int,
        *,
        dismissal_date: Optional[date],
        dismissal_order_number: Optional[str],
    ) -> Employee:
        order_number = (dismissal_order_number or "").strip()
        if dismissal_date is None or not order_number:
            raise AppException("Требуется указать дату увольнения и номер приказа", HTTP_STATUS_BAD_REQUEST)

        employee = self.get_employee(storage, organization_id, employee_id)
        if employee.dismissed:
            raise AppException("Сотрудник уже уволен", HTTP_STATUS_CONFLICT)

        dismissed = storage.dismiss_employee(organization_id, employee_id, dismissal_date, order_number)
        if dismissed is None:
            raise AppException(EMPLOYEE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        logger.info("Employee %s dismissed by order %s", employee_id, order_number)
        return dismissed

    @staticmethod
    def _ensure_department(storage: Storage, organization_id: int, department_id: int) -> None:
        if storage.get_department(organization_id, department_id) is None:
            raise AppException(DEPARTMENT_NOT_FOUND, HTTP_STATUS_NOT_FOUND)


employee_service = EmployeeService()
