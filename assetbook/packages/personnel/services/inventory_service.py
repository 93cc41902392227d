"""财产服务：每件财产必须归属本组织内的一名员工。"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from assetbook.packages.personnel.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
)
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.models import InventoryItem
from assetbook.packages.personnel.services.department_service import DEPARTMENT_NOT_FOUND
from assetbook.packages.personnel.services.employee_service import EMPLOYEE_NOT_FOUND
from assetbook.packages.personnel.storage import DuplicateKeyError, Storage

ITEM_NOT_FOUND = "Имущество не найдено"
DUPLICATE_NUMBER_MESSAGE = "Имущество с таким инвентарным номером уже существует"
SCOPE_REQUIRED_MESSAGE = "Требуется указать employeeId или departmentId"


class InventoryService:
    def list_items(
        self,
        storage: Storage,
        organization_id: int,
        *,
        employee_id: Optional[int] = None,
        department_id: Optional[int] = None,
    ) -> List[InventoryItem]:
        """按员工或按部门列出财产，两者必须且只能给出一个。"""
        if (employee_id is None) == (department_id is None):
            raise AppException(SCOPE_REQUIRED_MESSAGE, HTTP_STATUS_BAD_REQUEST)
        if employee_id is not None:
            return storage.get_inventory_items(organization_id, employee_id)
        return storage.get_inventory_items_by_department(organization_id, department_id)

    def get_item(self, storage: Storage, organization_id: int, item_id: int) -> InventoryItem:
        item = storage.get_inventory_item(organization_id, item_id)
        if item is None:
            raise AppException(ITEM_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return item

    def create_item(self, storage: Storage, organization_id: int, data: Dict[str, Any]) -> InventoryItem:
        payload = self._resolve_ownership(storage, organization_id, dict(data))
        try:
            return storage.create_inventory_item(organization_id, payload)
        except DuplicateKeyError as exc:
            raise AppException(DUPLICATE_NUMBER_MESSAGE, HTTP_STATUS_CONFLICT) from exc

    def update_item(
        self, storage: Storage, organization_id: int, item_id: int, patch: Dict[str, Any]
    ) -> InventoryItem:
        payload = {key: value for key, value in patch.items() if value is not None}
        self.get_item(storage, organization_id, item_id)
        if "employee_id" in payload:
            payload = self._resolve_ownership(storage, organization_id, payload)
        elif "department_id" in payload:
            self._ensure_department(storage, organization_id, payload["department_id"])
        try:
            item = storage.update_inventory_item(organization_id, item_id, payload)
        except DuplicateKeyError as exc:
            raise AppException(DUPLICATE_NUMBER_MESSAGE, HTTP_STATUS_CONFLICT) from exc
        if item is None:
            raise AppException(ITEM_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return item

    def delete_item(self, storage: Storage, organization_id: int, item_id: int) -> None:
        if not storage.delete_inventory_item(organization_id, item_id):
            raise AppException(ITEM_NOT_FOUND, HTTP_STATUS_NOT_FOUND)

    def _resolve_ownership(self, storage: Storage, organization_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """校验员工归属，缺省部门时沿用员工所在部门。"""
        employee = storage.get_employee(organization_id, payload["employee_id"])
        if employee is None:
            raise AppException(EMPLOYEE_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        if payload.get("department_id") is None:
            payload["department_id"] = employee.department_id
        else:
            self._ensure_department(storage, organization_id, payload["department_id"])
        return payload

    @staticmethod
    def _ensure_department(storage: Storage, organization_id: int, department_id: int) -> None:
        if storage.get_department(organization_id, department_id) is None:
            raise AppException(DEPARTMENT_NOT_FOUND, HTTP_STATUS_NOT_FOUND)


inventory_service = InventoryService()
