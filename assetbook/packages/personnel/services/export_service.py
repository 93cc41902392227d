"""Excel 导出服务：员工与财产清单以俄文表头输出为 ``.xlsx``。"""

from __future__ import annotations

import io
from typing import Dict, List, Optional

from fastapi.responses import StreamingResponse
from openpyxl import Workbook

from assetbook.packages.personnel.core.constants import HTTP_STATUS_BAD_REQUEST, XLSX_MEDIA_TYPE
from assetbook.packages.personnel.core.enums import LIABILITY_TYPE_LABELS
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.logger import transfer_logger
from assetbook.packages.personnel.core.timezone import format_date, now as tz_now
from assetbook.packages.personnel.models import InventoryItem
from assetbook.packages.personnel.services.inventory_service import SCOPE_REQUIRED_MESSAGE
from assetbook.packages.personnel.services.spreadsheet import EMPLOYEE_COLUMNS, INVENTORY_COLUMNS
from assetbook.packages.personnel.storage import Storage

_EMPLOYEE_LABELS = dict(EMPLOYEE_COLUMNS)
_INVENTORY_LABELS = dict(INVENTORY_COLUMNS)


class ExportService:
    def export_employees(
        self, storage: Storage, organization_id: int, *, department_id: Optional[int] = None
    ) -> StreamingResponse:
        """导出员工；表头与导入列一致，导出的文件可以直接再导入。"""
        employees = storage.get_employees(organization_id, department_id)
        department_names = self._department_names(storage, organization_id)

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Сотрудники"
        sheet.append(
            [
                "ID",
                _EMPLOYEE_LABELS["fullName"],
                _EMPLOYEE_LABELS["departmentId"],
                "Отдел",
                _EMPLOYEE_LABELS["position"],
                _EMPLOYEE_LABELS["hireDate"],
                _EMPLOYEE_LABELS["hireOrderNumber"],
                _EMPLOYEE_LABELS["passport"],
                _EMPLOYEE_LABELS["birthDate"],
                _EMPLOYEE_LABELS["address"],
                _EMPLOYEE_LABELS["phone"],
                _EMPLOYEE_LABELS["materialLiabilityType"],
                "Уволен",
                "Дата увольнения",
                "Приказ об увольнении",
            ]
        )
        for employee in employees:
            sheet.append(
                [
                    employee.id,
                    employee.full_name,
                    employee.department_id,
                    department_names.get(employee.department_id, ""),
                    employee.position,
                    format_date(employee.hire_date),
                    employee.hire_order_number,
                    employee.passport,
                    format_date(employee.birth_date),
                    employee.address,
                    employee.phone,
                    LIABILITY_TYPE_LABELS.get(employee.material_liability_type, employee.material_liability_type),
                    "Да" if employee.dismissed else "Нет",
                    format_date(employee.dismissal_date),
                    employee.dismissal_order_number or "",
                ]
            )
        transfer_logger.info(
            "Exported %s employees for organization %s",
            len(employees),
            organization_id,
            extra={"organization_id": organization_id},
        )
        return self._stream(workbook, "employees")

    def export_inventory(
        self,
        storage: Storage,
        organization_id: int,
        *,
        employee_id: Optional[int] = None,
        department_id: Optional[int] = None,
    ) -> StreamingResponse:
        items: List[InventoryItem]
        if employee_id is not None:
            items = storage.get_inventory_items(organization_id, employee_id)
        elif department_id is not None:
            items = storage.get_inventory_items_by_department(organization_id, department_id)
        else:
            raise AppException(SCOPE_REQUIRED_MESSAGE, HTTP_STATUS_BAD_REQUEST)

        department_names = self._department_names(storage, organization_id)
        employee_names = {employee.id: employee.full_name for employee in storage.get_employees(organization_id)}

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Имущество"
        sheet.append(
            [
                "ID",
                _INVENTORY_LABELS["name"],
                _INVENTORY_LABELS["inventoryNumber"],
                _INVENTORY_LABELS["description"],
                _INVENTORY_LABELS["cost"],
                _INVENTORY_LABELS["employeeId"],
                "Сотрудник",
                _INVENTORY_LABELS["departmentId"],
                "Отдел",
            ]
        )
        for item in items:
            sheet.append(
                [
                    item.id,
                    item.name,
                    item.inventory_number,
                    item.description,
                    item.cost,
                    item.employee_id,
                    employee_names.get(item.employee_id, ""),
                    item.department_id,
                    department_names.get(item.department_id, ""),
                ]
            )
        transfer_logger.info(
            "Exported %s inventory items for organization %s",
            len(items),
            organization_id,
            extra={"organization_id": organization_id},
        )
        return self._stream(workbook, "inventory")

    @staticmethod
    def _department_names(storage: Storage, organization_id: int) -> Dict[int, str]:
        return {department.id: department.name for department in storage.get_departments(organization_id)}

    @staticmethod
    def _stream(workbook: Workbook, prefix: str) -> StreamingResponse:
        buffer = io.BytesIO()
        workbook.save(buffer)
        buffer.seek(0)

        filename = f"{prefix}-{tz_now():%Y%m%d%H%M%S}.xlsx"
        response = StreamingResponse(buffer, media_type=XLSX_MEDIA_TYPE)
        response.headers["Content-Disposition"] = f"attachment; filename={filename}"
        return response


export_service = ExportService()
