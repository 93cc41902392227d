"""Excel 导入服务：逐行尽力导入员工与财产，失败行汇总为错误信息。"""

from __future__ import annotations

import io
import uuid
import zipfile
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import UploadFile
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from assetbook.packages.personnel.core.constants import (
    DEFAULT_BIRTH_DATE,
    HTTP_STATUS_BAD_REQUEST,
    SPREADSHEET_MIME_TYPES,
)
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.core.logger import transfer_logger
from assetbook.packages.personnel.core.timezone import today
from assetbook.packages.personnel.services.spreadsheet import (
    EMPLOYEE_COLUMNS,
    INVENTORY_COLUMNS,
    HeaderLookup,
    is_blank_row,
    normalize_text,
    parse_cost,
    parse_date,
    parse_int,
    parse_liability_type,
)
from assetbook.packages.personnel.services.upload_service import read_limited
from assetbook.packages.personnel.storage import DuplicateKeyError, Storage


class RowError(Exception):
    """单行数据无效，仅影响当前行。"""


@dataclass
class RowResult:
    row: int
    ok: bool
    message: Optional[str] = None


class ImportService:
    def import_employees(self, storage: Storage, organization_id: int, file: UploadFile) -> Dict[str, Any]:
        header, rows = self._read_sheet(file)
        lookup = HeaderLookup(header, EMPLOYEE_COLUMNS)
        results = self._run(rows, lambda row: self._import_employee_row(storage, organization_id, lookup, row))
        return self._summarize("employees", organization_id, results)

    def import_inventory(self, storage: Storage, organization_id: int, file: UploadFile) -> Dict[str, Any]:
        header, rows = self._read_sheet(file)
        lookup = HeaderLookup(header, INVENTORY_COLUMNS)
        results = self._run(rows, lambda row: self._import_inventory_row(storage, organization_id, lookup, row))
        return self._summarize("inventory", organization_id, results)

    # ------------------------------------------------------------------
    # 行处理
    # ------------------------------------------------------------------

    def _import_employee_row(
        self, storage: Storage, organization_id: int, lookup: HeaderLookup, row: Sequence[Any]
    ) -> None:
        full_name = normalize_text(lookup.value(row, "fullName"))
        position = normalize_text(lookup.value(row, "position"))
        raw_department = lookup.value(row, "departmentId")
        if not full_name or not position or raw_department is None:
            raise RowError("не указаны обязательные поля (ФИО, должность, ID отдела)")

        department_id = parse_int(raw_department)
        if department_id is None or storage.get_department(organization_id, department_id) is None:
            raise RowError(f"отдел с ID {normalize_text(raw_department)} не найден")

        storage.create_employee(
            organization_id,
            {
                "full_name": full_name,
                "department_id": department_id,
                "position": position,
                "hire_date": parse_date(lookup.value(row, "hireDate")) or today(),
                "hire_order_number": normalize_text(lookup.value(row, "hireOrderNumber")),
                "passport": normalize_text(lookup.value(row, "passport")),
                "birth_date": parse_date(lookup.value(row, "birthDate")) or date.fromisoformat(DEFAULT_BIRTH_DATE),
                "address": normalize_text(lookup.value(row, "address")),
                "phone": normalize_text(lookup.value(row, "phone")),
                "material_liability_type": parse_liability_type(lookup.value(row, "materialLiabilityType")),
            },
        )

    def _import_inventory_row(
        self, storage: Storage, organization_id: int, lookup: HeaderLookup, row: Sequence[Any]
    ) -> None:
        name = normalize_text(lookup.value(row, "name"))
        raw_employee = lookup.value(row, "employeeId")
        raw_department = lookup.value(row, "departmentId")
        if not name or (raw_employee is None and raw_department is None):
            raise RowError("не указаны обязательные поля (наименование, ID сотрудника или ID отдела)")
        if raw_employee is None:
            raise RowError("имущество должно быть закреплено за сотрудником (не указан ID сотрудника)")

        employee_id = parse_int(raw_employee)
        employee = storage.get_employee(organization_id, employee_id) if employee_id is not None else None
        if employee is None:
            raise RowError(f"сотрудник с ID {normalize_text(raw_employee)} не найден")

        department_id = employee.department_id
        if raw_department is not None:
            department_id = parse_int(raw_department)
            if department_id is None or storage.get_department(organization_id, department_id) is None:
                raise RowError(f"отдел с ID {normalize_text(raw_department)} не найден")

        inventory_number = normalize_text(lookup.value(row, "inventoryNumber")) or self._generate_number()
        try:
            storage.create_inventory_item(
                organization_id,
                {
                    "name": name,
                    "inventory_number": inventory_number,
                    "description": normalize_text(lookup.value(row, "description")),
                    "cost": parse_cost(lookup.value(row, "cost")),
                    "employee_id": employee.id,
                    "department_id": department_id,
                },
            )
        except DuplicateKeyError as exc:
            raise RowError(f"инвентарный номер {inventory_number} уже существует") from exc

    # ------------------------------------------------------------------
    # 内部辅助方法
    # ------------------------------------------------------------------

    @staticmethod
    def _read_sheet(file: Optional[UploadFile]) -> tuple[list, list]:
        if file is None:
            raise AppException("Файл не загружен", HTTP_STATUS_BAD_REQUEST)
        if (file.content_type or "application/octet-stream") not in SPREADSHEET_MIME_TYPES:
            raise AppException("Допускаются только файлы Excel", HTTP_STATUS_BAD_REQUEST)
        content = read_limited(file)
        if not content:
            raise AppException("Файл не загружен", HTTP_STATUS_BAD_REQUEST)
        try:
            workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
            raise AppException("Не удалось прочитать файл Excel", HTTP_STATUS_BAD_REQUEST) from exc

        try:
            sheet = workbook.worksheets[0]
            all_rows = [list(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()
        if not all_rows:
            raise AppException("Файл не содержит данных", HTTP_STATUS_BAD_REQUEST)
        return all_rows[0], all_rows[1:]

    @staticmethod
    def _run(rows: List[Sequence[Any]], handler: Callable[[Sequence[Any]], None]) -> List[RowResult]:
        """按顺序处理每一行；行号从 1 开始计数，表头不计入。"""
        results: List[RowResult] = []
        for number, row in enumerate(rows, start=1):
            if is_blank_row(row):
                continue
            try:
                handler(row)
            except RowError as exc:
                results.append(RowResult(number, False, str(exc)))
            except Exception as exc:  # noqa: BLE001
                transfer_logger.warning(
                    "Import row %s failed unexpectedly", number, exc_info=True, extra={"row": number}
                )
                results.append(RowResult(number, False, str(exc) or exc.__class__.__name__))
            else:
                results.append(RowResult(number, True))
        return results

    @staticmethod
    def _summarize(kind: str, organization_id: int, results: List[RowResult]) -> Dict[str, Any]:
        errors = [f"Строка {item.row}: {item.message}" for item in results if not item.ok]
        success = sum(1 for item in results if item.ok)
        transfer_logger.info(
            "Imported %s for organization %s: %s succeeded, %s failed",
            kind,
            organization_id,
            success,
            len(errors),
            extra={"organization_id": organization_id},
        )
        return {"success": success, "failed": len(errors), "errors": errors}

    @staticmethod
    def _generate_number() -> str:
        return f"INV-{uuid.uuid4().hex[:10].upper()}"


import_service = ImportService()
