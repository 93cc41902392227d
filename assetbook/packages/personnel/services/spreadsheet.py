"""Excel 列定义与单元格解析：导入、导出共用同一套双语表头。"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Sequence

from openpyxl.utils.datetime import from_excel

from assetbook.packages.personnel.core.enums import LIABILITY_TYPE_LABELS, LiabilityTypeEnum

# 每列：(英文键, 俄文标签)
EMPLOYEE_COLUMNS = (
    ("fullName", "ФИО"),
    ("departmentId", "ID отдела"),
    ("position", "Должность"),
    ("hireDate", "Дата приема"),
    ("hireOrderNumber", "Приказ о приеме"),
    ("passport", "Паспорт"),
    ("birthDate", "Дата рождения"),
    ("address", "Адрес"),
    ("phone", "Телефон"),
    ("materialLiabilityType", "Тип материальной ответственности"),
)

INVENTORY_COLUMNS = (
    ("name", "Наименование"),
    ("inventoryNumber", "Инвентарный номер"),
    ("description", "Описание"),
    ("cost", "Стоимость"),
    ("employeeId", "ID сотрудника"),
    ("departmentId", "ID отдела"),
)

DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%Y-%m-%dT%H:%M:%S")


class HeaderLookup:
    """按表头文本定位列：先英文键，再俄文标签，找不到返回默认值。"""

    def __init__(self, header: Sequence[Any], columns: Iterable[tuple]) -> None:
        positions = {}
        for index, cell in enumerate(header):
            text = normalize_text(cell)
            if text and text.lower() not in positions:
                positions[text.lower()] = index
        self._index: Dict[str, Optional[int]] = {}
        for key, label in columns:
            position = positions.get(key.lower())
            if position is None:
                position = positions.get(label.lower())
            self._index[key] = position

    def value(self, row: Sequence[Any], key: str, default: Any = None) -> Any:
        position = self._index.get(key)
        if position is None or position >= len(row):
            return default
        cell = row[position]
        if cell is None or (isinstance(cell, str) and not cell.strip()):
            return default
        return cell


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = normalize_text(value)
    try:
        return int(text)
    except ValueError:
        try:
            number = float(text.replace(",", "."))
        except ValueError:
            return None
        return int(number) if number.is_integer() else None


def parse_cost(value: Any) -> int:
    """解析金额并四舍五入到整数（0.5 进位）；无法解析或为负时记为 0。"""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        text = str(value)
    else:
        text = normalize_text(value).replace(" ", "").replace(",", ".")
    try:
        number = Decimal(text)
    except InvalidOperation:
        return 0
    if not number.is_finite() or number < 0:
        return 0
    return int(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_date(value: Any) -> Optional[date]:
    """支持 Excel 日期单元格、序列号以及常见的文本格式。"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        try:
            return from_excel(value).date()
        except (ValueError, OverflowError, TypeError):
            return None
    text = normalize_text(value)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_liability_type(value: Any) -> str:
    """接受枚举值或俄文标签，其余一律视为无责任。"""
    text = normalize_text(value).lower()
    for item in LiabilityTypeEnum:
        if text == item.value or text == LIABILITY_TYPE_LABELS[item.value].lower():
            return item.value
    return LiabilityTypeEnum.NONE.value


def is_blank_row(row: Sequence[Any]) -> bool:
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row)
