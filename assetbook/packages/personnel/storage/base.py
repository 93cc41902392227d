"""存储接口：所有业务数据访问都经过这里，按组织 ID 强制隔离。

约定：
- 查询不存在的实体返回 ``None``；
- 创建时分配单调递增的 ID，并显式写入 ``created_at``；
- 更新合并部分字段，忽略 ``id``、``organization_id``、``created_at``；
- 删除返回是否真的删除了记录；
- 用户名与财产编号全局唯一，冲突时抛出 ``DuplicateKeyError``。
"""

from __future__ import annotations

import abc
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from assetbook.packages.personnel.core.enums import LiabilityTypeEnum, RoleEnum
from assetbook.packages.personnel.models import (
    Department,
    Employee,
    EmployeeDocument,
    InventoryItem,
    Organization,
    User,
)

PROTECTED_FIELDS = frozenset({"id", "organization_id", "created_at"})
# 离职字段只能通过 dismiss_employee 修改
DISMISSAL_FIELDS = frozenset({"dismissed", "dismissal_date", "dismissal_order_number"})


class StorageError(Exception):
    """存储层异常基类。"""


class DuplicateKeyError(StorageError):
    """唯一键冲突（用户名、财产编号）。"""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"Duplicate value for {field}: {value!r}")
        self.field = field
        self.value = value


class AlreadySetupError(StorageError):
    """系统已完成初始化，再次初始化被拒绝。"""


def clean_patch(model: type, patch: Mapping[str, Any], *, extra_ignored: frozenset = frozenset()) -> Dict[str, Any]:
    """过滤补丁：只保留模型列，并剔除受保护字段。"""
    columns = set(model.__table__.columns.keys())
    ignored = PROTECTED_FIELDS | extra_ignored
    return {key: value for key, value in patch.items() if key in columns and key not in ignored}


def with_defaults(model: type, data: Mapping[str, Any]) -> Dict[str, Any]:
    """补齐实体的业务默认值，两种实现共用，保证返回的记录形态一致。"""
    payload = dict(data)
    if model is User:
        payload.setdefault("role", RoleEnum.VIEWER.value)
        payload["permissions"] = list(payload.get("permissions") or [])
    elif model is Employee:
        payload.setdefault("photo", None)
        payload.setdefault("material_liability_document", None)
        if not payload.get("material_liability_type"):
            payload["material_liability_type"] = LiabilityTypeEnum.NONE.value
        payload["dismissed"] = False
        payload["dismissal_date"] = None
        payload["dismissal_order_number"] = None
    elif model is InventoryItem:
        if payload.get("description") is None:
            payload["description"] = ""
        if payload.get("cost") is None:
            payload["cost"] = 0
    columns = set(model.__table__.columns.keys())
    return {key: value for key, value in payload.items() if key in columns}


class Storage(abc.ABC):
    """存储抽象基类；除组织/系统状态/按 ID 取用户外，所有操作都以组织 ID 为首个参数。"""

    # --- organizations & system state -------------------------------------------------

    @abc.abstractmethod
    def get_organization(self, id: int) -> Optional[Organization]: ...

    @abc.abstractmethod
    def create_organization(self, data: Mapping[str, Any]) -> Organization: ...

    @abc.abstractmethod
    def is_setup(self) -> bool: ...

    @abc.abstractmethod
    def setup_system(
        self, organization_data: Mapping[str, Any], admin_data: Mapping[str, Any]
    ) -> Tuple[Organization, User]:
        """原子地创建组织、管理员并写入初始化标记；已初始化时抛出 ``AlreadySetupError``。"""

    # --- users ---------------------------------------------------------------------------

    @abc.abstractmethod
    def get_user(self, id: int) -> Optional[User]: ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abc.abstractmethod
    def get_users(self, organization_id: int) -> List[User]: ...

    @abc.abstractmethod
    def create_user(self, organization_id: int, data: Mapping[str, Any]) -> User: ...

    @abc.abstractmethod
    def update_user(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[User]: ...

    # --- departments ---------------------------------------------------------------------

    @abc.abstractmethod
    def get_department(self, organization_id: int, id: int) -> Optional[Department]: ...

    @abc.abstractmethod
    def get_departments(self, organization_id: int) -> List[Department]: ...

    @abc.abstractmethod
    def create_department(self, organization_id: int, data: Mapping[str, Any]) -> Department: ...

    @abc.abstractmethod
    def update_department(
        self, organization_id: int, id: int, patch: Mapping[str, Any]
    ) -> Optional[Department]: ...

    @abc.abstractmethod
    def delete_department(self, organization_id: int, id: int) -> bool: ...

    # --- employees -----------------------------------------------------------------------

    @abc.abstractmethod
    def get_employee(self, organization_id: int, id: int) -> Optional[Employee]: ...

    @abc.abstractmethod
    def get_employees(self, organization_id: int, department_id: Optional[int] = None) -> List[Employee]: ...

    @abc.abstractmethod
    def create_employee(self, organization_id: int, data: Mapping[str, Any]) -> Employee: ...

    @abc.abstractmethod
    def update_employee(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[Employee]: ...

    @abc.abstractmethod
    def dismiss_employee(
        self, organization_id: int, id: int, dismissal_date: date, dismissal_order_number: str
    ) -> Optional[Employee]: ...

    # --- employee documents --------------------------------------------------------------

    @abc.abstractmethod
    def get_employee_documents(self, organization_id: int, employee_id: int) -> List[EmployeeDocument]: ...

    @abc.abstractmethod
    def get_employee_document(self, organization_id: int, id: int) -> Optional[EmployeeDocument]: ...

    @abc.abstractmethod
    def add_employee_document(self, organization_id: int, data: Mapping[str, Any]) -> EmployeeDocument: ...

    @abc.abstractmethod
    def delete_employee_document(self, organization_id: int, id: int) -> bool: ...

    # --- inventory -----------------------------------------------------------------------

    @abc.abstractmethod
    def get_inventory_item(self, organization_id: int, id: int) -> Optional[InventoryItem]: ...

    @abc.abstractmethod
    def get_inventory_items(self, organization_id: int, employee_id: int) -> List[InventoryItem]: ...

    @abc.abstractmethod
    def get_inventory_items_by_department(self, organization_id: int, department_id: int) -> List[InventoryItem]: ...

    @abc.abstractmethod
    def create_inventory_item(self, organization_id: int, data: Mapping[str, Any]) -> InventoryItem: ...

    @abc.abstractmethod
    def update_inventory_item(
        self, organization_id: int, id: int, patch: Mapping[str, Any]
    ) -> Optional[InventoryItem]: ...

    @abc.abstractmethod
    def delete_inventory_item(self, organization_id: int, id: int) -> bool: ...

    # --- derived -------------------------------------------------------------------------

    def get_department_stats(self, organization_id: int) -> List[Dict[str, Any]]:
        """逐个部门统计员工数与财产数，只基于上面的公开操作。"""
        stats: List[Dict[str, Any]] = []
        for department in self.get_departments(organization_id):
            employees = self.get_employees(organization_id, department.id)
            items = self.get_inventory_items_by_department(organization_id, department.id)
            stats.append(
                {
                    "department_id": department.id,
                    "department_name": department.name,
                    "employee_count": len(employees),
                    "inventory_count": len(items),
                }
            )
        return stats
