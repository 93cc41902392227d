"""内存存储：以字典保存实体、以计数器分配 ID，适合本地演示与测试。"""

from __future__ import annotations

import itertools
import threading
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from assetbook.packages.personnel.core.timezone import now as tz_now
from assetbook.packages.personnel.models import (
    Department,
    Employee,
    EmployeeDocument,
    InventoryItem,
    Organization,
    User,
)
from assetbook.packages.personnel.models.base import Base
from assetbook.packages.personnel.storage.base import (
    DISMISSAL_FIELDS,
    AlreadySetupError,
    DuplicateKeyError,
    Storage,
    clean_patch,
    with_defaults,
)

ModelType = TypeVar("ModelType", bound=Base)


class InMemoryStorage(Storage):
    """进程内存储；返回的都是未绑定会话的 ORM 实例。"""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tables: Dict[type, Dict[int, Any]] = {
            model: {} for model in (Organization, User, Department, Employee, EmployeeDocument, InventoryItem)
        }
        self._counters = {model: itertools.count(1) for model in self._tables}
        self._setup_completed = False

    # --- helpers -------------------------------------------------------------------------

    def _insert(self, model: Type[ModelType], data: Mapping[str, Any]) -> ModelType:
        payload = with_defaults(model, data)
        payload.pop("id", None)
        payload["id"] = next(self._counters[model])
        if model is EmployeeDocument:
            payload.setdefault("upload_date", tz_now())
        else:
            payload["created_at"] = tz_now()
        record = model(**payload)
        self._tables[model][record.id] = record
        return record

    def _owned(self, model: Type[ModelType], organization_id: int, id: int) -> Optional[ModelType]:
        record = self._tables[model].get(id)
        if record is None or record.organization_id != organization_id:
            return None
        return record

    def _select(self, model: Type[ModelType], organization_id: int, **filters: Any) -> List[ModelType]:
        return [
            record
            for _, record in sorted(self._tables[model].items())
            if record.organization_id == organization_id
            and all(getattr(record, field) == value for field, value in filters.items())
        ]

    def _patch(self, record: Optional[ModelType], values: Dict[str, Any]) -> Optional[ModelType]:
        if record is None:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        return record

    def _ensure_unique(self, model: type, field: str, value: Any, *, exclude_id: Optional[int] = None) -> None:
        for record in self._tables[model].values():
            if record.id != exclude_id and getattr(record, field) == value:
                raise DuplicateKeyError(field, value)

    # --- organizations & system state -------------------------------------------------

    def get_organization(self, id: int) -> Optional[Organization]:
        with self._lock:
            return self._tables[Organization].get(id)

    def create_organization(self, data: Mapping[str, Any]) -> Organization:
        with self._lock:
            return self._insert(Organization, {"name": data["name"]})

    def is_setup(self) -> bool:
        with self._lock:
            return self._setup_completed

    def setup_system(
        self, organization_data: Mapping[str, Any], admin_data: Mapping[str, Any]
    ) -> Tuple[Organization, User]:
        with self._lock:
            if self._setup_completed:
                raise AlreadySetupError()
            self._ensure_unique(User, "username", admin_data["username"])
            organization = self._insert(Organization, {"name": organization_data["name"]})
            admin = self._insert(User, {**admin_data, "organization_id": organization.id})
            self._setup_completed = True
            return organization, admin

    # --- users ---------------------------------------------------------------------------

    def get_user(self, id: int) -> Optional[User]:
        with self._lock:
            return self._tables[User].get(id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for record in self._tables[User].values():
                if record.username == username:
                    return record
            return None

    def get_users(self, organization_id: int) -> List[User]:
        with self._lock:
            return self._select(User, organization_id)

    def create_user(self, organization_id: int, data: Mapping[str, Any]) -> User:
        with self._lock:
            self._ensure_unique(User, "username", data.get("username"))
            return self._insert(User, {**data, "organization_id": organization_id})

    def update_user(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[User]:
        values = clean_patch(User, patch)
        with self._lock:
            record = self._owned(User, organization_id, id)
            if record is not None and "username" in values:
                self._ensure_unique(User, "username", values["username"], exclude_id=id)
            return self._patch(record, values)

    # --- departments ---------------------------------------------------------------------

    def get_department(self, organization_id: int, id: int) -> Optional[Department]:
        with self._lock:
            return self._owned(Department, organization_id, id)

    def get_departments(self, organization_id: int) -> List[Department]:
        with self._lock:
            return self._select(Department, organization_id)

    def create_department(self, organization_id: int, data: Mapping[str, Any]) -> Department:
        with self._lock:
            return self._insert(Department, {**data, "organization_id": organization_id})

    def update_department(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[Department]:
        values = clean_patch(Department, patch)
        with self._lock:
            return self._patch(self._owned(Department, organization_id, id), values)

    def delete_department(self, organization_id: int, id: int) -> bool:
        with self._lock:
            if self._owned(Department, organization_id, id) is None:
                return False
            del self._tables[Department][id]
            return True

    # --- employees -----------------------------------------------------------------------

    def get_employee(self, organization_id: int, id: int) -> Optional[Employee]:
        with self._lock:
            return self._owned(Employee, organization_id, id)

    def get_employees(self, organization_id: int, department_id: Optional[int] = None) -> List[Employee]:
        with self._lock:
            if department_id is None:
                return self._select(Employee, organization_id)
            return self._select(Employee, organization_id, department_id=department_id)

    def create_employee(self, organization_id: int, data: Mapping[str, Any]) -> Employee:
        with self._lock:
            return self._insert(Employee, {**data, "organization_id": organization_id})

    def update_employee(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[Employee]:
        values = clean_patch(Employee, patch, extra_ignored=DISMISSAL_FIELDS)
        with self._lock:
            return self._patch(self._owned(Employee, organization_id, id), values)

    def dismiss_employee(
        self, organization_id: int, id: int, dismissal_date: date, dismissal_order_number: str
    ) -> Optional[Employee]:
        values = {
            "dismissed": True,
            "dismissal_date": dismissal_date,
            "dismissal_order_number": dismissal_order_number,
        }
        with self._lock:
            return self._patch(self._owned(Employee, organization_id, id), values)

    # --- employee documents --------------------------------------------------------------

    def get_employee_documents(self, organization_id: int, employee_id: int) -> List[EmployeeDocument]:
        with self._lock:
            return self._select(EmployeeDocument, organization_id, employee_id=employee_id)

    def get_employee_document(self, organization_id: int, id: int) -> Optional[EmployeeDocument]:
        with self._lock:
            return self._owned(EmployeeDocument, organization_id, id)

    def add_employee_document(self, organization_id: int, data: Mapping[str, Any]) -> EmployeeDocument:
        with self._lock:
            return self._insert(EmployeeDocument, {**data, "organization_id": organization_id})

    def delete_employee_document(self, organization_id: int, id: int) -> bool:
        with self._lock:
            if self._owned(EmployeeDocument, organization_id, id) is None:
                return False
            del self._tables[EmployeeDocument][id]
            return True

    # --- inventory -----------------------------------------------------------------------

    def get_inventory_item(self, organization_id: int, id: int) -> Optional[InventoryItem]:
        with self._lock:
            return self._owned(InventoryItem, organization_id, id)

    def get_inventory_items(self, organization_id: int, employee_id: int) -> List[InventoryItem]:
        with self._lock:
            return self._select(InventoryItem, organization_id, employee_id=employee_id)

    def get_inventory_items_by_department(self, organization_id: int, department_id: int) -> List[InventoryItem]:
        with self._lock:
            return self._select(InventoryItem, organization_id, department_id=department_id)

    def create_inventory_item(self, organization_id: int, data: Mapping[str, Any]) -> InventoryItem:
        with self._lock:
            self._ensure_unique(InventoryItem, "inventory_number", data.get("inventory_number"))
            return self._insert(InventoryItem, {**data, "organization_id": organization_id})

    def update_inventory_item(
        self, organization_id: int, id: int, patch: Mapping[str, Any]
    ) -> Optional[InventoryItem]:
        values = clean_patch(InventoryItem, patch)
        with self._lock:
            record = self._owned(InventoryItem, organization_id, id)
            if record is not None and "inventory_number" in values:
                self._ensure_unique(InventoryItem, "inventory_number", values["inventory_number"], exclude_id=id)
            return self._patch(record, values)

    def delete_inventory_item(self, organization_id: int, id: int) -> bool:
        with self._lock:
            if self._owned(InventoryItem, organization_id, id) is None:
                return False
            del self._tables[InventoryItem][id]
            return True
