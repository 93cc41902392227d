"""关系型存储：基于 SQLAlchemy 会话与 CRUD 层实现存储接口。"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetbook.packages.personnel.core.constants import SETUP_COMPLETED_KEY
from assetbook.packages.personnel.core.logger import logger
from assetbook.packages.personnel.core.timezone import now as tz_now
from assetbook.packages.personnel.crud.departments import department_crud
from assetbook.packages.personnel.crud.documents import document_crud
from assetbook.packages.personnel.crud.employees import employee_crud
from assetbook.packages.personnel.crud.inventory import inventory_crud
from assetbook.packages.personnel.crud.organizations import organization_crud
from assetbook.packages.personnel.crud.system_settings import system_setting_crud
from assetbook.packages.personnel.crud.users import user_crud
from assetbook.packages.personnel.models import (
    Department,
    Employee,
    EmployeeDocument,
    InventoryItem,
    Organization,
    User,
)
from assetbook.packages.personnel.storage.base import (
    DISMISSAL_FIELDS,
    AlreadySetupError,
    DuplicateKeyError,
    Storage,
    clean_patch,
    with_defaults,
)


def _duplicate_field(exc: IntegrityError) -> Optional[str]:
    """识别唯一约束冲突对应的字段，其他完整性错误返回 ``None``。"""
    message = str(getattr(exc, "orig", exc)).lower()
    if "unique" not in message and "duplicate" not in message:
        return None
    if "inventory_number" in message:
        return "inventory_number"
    if "username" in message:
        return "username"
    return "unknown"


class DatabaseStorage(Storage):
    """每个写操作自成一个事务；唯一约束冲突转换为 ``DuplicateKeyError``。"""

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            field = _duplicate_field(exc)
            if field is None:
                raise
            logger.warning("Unique constraint violated on %s", field)
            raise DuplicateKeyError(field, None) from exc
        except Exception:
            self.db.rollback()
            raise

    def _create(self, crud: Any, model: type, data: Mapping[str, Any]) -> Any:
        payload = with_defaults(model, data)
        payload.pop("id", None)
        payload["created_at"] = tz_now()
        with self._transaction():
            record = crud.create(self.db, payload)
        return record

    def _update(self, crud: Any, organization_id: int, id: int, values: Mapping[str, Any]) -> Any:
        record = crud.get(self.db, id, organization_id=organization_id)
        if record is None:
            return None
        with self._transaction():
            for key, value in values.items():
                setattr(record, key, value)
            crud.save(self.db, record)
        return record

    def _delete(self, crud: Any, organization_id: int, id: int) -> bool:
        record = crud.get(self.db, id, organization_id=organization_id)
        if record is None:
            return False
        with self._transaction():
            crud.hard_delete(self.db, record)
        return True

    # --- organizations & system state -------------------------------------------------

    def get_organization(self, id: int) -> Optional[Organization]:
        return organization_crud.get(self.db, id)

    def create_organization(self, data: Mapping[str, Any]) -> Organization:
        return self._create(organization_crud, Organization, {"name": data["name"]})

    def is_setup(self) -> bool:
        return system_setting_crud.get_value(self.db, SETUP_COMPLETED_KEY) == "true"

    def setup_system(
        self, organization_data: Mapping[str, Any], admin_data: Mapping[str, Any]
    ) -> Tuple[Organization, User]:
        if self.is_setup():
            raise AlreadySetupError()
        stamp = tz_now()
        with self._transaction():
            organization = organization_crud.create(
                self.db, {"name": organization_data["name"], "created_at": stamp}
            )
            admin_payload = with_defaults(User, admin_data)
            admin_payload.update({"organization_id": organization.id, "created_at": stamp})
            admin_payload.pop("id", None)
            admin = user_crud.create(self.db, admin_payload)
            system_setting_crud.set_value(self.db, SETUP_COMPLETED_KEY, "true")
        return organization, admin

    # --- users ---------------------------------------------------------------------------

    def get_user(self, id: int) -> Optional[User]:
        return user_crud.get(self.db, id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return user_crud.get_by_username(self.db, username)

    def get_users(self, organization_id: int) -> List[User]:
        return user_crud.get_multi(self.db, organization_id=organization_id)

    def create_user(self, organization_id: int, data: Mapping[str, Any]) -> User:
        return self._create(user_crud, User, {**data, "organization_id": organization_id})

    def update_user(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[User]:
        return self._update(user_crud, organization_id, id, clean_patch(User, patch))

    # --- departments ---------------------------------------------------------------------

    def get_department(self, organization_id: int, id: int) -> Optional[Department]:
        return department_crud.get(self.db, id, organization_id=organization_id)

    def get_departments(self, organization_id: int) -> List[Department]:
        return department_crud.get_multi(self.db, organization_id=organization_id)

    def create_department(self, organization_id: int, data: Mapping[str, Any]) -> Department:
        return self._create(department_crud, Department, {**data, "organization_id": organization_id})

    def update_department(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[Department]:
        return self._update(department_crud, organization_id, id, clean_patch(Department, patch))

    def delete_department(self, organization_id: int, id: int) -> bool:
        return self._delete(department_crud, organization_id, id)

    # --- employees -----------------------------------------------------------------------

    def get_employee(self, organization_id: int, id: int) -> Optional[Employee]:
        return employee_crud.get(self.db, id, organization_id=organization_id)

    def get_employees(self, organization_id: int, department_id: Optional[int] = None) -> List[Employee]:
        return employee_crud.list_for_organization(self.db, organization_id, department_id=department_id)

    def create_employee(self, organization_id: int, data: Mapping[str, Any]) -> Employee:
        return self._create(employee_crud, Employee, {**data, "organization_id": organization_id})

    def update_employee(self, organization_id: int, id: int, patch: Mapping[str, Any]) -> Optional[Employee]:
        values = clean_patch(Employee, patch, extra_ignored=DISMISSAL_FIELDS)
        return self._update(employee_crud, organization_id, id, values)

    def dismiss_employee(
        self, organization_id: int, id: int, dismissal_date: date, dismissal_order_number: str
    ) -> Optional[Employee]:
        values = {
            "dismissed": True,
            "dismissal_date": dismissal_date,
            "dismissal_order_number": dismissal_order_number,
        }
        return self._update(employee_crud, organization_id, id, values)

    # --- employee documents --------------------------------------------------------------

    def get_employee_documents(self, organization_id: int, employee_id: int) -> List[EmployeeDocument]:
        return document_crud.get_multi(self.db, organization_id=organization_id, employee_id=employee_id)

    def get_employee_document(self, organization_id: int, id: int) -> Optional[EmployeeDocument]:
        return document_crud.get(self.db, id, organization_id=organization_id)

    def add_employee_document(self, organization_id: int, data: Mapping[str, Any]) -> EmployeeDocument:
        payload = clean_patch(EmployeeDocument, data)
        payload.update({"organization_id": organization_id})
        payload.setdefault("upload_date", tz_now())
        with self._transaction():
            record = document_crud.create(self.db, payload)
        return record

    def delete_employee_document(self, organization_id: int, id: int) -> bool:
        return self._delete(document_crud, organization_id, id)

    # --- inventory -----------------------------------------------------------------------

    def get_inventory_item(self, organization_id: int, id: int) -> Optional[InventoryItem]:
        return inventory_crud.get(self.db, id, organization_id=organization_id)

    def get_inventory_items(self, organization_id: int, employee_id: int) -> List[InventoryItem]:
        return inventory_crud.list_by_employee(self.db, organization_id, employee_id)

    def get_inventory_items_by_department(self, organization_id: int, department_id: int) -> List[InventoryItem]:
        return inventory_crud.list_by_department(self.db, organization_id, department_id)

    def create_inventory_item(self, organization_id: int, data: Mapping[str, Any]) -> InventoryItem:
        return self._create(inventory_crud, InventoryItem, {**data, "organization_id": organization_id})

    def update_inventory_item(
        self, organization_id: int, id: int, patch: Mapping[str, Any]
    ) -> Optional[InventoryItem]:
        return self._update(inventory_crud, organization_id, id, clean_patch(InventoryItem, patch))

    def delete_inventory_item(self, organization_id: int, id: int) -> bool:
        return self._delete(inventory_crud, organization_id, id)
