"""两种存储实现共享同一套行为约定，这里对它们逐一验证。"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from assetbook.packages.personnel.storage import (
    AlreadySetupError,
    DatabaseStorage,
    DuplicateKeyError,
    InMemoryStorage,
    Storage,
)


@pytest.fixture(params=["memory", "database"])
def storage(request, db_session_fixture: Session) -> Storage:
    if request.param == "memory":
        return InMemoryStorage()
    return DatabaseStorage(db_session_fixture)


def _user(username: str = "admin") -> dict:
    return {
        "username": username,
        "password": "hashed",
        "full_name": "A B",
        "position": "Boss",
        "role": "admin",
        "permissions": ["full_access"],
    }


def _employee(department_id: int, **overrides) -> dict:
    data = {
        "full_name": "Ivan Ivanov",
        "department_id": department_id,
        "position": "Storekeeper",
        "hire_date": date(2020, 1, 15),
        "hire_order_number": "1",
        "passport": "4500 123456",
        "birth_date": date(1990, 5, 20),
        "address": "Moscow",
        "phone": "+7",
    }
    data.update(overrides)
    return data


@pytest.fixture()
def org_id(storage: Storage) -> int:
    organization, _ = storage.setup_system({"name": "Acme"}, _user())
    return organization.id


def test_setup_is_one_shot(storage: Storage):
    assert storage.is_setup() is False

    organization, admin = storage.setup_system({"name": "Acme"}, _user())

    assert storage.is_setup() is True
    assert organization.id == 1
    assert admin.organization_id == organization.id
    assert admin.created_at is not None
    with pytest.raises(AlreadySetupError):
        storage.setup_system({"name": "Other"}, _user("second"))
    assert storage.get_organization(2) is None
    assert storage.get_user_by_username("second") is None


def test_missing_lookups_return_none(storage: Storage, org_id: int):
    assert storage.get_organization(42) is None
    assert storage.get_user(42) is None
    assert storage.get_user_by_username("ghost") is None
    assert storage.get_department(org_id, 42) is None
    assert storage.get_employee(org_id, 42) is None
    assert storage.get_employee_document(org_id, 42) is None
    assert storage.get_inventory_item(org_id, 42) is None
    assert storage.update_department(org_id, 42, {"name": "x"}) is None
    assert storage.update_employee(org_id, 42, {"position": "x"}) is None
    assert storage.update_inventory_item(org_id, 42, {"name": "x"}) is None


def test_ids_increase_and_created_at_is_set(storage: Storage, org_id: int):
    first = storage.create_department(org_id, {"name": "First"})
    second = storage.create_department(org_id, {"name": "Second"})

    assert second.id > first.id
    assert first.created_at is not None
    assert [item.name for item in storage.get_departments(org_id)] == ["First", "Second"]


def test_update_ignores_protected_fields(storage: Storage, org_id: int):
    department = storage.create_department(org_id, {"name": "Sales"})
    created_at = department.created_at

    updated = storage.update_department(
        org_id, department.id, {"name": "Marketing", "id": 99, "organization_id": 5, "created_at": None}
    )

    assert updated.id == department.id
    assert updated.name == "Marketing"
    assert updated.organization_id == org_id
    assert updated.created_at == created_at


def test_employee_defaults_and_dismissal(storage: Storage, org_id: int):
    department = storage.create_department(org_id, {"name": "Sales"})
    employee = storage.create_employee(org_id, _employee(department.id, dismissed=True))

    assert employee.dismissed is False
    assert employee.material_liability_type == "none"
    assert employee.photo is None

    patched = storage.update_employee(org_id, employee.id, {"position": "Lead", "dismissed": True})
    assert patched.position == "Lead"
    assert patched.dismissed is False

    dismissed = storage.dismiss_employee(org_id, employee.id, date(2024, 3, 1), "15-у")
    assert dismissed.dismissed is True
    assert dismissed.dismissal_date == date(2024, 3, 1)
    assert dismissed.dismissal_order_number == "15-у"


def test_delete_reports_result(storage: Storage, org_id: int):
    department = storage.create_department(org_id, {"name": "Sales"})

    assert storage.delete_department(org_id, department.id) is True
    assert storage.delete_department(org_id, department.id) is False
    assert storage.delete_inventory_item(org_id, 1) is False
    assert storage.delete_employee_document(org_id, 1) is False


def test_unique_keys(storage: Storage, org_id: int):
    with pytest.raises(DuplicateKeyError):
        storage.create_user(org_id, _user("admin"))

    department = storage.create_department(org_id, {"name": "Sales"})
    employee = storage.create_employee(org_id, _employee(department.id))
    item = {"name": "Laptop", "inventory_number": "INV-1", "employee_id": employee.id, "department_id": department.id}
    created = storage.create_inventory_item(org_id, item)
    other = storage.create_inventory_item(org_id, dict(item, inventory_number="INV-2"))

    assert created.cost == 0
    assert created.description == ""
    with pytest.raises(DuplicateKeyError):
        storage.create_inventory_item(org_id, item)
    with pytest.raises(DuplicateKeyError):
        storage.update_inventory_item(org_id, other.id, {"inventory_number": "INV-1"})
    assert storage.get_inventory_item(org_id, other.id).inventory_number == "INV-2"


def test_inventory_queries_and_stats(storage: Storage, org_id: int):
    sales = storage.create_department(org_id, {"name": "Sales"})
    empty = storage.create_department(org_id, {"name": "Empty"})
    first = storage.create_employee(org_id, _employee(sales.id))
    second = storage.create_employee(org_id, _employee(sales.id, full_name="Petr Petrov"))
    for number, owner in (("INV-1", first), ("INV-2", first), ("INV-3", second)):
        storage.create_inventory_item(
            org_id,
            {"name": number, "inventory_number": number, "cost": 10, "employee_id": owner.id, "department_id": sales.id},
        )

    assert [item.inventory_number for item in storage.get_inventory_items(org_id, first.id)] == ["INV-1", "INV-2"]
    assert len(storage.get_inventory_items_by_department(org_id, sales.id)) == 3
    assert storage.get_employees(org_id, empty.id) == []
    assert storage.get_department_stats(org_id) == [
        {"department_id": sales.id, "department_name": "Sales", "employee_count": 2, "inventory_count": 3},
        {"department_id": empty.id, "department_name": "Empty", "employee_count": 0, "inventory_count": 0},
    ]


def test_documents(storage: Storage, org_id: int):
    department = storage.create_department(org_id, {"name": "Sales"})
    employee = storage.create_employee(org_id, _employee(department.id))

    document = storage.add_employee_document(
        org_id, {"employee_id": employee.id, "filename": "a.pdf", "path": "/uploads/documents/a.pdf"}
    )

    assert document.upload_date is not None
    assert [item.id for item in storage.get_employee_documents(org_id, employee.id)] == [document.id]
    assert storage.delete_employee_document(org_id, document.id) is True
    assert storage.get_employee_documents(org_id, employee.id) == []


def test_tenant_isolation(storage: Storage, org_id: int):
    other_org = storage.create_organization({"name": "Globex"}).id
    department = storage.create_department(org_id, {"name": "Sales"})
    employee = storage.create_employee(org_id, _employee(department.id))
    item = storage.create_inventory_item(
        org_id,
        {"name": "Laptop", "inventory_number": "INV-1", "employee_id": employee.id, "department_id": department.id},
    )
    admin = storage.get_user_by_username("admin")

    assert storage.get_department(other_org, department.id) is None
    assert storage.get_departments(other_org) == []
    assert storage.get_employee(other_org, employee.id) is None
    assert storage.get_employees(other_org) == []
    assert storage.get_inventory_item(other_org, item.id) is None
    assert storage.get_inventory_items(other_org, employee.id) == []
    assert storage.get_users(other_org) == []
    assert storage.update_employee(other_org, employee.id, {"position": "x"}) is None
    assert storage.update_user(other_org, admin.id, {"position": "x"}) is None
    assert storage.dismiss_employee(other_org, employee.id, date(2024, 1, 1), "1") is None
    assert storage.delete_department(other_org, department.id) is False
    assert storage.delete_inventory_item(other_org, item.id) is False
    assert storage.get_employee(org_id, employee.id).position == "Storekeeper"
