"""员工档案、离职流程与组织隔离的测试用例。"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from assetbook.main import app
from assetbook.packages.personnel.core.security import get_password_hash
from assetbook.packages.personnel.storage import DatabaseStorage


@pytest.fixture()
def department(department_factory) -> dict:
    return department_factory("Warehouse")


def test_create_employee_defaults(admin_client: TestClient, department: dict, employee_factory):
    employee = employee_factory(department["id"], materialLiabilityType="none")

    assert employee["id"] == 1
    assert employee["organizationId"] == 1
    assert employee["dismissed"] is False
    assert employee["dismissalDate"] is None
    assert employee["dismissalOrderNumber"] is None
    assert employee["photo"] is None
    assert employee["hireDate"] == "2020-01-15"
    assert employee["createdAt"]


def test_create_employee_in_unknown_department(admin_client: TestClient, employee_factory):
    response = admin_client.post(
        "/api/employees",
        json={
            "fullName": "Nobody",
            "departmentId": 77,
            "position": "Ghost",
            "hireDate": "2020-01-01",
            "hireOrderNumber": "1",
            "passport": "1",
            "birthDate": "1990-01-01",
            "address": "-",
            "phone": "-",
        },
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Отдел не найден"


def test_create_employee_validates_payload(admin_client: TestClient, department: dict):
    response = admin_client.post("/api/employees", json={"fullName": "Only Name", "departmentId": department["id"]})
    assert response.status_code == 400


def test_list_employees_filters_by_department(admin_client: TestClient, department_factory, employee_factory):
    first = department_factory("First")
    second = department_factory("Second")
    employee_factory(first["id"], fullName="A")
    employee_factory(second["id"], fullName="B")
    employee_factory(second["id"], fullName="C")

    everyone = admin_client.get("/api/employees").json()
    filtered = admin_client.get("/api/employees", params={"departmentId": second["id"]}).json()

    assert [item["fullName"] for item in everyone] == ["A", "B", "C"]
    assert [item["fullName"] for item in filtered] == ["B", "C"]


def test_update_employee_merges_fields(admin_client: TestClient, department: dict, employee_factory):
    employee = employee_factory(department["id"])

    response = admin_client.put(
        f"/api/employees/{employee['id']}",
        json={"position": "Senior Storekeeper", "phone": "+7 911 111-11-11", "organizationId": 99, "dismissed": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["position"] == "Senior Storekeeper"
    assert body["phone"] == "+7 911 111-11-11"
    assert body["fullName"] == employee["fullName"]
    assert body["organizationId"] == 1
    assert body["dismissed"] is False


def test_dismiss_employee(admin_client: TestClient, department: dict, employee_factory):
    employee = employee_factory(department["id"])

    response = admin_client.post(
        f"/api/employees/{employee['id']}/dismiss",
        json={"dismissalDate": "2024-03-01", "dismissalOrderNumber": "15-у"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["dismissed"] is True
    assert body["dismissalDate"] == "2024-03-01"
    assert body["dismissalOrderNumber"] == "15-у"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"dismissalDate": "2024-03-01"},
        {"dismissalOrderNumber": "15-у"},
        {"dismissalDate": "2024-03-01", "dismissalOrderNumber": "   "},
    ],
)
def test_dismiss_requires_date_and_order(admin_client: TestClient, department: dict, employee_factory, payload):
    employee = employee_factory(department["id"])

    response = admin_client.post(f"/api/employees/{employee['id']}/dismiss", json=payload)

    assert response.status_code == 400
    assert admin_client.get(f"/api/employees/{employee['id']}").json()["dismissed"] is False


def test_dismissed_employee_is_frozen(admin_client: TestClient, department: dict, employee_factory):
    employee = employee_factory(department["id"])
    admin_client.post(
        f"/api/employees/{employee['id']}/dismiss",
        json={"dismissalDate": "2024-03-01", "dismissalOrderNumber": "15-у"},
    )

    again = admin_client.post(
        f"/api/employees/{employee['id']}/dismiss",
        json={"dismissalDate": "2024-04-01", "dismissalOrderNumber": "16-у"},
    )
    update = admin_client.put(f"/api/employees/{employee['id']}", json={"position": "Back again"})

    assert again.status_code == 409
    assert update.status_code == 409
    stored = admin_client.get(f"/api/employees/{employee['id']}").json()
    assert stored["dismissalOrderNumber"] == "15-у"
    assert stored["position"] == employee["position"]


def test_dismissed_employee_photo_cannot_change(admin_client: TestClient, department: dict, employee_factory):
    employee = employee_factory(department["id"])
    admin_client.post(
        f"/api/employees/{employee['id']}/dismiss",
        json={"dismissalDate": "2024-03-01", "dismissalOrderNumber": "15-у"},
    )

    response = admin_client.post(
        f"/api/upload/photo/{employee['id']}",
        files={"photo": ("face.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * 32, "image/png")},
    )

    assert response.status_code == 409
    assert admin_client.get(f"/api/employees/{employee['id']}").json()["photo"] is None


def test_unknown_employee_is_404(admin_client: TestClient):
    assert admin_client.get("/api/employees/404").status_code == 404
    response = admin_client.post(
        "/api/employees/404/dismiss",
        json={"dismissalDate": "2024-03-01", "dismissalOrderNumber": "1"},
    )
    assert response.status_code == 404


def test_employees_of_other_organization_are_invisible(
    admin_client: TestClient, department: dict, employee_factory, db_session_fixture: Session
):
    employee = employee_factory(department["id"])

    storage = DatabaseStorage(db_session_fixture)
    other = storage.create_organization({"name": "Globex"})
    storage.create_user(
        other.id,
        {
            "username": "outsider",
            "password": get_password_hash("password1"),
            "full_name": "Out Sider",
            "position": "Admin",
            "role": "admin",
            "permissions": ["full_access"],
        },
    )

    with TestClient(app) as outsider:
        login = outsider.post("/api/login", json={"username": "outsider", "password": "password1"})
        assert login.status_code == 200

        assert outsider.get("/api/employees").json() == []
        assert outsider.get(f"/api/employees/{employee['id']}").status_code == 404
        assert outsider.put(f"/api/employees/{employee['id']}", json={"position": "Hijacked"}).status_code == 404
        assert outsider.get(f"/api/departments/{department['id']}").status_code == 404

    assert admin_client.get(f"/api/employees/{employee['id']}").json()["position"] == employee["position"]


def test_employee_writes_require_manage_employees(make_client, department: dict):
    viewer = make_client("viewer", ["view_employee_data"])

    assert viewer.get("/api/employees").status_code == 200
    response = viewer.post(
        "/api/employees",
        json={
            "fullName": "Nope",
            "departmentId": department["id"],
            "position": "Nope",
            "hireDate": "2020-01-01",
            "hireOrderNumber": "1",
            "passport": "1",
            "birthDate": "1990-01-01",
            "address": "-",
            "phone": "-",
        },
    )
    assert response.status_code == 403
