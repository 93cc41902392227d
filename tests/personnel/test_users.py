"""用户管理与组织查询接口的测试用例。"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from assetbook.packages.personnel.models import User


def _new_user(**overrides) -> dict:
    payload = {
        "username": "clerk",
        "password": "password1",
        "fullName": "Ivan Petrov",
        "position": "Clerk",
        "role": "manager",
        "permissions": ["view_employee_data"],
    }
    payload.update(overrides)
    return payload


def test_create_and_list_users(admin_client: TestClient, db_session_fixture: Session):
    created = admin_client.post("/api/users", json=_new_user())

    assert created.status_code == 201
    body = created.json()
    assert body["username"] == "clerk"
    assert body["organizationId"] == 1
    assert body["role"] == "manager"
    assert "password" not in body

    stored = db_session_fixture.query(User).filter(User.username == "clerk").one()
    assert stored.password != "password1"

    listed = admin_client.get("/api/users")
    assert listed.status_code == 200
    assert [item["username"] for item in listed.json()] == ["admin", "clerk"]


def test_create_user_rejects_unknown_permissions(admin_client: TestClient):
    response = admin_client.post("/api/users", json=_new_user(permissions=["fly"]))

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "Неверно указаны разрешения пользователя"
    assert payload["details"] == {"invalid": ["fly"]}


def test_create_user_duplicate_username(admin_client: TestClient):
    response = admin_client.post("/api/users", json=_new_user(username="admin"))

    assert response.status_code == 409


def test_update_user_changes_permissions_and_password(admin_client: TestClient, make_client):
    make_client("clerk", ["view_employee_data"])
    users = admin_client.get("/api/users").json()
    clerk_id = next(item["id"] for item in users if item["username"] == "clerk")

    updated = admin_client.put(
        f"/api/users/{clerk_id}",
        json={"permissions": ["manage_employees"], "password": "changed1"},
    )

    assert updated.status_code == 200
    assert updated.json()["permissions"] == ["manage_employees"]
    login = admin_client.post("/api/login", json={"username": "clerk", "password": "changed1"})
    assert login.status_code == 200


def test_update_user_trims_username(admin_client: TestClient):
    created = admin_client.post("/api/users", json=_new_user()).json()

    renamed = admin_client.put(f"/api/users/{created['id']}", json={"username": "  storekeeper  "})
    clash = admin_client.put(f"/api/users/{created['id']}", json={"username": " admin "})

    assert renamed.status_code == 200
    assert renamed.json()["username"] == "storekeeper"
    assert clash.status_code == 409


def test_update_missing_user_is_404(admin_client: TestClient):
    response = admin_client.put("/api/users/999", json={"position": "Nobody"})
    assert response.status_code == 404


def test_list_users_requires_view_permission(make_client):
    printer = make_client("printer", ["print_documents"])
    assert printer.get("/api/users").status_code == 403


def test_read_own_organization(admin_client: TestClient):
    response = admin_client.get("/api/organizations/1")

    assert response.status_code == 200
    assert response.json()["name"] == "Acme"


def test_read_foreign_organization_is_forbidden(admin_client: TestClient):
    response = admin_client.get("/api/organizations/2")
    assert response.status_code == 403
