"""系统初始化与登录会话的集成测试用例。"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from assetbook.packages.personnel.models import Organization, User


def test_system_status_before_and_after_setup(client: TestClient, setup_payload: dict):
    assert client.get("/api/system-status").json() == {"isSetup": False}

    client.post("/api/setup", json=setup_payload)

    assert client.get("/api/system-status").json() == {"isSetup": True}


def test_setup_creates_organization_and_admin(client: TestClient, setup_payload: dict):
    """首次初始化：返回 201，组织 ID 为 1，管理员拥有 full_access。"""
    response = client.post("/api/setup", json=setup_payload)

    assert response.status_code == 201
    payload = response.json()
    assert payload["message"] == "Система успешно настроена"
    assert payload["organization"]["id"] == 1
    assert payload["organization"]["name"] == "Acme"
    assert payload["admin"]["username"] == "admin"
    assert payload["admin"]["permissions"] == ["full_access"]
    assert payload["admin"]["organizationId"] == 1
    assert "password" not in payload["admin"]


def test_setup_twice_is_rejected_without_side_effects(
    client: TestClient, setup_payload: dict, db_session_fixture: Session
):
    client.post("/api/setup", json=setup_payload)

    second = client.post(
        "/api/setup",
        json={**setup_payload, "organizationName": "Other", "adminUsername": "other"},
    )

    assert second.status_code == 409
    assert second.json()["error"] == "Система уже настроена"
    assert db_session_fixture.query(Organization).count() == 1
    assert db_session_fixture.query(User).count() == 1


def test_setup_requires_all_fields(client: TestClient, setup_payload: dict):
    response = client.post("/api/setup", json={**setup_payload, "adminPosition": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Не указаны все необходимые данные"
    assert client.get("/api/system-status").json() == {"isSetup": False}


def test_admin_password_is_hashed(admin_client: TestClient, db_session_fixture: Session):
    admin = db_session_fixture.query(User).filter(User.username == "admin").one()
    assert admin.password != "secret1"
    assert admin.password.startswith("$2")


def test_setup_logs_admin_in(admin_client: TestClient):
    response = admin_client.get("/api/user")

    assert response.status_code == 200
    assert response.json()["username"] == "admin"


def test_login_success_sets_cookie(admin_client: TestClient):
    admin_client.cookies.clear()

    response = admin_client.post("/api/login", json={"username": "admin", "password": "secret1"})

    assert response.status_code == 200
    assert response.json()["fullName"] == "A B"
    assert "password" not in response.json()
    assert "assetbook_session" in response.cookies
    assert admin_client.get("/api/user").status_code == 200


def test_login_invalid_credentials(admin_client: TestClient):
    response = admin_client.post("/api/login", json={"username": "admin", "password": "wrong"})

    assert response.status_code == 401
    payload = response.json()
    assert payload["code"] == 401
    assert payload["error"] == "Неверное имя пользователя или пароль"


def test_current_user_requires_session(client: TestClient):
    response = client.get("/api/user")

    assert response.status_code == 401
    assert response.json()["error"] == "Требуется авторизация"


def test_bearer_token_is_accepted(admin_client: TestClient):
    token = admin_client.post(
        "/api/login", json={"username": "admin", "password": "secret1"}
    ).cookies["assetbook_session"]
    admin_client.cookies.clear()

    response = admin_client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["username"] == "admin"


def test_logout_invalidates_session(admin_client: TestClient):
    token = admin_client.post(
        "/api/login", json={"username": "admin", "password": "secret1"}
    ).cookies["assetbook_session"]

    response = admin_client.post("/api/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Выход выполнен"}

    admin_client.cookies.clear()
    replay = admin_client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert replay.status_code == 401


def test_tampered_token_is_rejected(client: TestClient):
    response = client.get("/api/user", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers.get("x-request-id")
