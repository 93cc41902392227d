"""测试夹具：为 pytest 提供数据库、存储与客户端的共享配置。"""

import os
import shutil
import tempfile
from typing import Callable, Generator

_TMP_ROOT = tempfile.mkdtemp(prefix="assetbook-tests-")
os.environ.setdefault("STORAGE_BACKEND", "database")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_ROOT, "log"))
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TMP_ROOT, "uploads"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from assetbook.main import app  # noqa: E402
from assetbook.packages.personnel.core import session as session_store  # noqa: E402
from assetbook.packages.personnel.core.dependencies import get_db, reset_memory_storage  # noqa: E402
from assetbook.packages.personnel.db import session as db_session  # noqa: E402
from assetbook.packages.personnel.models.base import Base  # noqa: E402

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

SETUP_PAYLOAD = {
    "organizationName": "Acme",
    "adminUsername": "admin",
    "adminPassword": "secret1",
    "adminFullName": "A B",
    "adminPosition": "Boss",
}


@pytest.fixture(scope="session", autouse=True)
def test_engine() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal
    yield

    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)
    shutil.rmtree(_TMP_ROOT, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None, None, None]:
    """每个用例使用空库、空内存存储与全新的会话后端。"""
    Base.metadata.drop_all(bind=db_session.engine)
    Base.metadata.create_all(bind=db_session.engine)
    session_store.reset_backend()
    reset_memory_storage()
    yield
    session_store.reset_backend()
    reset_memory_storage()


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """构建 FastAPI TestClient，并注入测试专用的数据库依赖。"""
    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def setup_payload() -> dict:
    return dict(SETUP_PAYLOAD)


@pytest.fixture()
def admin_client(client: TestClient, setup_payload: dict) -> TestClient:
    """完成系统初始化后的客户端，Cookie 中已带有管理员会话。"""
    response = client.post("/api/setup", json=setup_payload)
    assert response.status_code == 201
    return client


@pytest.fixture()
def make_client(admin_client: TestClient) -> Generator[Callable[..., TestClient], None, None]:
    """按给定权限创建一个新用户，并返回以该用户登录的独立客户端。"""
    opened: list[TestClient] = []

    def factory(username: str, permissions: list[str], password: str = "password1") -> TestClient:
        created = admin_client.post(
            "/api/users",
            json={
                "username": username,
                "password": password,
                "fullName": f"User {username}",
                "position": "Clerk",
                "permissions": permissions,
            },
        )
        assert created.status_code == 201
        other = TestClient(app)
        opened.append(other)
        login = other.post("/api/login", json={"username": username, "password": password})
        assert login.status_code == 200
        return other

    yield factory

    for item in opened:
        item.close()


@pytest.fixture()
def department_factory(admin_client: TestClient) -> Callable[..., dict]:
    def factory(name: str = "Sales") -> dict:
        response = admin_client.post("/api/departments", json={"name": name})
        assert response.status_code == 201
        return response.json()

    return factory


@pytest.fixture()
def employee_factory(admin_client: TestClient) -> Callable[..., dict]:
    """通过接口创建员工，返回响应体；可用关键字参数覆盖默认字段。"""

    def factory(department_id: int, **overrides) -> dict:
        payload = {
            "fullName": "Ivan Ivanov",
            "departmentId": department_id,
            "position": "Storekeeper",
            "hireDate": "2020-01-15",
            "hireOrderNumber": "12-к",
            "passport": "4500 123456",
            "birthDate": "1990-05-20",
            "address": "Moscow",
            "phone": "+7 900 000-00-00",
            "materialLiabilityType": "individual",
        }
        payload.update(overrides)
        response = admin_client.post("/api/employees", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return factory
