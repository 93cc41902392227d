"""会话后端与内存存储模式的测试用例。"""

import pytest
from fastapi.testclient import TestClient

from assetbook.packages.personnel.core import session as session_store
from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.core.session import DatabaseSessionBackend, InMemorySessionBackend


@pytest.fixture(params=["memory", "database"])
def backend(request):
    if request.param == "memory":
        return InMemorySessionBackend()
    return DatabaseSessionBackend()


def test_session_lifecycle(backend):
    session_id = backend.create_session(1, 60)

    assert backend.touch_session(session_id, 1, 60) is True
    backend.delete_session(session_id)
    assert backend.touch_session(session_id, 1, 60) is False
    backend.delete_session(session_id)


def test_session_bound_to_user(backend):
    session_id = backend.create_session(1, 60)

    assert backend.touch_session(session_id, 2, 60) is False
    assert backend.touch_session(session_id, 1, 60) is False


def test_expired_session_is_rejected(backend):
    session_id = backend.create_session(1, -1)

    assert backend.touch_session(session_id, 1, 60) is False


def test_api_with_memory_backend(client: TestClient, setup_payload: dict, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(get_settings(), "storage_backend", "memory")
    session_store.reset_backend()

    status_before = client.get("/api/system-status").json()
    setup = client.post("/api/setup", json=setup_payload)
    created = client.post("/api/departments", json={"name": "Sales"})
    stats = client.get("/api/departments", params={"stats": "true"})

    assert status_before == {"isSetup": False}
    assert setup.status_code == 201
    assert created.status_code == 201
    assert stats.json() == [{"departmentId": 1, "departmentName": "Sales", "employeeCount": 0, "inventoryCount": 0}]
    assert isinstance(session_store._get_backend(), InMemorySessionBackend)
    assert client.get("/api/system-status").json() == {"isSetup": True}
