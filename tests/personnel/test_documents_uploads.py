"""照片、员工文档上传与受保护文件读取的测试用例。"""

import pytest
from fastapi.testclient import TestClient

from assetbook.main import app
from assetbook.packages.personnel.core.config import get_settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture()
def employee(department_factory, employee_factory) -> dict:
    department = department_factory("Office")
    return employee_factory(department["id"])


def test_photo_upload_updates_employee(admin_client: TestClient, employee: dict):
    response = admin_client.post(
        f"/api/upload/photo/{employee['id']}",
        files={"photo": ("face.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["photoUrl"].startswith("/uploads/photos/photo-")
    assert body["photoUrl"].endswith(".png")
    assert body["employee"]["photo"] == body["photoUrl"]

    stored = get_settings().upload_directory / body["photoUrl"][len("/uploads/"):]
    assert stored.read_bytes() == PNG_BYTES

    served = admin_client.get(body["photoUrl"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_photo_upload_rejects_non_images(admin_client: TestClient, employee: dict):
    response = admin_client.post(
        f"/api/upload/photo/{employee['id']}",
        files={"photo": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert admin_client.get(f"/api/employees/{employee['id']}").json()["photo"] is None


def test_photo_upload_requires_file(admin_client: TestClient, employee: dict):
    response = admin_client.post(f"/api/upload/photo/{employee['id']}")
    assert response.status_code == 400
    assert response.json()["error"] == "Файл не загружен"


def test_photo_upload_for_unknown_employee(admin_client: TestClient):
    response = admin_client.post("/api/upload/photo/321", files={"photo": ("face.png", PNG_BYTES, "image/png")})
    assert response.status_code == 404


def test_document_upload_list_and_delete(admin_client: TestClient, employee: dict):
    uploaded = admin_client.post(
        f"/api/upload/document/{employee['id']}",
        files={"document": ("contract.pdf", b"%PDF-1.4 test", "application/pdf")},
    )

    assert uploaded.status_code == 200
    document = uploaded.json()["document"]
    assert document["filename"] == "contract.pdf"
    assert document["employeeId"] == employee["id"]
    assert document["path"].startswith("/uploads/documents/document-")

    listed = admin_client.get(f"/api/employees/{employee['id']}/documents").json()
    assert [item["id"] for item in listed] == [document["id"]]

    stored = get_settings().upload_directory / document["path"][len("/uploads/"):]
    assert stored.is_file()

    assert admin_client.delete(f"/api/employees/documents/{document['id']}").status_code == 204
    assert admin_client.get(f"/api/employees/{employee['id']}/documents").json() == []
    assert not stored.exists()
    assert admin_client.delete(f"/api/employees/documents/{document['id']}").status_code == 404


def test_document_upload_rejects_unsupported_type(admin_client: TestClient, employee: dict):
    response = admin_client.post(
        f"/api/upload/document/{employee['id']}",
        files={"document": ("script.sh", b"echo hi", "application/x-sh")},
    )

    assert response.status_code == 400
    assert admin_client.get(f"/api/employees/{employee['id']}/documents").json() == []


def test_upload_size_limit(admin_client: TestClient, employee: dict, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(get_settings(), "upload_max_bytes", 16)

    response = admin_client.post(
        f"/api/upload/document/{employee['id']}",
        files={"document": ("big.pdf", b"x" * 64, "application/pdf")},
    )

    assert response.status_code == 413


def test_uploaded_files_require_session(admin_client: TestClient, employee: dict):
    body = admin_client.post(
        f"/api/upload/photo/{employee['id']}",
        files={"photo": ("face.png", PNG_BYTES, "image/png")},
    ).json()

    with TestClient(app) as anonymous:
        assert anonymous.get(body["photoUrl"]).status_code == 401


@pytest.mark.parametrize("path", ["/uploads/photos/missing.png", "/uploads/secrets/file.txt"])
def test_unknown_uploaded_file_is_404(admin_client: TestClient, path: str):
    assert admin_client.get(path).status_code == 404


def test_uploads_require_manage_employees(make_client, employee: dict):
    viewer = make_client("viewer", ["view_employee_data"])

    response = viewer.post(
        f"/api/upload/photo/{employee['id']}",
        files={"photo": ("face.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 403
