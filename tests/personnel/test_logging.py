"""日志配置与请求 ID 的测试用例。"""

import json
import logging

from fastapi.testclient import TestClient

from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.core.logger import (
    TRANSFER_LOGGER_NAME,
    JsonFormatter,
    RequestIdFilter,
    build_logging_config,
    set_request_id,
)


def test_transfer_logs_use_separate_file():
    settings = get_settings()
    config = build_logging_config(settings)

    transfer = config["loggers"][TRANSFER_LOGGER_NAME]
    assert transfer["handlers"] == ["console", "transfer_file"]
    assert transfer["propagate"] is False
    assert config["handlers"]["transfer_file"]["filename"].endswith(settings.transfer_log_file_name)
    assert config["handlers"]["file"]["filename"].endswith(settings.log_file_name)
    assert config["loggers"]["uvicorn.access"]["handlers"] == ["console", "file"]


def test_json_formatter_includes_request_and_context():
    record = logging.LogRecord("assetbook.transfer", logging.INFO, __file__, 1, "Imported %s", (3,), None)
    record.organization_id = 7

    set_request_id("req-42")
    try:
        RequestIdFilter().filter(record)
    finally:
        set_request_id(None)
    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "Imported 3"
    assert payload["request_id"] == "req-42"
    assert payload["organization_id"] == 7
    assert "employee_id" not in payload


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-1"})
    assert response.headers["x-request-id"] == "trace-1"


def test_oversized_request_id_is_replaced(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "x" * 500})
    assert response.headers["x-request-id"] != "x" * 500
