"""异常处理模块：定义统一的业务异常与错误响应格式。"""

from typing import Any

from fastapi import HTTPException, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from assetbook.packages.personnel.core.logger import logger


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.msg = msg
        self.data = data


def error_payload(message: Any, code: int, details: Any = None) -> dict[str, Any]:
    return {"error": message, "code": code, "details": details}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 ``HTTPException``（含路由未匹配等框架异常）转换为统一错误格式。"""
    payload = error_payload(exc.detail, exc.status_code, getattr(exc, "data", None))
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求体/参数校验失败统一转为 400，并附带字段级明细。"""

    def _serialize(obj: Any) -> Any:
        if isinstance(obj, Exception):
            return str(obj)
        if isinstance(obj, dict):
            return {key: _serialize(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_serialize(item) for item in obj]
        return obj

    details = [
        {"loc": _serialize(err.get("loc")), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_payload("Неверные данные запроса", status.HTTP_400_BAD_REQUEST, details),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：记录堆栈并返回不泄露细节的 500 响应。"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload("Внутренняя ошибка сервера", status.HTTP_500_INTERNAL_SERVER_ERROR),
    )
