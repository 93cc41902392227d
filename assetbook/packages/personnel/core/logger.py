"""日志配置模块：控制台彩色输出、按天滚动的文件日志，以及独立的表格导入导出日志。"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, Optional

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
TRANSFER_LOGGER_NAME = "assetbook.transfer"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# JSON 输出时额外携带的业务字段（通过 ``extra=`` 传入）
CONTEXT_FIELDS = ("organization_id", "employee_id", "row")

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class LocalTimeFormatter(logging.Formatter):
    """按配置时区输出时间戳，未指定格式时使用带毫秒的 ISO 格式。"""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:  # noqa: N802
        moment = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return moment.strftime(datefmt)
        return moment.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(LocalTimeFormatter):
    """终端下按级别着色，输出被重定向时保持纯文本。"""

    RESET = "\033[0m"
    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_colors: Optional[bool] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{message}{self.RESET}" if color else message


class JsonFormatter(LocalTimeFormatter):
    """结构化 JSON 日志，便于日志平台按组织或请求检索。"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class RequestIdFilter(logging.Filter):
    """把当前请求的 ID 写入每条日志记录。"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get() or "-"
        return True


def _file_handler(settings: Settings, filename: str, formatter: str) -> Dict[str, Any]:
    return {
        "level": settings.log_level,
        "class": "logging.handlers.TimedRotatingFileHandler",
        "formatter": formatter,
        "filename": str(settings.log_directory / filename),
        "when": "midnight",
        "backupCount": 14,
        "encoding": "utf-8",
        "delay": True,
        "filters": ["request_id"],
    }


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """根据配置生成 ``dictConfig`` 所需的字典。

    导入导出日志单独写入 ``TRANSFER_LOG_FILE_NAME``，同时仍会出现在控制台中。
    """
    console_formatter = "json" if settings.log_json else "console"
    file_formatter = "json" if settings.log_json else "plain"
    app_handlers = ["console", "file"]

    loggers: Dict[str, Any] = {
        name: {"handlers": app_handlers, "level": settings.log_level, "propagate": False}
        for name in UVICORN_LOGGERS
    }
    loggers["assetbook"] = {"handlers": app_handlers, "level": settings.log_level, "propagate": False}
    loggers[TRANSFER_LOGGER_NAME] = {
        "handlers": ["console", "transfer_file"],
        "level": settings.log_level,
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {
            "console": {"()": ColorFormatter, "fmt": LOG_FORMAT},
            "plain": {"()": LocalTimeFormatter, "fmt": LOG_FORMAT},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "level": settings.log_level,
                "class": "logging.StreamHandler",
                "formatter": console_formatter,
                "filters": ["request_id"],
            },
            "file": _file_handler(settings, settings.log_file_name, file_formatter),
            "transfer_file": _file_handler(settings, settings.transfer_log_file_name, file_formatter),
        },
        "loggers": loggers,
        "root": {"handlers": app_handlers, "level": settings.log_level},
    }


def setup_logging() -> None:
    """初始化日志系统；重复调用是安全的，配置会被整体替换。"""
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))


logger = logging.getLogger("assetbook")
transfer_logger = logging.getLogger(TRANSFER_LOGGER_NAME)


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)
