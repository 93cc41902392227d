"""会话管理：使用数据库或内存后端实现滑动过期的登录会话。"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.core.logger import logger


class SessionBackend:
    """会话后端基类，定义滑动过期操作的接口。"""

    def create_session(self, user_id: int, ttl_seconds: int) -> str:  # pragma: no cover - interface definition
        raise NotImplementedError

    def touch_session(self, session_id: str, user_id: int, ttl_seconds: int) -> bool:  # pragma: no cover
        raise NotImplementedError

    def delete_session(self, session_id: str) -> None:  # pragma: no cover
        raise NotImplementedError


class DatabaseSessionBackend(SessionBackend):
    """基于 ``sessions`` 表的会话后端，服务重启后会话依然有效。

    每次调用时才解析 ``db_session.SessionLocal``，以便测试替换引擎后自动生效。
    """

    def create_session(self, user_id: int, ttl_seconds: int) -> str:
        from assetbook.packages.personnel.db import session as db_session
        from assetbook.packages.personnel.models.session import SessionRecord

        session_id = uuid.uuid4().hex
        with db_session.SessionLocal() as db:
            db.add(SessionRecord(id=session_id, user_id=user_id, expires_at=_expiry(ttl_seconds)))
            db.commit()
        return session_id

    def touch_session(self, session_id: str, user_id: int, ttl_seconds: int) -> bool:
        from assetbook.packages.personnel.db import session as db_session
        from assetbook.packages.personnel.models.session import SessionRecord

        with db_session.SessionLocal() as db:
            record = db.get(SessionRecord, session_id)
            if record is None:
                return False
            if record.user_id != user_id or _as_utc(record.expires_at) < _now():
                db.delete(record)
                db.commit()
                return False
            record.expires_at = _expiry(ttl_seconds)
            db.commit()
            return True

    def delete_session(self, session_id: str) -> None:
        from assetbook.packages.personnel.db import session as db_session
        from assetbook.packages.personnel.models.session import SessionRecord

        with db_session.SessionLocal() as db:
            record = db.get(SessionRecord, session_id)
            if record is not None:
                db.delete(record)
                db.commit()


class InMemorySessionBackend(SessionBackend):
    """内存后端，配合内存存储使用，进程退出即失效。"""

    def __init__(self) -> None:
        self._store: dict[str, tuple[int, datetime]] = {}
        self._lock = threading.Lock()

    def create_session(self, user_id: int, ttl_seconds: int) -> str:
        session_id = uuid.uuid4().hex
        expires_at = _expiry(ttl_seconds)
        with self._lock:
            self._store[session_id] = (user_id, expires_at)
        return session_id

    def touch_session(self, session_id: str, user_id: int, ttl_seconds: int) -> bool:
        expires_at = _expiry(ttl_seconds)
        with self._lock:
            record = self._store.get(session_id)
            if record is None:
                return False
            stored_user_id, current_expiry = record
            if stored_user_id != user_id or current_expiry < _now():
                self._store.pop(session_id, None)
                return False
            self._store[session_id] = (stored_user_id, expires_at)
            return True

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            self._store.pop(session_id, None)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _expiry(ttl_seconds: int) -> datetime:
    return _now() + timedelta(seconds=ttl_seconds)


def _as_utc(value: datetime) -> datetime:
    # SQLite 读回的时间不带时区
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_backend: Optional[SessionBackend] = None


def _get_backend() -> SessionBackend:
    global _backend
    if _backend is not None:
        return _backend

    settings = get_settings()
    if settings.uses_database:
        _backend = DatabaseSessionBackend()
        logger.info("Session store initialized with database table 'sessions'")
    else:
        _backend = InMemorySessionBackend()
        logger.info("Session store initialized in memory")
    return _backend


def reset_backend(backend: Optional[SessionBackend] = None) -> None:
    """替换（或清空）当前会话后端，主要供测试使用。"""
    global _backend
    _backend = backend


def session_ttl_seconds() -> int:
    return max(get_settings().session_expire_minutes, 1) * 60


def create_session(user_id: int, ttl_seconds: int) -> str:
    """创建会话并返回会话 ID。"""
    return _get_backend().create_session(user_id, ttl_seconds)


def touch_session(session_id: str, user_id: int, ttl_seconds: int) -> bool:
    """刷新会话 TTL，若会话不存在、已过期或用户不匹配则返回 ``False``。"""
    return _get_backend().touch_session(session_id, user_id, ttl_seconds)


def delete_session(session_id: str) -> None:
    """删除指定会话，忽略不存在的情况。"""
    _get_backend().delete_session(session_id)
