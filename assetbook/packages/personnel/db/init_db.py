"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from assetbook.packages.personnel.core.config import get_settings
from assetbook.packages.personnel.db import session as db_session
from assetbook.packages.personnel.models import (  # noqa: F401 - ensure every table is registered
    Department,
    Employee,
    EmployeeDocument,
    InventoryItem,
    Organization,
    SessionRecord,
    SystemSetting,
    User,
)
from assetbook.packages.personnel.models.base import Base

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all database tables if they do not exist.

    No organization or administrator is seeded here: the first one is created
    through the one-time setup endpoint. In memory mode nothing is touched.
    """
    settings = get_settings()
    if not settings.uses_database:
        logger.info("Storage backend is '%s', skipping database bootstrap", settings.storage_backend)
        return
    Base.metadata.create_all(bind=db_session.engine)
    settings.upload_directory.mkdir(parents=True, exist_ok=True)
