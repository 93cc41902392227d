"""存储层：对外暴露存储接口、两种实现与相关异常。"""

from assetbook.packages.personnel.storage.base import (
    AlreadySetupError,
    DuplicateKeyError,
    Storage,
    StorageError,
)
from assetbook.packages.personnel.storage.database import DatabaseStorage
from assetbook.packages.personnel.storage.memory import InMemoryStorage

__all__ = [
    "AlreadySetupError",
    "DatabaseStorage",
    "DuplicateKeyError",
    "InMemoryStorage",
    "Storage",
    "StorageError",
]
