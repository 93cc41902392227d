"""人事与财产台账业务包：部门、员工、员工文档与财产的多组织管理。"""

from assetbook.packages.types import AppPackage

from .api import api_router, files_router
from .core.config import get_settings
from .core.exceptions import generic_exception_handler, http_exception_handler, validation_exception_handler
from .core.logger import logger, setup_logging
from .db.init_db import init_db

package = AppPackage(
    name="personnel",
    api_router=api_router,
    files_router=files_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    init_db=init_db,
    http_exception_handler=http_exception_handler,
    validation_exception_handler=validation_exception_handler,
    generic_exception_handler=generic_exception_handler,
)

__all__ = ["package", "api_router", "get_settings"]
