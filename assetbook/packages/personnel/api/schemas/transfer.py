"""Excel 导入结果模型。"""

from typing import List

from assetbook.packages.personnel.api.schemas.common import CamelModel


class ImportResult(CamelModel):
    success: int
    failed: int
    errors: List[str]
