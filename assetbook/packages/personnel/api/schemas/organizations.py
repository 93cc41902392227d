"""组织相关的响应模型定义。"""

from datetime import datetime

from assetbook.packages.personnel.api.schemas.common import CamelModel


class OrganizationOut(CamelModel):
    id: int
    name: str
    created_at: datetime
