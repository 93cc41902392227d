"""财产相关的请求与响应模型。"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from assetbook.packages.personnel.api.schemas.common import CamelModel


class InventoryItemOut(CamelModel):
    id: int
    name: str
    inventory_number: str
    description: str
    cost: int
    employee_id: int
    department_id: int
    organization_id: int
    created_at: datetime


class InventoryItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    inventory_number: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    cost: int = Field(default=0, ge=0)
    employee_id: int
    # 缺省时取所属员工的部门
    department_id: Optional[int] = None


class InventoryItemUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    inventory_number: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    cost: Optional[int] = Field(default=None, ge=0)
    employee_id: Optional[int] = None
    department_id: Optional[int] = None
