"""部门相关的请求与响应模型。"""

from datetime import datetime

from pydantic import Field

from assetbook.packages.personnel.api.schemas.common import CamelModel


class DepartmentOut(CamelModel):
    id: int
    name: str
    organization_id: int
    created_at: datetime


class DepartmentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class DepartmentUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class DepartmentStats(CamelModel):
    department_id: int
    department_name: str
    employee_count: int
    inventory_count: int
