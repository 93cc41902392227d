"""员工与员工文档相关的请求与响应模型。

请求模型不包含 ``organizationId`` 与离职字段：组织只来自会话，离职只走专门的接口。
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from assetbook.packages.personnel.api.schemas.common import CamelModel
from assetbook.packages.personnel.core.enums import LiabilityTypeEnum


class EmployeeOut(CamelModel):
    id: int
    full_name: str
    department_id: int
    position: str
    hire_date: date
    hire_order_number: str
    passport: str
    birth_date: date
    address: str
    phone: str
    photo: Optional[str] = None
    material_liability_type: str
    material_liability_document: Optional[str] = None
    dismissed: bool
    dismissal_date: Optional[date] = None
    dismissal_order_number: Optional[str] = None
    organization_id: int
    created_at: datetime


class EmployeeCreate(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    department_id: int
    position: str = Field(..., min_length=1, max_length=255)
    hire_date: date
    hire_order_number: str
    passport: str
    birth_date: date
    address: str
    phone: str
    photo: Optional[str] = None
    material_liability_type: LiabilityTypeEnum = LiabilityTypeEnum.NONE
    material_liability_document: Optional[str] = None


class EmployeeUpdate(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    department_id: Optional[int] = None
    position: Optional[str] = Field(default=None, min_length=1, max_length=255)
    hire_date: Optional[date] = None
    hire_order_number: Optional[str] = None
    passport: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None
    material_liability_type: Optional[LiabilityTypeEnum] = None
    material_liability_document: Optional[str] = None


class DismissRequest(CamelModel):
    dismissal_date: Optional[date] = None
    dismissal_order_number: Optional[str] = None


class EmployeeDocumentOut(CamelModel):
    id: int
    employee_id: int
    filename: str
    path: str
    upload_date: datetime
