"""用户相关的请求与响应模型；响应中从不包含密码。"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from assetbook.packages.personnel.api.schemas.common import CamelModel
from assetbook.packages.personnel.core.enums import RoleEnum


class UserOut(CamelModel):
    id: int
    username: str
    full_name: str
    position: str
    organization_id: int
    role: str
    permissions: List[str]
    created_at: datetime


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    role: RoleEnum = RoleEnum.VIEWER
    permissions: List[str] = Field(default_factory=list)


class UserUpdate(CamelModel):
    username: Optional[str] = Field(default=None, min_length=1, max_length=100)
    password: Optional[str] = Field(default=None, min_length=1, max_length=128)
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[RoleEnum] = None
    permissions: Optional[List[str]] = None
