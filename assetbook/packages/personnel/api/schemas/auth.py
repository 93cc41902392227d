"""认证与系统初始化相关的请求与响应模型。"""

from typing import Optional

from pydantic import Field

from assetbook.packages.personnel.api.schemas.common import CamelModel
from assetbook.packages.personnel.api.schemas.organizations import OrganizationOut
from assetbook.packages.personnel.api.schemas.users import UserOut


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class SetupRequest(CamelModel):
    """初始化请求；字段完整性由服务层检查，缺失时统一返回同一条提示。"""

    organization_name: Optional[str] = None
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    admin_full_name: Optional[str] = None
    admin_position: Optional[str] = None


class SetupResponse(CamelModel):
    message: str
    organization: OrganizationOut
    admin: UserOut


class SystemStatusResponse(CamelModel):
    is_setup: bool
