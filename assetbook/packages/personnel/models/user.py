"""用户模型：系统账号，权限以字符串列表形式直接挂在用户上。"""

from typing import List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from assetbook.packages.personnel.core.enums import RoleEnum
from assetbook.packages.personnel.models.base import Base, CreatedAtMixin, OrganizationOwnedMixin


class User(OrganizationOwnedMixin, CreatedAtMixin, Base):
    """用户实体；用户名在整个存储内唯一（不区分组织）。"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))
    full_name: Mapped[str] = mapped_column(String(255))
    position: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default=RoleEnum.VIEWER.value)
    permissions: Mapped[List[str]] = mapped_column(JSON, default=list)
