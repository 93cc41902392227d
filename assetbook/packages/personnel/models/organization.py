"""组织模型：租户边界，本系统内不会被删除。"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from assetbook.packages.personnel.models.base import Base, CreatedAtMixin


class Organization(CreatedAtMixin, Base):
    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
