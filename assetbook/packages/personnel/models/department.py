"""部门模型。"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from assetbook.packages.personnel.models.base import Base, CreatedAtMixin, OrganizationOwnedMixin


class Department(OrganizationOwnedMixin, CreatedAtMixin, Base):
    """部门实体；删除部门不会级联删除其员工与财产。"""

    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
