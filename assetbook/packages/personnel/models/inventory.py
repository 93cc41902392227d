"""财产模型：每件财产归属唯一员工，并冗余记录部门以便按部门汇总。"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from assetbook.packages.personnel.models.base import Base, CreatedAtMixin, OrganizationOwnedMixin


class InventoryItem(OrganizationOwnedMixin, CreatedAtMixin, Base):
    """财产实体；``inventory_number`` 在整个存储内唯一，``cost`` 以最小货币单位的整数存储。"""

    __tablename__ = "inventory_items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    inventory_number: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    cost: Mapped[int] = mapped_column(Integer, default=0)
    employee_id: Mapped[int] = mapped_column(Integer, index=True)
    department_id: Mapped[int] = mapped_column(Integer, index=True)
