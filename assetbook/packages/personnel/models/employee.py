"""员工模型：包含人事信息、材料责任类型与离职状态。"""

from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import expression

from assetbook.packages.personnel.core.enums import LiabilityTypeEnum
from assetbook.packages.personnel.models.base import Base, CreatedAtMixin, OrganizationOwnedMixin


class Employee(OrganizationOwnedMixin, CreatedAtMixin, Base):
    """员工实体。

    - 创建时 ``dismissed = False``；离职只能通过专门的离职操作完成，且不可逆；
    - 员工记录从不物理删除。
    """

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255))
    department_id: Mapped[int] = mapped_column(Integer, index=True)
    position: Mapped[str] = mapped_column(String(255))
    hire_date: Mapped[date] = mapped_column(Date)
    hire_order_number: Mapped[str] = mapped_column(String(100))
    passport: Mapped[str] = mapped_column(String(255))
    birth_date: Mapped[date] = mapped_column(Date)
    address: Mapped[str] = mapped_column(Text)
    phone: Mapped[str] = mapped_column(String(50))
    photo: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    material_liability_type: Mapped[str] = mapped_column(
        String(20), default=LiabilityTypeEnum.NONE.value
    )
    material_liability_document: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    dismissed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=expression.false(), nullable=False
    )
    dismissal_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    dismissal_order_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
