"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from assetbook.packages.personnel.models.department import Department
from assetbook.packages.personnel.models.document import EmployeeDocument
from assetbook.packages.personnel.models.employee import Employee
from assetbook.packages.personnel.models.inventory import InventoryItem
from assetbook.packages.personnel.models.organization import Organization
from assetbook.packages.personnel.models.session import SessionRecord
from assetbook.packages.personnel.models.system_setting import SystemSetting
from assetbook.packages.personnel.models.user import User

__all__ = [
    "Department",
    "Employee",
    "EmployeeDocument",
    "InventoryItem",
    "Organization",
    "SessionRecord",
    "SystemSetting",
    "User",
]
