"""打印文档数据模型：前端据此渲染可打印的表单。"""

from typing import List, Optional

from assetbook.packages.personnel.api.schemas.common import CamelModel
from assetbook.packages.personnel.api.schemas.departments import DepartmentOut
from assetbook.packages.personnel.api.schemas.employees import EmployeeOut
from assetbook.packages.personnel.api.schemas.inventory import InventoryItemOut
from assetbook.packages.personnel.api.schemas.organizations import OrganizationOut


class PrintDocumentOut(CamelModel):
    document_type: str
    title: str
    organization: Optional[OrganizationOut] = None
    employee: EmployeeOut
    department: Optional[DepartmentOut] = None
    liability_type_label: str
    items: List[InventoryItemOut]
    total_cost: int
    generated_at: str
