"""财产 CRUD：按员工或部门两种维度检索。"""

from typing import List

from sqlalchemy.orm import Session

from assetbook.packages.personnel.crud.base import CRUDBase
from assetbook.packages.personnel.models.inventory import InventoryItem


class CRUDInventoryItem(CRUDBase[InventoryItem]):
    def list_by_employee(self, db: Session, organization_id: int, employee_id: int) -> List[InventoryItem]:
        return self.get_multi(db, organization_id=organization_id, employee_id=employee_id)

    def list_by_department(self, db: Session, organization_id: int, department_id: int) -> List[InventoryItem]:
        return self.get_multi(db, organization_id=organization_id, department_id=department_id)


inventory_crud = CRUDInventoryItem(InventoryItem)
