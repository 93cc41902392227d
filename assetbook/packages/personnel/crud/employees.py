"""员工 CRUD：员工只会被修改或标记离职，不提供删除。"""

from typing import List, Optional

from sqlalchemy.orm import Session

from assetbook.packages.personnel.crud.base import CRUDBase
from assetbook.packages.personnel.models.employee import Employee


class CRUDEmployee(CRUDBase[Employee]):
    def list_for_organization(
        self,
        db: Session,
        organization_id: int,
        *,
        department_id: Optional[int] = None,
    ) -> List[Employee]:
        """按组织列出员工，可选按部门过滤。"""
        if department_id is None:
            return self.get_multi(db, organization_id=organization_id)
        return self.get_multi(db, organization_id=organization_id, department_id=department_id)


employee_crud = CRUDEmployee(Employee)
