"""部门 CRUD。"""

from assetbook.packages.personnel.crud.base import CRUDBase
from assetbook.packages.personnel.models.department import Department

department_crud = CRUDBase(Department)
