"""员工文档 CRUD。"""

from assetbook.packages.personnel.crud.base import CRUDBase
from assetbook.packages.personnel.models.document import EmployeeDocument

document_crud = CRUDBase(EmployeeDocument)
