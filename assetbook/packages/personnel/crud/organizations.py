"""组织 CRUD：管理组织相关的数据库操作。"""

from assetbook.packages.personnel.crud.base import CRUDBase
from assetbook.packages.personnel.models.organization import Organization


class CRUDOrganization(CRUDBase[Organization]):
    """组织没有额外的查询需求，沿用基类方法即可。"""


organization_crud = CRUDOrganization(Organization)
