"""用户 CRUD：集中管理用户相关的数据操作。"""

from typing import Optional

from sqlalchemy.orm import Session

from assetbook.packages.personnel.crud.base import CRUDBase
from assetbook.packages.personnel.models.user import User


class CRUDUser(CRUDBase[User]):
    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        """根据唯一用户名获取用户实例（跨组织查找，登录时使用）。"""
        return self.query(db).filter(User.username == username).first()


user_crud = CRUDUser(User)
