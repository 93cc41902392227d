"""CRUD 基类：为各实体提供按组织隔离的通用数据访问方法。"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from assetbook.packages.personnel.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """封装常见的查询、创建与保存逻辑，减少重复代码。

    事务边界由调用方（存储层）控制：这里的写操作只 ``flush``，从不提交。
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any, *, organization_id: Optional[int] = None) -> Optional[ModelType]:
        return self.query(db, organization_id=organization_id).filter(self.model.id == id).first()

    def get_multi(self, db: Session, *, organization_id: Optional[int] = None, **filters: Any) -> List[ModelType]:
        query = self.query(db, organization_id=organization_id)
        for field, value in filters.items():
            query = query.filter(getattr(self.model, field) == value)
        return query.order_by(self.model.id.asc()).all()

    def create(self, db: Session, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        db.flush()
        return db_obj

    def save(self, db: Session, db_obj: ModelType) -> ModelType:
        db.add(db_obj)
        db.flush()
        return db_obj

    def hard_delete(self, db: Session, db_obj: ModelType) -> None:
        """物理删除行；员工与组织从不经过这里。"""
        db.delete(db_obj)
        db.flush()

    # 统一构造带租户过滤的查询
    def query(self, db: Session, *, organization_id: Optional[int] = None) -> Query:
        query = db.query(self.model)
        if organization_id is not None and hasattr(self.model, "organization_id"):
            query = query.filter(self.model.organization_id == organization_id)
        return query
