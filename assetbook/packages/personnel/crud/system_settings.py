"""系统设置 CRUD：按键读写全局设置。"""

from typing import Optional

from sqlalchemy.orm import Session

from assetbook.packages.personnel.models.system_setting import SystemSetting


class CRUDSystemSetting:
    def get_value(self, db: Session, key: str) -> Optional[str]:
        record = db.get(SystemSetting, key)
        return record.value if record is not None else None

    def set_value(self, db: Session, key: str, value: str) -> SystemSetting:
        record = db.get(SystemSetting, key)
        if record is None:
            record = SystemSetting(key=key, value=value)
        else:
            record.value = value
        db.add(record)
        db.flush()
        return record


system_setting_crud = CRUDSystemSetting()
