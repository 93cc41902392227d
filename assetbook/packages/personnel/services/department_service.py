"""部门服务：部门的增删改查与统计。"""

from typing import Any, Dict, List

from assetbook.packages.personnel.core.constants import HTTP_STATUS_NOT_FOUND
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.models import Department
from assetbook.packages.personnel.storage import Storage

DEPARTMENT_NOT_FOUND = "Отдел не найден"


class DepartmentService:
    def list_departments(self, storage: Storage, organization_id: int) -> List[Department]:
        return storage.get_departments(organization_id)

    def department_stats(self, storage: Storage, organization_id: int) -> List[Dict[str, Any]]:
        return storage.get_department_stats(organization_id)

    def get_department(self, storage: Storage, organization_id: int, department_id: int) -> Department:
        department = storage.get_department(organization_id, department_id)
        if department is None:
            raise AppException(DEPARTMENT_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return department

    def create_department(self, storage: Storage, organization_id: int, data: Dict[str, Any]) -> Department:
        return storage.create_department(organization_id, data)

    def update_department(
        self, storage: Storage, organization_id: int, department_id: int, patch: Dict[str, Any]
    ) -> Department:
        department = storage.update_department(organization_id, department_id, patch)
        if department is None:
            raise AppException(DEPARTMENT_NOT_FOUND, HTTP_STATUS_NOT_FOUND)
        return department

    def delete_department(self, storage: Storage, organization_id: int, department_id: int) -> None:
        """删除部门；其下的员工与财产保持原样，不做级联。"""
        if not storage.delete_department(organization_id, department_id):
            raise AppException(DEPARTMENT_NOT_FOUND, HTTP_STATUS_NOT_FOUND)


department_service = DepartmentService()
