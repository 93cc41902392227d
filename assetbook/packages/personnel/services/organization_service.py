"""组织相关业务逻辑：只允许查看自己所属的组织。"""

from assetbook.packages.personnel.core.constants import HTTP_STATUS_FORBIDDEN, HTTP_STATUS_NOT_FOUND
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.models import Organization, User
from assetbook.packages.personnel.storage import Storage


class OrganizationService:
    def get_own_organization(self, storage: Storage, current_user: User, organization_id: int) -> Organization:
        if organization_id != current_user.organization_id:
            raise AppException("Нет доступа к данным этой организации", HTTP_STATUS_FORBIDDEN)
        organization = storage.get_organization(organization_id)
        if organization is None:
            raise AppException("Организация не найдена", HTTP_STATUS_NOT_FOUND)
        return organization


organization_service = OrganizationService()
