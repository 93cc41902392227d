"""组织查询路由。"""

from fastapi import APIRouter, Depends

from assetbook.packages.personnel.api.schemas.organizations import OrganizationOut
from assetbook.packages.personnel.core.dependencies import get_current_user, get_storage
from assetbook.packages.personnel.models import Organization, User
from assetbook.packages.personnel.services.organization_service import organization_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("/{organization_id}", response_model=OrganizationOut)
def read_organization(
    organization_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> Organization:
    """只能查看自己所属的组织。"""
    return organization_service.get_own_organization(storage, current_user, organization_id)
