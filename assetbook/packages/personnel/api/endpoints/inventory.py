"""财产路由：修改需要 ``manage_liability``。"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from assetbook.packages.personnel.api.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemOut,
    InventoryItemUpdate,
)
from assetbook.packages.personnel.core.constants import HTTP_STATUS_CREATED, HTTP_STATUS_NO_CONTENT
from assetbook.packages.personnel.core.dependencies import get_current_user, get_storage, require_permission
from assetbook.packages.personnel.core.enums import PermissionEnum
from assetbook.packages.personnel.models import InventoryItem, User
from assetbook.packages.personnel.services.inventory_service import inventory_service
from assetbook.packages.personnel.storage import Storage

router = APIRouter(prefix="/inventory", tags=["inventory"])

manage_liability = require_permission(PermissionEnum.MANAGE_LIABILITY)


@router.get("", response_model=List[InventoryItemOut])
def list_inventory(
    employee_id: Optional[int] = Query(default=None, alias="employeeId"),
    department_id: Optional[int] = Query(default=None, alias="departmentId"),
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> List[InventoryItem]:
    return inventory_service.list_items(
        storage,
        current_user.organization_id,
        employee_id=employee_id,
        department_id=department_id,
    )


@router.get("/{item_id}", response_model=InventoryItemOut)
def read_inventory_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> InventoryItem:
    return inventory_service.get_item(storage, current_user.organization_id, item_id)


@router.post("", response_model=InventoryItemOut, status_code=HTTP_STATUS_CREATED)
def create_inventory_item(
    payload: InventoryItemCreate,
    current_user: User = Depends(manage_liability),
    storage: Storage = Depends(get_storage),
) -> InventoryItem:
    return inventory_service.create_item(storage, current_user.organization_id, payload.model_dump())


@router.put("/{item_id}", response_model=InventoryItemOut)
def update_inventory_item(
    item_id: int,
    payload: InventoryItemUpdate,
    current_user: User = Depends(manage_liability),
    storage: Storage = Depends(get_storage),
) -> InventoryItem:
    patch = payload.model_dump(exclude_unset=True)
    return inventory_service.update_item(storage, current_user.organization_id, item_id, patch)


@router.delete("/{item_id}", status_code=HTTP_STATUS_NO_CONTENT)
def delete_inventory_item(
    item_id: int,
    current_user: User = Depends(manage_liability),
    storage: Storage = Depends(get_storage),
) -> Response:
    inventory_service.delete_item(storage, current_user.organization_id, item_id)
    return Response(status_code=HTTP_STATUS_NO_CONTENT)
