"""权限判定：扁平的权限字符串集合，``full_access`` 作为唯一的全局放行项。"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from assetbook.packages.personnel.core.enums import PermissionEnum

ALL_PERMISSIONS = frozenset(item.value for item in PermissionEnum)


def has_permission(user_permissions: Optional[Iterable[str]], required: Union[str, PermissionEnum]) -> bool:
    """当权限集合包含 ``full_access`` 或 ``required`` 本身时返回 ``True``。

    注意：``full_access`` 对任意字符串都放行，包括枚举之外的值；
    对 ``required`` 的合法性校验由声明权限门的调用方完成（见 ``normalize_permission``）。
    """
    if not user_permissions:
        return False
    granted = {str(getattr(item, "value", item)) for item in user_permissions}
    token = str(getattr(required, "value", required))
    return PermissionEnum.FULL_ACCESS.value in granted or token in granted


def normalize_permission(permission: Union[str, PermissionEnum]) -> PermissionEnum:
    """把权限声明规整为枚举成员，未知权限直接抛出 ``ValueError``。"""
    if isinstance(permission, PermissionEnum):
        return permission
    try:
        return PermissionEnum(permission)
    except ValueError as exc:
        raise ValueError(f"Unknown permission: {permission!r}") from exc


def invalid_permissions(permissions: Iterable[str]) -> list[str]:
    """返回不在权限枚举中的条目，保持原有顺序。"""
    return [item for item in permissions if item not in ALL_PERMISSIONS]
