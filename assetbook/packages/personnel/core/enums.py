"""枚举定义：约束权限、角色、材料责任类型等可选值。"""

from enum import Enum


class PermissionEnum(str, Enum):
    FULL_ACCESS = "full_access"
    MANAGE_POSITIONS = "manage_positions"
    VIEW_EMPLOYEE_DATA = "view_employee_data"
    MANAGE_EMPLOYEES = "manage_employees"
    MANAGE_DEPARTMENTS = "manage_departments"
    PRINT_DOCUMENTS = "print_documents"
    MANAGE_LIABILITY = "manage_liability"


class RoleEnum(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    VIEWER = "viewer"


class LiabilityTypeEnum(str, Enum):
    """材料责任类型。"""

    INDIVIDUAL = "individual"
    COLLECTIVE = "collective"
    NONE = "none"


class PrintDocumentTypeEnum(str, Enum):
    """可打印的文档类型：责任合同、人事卡片、财产清单。"""

    LIABILITY = "liability"
    PROFILE = "profile"
    INVENTORY = "inventory"


class UploadKindEnum(str, Enum):
    PHOTO = "photo"
    DOCUMENT = "document"


LIABILITY_TYPE_LABELS = {
    LiabilityTypeEnum.INDIVIDUAL.value: "Индивидуальная",
    LiabilityTypeEnum.COLLECTIVE.value: "Коллективная",
    LiabilityTypeEnum.NONE.value: "Отсутствует",
}
