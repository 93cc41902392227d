"""打印服务：组装责任合同、人事卡片与财产清单所需的数据。"""

from __future__ import annotations

from typing import Any, Dict, List

from assetbook.packages.personnel.core.enums import LIABILITY_TYPE_LABELS, PrintDocumentTypeEnum
from assetbook.packages.personnel.core.timezone import format_date, today
from assetbook.packages.personnel.models import InventoryItem
from assetbook.packages.personnel.services.employee_service import employee_service
from assetbook.packages.personnel.storage import Storage

DOCUMENT_TITLES = {
    PrintDocumentTypeEnum.LIABILITY: "ДОГОВОР О МАТЕРИАЛЬНОЙ ОТВЕТСТВЕННОСТИ",
    PrintDocumentTypeEnum.PROFILE: "ЛИЧНАЯ КАРТОЧКА СОТРУДНИКА",
    PrintDocumentTypeEnum.INVENTORY: "ОПИСЬ ИМУЩЕСТВА",
}


class PrintService:
    def build_document(
        self,
        storage: Storage,
        organization_id: int,
        employee_id: int,
        document_type: PrintDocumentTypeEnum,
    ) -> Dict[str, Any]:
        employee = employee_service.get_employee(storage, organization_id, employee_id)
        items: List[InventoryItem] = []
        if document_type is not PrintDocumentTypeEnum.PROFILE:
            items = storage.get_inventory_items(organization_id, employee.id)

        return {
            "document_type": document_type.value,
            "title": DOCUMENT_TITLES[document_type],
            "organization": storage.get_organization(organization_id),
            "employee": employee,
            "department": storage.get_department(organization_id, employee.department_id),
            "liability_type_label": LIABILITY_TYPE_LABELS.get(
                employee.material_liability_type, employee.material_liability_type
            ),
            "items": items,
            "total_cost": sum(item.cost for item in items),
            "generated_at": format_date(today()),
        }


print_service = PrintService()
