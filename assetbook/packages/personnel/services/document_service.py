"""员工文档服务：查看与删除员工附件。"""

from typing import List

from assetbook.packages.personnel.core.constants import HTTP_STATUS_NOT_FOUND
from assetbook.packages.personnel.core.exceptions import AppException
from assetbook.packages.personnel.models import EmployeeDocument
from assetbook.packages.personnel.services.employee_service import employee_service
from assetbook.packages.personnel.services.upload_service import upload_service
from assetbook.packages.personnel.storage import Storage


class DocumentService:
    def list_documents(self, storage: Storage, organization_id: int, employee_id: int) -> List[EmployeeDocument]:
        employee_service.get_employee(storage, organization_id, employee_id)
        return storage.get_employee_documents(organization_id, employee_id)

    def delete_document(self, storage: Storage, organization_id: int, document_id: int) -> None:
        """删除文档记录，并尽力移除磁盘上的文件。"""
        document = storage.get_employee_document(organization_id, document_id)
        if document is None or not storage.delete_employee_document(organization_id, document_id):
            raise AppException("Документ не найден", HTTP_STATUS_NOT_FOUND)
        upload_service.remove_public_file(document.path)


document_service = DocumentService()
