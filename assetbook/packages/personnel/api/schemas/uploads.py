"""文件上传接口的响应模型。"""

from assetbook.packages.personnel.api.schemas.common import CamelModel
from assetbook.packages.personnel.api.schemas.employees import EmployeeDocumentOut, EmployeeOut


class PhotoUploadResponse(CamelModel):
    success: bool
    photo_url: str
    employee: EmployeeOut


class DocumentUploadResponse(CamelModel):
    success: bool
    document: EmployeeDocumentOut
