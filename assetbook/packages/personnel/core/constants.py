"""常量定义：集中维护状态码、会话与系统设置相关的固定值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_CREATED = 201
HTTP_STATUS_NO_CONTENT = 204
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_PAYLOAD_TOO_LARGE = 413
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

ACCESS_TOKEN_TYPE = "bearer"

# 系统初始化标记：存在且为 "true" 即视为已完成初始化
SETUP_COMPLETED_KEY = "system.setup_completed"

ADMIN_ROLE = "admin"

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# 导入时缺失或无法解析的出生日期统一回落到该值
DEFAULT_BIRTH_DATE = "1980-01-01"

UPLOAD_URL_PREFIX = "/uploads"
PHOTO_SUBDIR = "photos"
DOCUMENT_SUBDIR = "documents"

DOCUMENT_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        XLSX_MEDIA_TYPE,
    }
)

# 浏览器对 .xlsx 有时只给出通用二进制类型
SPREADSHEET_MIME_TYPES = frozenset(
    {
        XLSX_MEDIA_TYPE,
        "application/vnd.ms-excel",
        "application/octet-stream",
    }
)
