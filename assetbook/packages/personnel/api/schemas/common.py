"""通用响应模型：统一的驼峰命名配置与简单消息体。"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """对外字段使用驼峰命名，内部仍按下划线命名访问；可直接从 ORM 实例构造。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class MessageResponse(CamelModel):
    message: str


class ErrorResponse(BaseModel):
    """全局异常处理器输出的错误结构。"""

    error: Any
    code: int
    details: Optional[Any] = None
