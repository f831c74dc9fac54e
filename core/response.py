"""
统一响应格式定义

引导程序自身接口使用 JSON 信封；缺失配置使用纯文本失败响应。
"""
from typing import Any, Optional, Generic, TypeVar
from pydantic import BaseModel, Field, field_serializer
from datetime import datetime, timezone
from starlette import status as http_status
from starlette.responses import PlainTextResponse

from domain.common.exceptions import MissingRequiredConfigurationError
from shared.codes import BusinessCode


T = TypeVar("T")

PLAIN_TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


class ErrorDetail(BaseModel):
    """错误详情"""
    type: str
    details: Optional[dict] = None
    field: Optional[str] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        """序列化时间戳为 UTC ISO8601，统一使用 Z 结尾"""
        ts = timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        else:
            ts = ts.astimezone(timezone.utc)
        return ts.isoformat().replace("+00:00", "Z")


class Response(BaseModel, Generic[T]):
    """统一响应模型"""
    code: int
    message: str
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None


def success_response(
    data: Any = None,
    message: str = "Success",
    code: int = BusinessCode.SUCCESS
) -> Response:
    """
    创建成功响应

    Args:
        data: 响应数据
        message: 成功消息
        code: 业务状态码

    Returns:
        Response: 统一响应对象
    """
    return Response(
        code=code,
        message=message,
        data=data,
        error=None
    )


def error_response(
    code: int,
    message: str,
    error_type: str = "BusinessError",
    details: Optional[dict] = None,
    field: Optional[str] = None,
    request_id: Optional[str] = None
) -> Response:
    """
    创建错误响应

    Args:
        code: 业务错误码
        message: 错误消息
        error_type: 错误类型
        details: 错误详情
        field: 错误字段
        request_id: 请求ID

    Returns:
        Response: 统一响应对象
    """
    return Response(
        code=code,
        message=message,
        data=None,
        error=ErrorDetail(
            type=error_type,
            details=details,
            field=field,
            request_id=request_id
        )
    )


def missing_configuration_body(exc: MissingRequiredConfigurationError) -> str:
    return f"{exc.message}\n"


def missing_configuration_response(exc: MissingRequiredConfigurationError) -> PlainTextResponse:
    """500 text/plain，只写出缺失的键名，不列出其它键或任何值。"""
    return PlainTextResponse(
        content=missing_configuration_body(exc),
        status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=PLAIN_TEXT_MEDIA_TYPE,
    )
