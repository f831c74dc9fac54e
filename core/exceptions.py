"""
自定义异常映射与全局异常处理器
"""
import sys
import traceback
import uuid
from typing import NoReturn, Optional, TextIO

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from starlette import status as http_status

from .response import error_response, missing_configuration_body, missing_configuration_response
from shared.codes import BusinessCode
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException, MissingRequiredConfigurationError


logger = get_logger(__name__)

# CLI 退出码：缺少必需配置 / 内核交接失败
EXIT_MISSING_CONFIGURATION = 1
EXIT_HANDOFF_FAILED = 2


def business_code_to_http_status(code: int) -> int:
    """根据业务码映射HTTP状态码（默认400）。"""
    mapping = {
        BusinessCode.PARAM_ERROR: http_status.HTTP_400_BAD_REQUEST,
        BusinessCode.CONFIG_MISSING: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        BusinessCode.CONFIG_KEY_INVALID: http_status.HTTP_500_INTERNAL_SERVER_ERROR,

        BusinessCode.SYSTEM_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        BusinessCode.DATABASE_ERROR: http_status.HTTP_503_SERVICE_UNAVAILABLE,
        BusinessCode.CACHE_ERROR: http_status.HTTP_503_SERVICE_UNAVAILABLE,
        BusinessCode.CORE_HANDOFF_ERROR: http_status.HTTP_502_BAD_GATEWAY,
    }
    try:
        bc = BusinessCode(code)
        return mapping.get(bc, http_status.HTTP_400_BAD_REQUEST)
    except ValueError:
        return http_status.HTTP_400_BAD_REQUEST


def abort_startup(
    exc: MissingRequiredConfigurationError,
    stream: Optional[TextIO] = None,
) -> NoReturn:
    """CLI 下对应 500 响应：输出诊断信息并退出。"""
    stream = stream or sys.stderr
    stream.write(missing_configuration_body(exc))
    stream.flush()
    raise SystemExit(EXIT_MISSING_CONFIGURATION)


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def register_exception_handlers(app: FastAPI):
    """
    注册全局异常处理器

    Args:
        app: FastAPI应用实例
    """

    @app.exception_handler(MissingRequiredConfigurationError)
    async def missing_configuration_handler(request: Request, exc: MissingRequiredConfigurationError):
        """缺失配置：纯文本 500"""
        logger.error(
            "required_config_missing",
            request_id=_request_id(request),
            key=exc.key,
        )
        return missing_configuration_response(exc)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """处理业务异常"""
        response = error_response(
            code=exc.code,
            message=exc.message,
            error_type=exc.error_type,
            details=exc.details,
            field=exc.field,
            request_id=_request_id(request),
        )
        status_code = business_code_to_http_status(exc.code)
        return JSONResponse(status_code=status_code, content=response.model_dump(mode='json'))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """处理HTTP异常"""
        code_mapping = {
            500: BusinessCode.SYSTEM_ERROR,
            502: BusinessCode.CORE_HANDOFF_ERROR,
        }
        code = code_mapping.get(exc.status_code, BusinessCode.PARAM_ERROR)
        response = error_response(
            code=code,
            message=str(exc.detail),
            error_type="HTTPError",
            details={"status_code": exc.status_code},
            request_id=_request_id(request),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(mode='json'),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """处理未捕获的异常"""
        request_id = _request_id(request)

        details = None
        if app.debug:
            details = {
                "exception": str(exc),
                "traceback": traceback.format_exc()
            }

        response = error_response(
            code=BusinessCode.SYSTEM_ERROR,
            message="Internal server error",
            error_type="SystemError",
            details=details,
            request_id=request_id,
        )

        logger.error(
            "unhandled_exception",
            request_id=request_id,
            error=str(exc),
            exc_info=True,
        )

        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(mode='json')
        )
