"""
Structlog 日志配置模块

stdlib logging 与 structlog 共用同一处理链；输出写到 stderr，
stdout 留给平台内核和 `check` 命令。
"""
import logging
import json
import sys
import structlog
from structlog.processors import TimeStamper, add_log_level, JSONRenderer
from structlog.dev import ConsoleRenderer
from structlog.contextvars import merge_contextvars
from structlog.stdlib import ProcessorFormatter
from typing import Any, List, MutableMapping

from core.config import settings
from domain.site_config.entity import SECRET_CONSTANTS


REDACTED = "********"

# 已发布常量名 + 对应的原始环境变量名
SECRET_LOG_KEYS = frozenset(
    SECRET_CONSTANTS
    | {f"WP_{name}" for name in SECRET_CONSTANTS if name.endswith(("_KEY", "_SALT"))}
    | {"REDIS_PASSWORD"}
)


def _is_secret_key(key: Any) -> bool:
    return isinstance(key, str) and (key in SECRET_LOG_KEYS or "password" in key.lower())


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: REDACTED if _is_secret_key(k) else _redact(v) for k, v in value.items()}
    return value


def redact_secrets(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """屏蔽密钥类字段的值，只保留键名（嵌套 dict 同样处理）。"""
    for key, value in list(event_dict.items()):
        if key == "event":
            continue
        event_dict[key] = REDACTED if _is_secret_key(key) else _redact(value)
    return event_dict


def get_renderer() -> Any:
    """根据环境选择渲染器：DEBUG 用 Console，其余用 JSON。"""
    if settings.DEBUG:
        return ConsoleRenderer(colors=True)
    # structlog 会向 serializer 传 default/sort_keys 等参数
    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)
    return JSONRenderer(serializer=_dumps)


def build_pre_chain() -> List[Any]:
    """structlog.configure 与 ProcessorFormatter 共用的预处理链。"""
    return [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_secrets,
    ]


def configure_logging(stream=None) -> None:
    """配置 structlog 并桥接标准库 logging；默认输出到 stderr。"""
    shared_pre_chain = build_pre_chain()

    structlog.configure(
        processors=[
            *shared_pre_chain,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(),
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """获取 structlog logger 实例。"""
    return structlog.get_logger(name)
