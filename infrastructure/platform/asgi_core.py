"""
In-process hand-off for request-serving mode: forward requests to the core's
ASGI application with the frozen constants attached to the scope.
"""
from __future__ import annotations

import importlib
from typing import Any, Mapping, Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from core.logging_config import get_logger
from domain.common.exceptions import CoreHandoffError

logger = get_logger(__name__)

SCOPE_STATE_KEY = "site_constants"


def load_core_app(import_string: str) -> ASGIApp:
    """Import ``module:attribute`` and return the attribute."""
    module_name, sep, attr = import_string.partition(":")
    if not sep or not module_name or not attr:
        raise CoreHandoffError(
            f"Invalid core app import string: {import_string!r} (expected 'module:attribute')",
            details={"import_string": import_string},
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise CoreHandoffError(
            f"Cannot import core module {module_name!r}: {exc}",
            details={"import_string": import_string},
        ) from exc
    app = module
    for part in attr.split("."):
        try:
            app = getattr(app, part)
        except AttributeError as exc:
            raise CoreHandoffError(
                f"Core module {module_name!r} has no attribute {attr!r}",
                details={"import_string": import_string},
            ) from exc
    return app


class AsgiPlatformCore:
    """ASGI callable wrapping the core app; usable once ``boot`` ran."""

    def __init__(self, app: ASGIApp):
        self.app = app
        self.constants: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_import_string(cls, import_string: str) -> "AsgiPlatformCore":
        return cls(load_core_app(import_string))

    def boot(self, constants: Mapping[str, Any]) -> "AsgiPlatformCore":
        if self.constants is None:
            self.constants = constants
            logger.info("core_booted", constants=len(constants))
        return self

    @property
    def booted(self) -> bool:
        return self.constants is not None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self.constants is None:
            raise CoreHandoffError("Platform core called before boot")
        if scope["type"] in ("http", "websocket"):
            state = scope.setdefault("state", {})
            state[SCOPE_STATE_KEY] = self.constants
        await self.app(scope, receive, send)
