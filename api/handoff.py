"""
Catch-all ASGI app: every request not claimed by the bootstrapper's own routes
is handed to the platform core once the configuration has been published.
"""
from __future__ import annotations

from typing import Optional

from starlette.responses import PlainTextResponse
from starlette.types import Receive, Scope, Send

from api.dependencies import BootstrapState
from core.logging_config import get_logger
from core.response import PLAIN_TEXT_MEDIA_TYPE, missing_configuration_response
from domain.common.exceptions import MissingRequiredConfigurationError
from infrastructure.platform import AsgiPlatformCore

logger = get_logger(__name__)

CORE_NOT_CONFIGURED_BODY = "Platform core is not configured\n"


class HandoffApp:
    def __init__(self, state: BootstrapState, core: Optional[AsgiPlatformCore]):
        self.state = state
        self.core = core

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            return
        try:
            registry = self.state.load()
        except MissingRequiredConfigurationError as exc:
            if scope["type"] == "websocket":
                await send({"type": "websocket.close", "code": 1011})
                return
            response = missing_configuration_response(exc)
            await response(scope, receive, send)
            return

        if self.core is None:
            logger.warning("core_app_not_configured", path=scope.get("path"))
            response = PlainTextResponse(
                CORE_NOT_CONFIGURED_BODY, status_code=503, media_type=PLAIN_TEXT_MEDIA_TYPE
            )
            await response(scope, receive, send)
            return

        await self.core.boot(registry.as_mapping())(scope, receive, send)
