"""
Request-serving entry point (ASGI)

The process manager provides the environment; no env file is read here.
"""
from contextlib import asynccontextmanager
from typing import MutableMapping, Optional

from fastapi import FastAPI

from api.dependencies import BootstrapState
from api.handoff import HandoffApp
from api.middleware import RequestIDMiddleware
from api.routes import health
from application.services.bootstrap_service import BootstrapService
from core.config import Settings, settings as default_settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging
from domain.common.exceptions import MissingRequiredConfigurationError
from domain.site_config import InvocationMode
from infrastructure.platform import AsgiPlatformCore


configure_logging()
logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    environ: Optional[MutableMapping[str, str]] = None,
    core: Optional[AsgiPlatformCore] = None,
) -> FastAPI:
    """
    Build the bootstrap application

    Args:
        settings: bootstrap settings (defaults to the process settings)
        environ: environment to resolve from (defaults to os.environ)
        core: platform core; loaded from CORE_APP when omitted

    Returns:
        FastAPI app whose unmatched paths are handed to the core
    """
    settings = settings or default_settings
    if core is None and settings.CORE_APP:
        core = AsgiPlatformCore.from_import_string(settings.CORE_APP)

    state = BootstrapState(
        BootstrapService(InvocationMode.SERVER, settings=settings, environ=environ)
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            state.load()
            logger.info("bootstrap_ready", core_configured=core is not None)
        except MissingRequiredConfigurationError as exc:
            # Keep serving so every request gets the diagnostic
            logger.error("bootstrap_failed", key=exc.key, missing_keys=list(exc.missing_keys))
        yield
        logger.info("application_shutdown")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.bootstrap = state
    app.state.settings = settings

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    app.include_router(health.router)
    app.mount("/", HandoffApp(state, core))
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        log_level="debug" if default_settings.DEBUG else "info"
    )
