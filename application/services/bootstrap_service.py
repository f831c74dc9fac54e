"""
Bootstrap service - preload, resolve, publish, hand off.

One straight-line pass per process. Any missing required key stops the pass
before a single constant is published.
"""
from __future__ import annotations

import os
from typing import Any, MutableMapping, Optional

from application.ports.platform_core import PlatformCore
from application.services.config_emitter import ConfigurationEmitter
from application.services.env_resolver import EnvResolver
from core.config import Settings, settings as default_settings
from core.logging_config import get_logger
from domain.site_config import ConstantRegistry, InvocationMode, SiteConfiguration
from infrastructure.env_file import EnvFilePreloader

logger = get_logger(__name__)


class BootstrapService:
    def __init__(
        self,
        mode: InvocationMode,
        *,
        settings: Optional[Settings] = None,
        environ: Optional[MutableMapping[str, str]] = None,
        preloader: Optional[EnvFilePreloader] = None,
    ) -> None:
        self.mode = mode
        self.settings = settings or default_settings
        self.environ = os.environ if environ is None else environ
        self.preloader = preloader or EnvFilePreloader(self.settings.ENV_FILE)
        self.configuration: Optional[SiteConfiguration] = None
        self.registry: Optional[ConstantRegistry] = None

    def _preset(self) -> dict[str, str]:
        # The core may already have bound ABSPATH before reaching us
        preset = {}
        abspath = self.environ.get("ABSPATH")
        if abspath:
            preset["ABSPATH"] = abspath
        return preset

    def prepare(self) -> ConstantRegistry:
        """Run every step except the hand-off.

        Raises:
            MissingRequiredConfigurationError: a required key is unset or empty.
        """
        if self.registry is not None:
            return self.registry

        self.preloader.preload(self.environ, self.mode)

        emitter = ConfigurationEmitter(EnvResolver(self.environ))
        configuration = emitter.build()
        registry = emitter.publish(
            configuration,
            ConstantRegistry(self._preset()),
            abspath=self.settings.ABSPATH,
        )

        self.configuration = configuration
        self.registry = registry
        return registry

    def run(self, core: PlatformCore) -> Any:
        """Prepare, then transfer control to ``core``."""
        registry = self.prepare()
        logger.info("core_handoff", mode=self.mode.value, core=type(core).__name__)
        return core.boot(registry.as_mapping())
