"""
API dependencies - access to the process-wide bootstrap outcome
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from fastapi import Request

from application.services.bootstrap_service import BootstrapService
from domain.common.exceptions import MissingRequiredConfigurationError
from domain.site_config import ConstantRegistry


class BootstrapState:
    """Resolves configuration once per process and remembers the outcome.

    A failed resolution is remembered too: the process keeps answering with
    the same diagnostic instead of re-reading the environment.
    """

    def __init__(self, service: BootstrapService):
        self.service = service
        self._registry: Optional[ConstantRegistry] = None
        self._error: Optional[MissingRequiredConfigurationError] = None

    def load(self) -> ConstantRegistry:
        if self._registry is not None:
            return self._registry
        if self._error is not None:
            raise self._error
        try:
            self._registry = self.service.prepare()
        except MissingRequiredConfigurationError as exc:
            self._error = exc
            raise
        return self._registry

    @property
    def error(self) -> Optional[MissingRequiredConfigurationError]:
        return self._error


def get_bootstrap_state(request: Request) -> BootstrapState:
    return request.app.state.bootstrap


def get_site_constants(request: Request) -> Mapping[str, Any]:
    """Published constants; raises MissingRequiredConfigurationError otherwise."""
    return get_bootstrap_state(request).load().as_mapping()
