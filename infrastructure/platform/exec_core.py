"""
Process hand-off: replace the current process with the core's CLI entry point.
"""
from __future__ import annotations

import os
from typing import Any, Callable, Mapping, Optional, Sequence

from core.config import Settings, settings as default_settings
from core.logging_config import get_logger
from domain.common.exceptions import CoreHandoffError

logger = get_logger(__name__)


def _export_value(value: Any) -> str:
    # Booleans follow the core's getenv truthiness: "1" or empty
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def export_constants(
    constants: Mapping[str, Any],
    base: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Merge the published constants into a copy of ``base`` as strings."""
    env = dict(os.environ if base is None else base)
    for name, value in constants.items():
        env[name] = _export_value(value)
    return env


class ExecPlatformCore:
    """Runs ``CORE_INTERPRETER ABSPATH+CORE_ENTRYPOINT [args...]`` via exec.

    On success ``boot`` never returns.
    """

    def __init__(
        self,
        args: Sequence[str] = (),
        *,
        settings: Optional[Settings] = None,
        environ: Optional[Mapping[str, str]] = None,
        execvpe: Optional[Callable[..., Any]] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.args = list(args)
        self._environ = environ
        self._execvpe = execvpe or os.execvpe

    def command(self, constants: Mapping[str, Any]) -> list[str]:
        abspath = constants.get("ABSPATH") or self.settings.ABSPATH
        return [
            self.settings.CORE_INTERPRETER,
            str(abspath) + self.settings.CORE_ENTRYPOINT,
            *self.args,
        ]

    def boot(self, constants: Mapping[str, Any]) -> Any:
        argv = self.command(constants)
        env = export_constants(constants, self._environ)
        logger.info("core_exec", program=argv[0], entrypoint=argv[1])
        try:
            return self._execvpe(argv[0], argv, env)
        except OSError as exc:
            raise CoreHandoffError(
                f"Failed to start platform core: {exc}",
                details={"argv": argv, "errno": exc.errno},
            ) from exc
