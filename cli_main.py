"""
Command-line entry point

    python cli_main.py boot [core args...]   preload, resolve, publish, exec the core
    python cli_main.py check [--ping]        resolve and publish only, report the result
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence, TextIO

from application.services.bootstrap_service import BootstrapService
from core.config import Settings, settings as default_settings
from core.exceptions import EXIT_HANDOFF_FAILED, abort_startup
from core.logging_config import REDACTED, configure_logging, get_logger
from domain.common.exceptions import (
    ConnectionCheckError,
    CoreHandoffError,
    MissingRequiredConfigurationError,
)
from domain.site_config import InvocationMode, SiteConfiguration
from domain.site_config.entity import SECRET_CONSTANTS
from infrastructure.database import ping_database
from infrastructure.external.cache import ping_cache
from infrastructure.platform import ExecPlatformCore


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Multisite platform bootstrap")
    sub = ap.add_subparsers(dest="command")

    boot = sub.add_parser("boot", help="Publish configuration and hand off to the platform core")
    boot.add_argument("core_args", nargs=argparse.REMAINDER, help="Arguments passed to the core entry point")

    check = sub.add_parser("check", help="Resolve configuration without handing off")
    check.add_argument("--ping", action="store_true", help="Also connect to the database and object cache")
    check.add_argument("--show-values", action="store_true", help="Print non-secret values next to names")
    return ap


def _format_constants(constants, show_values: bool) -> list[str]:
    lines = []
    for name, value in constants.items():
        if not show_values:
            lines.append(name)
        elif name in SECRET_CONSTANTS:
            lines.append(f"{name}={REDACTED}")
        else:
            lines.append(f"{name}={value!r}")
    return lines


async def _ping(configuration: SiteConfiguration, timeout: float) -> None:
    await ping_database(configuration.database, timeout=timeout)
    await ping_cache(configuration.cache, timeout=timeout)


def run_check(service: BootstrapService, ping: bool, show_values: bool, out: TextIO) -> int:
    registry = service.prepare()
    for line in _format_constants(registry.as_mapping(), show_values):
        out.write(line + "\n")
    if ping and service.configuration is not None:
        try:
            asyncio.run(_ping(service.configuration, service.settings.PING_TIMEOUT))
        except ConnectionCheckError as exc:
            out.write(f"{exc.message}\n")
            return 1
        out.write("connections ok\n")
    return 0


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    settings: Optional[Settings] = None,
    environ=None,
    core=None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or default_settings
    out = out or sys.stdout
    service = BootstrapService(InvocationMode.CLI, settings=settings, environ=environ)

    try:
        if args.command == "check":
            return run_check(service, args.ping, args.show_values, out)
        core_args = getattr(args, "core_args", None) or []
        core = core or ExecPlatformCore(core_args, settings=settings, environ=service.environ)
        service.run(core)
        return 0
    except MissingRequiredConfigurationError as exc:
        abort_startup(exc, err)
    except CoreHandoffError as exc:
        logger.error("core_handoff_failed", error=exc.message)
        (err or sys.stderr).write(f"{exc.message}\n")
        return EXIT_HANDOFF_FAILED


def run() -> None:
    configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    run()
