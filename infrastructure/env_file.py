"""
Environment file preloading for CLI invocations.

Request-serving processes get the same file through their process manager's
EnvironmentFile; the CLI has no such wrapper, so it reads the file itself.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, MutableMapping, Optional

from core.logging_config import get_logger
from domain.site_config import InvocationMode

logger = get_logger(__name__)

COMMENT_MARKER = "#"
# Same error handler os.environ uses, so undecodable bytes round-trip
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"


def _strip_newline(raw: str) -> str:
    line = raw[:-1] if raw.endswith("\n") else raw
    return line[:-1] if line.endswith("\r") else line


def _split_line(line: str) -> Optional[tuple[str, str]]:
    """Return ``(key, value)`` for an assignment line, None for anything else.

    Empty keys and NUL bytes cannot enter a process environment, so such
    lines count as malformed.
    """
    if not line or line[0] == COMMENT_MARKER or "=" not in line:
        return None
    key, value = line.split("=", 1)
    if not key or "\x00" in key or "\x00" in value:
        return None
    return key, value


def _is_malformed(line: str) -> bool:
    return bool(line) and line[0] != COMMENT_MARKER and _split_line(line) is None


def parse_env_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines into a mapping.

    Empty lines, lines starting with ``#``, lines without ``=`` and lines that
    cannot be an environment entry are skipped. The split happens on the
    first ``=``; neither side is trimmed.
    """
    parsed: dict[str, str] = {}
    for raw in lines:
        pair = _split_line(_strip_newline(raw))
        if pair is not None:
            parsed[pair[0]] = pair[1]
    return parsed


def read_env_file(path: str | Path) -> dict[str, str]:
    """Read ``path`` as raw bytes split on ``\\n`` only."""
    text = Path(path).read_bytes().decode(FILE_ENCODING, FILE_ERRORS)
    lines = [_strip_newline(line) for line in text.split("\n")]
    malformed = sum(1 for line in lines if _is_malformed(line))
    if malformed:
        logger.debug("env_file_lines_skipped", path=str(path), skipped=malformed)
    return parse_env_lines(lines)


class EnvFilePreloader:
    """One-shot loader of an environment file into a process environment."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def preload(
        self,
        environ: MutableMapping[str, str],
        mode: InvocationMode,
    ) -> Optional[list[str]]:
        """Apply the file to ``environ``.

        Only runs in CLI mode, only if the file exists, and at most once.

        Returns:
            The applied keys, or None when preloading was skipped.
        """
        if self._done:
            return None
        if mode is not InvocationMode.CLI:
            return None
        if not self.path.is_file():
            logger.debug("env_file_absent", path=str(self.path))
            return None

        values = read_env_file(self.path)
        environ.update(values)
        self._done = True
        logger.info("env_file_preloaded", path=str(self.path), keys=len(values))
        return list(values)
