"""
Environment resolver - single synchronous lookups against the process environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from domain.common.exceptions import (
    InvalidConfigurationKeyError,
    MissingRequiredConfigurationError,
)


@dataclass(frozen=True)
class Resolved:
    key: str
    value: str = field(repr=False)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Missing:
    key: str

    @property
    def ok(self) -> bool:
        return False

    def to_error(self) -> MissingRequiredConfigurationError:
        return MissingRequiredConfigurationError(self.key)


Resolution = Union[Resolved, Missing]


class EnvResolver:
    """Reads configuration keys from an environment mapping.

    Unset and empty are the same thing: both make a required key missing and
    both make an optional key fall back to its default.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    @staticmethod
    def _check_key(key: str) -> None:
        if not isinstance(key, str) or not key:
            raise InvalidConfigurationKeyError(key)

    def resolve(self, key: str) -> Resolution:
        self._check_key(key)
        value = self._environ.get(key)
        if value is None or value == "":
            return Missing(key)
        return Resolved(key, value)

    def require(self, key: str) -> str:
        """Return the non-empty value of ``key``.

        Raises:
            MissingRequiredConfigurationError: ``key`` is unset or empty.
        """
        resolution = self.resolve(key)
        if isinstance(resolution, Missing):
            raise resolution.to_error()
        return resolution.value

    def optional(self, key: str, default: str) -> str:
        resolution = self.resolve(key)
        if isinstance(resolution, Missing):
            return default
        return resolution.value
