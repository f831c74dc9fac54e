"""Domain-level business exceptions, shared by the domain and infrastructure layers.

The core layer only maps these to transport responses; the domain layer never
depends back on core.
"""
from __future__ import annotations

from typing import Optional, Sequence
from shared.codes import BusinessCode


MISSING_CONFIGURATION_MESSAGE = "Missing required environment variable: {key}"


class BusinessException(Exception):
    """Base business exception"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class MissingRequiredConfigurationError(BusinessException):
    """A required configuration key is unset or empty.

    ``key`` is the first missing key in resolution order; ``missing_keys``
    lists every required key that failed to resolve.
    """

    def __init__(self, key: str, missing_keys: Optional[Sequence[str]] = None):
        self.key = key
        self.missing_keys = tuple(missing_keys) if missing_keys else (key,)
        super().__init__(
            code=BusinessCode.CONFIG_MISSING,
            message=MISSING_CONFIGURATION_MESSAGE.format(key=key),
            error_type="MissingRequiredConfiguration",
            details={"missing_keys": list(self.missing_keys)},
            field=key,
        )


class InvalidConfigurationKeyError(BusinessException):
    def __init__(self, key: object):
        super().__init__(
            code=BusinessCode.CONFIG_KEY_INVALID,
            message="Configuration key name must be a non-empty string",
            error_type="InvalidConfigurationKey",
            details={"key": repr(key)},
        )


class CoreHandoffError(BusinessException):
    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(
            code=BusinessCode.CORE_HANDOFF_ERROR,
            message=message,
            error_type="CoreHandoffError",
            details=details,
        )


class ConnectionCheckError(BusinessException):
    """Raised by connectivity checks against the database or object cache."""

    def __init__(self, target: str, reason: str):
        code = BusinessCode.DATABASE_ERROR if target == "database" else BusinessCode.CACHE_ERROR
        super().__init__(
            code=code,
            message=f"{target} connection check failed: {reason}",
            error_type="ConnectionCheckError",
            details={"target": target, "reason": reason},
        )
