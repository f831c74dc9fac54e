"""
Shared business codes used across layers (Domain/Core/API).

This module provides a single source of truth to avoid drift between
multiple enum definitions scattered across the codebase.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Business status codes (single source of truth)."""

    # Success
    SUCCESS = 0

    # Parameter errors (1xxxx)
    PARAM_ERROR = 10000

    # Configuration errors (2xxxx)
    CONFIG_MISSING = 20001
    CONFIG_KEY_INVALID = 20002

    # System errors (4xxxx)
    SYSTEM_ERROR = 40000
    DATABASE_ERROR = 40001
    CACHE_ERROR = 40002
    CORE_HANDOFF_ERROR = 40003


__all__ = ["BusinessCode"]
