"""Application-owned port for the external platform core.

The bootstrapper only knows that the core accepts the published constants and
takes over from there.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class PlatformCore(Protocol):
    def boot(self, constants: Mapping[str, Any]) -> Any:
        """Start the core with the frozen constants. Terminal for the caller."""
        ...
