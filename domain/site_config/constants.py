"""Define-once registry for the published platform constants."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional


class ConstantRegistry:
    """Process-wide constant table.

    A name is bound at most once; later ``define`` calls for a bound name are
    skipped. After ``freeze`` the table is read-only.
    """

    def __init__(self, preset: Optional[Mapping[str, Any]] = None) -> None:
        self._values: dict[str, Any] = dict(preset or {})
        self._frozen = False

    def defined(self, name: str) -> bool:
        return name in self._values

    def define(self, name: str, value: Any) -> bool:
        """Bind ``name`` to ``value`` unless it is already bound.

        Returns:
            True if the name was bound by this call.
        """
        if self._frozen:
            raise RuntimeError(f"constant registry is frozen; cannot define {name}")
        if name in self._values:
            return False
        self._values[name] = value
        return True

    def freeze(self) -> "ConstantRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def as_mapping(self) -> Mapping[str, Any]:
        return MappingProxyType(self._values)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
