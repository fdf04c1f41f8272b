"""Strict config-section parser with consumed-keys enforcement."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable

_MISSING = object()


@dataclass
class ConfigNamespace:
    """Reads typed values out of one config mapping and remembers which keys were read.

    Getters are strict: a wrongly typed value raises `TypeError` naming the dotted
    path, and `assert_consumed()` rejects keys nobody asked for (usually typos).
    """

    data: Mapping[str, Any]
    path: str
    _consumed: set[str] = field(default_factory=set, init=False, repr=False)
    _children: dict[str, "ConfigNamespace"] = field(default_factory=dict, init=False, repr=False)

    def _key_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def _take(self, key: Any) -> str:
        if not isinstance(key, str) or not key.strip():
            raise TypeError("ConfigNamespace key must be a non-empty string")
        normalized = key.strip()
        if normalized in self._children:
            raise ValueError(f"{self._key_path(normalized)} already accessed as a nested namespace")
        self._consumed.add(normalized)
        return normalized

    def assert_consumed(self) -> None:
        unknown = sorted(k for k in self.data if k not in self._consumed)
        if unknown:
            consumed = ", ".join(sorted(self._consumed)) or "<none>"
            raise ValueError(
                f"Unknown config keys under {self.path or '<root>'}: {', '.join(unknown)} "
                f"(consumed: {consumed})"
            )
        for child in self._children.values():
            child.assert_consumed()

    def namespace(self, key: str, *, optional: bool = False) -> "ConfigNamespace":
        """Return the nested section `key`; an optional missing or null section reads as empty."""

        if isinstance(key, str) and key.strip() in self._children:
            return self._children[key.strip()]
        normalized = self._take(key)
        raw = self.data.get(normalized)

        if raw is None:
            if not optional:
                raise ValueError(f"Missing required config namespace: {self._key_path(normalized)}")
            raw = {}
        elif not isinstance(raw, Mapping):
            raise TypeError(
                f"{self._key_path(normalized)} must be a mapping (type={type(raw).__name__})"
            )

        child = ConfigNamespace(dict(raw), path=self._key_path(normalized))
        self._children[normalized] = child
        return child

    def _get(self, key: str, default: Any) -> tuple[str, Any]:
        normalized = self._take(key)
        if normalized in self.data:
            return normalized, self.data[normalized]
        if default is _MISSING:
            raise ValueError(f"Missing required config key: {self._key_path(normalized)}")
        return normalized, default

    def get_bool(self, key: str, *, default: bool | object = _MISSING) -> bool:
        normalized, value = self._get(key, default)
        if not isinstance(value, bool):
            raise TypeError(
                f"{self._key_path(normalized)} must be a boolean (type={type(value).__name__})"
            )
        return value

    def get_str(
        self,
        key: str,
        *,
        default: str | None | object = _MISSING,
        allow_empty: bool = False,
        choices: Iterable[str] | None = None,
    ) -> str | None:
        normalized, raw = self._get(key, default)
        path = self._key_path(normalized)
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise TypeError(f"{path} must be a string (type={type(raw).__name__})")

        value = raw.strip()
        if not value and not allow_empty:
            raise ValueError(f"{path} cannot be empty")
        if choices is not None:
            allowed = sorted({item.strip() for item in choices if item.strip()})
            if value not in allowed:
                raise ValueError(
                    f"{path} must be one of: {', '.join(allowed) or '<none>'} (got {value!r})"
                )
        return value
