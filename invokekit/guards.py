"""Guard predicates used by `invokekit.invoker`.

Each predicate is pure: it inspects its arguments and returns a bool, raising only
when the caller violated the predicate's input contract.
"""

from __future__ import annotations

from collections.abc import Sized
from typing import Any

# str.isspace() is true for these; no-break spaces and NEL still count as text.
_NOT_WHITESPACE = frozenset("\u00a0\u2007\u202f\u0085")


class InvokerPreconditionError(TypeError):
    """Raised when a guard is asked to inspect a value it cannot inspect."""


def has_text(value: str | None) -> bool:
    """True when `value` is a string holding at least one non-whitespace character.

    Whitespace means separator whitespace (spaces, tabs, line breaks and the
    other Unicode space/line/paragraph separators). No-break spaces (U+00A0,
    U+2007, U+202F) and NEL (U+0085) are not whitespace, so `"\\u00a0"` has text.
    """

    if value is None:
        return False
    if not isinstance(value, str):
        raise TypeError(f"value must be a string or None (type={type(value).__name__})")
    return any(ch in _NOT_WHITESPACE or not ch.isspace() for ch in value)


def is_not_empty(values: Sized | None) -> bool:
    # len(), not truthiness: numpy arrays and pandas objects refuse bool().
    if values is None:
        return False
    return len(values) > 0


def is_instance_of(type_: type | tuple[type, ...], value: Any) -> bool:
    """True when the runtime type of `value` is `type_` or a subtype of it.

    `value` must not be None: the type of an absent value is not tested, the call
    fails with `InvokerPreconditionError` instead of reporting a mismatch.
    """

    if value is None:
        raise InvokerPreconditionError(
            f"cannot test the runtime type of None against {_type_name(type_)}"
        )
    return isinstance(value, type_)


def _type_name(type_: Any) -> str:
    if isinstance(type_, tuple):
        return "(" + ", ".join(_type_name(item) for item in type_) + ")"
    return getattr(type_, "__name__", repr(type_))
