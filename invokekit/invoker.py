"""Chainable guarded invocation of callbacks.

Obtain the shared `INSTANCE` and chain calls on it:

    INSTANCE.accept_if_not_none(timeout, client.set_timeout).accept_if_has_text(
        name, client.set_name
    )

Every operation evaluates its guard, calls the consumer synchronously when the guard
holds and returns the invoker. A guard that does not hold is a silent no-op. Faults
raised by a consumer propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sized
from typing import Any, TypeVar

from invokekit.guards import has_text, is_instance_of, is_not_empty

T = TypeVar("T")
T1 = TypeVar("T1")
T2 = TypeVar("T2")
S = TypeVar("S", bound=Sized)

logger = logging.getLogger(__name__)


def _skipped(operation: str, reason: str) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s skipped: %s", operation, reason)


def _checked_condition(condition: bool) -> bool:
    if not isinstance(condition, bool):
        raise TypeError(f"condition must be a boolean (type={type(condition).__name__})")
    return condition


class ConditionalInvoker:
    """Stateless namespace for the guarded-dispatch operations.

    Holds no attributes; use the module-level `INSTANCE`.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "ConditionalInvoker()"

    def accept_if_condition(
        self, condition: bool, value: T, consumer: Callable[[T], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(value)` if `condition` is true.

        `condition` must be a real `bool`; anything else raises `TypeError`.
        """

        if _checked_condition(condition):
            consumer(value)
        else:
            _skipped("accept_if_condition", "condition is false")
        return self

    def accept_both_if_condition(
        self,
        condition: bool,
        first: T1,
        second: T2,
        consumer: Callable[[T1, T2], Any],
    ) -> "ConditionalInvoker":
        """Call `consumer(first, second)` if `condition` is true."""

        if _checked_condition(condition):
            consumer(first, second)
        else:
            _skipped("accept_both_if_condition", "condition is false")
        return self

    def accept_if_not_none(
        self, value: T | None, consumer: Callable[[T], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(value)` if `value` is not None.

        Only None is rejected; falsy values such as 0 or "" are passed through.
        """

        if value is not None:
            consumer(value)
        else:
            _skipped("accept_if_not_none", "value is None")
        return self

    def accept_both_if_not_none(
        self, first: T1, second: T2 | None, consumer: Callable[[T1, T2], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(first, second)` if `second` is not None."""

        if second is not None:
            consumer(first, second)
        else:
            _skipped("accept_both_if_not_none", "second value is None")
        return self

    def accept_if_has_text(
        self, value: str | None, consumer: Callable[[str], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(value)` if `value` contains a non-whitespace character."""

        if has_text(value):
            consumer(value)  # type: ignore[arg-type]
        else:
            _skipped("accept_if_has_text", "value has no text")
        return self

    def accept_both_if_has_text(
        self, first: T, value: str | None, consumer: Callable[[T, str], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(first, value)` if `value` contains a non-whitespace character."""

        if has_text(value):
            consumer(first, value)  # type: ignore[arg-type]
        else:
            _skipped("accept_both_if_has_text", "value has no text")
        return self

    def accept_if_instance_of(
        self, type_: type[T], value: Any, consumer: Callable[[T], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(value)` if `value` is an instance of `type_`.

        `value` must not be None; `InvokerPreconditionError` is raised otherwise.
        """

        if is_instance_of(type_, value):
            consumer(value)
        else:
            _skipped("accept_if_instance_of", f"value is a {type(value).__name__}")
        return self

    def accept_if_not_empty(
        self, values: S | None, consumer: Callable[[S], Any]
    ) -> "ConditionalInvoker":
        """Call `consumer(values)` if `values` is not None and has at least one element.

        Works for lists as well as fixed-size forms (tuples, arrays).
        """

        if is_not_empty(values):
            consumer(values)  # type: ignore[arg-type]
        else:
            _skipped("accept_if_not_empty", "values are None or empty")
        return self


INSTANCE = ConditionalInvoker()

accept_if_condition = INSTANCE.accept_if_condition
accept_both_if_condition = INSTANCE.accept_both_if_condition
accept_if_not_none = INSTANCE.accept_if_not_none
accept_both_if_not_none = INSTANCE.accept_both_if_not_none
accept_if_has_text = INSTANCE.accept_if_has_text
accept_both_if_has_text = INSTANCE.accept_both_if_has_text
accept_if_instance_of = INSTANCE.accept_if_instance_of
accept_if_not_empty = INSTANCE.accept_if_not_empty
