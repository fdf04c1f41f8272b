from __future__ import annotations

import array
from collections.abc import Mapping

import pytest

from invokekit import INSTANCE, ConditionalInvoker, InvokerPreconditionError


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def one(self, value) -> None:
        self.calls.append((value,))

    def two(self, first, second) -> None:
        self.calls.append((first, second))


class _Animal:
    pass


class _Dog(_Animal):
    pass


@pytest.mark.parametrize("condition", [True, False])
def test_accept_if_condition_calls_consumer_only_when_true(condition):
    rec = _Recorder()

    result = INSTANCE.accept_if_condition(condition, 5, rec.one)

    assert result is INSTANCE
    assert rec.calls == ([(5,)] if condition else [])


@pytest.mark.parametrize("condition", [True, False])
def test_accept_both_if_condition_passes_both_arguments_in_order(condition):
    rec = _Recorder()

    result = INSTANCE.accept_both_if_condition(condition, "a", 1, rec.two)

    assert result is INSTANCE
    assert rec.calls == ([("a", 1)] if condition else [])


@pytest.mark.parametrize("value", [0, "", [], False, 0.0, "x"])
def test_accept_if_not_none_passes_falsy_values_through(value):
    rec = _Recorder()

    INSTANCE.accept_if_not_none(value, rec.one)

    assert rec.calls == [(value,)]


def test_accept_if_not_none_skips_none():
    rec = _Recorder()

    assert INSTANCE.accept_if_not_none(None, rec.one) is INSTANCE
    assert rec.calls == []


def test_accept_both_if_not_none_checks_only_the_second_value():
    rec = _Recorder()

    INSTANCE.accept_both_if_not_none(None, 2, rec.two)
    INSTANCE.accept_both_if_not_none("first", None, rec.two)

    assert rec.calls == [(None, 2)]


@pytest.mark.parametrize("value", ["a", " a ", "\tok\n", "ok"])
def test_accept_if_has_text_calls_consumer_for_text(value):
    rec = _Recorder()

    INSTANCE.accept_if_has_text(value, rec.one)

    assert rec.calls == [(value,)]


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n", "\u2003"])
def test_accept_if_has_text_skips_absent_or_blank(value):
    rec = _Recorder()

    assert INSTANCE.accept_if_has_text(value, rec.one) is INSTANCE
    assert rec.calls == []


def test_accept_if_has_text_rejects_non_string_values():
    rec = _Recorder()

    with pytest.raises(TypeError, match=r"must be a string or None \(type=int\)"):
        INSTANCE.accept_if_has_text(3, rec.one)
    assert rec.calls == []


def test_accept_both_if_has_text_carries_first_value_unchanged():
    rec = _Recorder()
    carried = {"k": "v"}

    INSTANCE.accept_both_if_has_text(carried, "name", rec.two)
    INSTANCE.accept_both_if_has_text(carried, "  ", rec.two)
    INSTANCE.accept_both_if_has_text(carried, None, rec.two)

    assert rec.calls == [(carried, "name")]
    assert rec.calls[0][0] is carried


def test_accept_if_instance_of_accepts_exact_type_and_subtypes():
    rec = _Recorder()
    dog = _Dog()
    animal = _Animal()

    INSTANCE.accept_if_instance_of(_Animal, dog, rec.one)
    INSTANCE.accept_if_instance_of(_Animal, animal, rec.one)
    INSTANCE.accept_if_instance_of(_Dog, animal, rec.one)

    assert rec.calls == [(dog,), (animal,)]


def test_accept_if_instance_of_supports_abstract_base_classes():
    rec = _Recorder()

    INSTANCE.accept_if_instance_of(Mapping, {"a": 1}, rec.one)
    INSTANCE.accept_if_instance_of(Mapping, [("a", 1)], rec.one)

    assert rec.calls == [({"a": 1},)]


def test_accept_if_instance_of_none_is_a_precondition_violation():
    rec = _Recorder()

    with pytest.raises(InvokerPreconditionError, match=r"runtime type of None against _Animal"):
        INSTANCE.accept_if_instance_of(_Animal, None, rec.one)
    assert rec.calls == []


def test_precondition_error_is_a_type_error():
    with pytest.raises(TypeError):
        INSTANCE.accept_if_instance_of(object, None, lambda value: None)


def test_accept_if_not_empty_skips_none_and_empty_sequences():
    rec = _Recorder()

    INSTANCE.accept_if_not_empty(None, rec.one)
    INSTANCE.accept_if_not_empty([], rec.one)
    INSTANCE.accept_if_not_empty((), rec.one)

    assert rec.calls == []


def test_accept_if_not_empty_forwards_the_whole_sequence():
    rec = _Recorder()
    items = [1]
    fixed = (1, 2, 3)
    packed = array.array("i", [7, 8])

    INSTANCE.accept_if_not_empty(items, rec.one)
    INSTANCE.accept_if_not_empty(fixed, rec.one)
    INSTANCE.accept_if_not_empty(packed, rec.one)

    assert [call[0] for call in rec.calls] == [items, fixed, packed]
    assert rec.calls[0][0] is items


def test_consumer_exceptions_propagate_unchanged():
    class Boom(RuntimeError):
        pass

    def explode(*_args):
        raise Boom("consumer failed")

    with pytest.raises(Boom, match="consumer failed"):
        INSTANCE.accept_if_condition(True, 1, explode)
    with pytest.raises(Boom):
        INSTANCE.accept_both_if_has_text(1, "x", explode)
    with pytest.raises(Boom):
        INSTANCE.accept_if_not_empty([1], explode)


def test_invoker_holds_no_state():
    with pytest.raises(AttributeError):
        INSTANCE.some_attribute = 1  # type: ignore[attr-defined]
    assert isinstance(INSTANCE, ConditionalInvoker)
    assert repr(INSTANCE) == "ConditionalInvoker()"


def test_accept_if_has_text_calls_consumer_for_a_no_break_space():
    rec = _Recorder()

    INSTANCE.accept_if_has_text("\u00a0", rec.one)

    assert rec.calls == [("\u00a0",)]


@pytest.mark.parametrize("condition", [1, "yes", None, [True]])
def test_condition_must_be_a_real_boolean(condition):
    rec = _Recorder()

    with pytest.raises(TypeError, match=r"condition must be a boolean"):
        INSTANCE.accept_if_condition(condition, 5, rec.one)
    with pytest.raises(TypeError, match=r"condition must be a boolean"):
        INSTANCE.accept_both_if_condition(condition, 5, 6, rec.two)
    assert rec.calls == []
