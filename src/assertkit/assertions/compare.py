"""Ordering assertions built on the comparison dispatcher.

Each assertion classifies both operands, compares them, and checks the
three-way result against the set of results it allows. Operands may have
different Python types as long as they land in the same ordering domain.
"""

from __future__ import annotations

from typing import Any

from assertkit.assertions.base import HelperReporter, Reporter, fail
from assertkit.config.settings import get_settings
from assertkit.domain.classify import classify
from assertkit.domain.compare import COMPARATORS, compare, contains_value
from assertkit.domain.types import NUMERIC_DOMAINS, CompareResult, Domain
from assertkit.output.formatters import render_operand

GREATER: frozenset[CompareResult] = frozenset({CompareResult.GREATER})
GREATER_OR_EQUAL: frozenset[CompareResult] = frozenset(
    {CompareResult.GREATER, CompareResult.EQUAL}
)
LESS: frozenset[CompareResult] = frozenset({CompareResult.LESS})
LESS_OR_EQUAL: frozenset[CompareResult] = frozenset({CompareResult.LESS, CompareResult.EQUAL})

_ZERO: dict[Domain, Any] = {
    Domain.SIGNED_INTEGER: 0,
    Domain.UNSIGNED_INTEGER: 0,
    Domain.FLOAT: 0.0,
}


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _not_comparable_message(e1: Any, e2: Any) -> str:
    """Explain why *e1* and *e2* could not be ordered."""
    naive_tz = get_settings().compare.naive_tz()
    left = classify(e1, naive_tz=naive_tz)
    if left is None:
        return f'Can not compare type "{_type_name(e1)}"'
    right = classify(e2, naive_tz=naive_tz)
    if right is None:
        return f'Can not compare type "{_type_name(e2)}"'
    if left.domain is not right.domain:
        return "Elements should be the same type"
    return f'Can not order "{render_operand(e1)}" and "{render_operand(e2)}"'


def compare_two_values(
    reporter: Reporter,
    e1: Any,
    e2: Any,
    allowed: frozenset[CompareResult],
    failure_message: str,
    *msg_and_args: Any,
) -> bool:
    """Assert that ``compare(e1, e2)`` yields one of the *allowed* results."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()

    result, ok = compare(e1, e2, naive_tz=get_settings().compare.naive_tz())
    if not ok or result is None:
        return fail(reporter, _not_comparable_message(e1, e2), *msg_and_args)
    if not contains_value(allowed, result):
        return fail(reporter, failure_message, *msg_and_args)
    return True


def greater(reporter: Reporter, e1: Any, e2: Any, *msg_and_args: Any) -> bool:
    """Assert that the first element is greater than the second.

    Example::

        greater(reporter, 2, 1)
        greater(reporter, 2.0, 1.0)
        greater(reporter, "b", "a")
    """
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    failure_message = f'"{render_operand(e1)}" is not greater than "{render_operand(e2)}"'
    return compare_two_values(reporter, e1, e2, GREATER, failure_message, *msg_and_args)


def greater_or_equal(reporter: Reporter, e1: Any, e2: Any, *msg_and_args: Any) -> bool:
    """Assert that the first element is greater than or equal to the second."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    failure_message = (
        f'"{render_operand(e1)}" is not greater than or equal to "{render_operand(e2)}"'
    )
    return compare_two_values(reporter, e1, e2, GREATER_OR_EQUAL, failure_message, *msg_and_args)


def less(reporter: Reporter, e1: Any, e2: Any, *msg_and_args: Any) -> bool:
    """Assert that the first element is less than the second.

    Example::

        less(reporter, 1, 2)
        less(reporter, b"\\x01\\x01", b"\\x01\\x02")
    """
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    failure_message = f'"{render_operand(e1)}" is not less than "{render_operand(e2)}"'
    return compare_two_values(reporter, e1, e2, LESS, failure_message, *msg_and_args)


def less_or_equal(reporter: Reporter, e1: Any, e2: Any, *msg_and_args: Any) -> bool:
    """Assert that the first element is less than or equal to the second."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    failure_message = f'"{render_operand(e1)}" is not less than or equal to "{render_operand(e2)}"'
    return compare_two_values(reporter, e1, e2, LESS_OR_EQUAL, failure_message, *msg_and_args)


def _check_sign(
    reporter: Reporter,
    e: Any,
    allowed: frozenset[CompareResult],
    failure_message: str,
    *msg_and_args: Any,
) -> bool:
    """Compare *e* against the zero of its own numeric domain."""
    __tracebackhide__ = True
    classified = classify(e, naive_tz=get_settings().compare.naive_tz())
    if classified is None or classified.domain not in NUMERIC_DOMAINS:
        return fail(reporter, f'Can not determine sign of type "{_type_name(e)}"', *msg_and_args)
    result = COMPARATORS[classified.domain](classified.key, _ZERO[classified.domain])
    if result is None:
        return fail(reporter, f'Can not order "{render_operand(e)}" and "0"', *msg_and_args)
    if not contains_value(allowed, result):
        return fail(reporter, failure_message, *msg_and_args)
    return True


def positive(reporter: Reporter, e: Any, *msg_and_args: Any) -> bool:
    """Assert that the specified element is positive."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    return _check_sign(reporter, e, GREATER, f'"{render_operand(e)}" is not positive', *msg_and_args)


def negative(reporter: Reporter, e: Any, *msg_and_args: Any) -> bool:
    """Assert that the specified element is negative."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    return _check_sign(reporter, e, LESS, f'"{render_operand(e)}" is not negative', *msg_and_args)
