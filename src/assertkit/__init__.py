"""assertkit — soft test assertions with a generic ordering engine."""

from assertkit.assertions.compare import (
    greater,
    greater_or_equal,
    less,
    less_or_equal,
    negative,
    positive,
)
from assertkit.assertions.http import (
    handler_func,
    http_body,
    http_body_contains,
    http_body_not_contains,
    http_code,
    http_error,
    http_redirect,
    http_status_code,
    http_success,
)
from assertkit.domain.compare import compare
from assertkit.domain.types import CompareResult, Domain

__all__ = [
    "CompareResult",
    "Domain",
    "compare",
    "greater",
    "greater_or_equal",
    "handler_func",
    "http_body",
    "http_body_contains",
    "http_body_not_contains",
    "http_code",
    "http_error",
    "http_redirect",
    "http_status_code",
    "http_success",
    "less",
    "less_or_equal",
    "negative",
    "positive",
]
