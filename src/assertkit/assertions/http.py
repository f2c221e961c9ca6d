"""HTTP handler assertions.

A handler is any ASGI application. Requests are issued in-process through
Starlette's ``TestClient``; redirects are not followed and server errors
surface as a 500 response (both configurable under ``[http]``).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

import httpx
from starlette.requests import Request
from starlette.routing import request_response
from starlette.testclient import TestClient
from starlette.types import ASGIApp

from assertkit.assertions.base import HelperReporter, Reporter, fail
from assertkit.config.settings import get_settings

logger = logging.getLogger(__name__)

QueryValues = Mapping[str, str | Sequence[str]]

# RFC 9110 token characters.
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


class RequestBuildError(Exception):
    """The harness could not build or send the test request."""


def handler_func(endpoint: Callable[[Request], Any]) -> ASGIApp:
    """Adapt a ``request -> Response`` function (sync or async) to ASGI."""
    return request_response(endpoint)


def encode_values(values: QueryValues | None) -> str:
    """Encode query values sorted by key, repeating keys for lists."""
    if not values:
        return ""
    pairs: list[tuple[str, str]] = []
    for key in sorted(values):
        value = values[key]
        if isinstance(value, str):
            pairs.append((key, value))
        else:
            pairs.extend((key, item) for item in value)
    return urlencode(pairs)


def request_uri(url: str, values: QueryValues | None) -> str:
    query = encode_values(values)
    return f"{url}?{query}" if query else url


def _perform(
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None,
) -> httpx.Response:
    if not _METHOD_TOKEN.fullmatch(method):
        raise RequestBuildError(f"invalid method {method!r}")
    cfg = get_settings().http
    client = TestClient(
        handler,
        base_url=cfg.base_url,
        raise_server_exceptions=cfg.raise_server_exceptions,
        follow_redirects=cfg.follow_redirects,
    )
    query = encode_values(values)
    try:
        return client.request(method, url, params=query or None)
    except (httpx.InvalidURL, httpx.HTTPError) as exc:
        raise RequestBuildError(str(exc)) from exc
    finally:
        client.close()


def http_code(handler: ASGIApp, method: str, url: str, values: QueryValues | None) -> int:
    """Return the status code *handler* answers with, or -1 on a build error."""
    try:
        return _perform(handler, method, url, values).status_code
    except RequestBuildError:
        logger.debug("Failed to build test request for %s %s", method, url, exc_info=True)
        return -1


def http_body(handler: ASGIApp, method: str, url: str, values: QueryValues | None) -> str:
    """Return the body *handler* answers with, or an empty string on a build error."""
    try:
        return _perform(handler, method, url, values).text
    except RequestBuildError:
        logger.debug("Failed to build test request for %s %s", method, url, exc_info=True)
        return ""


def _status_check(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None,
    accept: Callable[[int], bool],
    describe: Callable[[int], str],
    *msg_and_args: Any,
) -> bool:
    __tracebackhide__ = True
    try:
        code = _perform(handler, method, url, values).status_code
    except RequestBuildError as exc:
        return fail(reporter, f"Failed to build test request, got error: {exc}", *msg_and_args)
    if not accept(code):
        return fail(reporter, describe(code), *msg_and_args)
    return True


def http_success(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None = None,
    *msg_and_args: Any,
) -> bool:
    """Assert that *handler* answers with a success status code (200-206)."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    uri = request_uri(url, values)
    return _status_check(
        reporter,
        handler,
        method,
        url,
        values,
        lambda code: 200 <= code <= 206,
        lambda code: f'Expected HTTP success status code for "{uri}" but received {code}',
        *msg_and_args,
    )


def http_redirect(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None = None,
    *msg_and_args: Any,
) -> bool:
    """Assert that *handler* answers with a redirect status code (300-307)."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    uri = request_uri(url, values)
    return _status_check(
        reporter,
        handler,
        method,
        url,
        values,
        lambda code: 300 <= code <= 307,
        lambda code: f'Expected HTTP redirect status code for "{uri}" but received {code}',
        *msg_and_args,
    )


def http_error(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None = None,
    *msg_and_args: Any,
) -> bool:
    """Assert that *handler* answers with an error status code (400 and up)."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    uri = request_uri(url, values)
    return _status_check(
        reporter,
        handler,
        method,
        url,
        values,
        lambda code: code >= 400,
        lambda code: f'Expected HTTP error status code for "{uri}" but received {code}',
        *msg_and_args,
    )


def http_status_code(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None,
    status_code: int,
    *msg_and_args: Any,
) -> bool:
    """Assert that *handler* answers with exactly *status_code*."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    uri = request_uri(url, values)
    return _status_check(
        reporter,
        handler,
        method,
        url,
        values,
        lambda code: code == status_code,
        lambda code: f'Expected HTTP status code {status_code} for "{uri}" but received {code}',
        *msg_and_args,
    )


def http_body_contains(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None,
    needle: Any,
    *msg_and_args: Any,
) -> bool:
    """Assert that the response body contains ``str(needle)``."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    body = http_body(handler, method, url, values)
    if str(needle) not in body:
        uri = request_uri(url, values)
        return fail(
            reporter,
            f'Expected response body for "{uri}" to contain "{needle}" but found "{body}"',
            *msg_and_args,
        )
    return True


def http_body_not_contains(
    reporter: Reporter,
    handler: ASGIApp,
    method: str,
    url: str,
    values: QueryValues | None,
    needle: Any,
    *msg_and_args: Any,
) -> bool:
    """Assert that the response body does not contain ``str(needle)``."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()
    body = http_body(handler, method, url, values)
    if str(needle) in body:
        uri = request_uri(url, values)
        return fail(
            reporter,
            f'Expected response body for "{uri}" to NOT contain "{needle}" but found "{body}"',
            *msg_and_args,
        )
    return True
