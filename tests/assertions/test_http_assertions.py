"""Tests for the HTTP handler assertions."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.testclient import TestClient

from assertkit.assertions.http import (
    encode_values,
    handler_func,
    http_body,
    http_body_contains,
    http_body_not_contains,
    http_code,
    http_error,
    http_redirect,
    http_status_code,
    http_success,
    request_uri,
)
from assertkit.reporters import RecordingReporter


def _ok(request: Request) -> Response:
    return Response(status_code=200)


async def _read_body(request: Request) -> Response:
    await request.body()
    return PlainTextResponse("hello")


def _redirect(request: Request) -> Response:
    return Response(status_code=307, headers={"location": "/elsewhere"})


def _error(request: Request) -> Response:
    return Response(status_code=500)


def _switching_protocols(request: Request) -> Response:
    return Response(status_code=101)


def _hello_name(request: Request) -> Response:
    return PlainTextResponse(f"Hello, {request.query_params.get('name', '')}!")


def _explode(request: Request) -> Response:
    raise RuntimeError("handler crashed")


http_ok = handler_func(_ok)
http_read_body = handler_func(_read_body)
http_redirect_handler = handler_func(_redirect)
http_error_handler = handler_func(_error)
http_status_handler = handler_func(_switching_protocols)
http_hello_name = handler_func(_hello_name)


class TestHttpSuccess:
    def test_ok(self, recorder: RecordingReporter) -> None:
        assert http_success(recorder, http_ok, "GET", "/", None) is True
        assert not recorder.failed

    def test_redirect_fails(self, recorder: RecordingReporter) -> None:
        assert http_success(recorder, http_redirect_handler, "GET", "/", None) is False
        assert recorder.failed

    def test_error_fails_with_message(self, recorder: RecordingReporter) -> None:
        result = http_success(
            recorder, http_error_handler, "GET", "/", None, "was not expecting a failure here"
        )
        assert result is False
        assert "was not expecting a failure here" in recorder.output()
        assert 'Expected HTTP success status code for "/" but received 500' in recorder.output()

    def test_informational_fails(self, recorder: RecordingReporter) -> None:
        assert http_success(recorder, http_status_handler, "GET", "/", None) is False

    def test_post_reading_body(self, recorder: RecordingReporter) -> None:
        assert http_success(recorder, http_read_body, "POST", "/", None) is True
        assert not recorder.failed

    def test_marks_helper(self, recorder: RecordingReporter) -> None:
        http_success(recorder, http_error_handler, "GET", "/")
        assert "assertkit.assertions.http.http_success" in recorder.helpers


class TestHttpRedirect:
    def test_ok_fails_with_message(self, recorder: RecordingReporter) -> None:
        result = http_redirect(
            recorder, http_ok, "GET", "/", None, "was expecting a 3xx status code. Got 200."
        )
        assert result is False
        assert "was expecting a 3xx status code. Got 200." in recorder.output()

    def test_redirect(self, recorder: RecordingReporter) -> None:
        assert http_redirect(recorder, http_redirect_handler, "GET", "/", None) is True
        assert not recorder.failed

    def test_error_fails(self, recorder: RecordingReporter) -> None:
        assert http_redirect(recorder, http_error_handler, "GET", "/", None) is False

    def test_informational_fails(self, recorder: RecordingReporter) -> None:
        assert http_redirect(recorder, http_status_handler, "GET", "/", None) is False


class TestHttpError:
    def test_ok_fails(self, recorder: RecordingReporter) -> None:
        assert http_error(recorder, http_ok, "GET", "/", None) is False

    def test_redirect_fails_with_message(self, recorder: RecordingReporter) -> None:
        result = http_error(
            recorder,
            http_redirect_handler,
            "GET",
            "/",
            None,
            "Expected this request to error out. But it didn't",
        )
        assert result is False
        assert "Expected this request to error out. But it didn't" in recorder.output()

    def test_error(self, recorder: RecordingReporter) -> None:
        assert http_error(recorder, http_error_handler, "GET", "/", None) is True

    def test_informational_fails(self, recorder: RecordingReporter) -> None:
        assert http_error(recorder, http_status_handler, "GET", "/", None) is False

    def test_handler_exception_is_server_error(self, recorder: RecordingReporter) -> None:
        assert http_error(recorder, handler_func(_explode), "GET", "/", None) is True


class TestHttpStatusCode:
    def test_ok_fails(self, recorder: RecordingReporter) -> None:
        assert http_status_code(recorder, http_ok, "GET", "/", None, 101) is False

    def test_redirect_fails(self, recorder: RecordingReporter) -> None:
        assert http_status_code(recorder, http_redirect_handler, "GET", "/", None, 101) is False

    def test_formatted_message(self, recorder: RecordingReporter) -> None:
        result = http_status_code(
            recorder,
            http_error_handler,
            "GET",
            "/",
            None,
            101,
            "Expected the status code to be %d",
            101,
        )
        assert result is False
        assert "Expected the status code to be 101" in recorder.output()
        assert 'Expected HTTP status code 101 for "/" but received 500' in recorder.output()

    def test_exact_match(self, recorder: RecordingReporter) -> None:
        assert http_status_code(recorder, http_status_handler, "GET", "/", None, 101) is True


class TestHttpRequestBuilding:
    def test_no_params(self, recorder: RecordingReporter) -> None:
        seen: list[Request] = []

        def capture(request: Request) -> Response:
            seen.append(request)
            return Response(status_code=200)

        assert http_success(recorder, handler_func(capture), "GET", "/url", None)
        assert seen[0].url.path == "/url"
        assert not seen[0].query_params

    def test_with_params(self, recorder: RecordingReporter) -> None:
        seen: list[Request] = []

        def capture(request: Request) -> Response:
            seen.append(request)
            return Response(status_code=200)

        assert http_success(recorder, handler_func(capture), "GET", "/url", {"id": "12345"})
        assert dict(seen[0].query_params) == {"id": "12345"}
        assert seen[0].url.path == "/url"
        assert seen[0].url.query == "id=12345"

    def test_encode_values_sorted_and_repeated(self) -> None:
        assert encode_values({"b": "2", "a": ["1", "x y"]}) == "a=1&a=x+y&b=2"
        assert encode_values(None) == ""

    def test_request_uri(self) -> None:
        assert request_uri("/url", {"id": "12345"}) == "/url?id=12345"
        assert request_uri("/url", None) == "/url"

    def test_http_code(self) -> None:
        assert http_code(http_redirect_handler, "GET", "/", None) == 307

    def test_http_body(self) -> None:
        assert http_body(http_hello_name, "GET", "/", {"name": "World"}) == "Hello, World!"


class TestHttpBody:
    def test_contains(self, recorder: RecordingReporter) -> None:
        values = {"name": ["World"]}
        assert http_body_contains(recorder, http_hello_name, "GET", "/", values, "Hello, World!")
        assert http_body_contains(recorder, http_hello_name, "GET", "/", values, "World")
        assert not http_body_contains(recorder, http_hello_name, "GET", "/", values, "world")
        assert (
            'Expected response body for "/?name=World" to contain "world" '
            'but found "Hello, World!"'
        ) in recorder.output()

    def test_not_contains(self, recorder: RecordingReporter) -> None:
        values = {"name": ["World"]}
        assert not http_body_not_contains(
            recorder, http_hello_name, "GET", "/", values, "Hello, World!"
        )
        assert not http_body_not_contains(
            recorder,
            http_hello_name,
            "GET",
            "/",
            values,
            "World",
            "Expected the request body to not contain 'World'. But it did.",
        )
        assert http_body_not_contains(recorder, http_hello_name, "GET", "/", values, "world")
        assert "Expected the request body to not contain 'World'. But it did." in recorder.output()
        assert "to NOT contain" in recorder.output()

    def test_reads_request_body(self, recorder: RecordingReporter) -> None:
        assert http_body_contains(recorder, http_read_body, "GET", "/", None, "hello")

    def test_non_string_needle(self, recorder: RecordingReporter) -> None:
        digits = handler_func(lambda request: PlainTextResponse("code 42"))
        assert http_body_contains(recorder, digits, "GET", "/", None, 42)


class TestRequestBuildFailures:
    BAD_URL = "http://[::1"

    def test_http_code_is_minus_one(self) -> None:
        assert http_code(http_ok, "GET", self.BAD_URL, None) == -1

    def test_http_body_is_empty(self) -> None:
        assert http_body(http_hello_name, "GET", self.BAD_URL, None) == ""

    @pytest.mark.parametrize("assertion", [http_success, http_redirect, http_error])
    def test_status_assertions_report(
        self, recorder: RecordingReporter, assertion: Callable[..., bool]
    ) -> None:
        assert assertion(recorder, http_ok, "GET", self.BAD_URL, None) is False
        assert "Failed to build test request, got error: " in recorder.output()

    def test_status_code_reports(self, recorder: RecordingReporter) -> None:
        assert http_status_code(recorder, http_ok, "GET", self.BAD_URL, None, 200) is False
        assert "Failed to build test request, got error: " in recorder.output()

    @pytest.mark.parametrize("method", ["G ET", "", "GET\r\n", "GE(T"])
    def test_invalid_method(self, recorder: RecordingReporter, method: str) -> None:
        assert http_code(http_ok, method, "/", None) == -1
        assert http_success(recorder, http_ok, method, "/", None) is False
        assert (
            f"Failed to build test request, got error: invalid method {method!r}"
            in recorder.output()
        )

    def test_extension_method_accepted(self, recorder: RecordingReporter) -> None:
        assert http_success(recorder, http_ok, "PURGE", "/", None)


class TestClientLifetime:
    def test_client_closed_after_each_request(self, monkeypatch: pytest.MonkeyPatch) -> None:
        closed: list[TestClient] = []
        original_close = TestClient.close

        def tracking_close(self: TestClient) -> None:
            closed.append(self)
            original_close(self)

        monkeypatch.setattr(TestClient, "close", tracking_close)
        assert http_code(http_ok, "GET", "/", None) == 200
        assert http_code(http_ok, "GET", "http://[::1", None) == -1
        assert len(closed) == 2
