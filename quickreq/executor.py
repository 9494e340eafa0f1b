"""quickreq executor - HTTP request execution."""

from __future__ import annotations

import json
import time
from typing import Any

import requests

from quickreq.errors import ExecutionError, NetworkError, ParseError, ValidationError
from quickreq.models import METHODS, RequestData, ResponseData


class ExecutionResult:
    """Result of one execution: exactly one of response / error is set."""

    def __init__(
        self,
        response: ResponseData | None = None,
        error: ExecutionError | None = None,
    ):
        if (response is None) == (error is None):
            raise ValueError("ExecutionResult needs exactly one of response or error")
        self.response = response
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.error is not None:
            return f"<ExecutionResult error={type(self.error).__name__}: {self.error.message}>"
        return f"<ExecutionResult status={self.response.status} time={self.response.time}ms>"


def build_request_kwargs(request: RequestData, timeout: float | None = None) -> dict[str, Any]:
    """Translate a RequestData into keyword arguments for requests.request.

    Headers are passed verbatim. The body goes out only for non-GET methods
    and only when non-empty.
    """
    kwargs: dict[str, Any] = {
        "method": request.method.upper(),
        "url": request.url,
        "headers": dict(request.headers),
        "timeout": timeout or None,
        "allow_redirects": True,
    }
    if kwargs["method"] != "GET" and request.body:
        kwargs["data"] = request.body.encode("utf-8")
    return kwargs


def execute_request(request: RequestData, timeout: float | None = None) -> ExecutionResult:
    """Execute a request and return a structured result.

    - Validates url and method before any network activity
    - Parses the response body as JSON; a non-JSON body is a ParseError
    - Any received status code (4xx/5xx included) is a response, not an error
    - Elapsed time covers dispatch through JSON parsing
    - Never raises for execution outcomes
    """
    if not request.url:
        return ExecutionResult(error=ValidationError("URL is required", key="urlRequired"))
    if request.method.upper() not in METHODS:
        return ExecutionResult(
            error=ValidationError(f"Unsupported method: {request.method}"),
        )

    kwargs = build_request_kwargs(request, timeout)

    try:
        start = time.monotonic()
        resp = requests.request(**kwargs)
        try:
            data = resp.json()
        except (json.JSONDecodeError, ValueError) as e:
            return ExecutionResult(error=ParseError(f"Response is not valid JSON: {e}"))
        elapsed_ms = int(round((time.monotonic() - start) * 1000))
    except requests.exceptions.Timeout as e:
        return ExecutionResult(error=NetworkError(f"Request timed out: {e}"))
    except requests.exceptions.ConnectionError as e:
        return ExecutionResult(error=NetworkError(f"Connection error: {e}"))
    except requests.exceptions.RequestException as e:
        return ExecutionResult(error=NetworkError(f"Request failed: {e}"))
    except Exception as e:
        return ExecutionResult(error=NetworkError(f"Unexpected error: {e}"))

    response = ResponseData(
        status=resp.status_code,
        status_text=resp.reason or "",
        headers=dict(resp.headers),
        data=data,
        time=max(0, elapsed_ms),
    )
    return ExecutionResult(response=response)
