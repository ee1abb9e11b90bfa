"""Exception hierarchy for the Direct Decisions client.

Two families hang off :class:`DirectDecisionsError`:

* :class:`ApiError` -- semantic failures reported by the API (bad input,
  authentication, missing resources, rate limiting, server faults).
* :class:`TransportError` -- connectivity problems, undecodable success
  bodies and transient gateway failures (502/503). Callers may retry these.
"""

from __future__ import annotations

from ddclient.models import Rate, ValidationErrorCode


class DirectDecisionsError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# API errors
# ---------------------------------------------------------------------------


class ApiError(DirectDecisionsError):
    """Base class for errors derived from the response status code."""


class BadRequestError(ApiError):
    """Raised on 400 responses.

    ``errors`` holds the recognized validation codes, in the order the server
    listed them. Unrecognized strings are dropped, so an empty list can mean
    either an unparseable body or one with no known codes.
    """

    def __init__(self, errors: list[ValidationErrorCode]) -> None:
        self.errors = list(errors)
        detail = ", ".join(code.value for code in self.errors)
        super().__init__(f"Bad Request: [{detail}]", 400)


class UnauthorizedError(ApiError):
    """Raised on 401 responses."""

    def __init__(self) -> None:
        super().__init__("Unauthorized", 401)


class ForbiddenError(ApiError):
    """Raised on 403 responses."""

    def __init__(self) -> None:
        super().__init__("Forbidden", 403)


class NotFoundError(ApiError):
    """Raised on 404 responses."""

    def __init__(self) -> None:
        super().__init__("Not Found", 404)


class MethodNotAllowedError(ApiError):
    """Raised on 405 responses."""

    def __init__(self) -> None:
        super().__init__("Method Not Allowed", 405)


class TooManyRequestsError(ApiError):
    """Raised on 429 responses."""

    def __init__(self, rate: Rate | None = None) -> None:
        super().__init__("Too many requests", 429)
        self.rate = rate


class InternalServerError(ApiError):
    """Raised on 500 responses; ``body`` is the raw response text."""

    def __init__(self, body: str) -> None:
        self.body = body
        super().__init__(f"Internal Server Error: {body}", 500)


class OtherError(ApiError):
    """Raised for any status code without a dedicated mapping."""

    def __init__(self, status_code: int, body: str) -> None:
        self.body = body
        super().__init__(f"Other Error: {body}", status_code)


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class TransportError(DirectDecisionsError):
    """Base class for failures that are not API-semantic errors."""


class HttpRequestError(TransportError):
    """The HTTP exchange itself failed (DNS, TLS, timeout, reset...)."""

    def __init__(self, description: str) -> None:
        super().__init__(f"HTTP Request Error: {description}")
        self.description = description


class DecodeError(TransportError):
    """A 200 response body did not match the expected shape."""

    def __init__(self, description: str) -> None:
        super().__init__(f"Decode Error: {description}", 200)
        self.description = description


class BadGatewayError(TransportError):
    """Raised on 502 responses."""

    def __init__(self) -> None:
        super().__init__("Bad Gateway", 502)


class ServiceUnavailableError(TransportError):
    """Raised on 503 responses."""

    def __init__(self) -> None:
        super().__init__("Service Unavailable", 503)
