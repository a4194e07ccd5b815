"""
Identity error taxonomy (single entry point).

- **Base class**: every failure raised by the identity client inherits `IdentityError`,
  so callers can catch the whole family with one clause.
- **Boundary mapping**: `to_transport_error` is the only place `httpx` failures are
  converted into the local taxonomy.

All errors are terminal: nothing in this package retries. A fresh authorization code
is needed to restart the flow after an `authenticate` failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

import httpx

if TYPE_CHECKING:
    from identity_gate.core.oauth.models import ProviderError

# Raw bodies carried by DecodeError are cut to this length in str()
_BODY_PREVIEW_LIMIT = 200


class IdentityError(Exception):
    """Base class for identity client failures."""

    message: str

    def __init__(self, message: str = "Identity provider request failed"):
        super().__init__(message)
        self.message = message


class TransportError(IdentityError):
    """The request could not be sent or its response could not be read."""

    def __init__(self, message: str = "Identity provider unreachable"):
        super().__init__(message)


class HttpError(IdentityError):
    """The token exchange came back with a non-success HTTP status."""

    status_code: int

    def __init__(self, status_code: int):
        super().__init__(f"Token exchange rejected with HTTP {status_code}")
        self.status_code = status_code


class AuthProviderError(IdentityError):
    """The token endpoint answered with a structured error body."""

    error: "ProviderError"

    def __init__(self, error: "ProviderError"):
        super().__init__(str(error))
        self.error = error

    @property
    def error_code(self) -> str:
        return self.error.error

    @property
    def description(self) -> str:
        return self.error.error_description

    @property
    def uri(self) -> str:
        return self.error.error_uri


class MissingScope(IdentityError):
    """The grant does not include a scope the client requires."""

    scope: str

    def __init__(self, scope: str):
        super().__init__(f"Missing OAuth scope: {scope}")
        self.scope = scope


class ApiError(IdentityError):
    """A resource endpoint rejected the request with a decodable error body."""

    body: Dict[str, str]

    def __init__(self, body: Dict[str, str]):
        message = body.get("message") or ", ".join(f"{k}={v}" for k, v in body.items())
        super().__init__(f"Identity provider API error: {message or 'unknown'}")
        self.body = body


class DecodeError(IdentityError):
    """A response body matched none of the shapes expected for it."""

    body: str

    def __init__(self, body: str = "", *, expected: Optional[str] = None):
        preview = body if len(body) <= _BODY_PREVIEW_LIMIT else f"{body[:_BODY_PREVIEW_LIMIT]}..."
        target = f" as {expected}" if expected else ""
        super().__init__(f"Unable to decode provider response{target}: {preview!r}")
        self.body = body
        self.expected = expected


def to_transport_error(exc: httpx.HTTPError) -> TransportError:
    """Convert an httpx failure into a `TransportError`, keeping the original as cause."""
    if isinstance(exc, httpx.TimeoutException):
        message = f"Identity provider timed out: {type(exc).__name__}"
    elif isinstance(exc, httpx.ConnectError):
        message = "Identity provider connection failed"
    else:
        message = f"Identity provider request failed: {str(exc) or type(exc).__name__}"
    error = TransportError(message)
    error.__cause__ = exc
    return error


__all__ = [
    "IdentityError",
    "TransportError",
    "HttpError",
    "AuthProviderError",
    "MissingScope",
    "ApiError",
    "DecodeError",
    "to_transport_error",
]
