"""
IamResponding client error classes.

Every failure raised by the client derives from ``IamRespondingError`` and
carries a ``context`` mapping naming the operation and URL involved.
Cancellation is not an error of this family: ``asyncio.CancelledError``
propagates untouched.
"""

from __future__ import annotations

from typing import Any


class IamRespondingError(Exception):
    """Base exception for all IamResponding client errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"error": self.message, "type": type(self).__name__}
        if self.context:
            result["context"] = self.context
        return result


class TransportError(IamRespondingError):
    """DNS, connect, timeout or protocol failure below the HTTP status level."""


class AuthenticationError(IamRespondingError):
    """The login endpoint answered, but did not confirm the login."""


class HandshakeError(IamRespondingError):
    """A handshake step could not be completed (e.g. unparseable login page)."""

    def __init__(self, message: str, state: str, context: dict[str, Any] | None = None):
        super().__init__(message, context)
        self.state = state


class HTTPStatusError(IamRespondingError):
    """Non-200 response to an API call."""

    def __init__(self, status_code: int, url: str, context: dict[str, Any] | None = None):
        super().__init__(f"HTTP Status {status_code}", {"url": url, **(context or {})})
        self.status_code = status_code
        self.url = url

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.status_code
        return result


class DecodeError(IamRespondingError):
    """Response body is not JSON or does not fit the expected record shape."""

    def __init__(self, message: str, url: str, context: dict[str, Any] | None = None):
        super().__init__(message, {"url": url, **(context or {})})
        self.url = url
