"""
Structured error system for the Resend API client.

Every failure a command can hit is represented by a ``ResendError``
subclass, so the CLI can report it as a single line and pick an exit code
without inspecting HTTP details.
"""

from typing import Any, Dict, Optional
import json
import logging

import httpx
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ResendError(Exception):
    """Base exception for all Resend CLI errors."""

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.status:
            parts.append(f"(Status: {self.status})")
        if self.code:
            parts.append(f"(Code: {self.code})")
        return " ".join(parts)


class NotConfiguredError(ResendError):
    """No API key has been saved yet."""

    def __init__(
        self,
        message: str = "No API key configured. Run `resend-cli config` first.",
        path: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="NOT_CONFIGURED", **kwargs)
        if path:
            self.details["path"] = path


class AuthenticationError(ResendError):
    """The provider rejected the API key (HTTP 401/403)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        status: int = 401,
        **kwargs
    ):
        super().__init__(message, status=status, code="AUTHENTICATION_ERROR", **kwargs)


class NotFoundError(ResendError):
    """The requested email does not exist (HTTP 404 or an empty newest lookup)."""

    def __init__(
        self,
        message: str = "Email not found",
        resource_id: Optional[str] = None,
        **kwargs
    ):
        kwargs.setdefault("status", 404)
        super().__init__(message, code="NOT_FOUND", **kwargs)
        if resource_id:
            self.details["id"] = resource_id


class ValidationFailedError(ResendError):
    """Invalid command input, detected before any request is made."""

    exit_code = 2

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="VALIDATION_FAILED", **kwargs)
        if field:
            self.details["field"] = field


class NetworkError(ResendError):
    """Error for connection failures and timeouts."""

    def __init__(
        self,
        message: str = "Network error",
        **kwargs
    ):
        super().__init__(message, code="NETWORK_ERROR", **kwargs)


class MalformedResponseError(ResendError):
    """The provider answered with a body this client cannot interpret."""

    def __init__(
        self,
        message: str = "Malformed response from the Resend API",
        **kwargs
    ):
        super().__init__(message, code="MALFORMED_RESPONSE", **kwargs)


class FileAccessError(ResendError):
    """Reading or writing a local file (credentials, batch input) failed."""

    def __init__(
        self,
        message: str = "File access error",
        path: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="FILE_ACCESS_ERROR", **kwargs)
        if path:
            self.details["path"] = path


class ApiError(ResendError):
    """Any other non-success answer from the API."""

    def __init__(
        self,
        message: str = "API error",
        code: str = "API_ERROR",
        **kwargs
    ):
        super().__init__(message, code=code, **kwargs)


def _extract_api_message(response: httpx.Response) -> str:
    """Pull the provider's error message out of a response body."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.text.strip() or response.reason_phrase

    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str) and message:
            return message
    return response.reason_phrase


def map_http_error(response: httpx.Response) -> ResendError:
    """
    Map a non-success HTTP response to an error kind.

    Args:
        response: The failed response

    Returns:
        Classified ResendError instance
    """
    status_code = response.status_code
    message = _extract_api_message(response)

    if status_code in (401, 403):
        return AuthenticationError(
            f"Authentication failed: {message}. Check your API key with `resend-cli config`",
            status=status_code
        )
    elif status_code == 404:
        return NotFoundError(f"Not found: {message}")
    elif status_code in (400, 422):
        return ApiError(f"Invalid request: {message}", code="INVALID_REQUEST", status=status_code)
    elif status_code == 429:
        return ApiError(f"Rate limit exceeded: {message}", code="RATE_LIMITED", status=status_code)
    elif 500 <= status_code < 600:
        return ApiError(f"Server error: {message}", code="SERVER_ERROR", status=status_code)
    else:
        return ApiError(f"HTTP {status_code} error: {message}", status=status_code)


def classify_error(error: Exception) -> ResendError:
    """
    Classify a generic exception into a structured ResendError.

    Args:
        error: The original exception

    Returns:
        Classified ResendError instance
    """
    if isinstance(error, ResendError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        return map_http_error(error.response)

    if isinstance(error, httpx.TimeoutException):
        return NetworkError(f"Request timed out: {error}", original_error=error)

    if isinstance(error, httpx.TransportError):
        return NetworkError(f"Could not reach the Resend API: {error}", original_error=error)

    if isinstance(error, (ValidationError, json.JSONDecodeError)):
        return MalformedResponseError(
            f"Unexpected response shape: {error}".splitlines()[0],
            original_error=error
        )

    if isinstance(error, OSError):
        return FileAccessError(str(error), path=getattr(error, "filename", None), original_error=error)

    return ResendError(str(error), original_error=error)


def create_user_friendly_message(error: ResendError) -> str:
    """
    Create a single-line user-facing message for an error.

    Args:
        error: The ResendError to convert

    Returns:
        Message text, without an "Error:" prefix
    """
    if isinstance(error, NetworkError):
        message = f"{error.message}. Please check your internet connection and try again."
    elif isinstance(error, FileAccessError):
        path = error.details.get("path")
        message = f"{error.message} ({path})" if path and str(path) not in error.message else error.message
    else:
        message = error.message

    return " ".join(message.split())
