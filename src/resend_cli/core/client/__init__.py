"""
Resend API client package for Resend CLI.

This package provides the HTTP client, the typed request/response records
and the structured error kinds used by every command.
"""

from .errors import (
    ResendError,
    NotConfiguredError,
    AuthenticationError,
    NotFoundError,
    ValidationFailedError,
    NetworkError,
    MalformedResponseError,
    FileAccessError,
    ApiError,
    classify_error,
    map_http_error,
    create_user_friendly_message,
)
from .models import (
    SendEmailRequest,
    UpdateEmailRequest,
    CreatedEmail,
    SentEmail,
    ReceivedEmail,
    ListPage,
)
from .resend_client import (
    ResendClient,
    create_resend_client,
    get_newest_sent_email,
    get_newest_received_email,
)

__all__ = [
    # Errors
    "ResendError",
    "NotConfiguredError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationFailedError",
    "NetworkError",
    "MalformedResponseError",
    "FileAccessError",
    "ApiError",
    "classify_error",
    "map_http_error",
    "create_user_friendly_message",
    # Models
    "SendEmailRequest",
    "UpdateEmailRequest",
    "CreatedEmail",
    "SentEmail",
    "ReceivedEmail",
    "ListPage",
    # Client
    "ResendClient",
    "create_resend_client",
    "get_newest_sent_email",
    "get_newest_received_email",
]
