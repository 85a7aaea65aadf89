"""
Resend API client for Resend CLI.

This module provides a thin synchronous client over the Resend REST API.
Each method issues exactly one HTTP request and returns a typed record;
failures are raised as classified ``ResendError`` instances.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from resend_cli import USER_AGENT
from resend_cli.config.settings import DEFAULT_BASE_URL
from .errors import (
    MalformedResponseError,
    NotFoundError,
    ValidationFailedError,
    classify_error,
    map_http_error,
)
from .models import (
    BatchResponse,
    CreatedEmail,
    ListPage,
    ReceivedEmail,
    SendEmailRequest,
    SentEmail,
    UpdateEmailRequest,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _path_segment(email_id: str) -> str:
    """Escape an email id for use as a single URL path segment."""
    if email_id in ("", ".", ".."):
        raise ValidationFailedError(f"Invalid email id '{email_id}'", field="id")
    return quote(email_id, safe="")


class ResendClient:
    """Client for the Resend emails and receiving endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

        self.base_url = base_url
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def __enter__(self) -> "ResendClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    # Sent emails

    def send_email(self, message: SendEmailRequest) -> CreatedEmail:
        """Send a single email."""
        body = self._request("POST", "/emails", json=message.to_payload())
        return self._parse(CreatedEmail, body)

    def send_batch(self, messages: Sequence[Any]) -> List[CreatedEmail]:
        """
        Send several emails in one request.

        Args:
            messages: ``SendEmailRequest`` models or raw payload dicts, sent
                in the given order

        Returns:
            The created emails, in the order the API reports them
        """
        payload = [
            m.to_payload() if isinstance(m, SendEmailRequest) else m
            for m in messages
        ]
        body = self._request("POST", "/emails/batch", json=payload)
        return self._parse(BatchResponse, body).data

    def list_sent(self, count: int = 10) -> ListPage[SentEmail]:
        """List the most recent sent emails, newest first."""
        body = self._request("GET", "/emails", params={"limit": count})
        page = self._parse(ListPage[SentEmail], body)
        page.data = page.data[:count]
        return page

    def get_sent(self, email_id: str) -> SentEmail:
        """Fetch one sent email by id."""
        body = self._request("GET", f"/emails/{_path_segment(email_id)}")
        return self._parse(SentEmail, body)

    def update_sent(self, email_id: str, update: UpdateEmailRequest) -> CreatedEmail:
        """Update a scheduled email."""
        body = self._request("PATCH", f"/emails/{_path_segment(email_id)}", json=update.to_payload())
        return self._parse(CreatedEmail, body)

    def cancel_sent(self, email_id: str) -> CreatedEmail:
        """Cancel a scheduled email."""
        body = self._request("POST", f"/emails/{_path_segment(email_id)}/cancel")
        return self._parse(CreatedEmail, body)

    # Received emails

    def list_received(self, count: int = 10) -> ListPage[ReceivedEmail]:
        """List the most recent received emails, newest first."""
        body = self._request("GET", "/emails/receiving", params={"limit": count})
        page = self._parse(ListPage[ReceivedEmail], body)
        page.data = page.data[:count]
        return page

    def get_received(self, email_id: str) -> ReceivedEmail:
        """Fetch one received email by id."""
        body = self._request("GET", f"/emails/receiving/{_path_segment(email_id)}")
        return self._parse(ReceivedEmail, body)

    # Internals

    def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body."""
        logger.debug(f"{method} {path} params={params}")
        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            error = classify_error(e)
            logger.debug(f"{method} {path} failed: {error}")
            raise error from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.is_error:
            raise map_http_error(response)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response from {path} is not valid JSON",
                status=response.status_code,
                original_error=e,
            ) from e

    @staticmethod
    def _parse(model: Type[ModelT], body: Any) -> ModelT:
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise classify_error(e) from e


# Newest lookup helpers

def get_newest_sent_email(client: ResendClient) -> SentEmail:
    """
    Fetch the most recently sent email.

    Lists a single-item page to learn the newest id, then fetches that
    email: two sequential requests, not an atomic operation.

    Raises:
        NotFoundError: if there are no sent emails
    """
    page = client.list_sent(1)
    if not page.data:
        raise NotFoundError("No sent emails found", status=None)
    return client.get_sent(page.data[0].id)


def get_newest_received_email(client: ResendClient) -> ReceivedEmail:
    """Fetch the most recently received email. See ``get_newest_sent_email``."""
    page = client.list_received(1)
    if not page.data:
        raise NotFoundError("No received emails found", status=None)
    return client.get_received(page.data[0].id)


def create_resend_client(
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 30.0,
    **kwargs
) -> ResendClient:
    """Create a Resend client with the given configuration."""
    return ResendClient(api_key=api_key, base_url=base_url, timeout=timeout, **kwargs)
