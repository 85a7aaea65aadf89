"""
Typed request and response records for the Resend API.

Response models are lenient: only ``id`` is required, every other field
defaults to ``None`` so that partially populated records still format.
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ResendModel(BaseModel):
    """Base model accepting both ``from`` and ``from_`` and ignoring unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict:
        """Serialize for a request body, using wire names and dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _coerce_address_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class SendEmailRequest(ResendModel):
    """Outbound email payload for ``POST /emails``."""

    from_: str = Field(alias="from")
    to: List[str]
    subject: str
    html: Optional[str] = None
    text: Optional[str] = None
    scheduled_at: Optional[str] = None

    @field_validator("to")
    @classmethod
    def validate_to(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one recipient is required")
        return v

    @model_validator(mode="after")
    def validate_body(self) -> "SendEmailRequest":
        if self.html is None and self.text is None:
            raise ValueError("either html or text must be provided")
        return self


class UpdateEmailRequest(ResendModel):
    """Fields that can change on a scheduled email."""

    scheduled_at: Optional[str] = None


class CreatedEmail(ResendModel):
    """The ``{"id": ...}`` acknowledgement returned by write operations."""

    id: str


class BatchResponse(ResendModel):
    data: List[CreatedEmail]


class SentEmail(ResendModel):
    """An outbound email as returned by ``GET /emails``."""

    id: str
    from_: Optional[str] = Field(default=None, alias="from")
    to: List[str] = Field(default_factory=list)
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None
    created_at: Optional[str] = None
    last_event: Optional[str] = None
    scheduled_at: Optional[str] = None
    cc: List[str] = Field(default_factory=list)
    bcc: List[str] = Field(default_factory=list)
    reply_to: List[str] = Field(default_factory=list)

    @field_validator("to", "cc", "bcc", "reply_to", mode="before")
    @classmethod
    def normalize_address_lists(cls, v: Any) -> Any:
        return _coerce_address_list(v)


class ReceivedEmail(ResendModel):
    """An inbound email as returned by ``GET /emails/receiving``. Read-only."""

    id: str
    from_: Optional[str] = Field(default=None, alias="from")
    to: List[str] = Field(default_factory=list)
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None
    created_at: Optional[str] = None
    cc: List[str] = Field(default_factory=list)
    bcc: List[str] = Field(default_factory=list)
    reply_to: List[str] = Field(default_factory=list)

    @field_validator("to", "cc", "bcc", "reply_to", mode="before")
    @classmethod
    def normalize_address_lists(cls, v: Any) -> Any:
        return _coerce_address_list(v)


T = TypeVar("T")


class ListPage(ResendModel, Generic[T]):
    """One page of a list endpoint."""

    data: List[T] = Field(default_factory=list)
    has_more: bool = False
