"""
Input validation for CLI commands.

Everything here runs before the API key is loaded or a request is made,
so bad input never costs a network call.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple

from pydantic import ValidationError

from ..core.client.errors import FileAccessError, ValidationFailedError
from ..core.client.models import SendEmailRequest, UpdateEmailRequest

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10


def parse_recipients(value: str) -> List[str]:
    """Split a comma separated recipient list, dropping blanks."""
    recipients = [part.strip() for part in value.split(",")]
    recipients = [r for r in recipients if r]
    if not recipients:
        raise ValidationFailedError("At least one recipient is required (--to)", field="to")
    return recipients


def resolve_body(
    html: Optional[str],
    text: Optional[str],
    from_stdin: bool,
    stdin: TextIO,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Decide the email body.

    Explicit ``--html``/``--text`` win. Otherwise, with ``--from-stdin``,
    standard input is read to EOF and used as HTML.

    Returns:
        ``(html, text)`` with at least one of them set
    """
    if html is not None or text is not None:
        return html, text

    if from_stdin:
        body = stdin.read()
        if not body.strip():
            raise ValidationFailedError("No body supplied: standard input was empty", field="body")
        return body, None

    raise ValidationFailedError(
        "No body supplied. Use --html, --text or --from-stdin",
        field="body"
    )


def parse_count(value: Optional[str]) -> int:
    """Parse a list size argument; defaults to 10 and must be a positive integer."""
    if value is None:
        return DEFAULT_COUNT

    digits = value.strip()
    # int() would also accept signs, underscores and non-ASCII digits
    if not (digits.isascii() and digits.isdigit()):
        raise ValidationFailedError(f"Invalid count '{value}': expected a positive integer", field="count")

    count = int(digits)
    if count < 1:
        raise ValidationFailedError(f"Invalid count '{value}': expected a positive integer", field="count")
    return count


def build_send_request(
    from_: str,
    to: str,
    subject: str,
    html: Optional[str],
    text: Optional[str],
    scheduled_at: Optional[str] = None,
) -> SendEmailRequest:
    recipients = parse_recipients(to)
    if not from_.strip():
        raise ValidationFailedError("Sender is required (--from)", field="from")
    try:
        return SendEmailRequest(
            from_=from_,
            to=recipients,
            subject=subject,
            html=html,
            text=text,
            scheduled_at=scheduled_at,
        )
    except ValidationError as e:
        raise ValidationFailedError(f"Invalid email: {e.errors()[0]['msg']}") from e


def build_update(scheduled_at: Optional[str]) -> UpdateEmailRequest:
    """Build an update payload, requiring at least one field to change."""
    if scheduled_at is None or not scheduled_at.strip():
        raise ValidationFailedError("Nothing to update. Use --scheduled-at", field="scheduled_at")
    return UpdateEmailRequest(scheduled_at=scheduled_at.strip())


def load_batch_file(path: Path) -> List[Dict[str, Any]]:
    """
    Load a batch file: a JSON array of email objects.

    Items are returned verbatim and in file order; their fields are
    validated by the API, not here.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Could not read batch file: {e}", path=str(path), original_error=e) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationFailedError(f"Batch file {path} is not valid JSON: {e}", field="file") from e

    if not isinstance(data, list):
        raise ValidationFailedError(f"Batch file {path} must contain a JSON array", field="file")
    if not data:
        raise ValidationFailedError(f"Batch file {path} contains no emails", field="file")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValidationFailedError(
                f"Batch item {index} in {path} is not a JSON object",
                field="file"
            )

    logger.debug(f"Loaded {len(data)} emails from {path}")
    return data
