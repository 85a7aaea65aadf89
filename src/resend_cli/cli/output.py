"""
Output formatting for Resend CLI.

Formatters are pure: they turn records into lines of text and leave
printing to the caller.
"""

from typing import List, Sequence, Union

from ..core.client.models import CreatedEmail, ReceivedEmail, SentEmail

EmailRecord = Union[SentEmail, ReceivedEmail]

NO_BODY = "(no body)"


def format_created(created: CreatedEmail) -> str:
    return f"Email sent: {created.id}"


def format_batch(created: Sequence[CreatedEmail]) -> List[str]:
    return [format_created(c) for c in created]


def format_email_line(email: EmailRecord) -> str:
    """One summary line for list output."""
    return (
        f"ID: {email.id}, "
        f"Created: {email.created_at or '-'}, "
        f"From: {email.from_ or '-'}, "
        f"Subject: {email.subject or ''}"
    )


def format_email_list(emails: Sequence[EmailRecord]) -> List[str]:
    """One line per email, no header, so the line count equals the item count."""
    return [format_email_line(email) for email in emails]


def email_body(email: EmailRecord) -> str:
    """The body to display: HTML when present, otherwise plain text."""
    if email.html:
        return email.html
    if email.text:
        return email.text
    return NO_BODY


def format_email_detail(email: EmailRecord) -> List[str]:
    """Headers, then the subject, then the body."""
    lines = [
        f"ID: {email.id}",
        f"From: {email.from_ or '-'}",
        f"To: {', '.join(email.to) or '-'}",
        f"Created: {email.created_at or '-'}",
    ]
    if isinstance(email, SentEmail):
        if email.scheduled_at:
            lines.append(f"Scheduled: {email.scheduled_at}")
        if email.last_event:
            lines.append(f"Status: {email.last_event}")

    lines.append(f"Subject: {email.subject or ''}")
    lines.append("")
    lines.append(email_body(email))
    return lines
