"""
Main CLI application entry point.

This module contains the main Typer application and command handlers
for Resend CLI. Each handler validates its input first, then loads the
API key, then talks to the API; any ``ResendError`` is reported as one
line on stderr with a non-zero exit code.
"""

from enum import Enum
from pathlib import Path
from typing import Iterable, NoReturn, Optional
import logging

import typer
from click.shell_completion import get_completion_class
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer.completion import completion_init
from typer.main import get_command as get_click_command

from resend_cli import VERSION, PACKAGE_NAME
from resend_cli.config.settings import ResendCliSettings
from resend_cli.config.store import CredentialStore, resolve_api_key
from resend_cli.core.client import (
    ResendClient,
    ResendError,
    create_resend_client,
    create_user_friendly_message,
    get_newest_received_email,
    get_newest_sent_email,
)
from resend_cli.cli.inputs import (
    build_send_request,
    build_update,
    load_batch_file,
    parse_count,
    resolve_body,
)
from resend_cli.cli.output import (
    format_batch,
    format_created,
    format_email_detail,
    format_email_list,
)

logger = logging.getLogger(__name__)

# Create the main Typer application
app = typer.Typer(
    name="resend-cli",
    help="Resend CLI - send and inspect emails with the Resend API",
    add_completion=False,
    rich_markup_mode="rich",
)

# Typer only registers its completion classes with click when add_completion is on
completion_init()

# Rich consoles: command output on stdout, errors and logs on stderr
console = Console(emoji=False, highlight=False)
err_console = Console(stderr=True, emoji=False, highlight=False)


class Shell(str, Enum):
    """Shells a completion script can be generated for."""
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold blue]Resend CLI[/bold blue] version [green]{VERSION}[/green]")
        raise typer.Exit()


def _fail(error: ResendError) -> NoReturn:
    """Report an error on stderr and exit with its code."""
    logger.debug(f"Command failed: {error!r}", exc_info=error)
    err_console.print(
        f"[red]Error:[/red] {escape(create_user_friendly_message(error))}",
        soft_wrap=True,
    )
    raise typer.Exit(error.exit_code)


def _echo_lines(lines: Iterable[str]) -> None:
    # Written unchanged: no markup, tab expansion or carriage return handling
    for line in lines:
        typer.echo(line)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if level == "DEBUG" else logging.WARNING)


def _settings(ctx: typer.Context) -> ResendCliSettings:
    return ctx.obj


def _open_client(ctx: typer.Context) -> ResendClient:
    """Load the API key once and build the client for this invocation."""
    settings = _settings(ctx)
    api_key = resolve_api_key(settings)
    return create_resend_client(api_key, base_url=settings.base_url, timeout=settings.timeout)


@app.callback()
def app_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    debug: bool = typer.Option(False, "--debug", help="Log HTTP requests and other details to stderr"),
) -> None:
    """
    Resend CLI - send and inspect emails with the Resend API.

    Save your API key once with [cyan]resend-cli config[/cyan], then use the
    other commands.
    """
    try:
        settings = ResendCliSettings()
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(e.errors()[0]['msg']))}")
        raise typer.Exit(2)

    if debug:
        settings.debug = True
    _configure_logging(settings.effective_log_level)
    logger.debug(f"Settings: {settings.to_dict()}")
    ctx.obj = settings


@app.command("config")
def config_command(
    ctx: typer.Context,
    key: Optional[str] = typer.Option(None, "--key", "-k", help="API key to save (prompted for if omitted)"),
) -> None:
    """Save your API key for reuse."""
    try:
        if key is None:
            key = typer.prompt("Enter your Resend API key (starts with re_)", hide_input=True)
        if not key.strip().startswith("re_"):
            err_console.print("[yellow]Warning:[/yellow] Resend API keys usually start with 're_'")

        path = CredentialStore.from_settings(_settings(ctx)).save(key)
        console.print(f"[green]✓[/green] API key saved to {escape(str(path))}", soft_wrap=True)
    except ResendError as e:
        _fail(e)


@app.command("send")
def send_command(
    ctx: typer.Context,
    from_: str = typer.Option(..., "--from", "-f", help='Sender, e.g. "Acme <no-reply@acme.com>"'),
    to: str = typer.Option(..., "--to", "-t", help="Recipients, comma separated"),
    subject: str = typer.Option(..., "--subject", "-s", help="Subject line"),
    html: Optional[str] = typer.Option(None, "--html", help="HTML body"),
    text: Optional[str] = typer.Option(None, "--text", help="Plain text body"),
    from_stdin: bool = typer.Option(False, "--from-stdin", help="Read the HTML body from standard input"),
    scheduled_at: Optional[str] = typer.Option(
        None, "--scheduled-at", help='Schedule delivery, e.g. "in 1 hour" or an ISO 8601 timestamp'
    ),
) -> None:
    """Send one email (body from --html, --text, or stdin)."""
    try:
        html_body, text_body = resolve_body(html, text, from_stdin, typer.get_text_stream("stdin"))
        request = build_send_request(from_, to, subject, html_body, text_body, scheduled_at)

        with _open_client(ctx) as client:
            created = client.send_email(request)
        _echo_lines([format_created(created)])
    except ResendError as e:
        _fail(e)


@app.command("batch")
def batch_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON file holding an array of emails"),
) -> None:
    """Send a batch of emails from a JSON file in a single request."""
    try:
        messages = load_batch_file(file)

        with _open_client(ctx) as client:
            created = client.send_batch(messages)
        _echo_lines(format_batch(created))
    except ResendError as e:
        _fail(e)


@app.command("list")
def list_command(
    ctx: typer.Context,
    count: Optional[str] = typer.Argument(None, metavar="[COUNT]", help="Number of emails to show (default 10)"),
) -> None:
    """List sent emails."""
    try:
        limit = parse_count(count)

        with _open_client(ctx) as client:
            page = client.list_sent(limit)
        _echo_lines(format_email_list(page.data))
    except ResendError as e:
        _fail(e)


@app.command("get")
def get_command(
    ctx: typer.Context,
    email_id: Optional[str] = typer.Argument(None, metavar="[ID]", help="Email id (default: the newest)"),
) -> None:
    """Show a sent email."""
    try:
        with _open_client(ctx) as client:
            email = client.get_sent(email_id) if email_id else get_newest_sent_email(client)
        _echo_lines(format_email_detail(email))
    except ResendError as e:
        _fail(e)


@app.command("update")
def update_command(
    ctx: typer.Context,
    email_id: str = typer.Argument(..., metavar="ID", help="Email id"),
    scheduled_at: Optional[str] = typer.Option(
        None, "--scheduled-at", "-s", help='New delivery time, e.g. "in 1 hour" or an ISO 8601 timestamp'
    ),
) -> None:
    """Update a scheduled email."""
    try:
        update = build_update(scheduled_at)

        with _open_client(ctx) as client:
            updated = client.update_sent(email_id, update)
        _echo_lines([f"Updated: {updated.id}"])
    except ResendError as e:
        _fail(e)


@app.command("cancel")
def cancel_command(
    ctx: typer.Context,
    email_id: str = typer.Argument(..., metavar="ID", help="Email id"),
) -> None:
    """Cancel a scheduled email."""
    try:
        with _open_client(ctx) as client:
            canceled = client.cancel_sent(email_id)
        _echo_lines([f"Canceled: {canceled.id}"])
    except ResendError as e:
        _fail(e)


@app.command("received-list")
def received_list_command(
    ctx: typer.Context,
    count: Optional[str] = typer.Argument(None, metavar="[COUNT]", help="Number of emails to show (default 10)"),
) -> None:
    """List received emails (inbox)."""
    try:
        limit = parse_count(count)

        with _open_client(ctx) as client:
            page = client.list_received(limit)
        _echo_lines(format_email_list(page.data))
    except ResendError as e:
        _fail(e)


@app.command("received-get")
def received_get_command(
    ctx: typer.Context,
    email_id: Optional[str] = typer.Argument(None, metavar="[ID]", help="Email id (default: the newest)"),
) -> None:
    """Show a received email."""
    try:
        with _open_client(ctx) as client:
            email = client.get_received(email_id) if email_id else get_newest_received_email(client)
        _echo_lines(format_email_detail(email))
    except ResendError as e:
        _fail(e)


@app.command("completions")
def completions_command(
    shell: Shell = typer.Argument(..., help="Shell to generate the completion script for"),
) -> None:
    """Print a shell completion script."""
    complete_var = "_{}_COMPLETE".format(PACKAGE_NAME.replace("-", "_").upper())
    complete_class = get_completion_class(shell.value)
    completion = complete_class(get_click_command(app), {}, PACKAGE_NAME, complete_var)
    typer.echo(completion.source())


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
