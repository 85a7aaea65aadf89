"""
End-to-end tests for the CLI commands, with the API faked.
"""

import json

import httpx
import pytest
from typer.testing import CliRunner

from resend_cli import VERSION
from resend_cli.cli.app import app

runner = CliRunner()


@pytest.fixture
def configured(cli_api):
    """Save an API key through the CLI itself."""
    result = runner.invoke(app, ["config", "--key", "re_test123"])
    assert result.exit_code == 0, result.output
    return cli_api


def _listing(email_factory, available):
    def handler(request: httpx.Request):
        limit = int(request.url.params["limit"])
        return {"object": "list", "data": [email_factory(i) for i in range(min(limit, available))]}
    return handler


class TestConfigCommand:

    def test_config_saves_key(self, cli_api, config_dir):
        result = runner.invoke(app, ["config", "--key", "re_test123"])

        assert result.exit_code == 0
        assert "API key saved" in result.stdout
        assert (config_dir / "credentials").read_text(encoding="utf-8") == "re_test123"

    def test_config_prompts_when_key_omitted(self, cli_api, config_dir):
        result = runner.invoke(app, ["config"], input="re_prompted\n")

        assert result.exit_code == 0
        assert (config_dir / "credentials").read_text(encoding="utf-8") == "re_prompted"

    def test_saved_key_used_by_later_invocation(self, configured, email_factory):
        configured.add("GET", "/emails", _listing(email_factory, 1))

        result = runner.invoke(app, ["list", "1"])

        assert result.exit_code == 0
        assert configured.requests[0].headers["authorization"] == "Bearer re_test123"

    def test_environment_key_overrides_saved_key(self, configured, email_factory, monkeypatch):
        monkeypatch.setenv("RESEND_CLI_API_KEY", "re_from_env")
        configured.add("GET", "/emails", _listing(email_factory, 1))

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert configured.requests[0].headers["authorization"] == "Bearer re_from_env"


class TestNotConfigured:

    @pytest.mark.parametrize("args", [["get"], ["list"], ["received-get", "r1"], ["cancel", "e1"]])
    def test_commands_fail_without_key(self, cli_api, args):
        result = runner.invoke(app, args)

        assert result.exit_code != 0
        assert "No API key configured" in result.output
        assert cli_api.requests == []


class TestSendCommand:

    def test_send_html(self, configured):
        configured.add("POST", "/emails", {"id": "abc"})

        result = runner.invoke(
            app,
            ["send", "-f", "A <a@x.com>", "-t", "b@x.com", "-s", "hi", "--html", "<p>hi</p>"],
        )

        assert result.exit_code == 0, result.output
        assert "abc" in result.stdout
        assert configured.json_body() == {
            "from": "A <a@x.com>",
            "to": ["b@x.com"],
            "subject": "hi",
            "html": "<p>hi</p>",
        }

    def test_send_multiple_recipients_and_text(self, configured):
        configured.add("POST", "/emails", {"id": "def"})

        result = runner.invoke(
            app,
            ["send", "--from", "a@x.com", "--to", "b@x.com, c@x.com", "--subject", "hi", "--text", "plain"],
        )

        assert result.exit_code == 0
        body = configured.json_body()
        assert body["to"] == ["b@x.com", "c@x.com"]
        assert body["text"] == "plain"
        assert "html" not in body

    def test_send_from_stdin(self, configured):
        configured.add("POST", "/emails", {"id": "ghi"})

        result = runner.invoke(
            app,
            ["send", "-f", "a@x.com", "-t", "b@x.com", "-s", "hi", "--from-stdin"],
            input="<p>piped</p>",
        )

        assert result.exit_code == 0
        assert configured.json_body()["html"] == "<p>piped</p>"

    def test_send_without_body_makes_no_call(self, configured):
        result = runner.invoke(app, ["send", "-f", "a@x.com", "-t", "b@x.com", "-s", "hi"])

        assert result.exit_code == 2
        assert "No body supplied" in result.output
        assert configured.requests == []

    def test_send_rejected_key(self, configured):
        configured.add("POST", "/emails", {"name": "invalid_api_key", "message": "API key is invalid"}, 401)

        result = runner.invoke(app, ["send", "-f", "a@x.com", "-t", "b@x.com", "-s", "hi", "--text", "x"])

        assert result.exit_code == 1
        assert "Authentication failed" in result.output


class TestBatchCommand:

    def test_batch_single_request_in_order(self, configured, tmp_path):
        items = [
            {"from": "a@x.com", "to": [f"user{i}@x.com"], "subject": f"s{i}", "text": f"t{i}"}
            for i in range(3)
        ]
        batch_file = tmp_path / "batch.json"
        batch_file.write_text(json.dumps(items), encoding="utf-8")
        configured.add("POST", "/emails/batch", {"data": [{"id": "b0"}, {"id": "b1"}, {"id": "b2"}]})

        result = runner.invoke(app, ["batch", str(batch_file)])

        assert result.exit_code == 0, result.output
        assert len(configured.requests) == 1
        assert configured.json_body() == items
        assert result.stdout.splitlines() == ["Email sent: b0", "Email sent: b1", "Email sent: b2"]

    def test_batch_missing_file(self, configured, tmp_path):
        result = runner.invoke(app, ["batch", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "Could not read batch file" in result.output
        assert configured.requests == []


class TestListCommands:

    @pytest.mark.parametrize("count", [1, 4, 10])
    def test_list_requests_count(self, configured, email_factory, count):
        configured.add("GET", "/emails", _listing(email_factory, available=5))

        result = runner.invoke(app, ["list", str(count)])

        assert result.exit_code == 0
        assert configured.requests[0].url.params["limit"] == str(count)
        assert len(result.stdout.splitlines()) == min(count, 5)

    def test_list_default_count(self, configured, email_factory):
        configured.add("GET", "/emails", _listing(email_factory, available=20))

        result = runner.invoke(app, ["list"])

        assert configured.requests[0].url.params["limit"] == "10"
        assert len(result.stdout.splitlines()) == 10

    @pytest.mark.parametrize("count", ["0", "-1", "ten", "1_0"])
    def test_bad_count_makes_no_call(self, configured, count):
        result = runner.invoke(app, ["received-list", "--", count])

        assert result.exit_code == 2
        assert "Invalid count" in result.output
        assert configured.requests == []

    def test_received_list(self, configured, email_factory):
        configured.add("GET", "/emails/receiving", _listing(email_factory, available=2))

        result = runner.invoke(app, ["received-list", "5"])

        assert result.exit_code == 0
        assert configured.requests[0].url.path == "/emails/receiving"
        assert len(result.stdout.splitlines()) == 2


class TestGetCommands:

    def test_get_without_id_makes_two_calls(self, configured, email_factory):
        configured.add("GET", "/emails", _listing(email_factory, available=3))
        configured.add("GET", "/emails/email-0", email_factory(0, html="<p>newest</p>"))

        result = runner.invoke(app, ["get"])

        assert result.exit_code == 0, result.output
        assert len(configured.requests) == 2
        assert "Subject: Subject 0" in result.stdout
        assert "<p>newest</p>" in result.stdout

    def test_get_with_id_makes_one_call(self, configured, email_factory):
        configured.add("GET", "/emails/email-2", email_factory(2, text="plain body"))

        result = runner.invoke(app, ["get", "email-2"])

        assert result.exit_code == 0
        assert len(configured.requests) == 1
        assert result.stdout.splitlines()[-1] == "plain body"

    def test_get_unknown_id(self, configured):
        configured.add("GET", "/emails/missing", {"name": "not_found", "message": "Email not found"}, 404)

        result = runner.invoke(app, ["get", "missing"])

        assert result.exit_code == 1
        assert "Not found" in result.output

    def test_received_get_newest(self, configured, email_factory):
        configured.add("GET", "/emails/receiving", _listing(email_factory, available=1))
        configured.add("GET", "/emails/receiving/email-0", email_factory(0))

        result = runner.invoke(app, ["received-get"])

        assert result.exit_code == 0
        assert len(configured.requests) == 2
        assert result.stdout.splitlines()[-1] == "(no body)"

    def test_received_get_empty_inbox(self, configured):
        configured.add("GET", "/emails/receiving", {"object": "list", "data": []})

        result = runner.invoke(app, ["received-get"])

        assert result.exit_code == 1
        assert "No received emails found" in result.output

    def test_body_with_markup_is_printed_verbatim(self, configured, email_factory):
        configured.add("GET", "/emails/e1", email_factory(1, subject="[bold]x[/bold] :smile:", text="[red]y[/red]"))

        result = runner.invoke(app, ["get", "e1"])

        assert "Subject: [bold]x[/bold] :smile:" in result.stdout
        assert "[red]y[/red]" in result.stdout

    def test_body_whitespace_is_printed_verbatim(self, configured, email_factory):
        configured.add("GET", "/emails/e1", email_factory(1, text="a\tb\r\nc"))

        result = runner.invoke(app, ["get", "e1"])

        assert result.exit_code == 0
        assert result.stdout_bytes.endswith(b"\na\tb\r\nc\n")

    def test_dot_id_makes_no_call(self, configured):
        result = runner.invoke(app, ["get", ".."])

        assert result.exit_code == 2
        assert configured.requests == []


class TestUpdateAndCancel:

    def test_update(self, configured):
        configured.add("PATCH", "/emails/e1", {"object": "email", "id": "e1"})

        result = runner.invoke(app, ["update", "e1", "--scheduled-at", "in 1 hour"])

        assert result.exit_code == 0
        assert "Updated: e1" in result.stdout
        assert configured.json_body() == {"scheduled_at": "in 1 hour"}

    def test_update_without_fields_makes_no_call(self, configured):
        result = runner.invoke(app, ["update", "e1"])

        assert result.exit_code == 2
        assert configured.requests == []

    def test_cancel(self, configured):
        configured.add("POST", "/emails/e1/cancel", {"object": "email", "id": "e1"})

        result = runner.invoke(app, ["cancel", "e1"])

        assert result.exit_code == 0
        assert "Canceled: e1" in result.stdout


class TestMiscCommands:

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert VERSION in result.stdout

    @pytest.mark.parametrize("shell", ["bash", "zsh", "fish", "powershell"])
    def test_completions(self, config_dir, shell):
        result = runner.invoke(app, ["completions", shell])

        assert result.exit_code == 0
        assert "_RESEND_CLI_COMPLETE" in result.stdout

    def test_completions_unknown_shell(self, config_dir):
        result = runner.invoke(app, ["completions", "tcsh"])

        assert result.exit_code != 0

    def test_bash_completion_callback_lists_commands(self, config_dir):
        env = {
            "_RESEND_CLI_COMPLETE": "complete_bash",
            "COMP_WORDS": "resend-cli rec",
            "COMP_CWORD": "1",
        }

        result = runner.invoke(app, [], env=env, prog_name="resend-cli")

        assert result.exit_code == 0, result.output
        assert "not supported" not in result.output
        assert sorted(result.stdout.split()) == ["received-get", "received-list"]
