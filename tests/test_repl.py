"""
Tests for the interactive line surface.
"""
import io
import os
import signal
import subprocess
import sys
from pathlib import Path

import pytest
from unittest.mock import AsyncMock

from lightai.models import Reply, ReplySource
from lightai.repl import BANNER, PROMPT, parse_line, run_repl
from lightai.responders import ResponderPolicy
from lightai.responders.local import GREETING_REPLY, JOKE_REPLY

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.parametrize("line,expected", [
    ("", None),
    ("   \n", None),
    ("hello\n", ("hello", False)),
    ("  /o tell me a joke  ", ("tell me a joke", True)),
    ("/openai   what is up\n", ("what is up", True)),
    ("/openai", ("/openai", False)),
    ("/other thing", ("/other thing", False)),
])
def test_parse_line(line, expected):
    assert parse_line(line) == expected


def _run(policy, text):
    stdin, stdout, stderr = io.StringIO(text), io.StringIO(), io.StringIO()
    run_repl(policy, stdin=stdin, stdout=stdout, stderr=stderr)
    return stdout.getvalue(), stderr.getvalue()


class InterruptingStdin:
    """Yields the given lines, then raises KeyboardInterrupt as Ctrl+C would."""

    def __init__(self, *lines):
        self.lines = list(lines)

    def readline(self):
        if self.lines:
            return self.lines.pop(0)
        raise KeyboardInterrupt


def test_forced_remote_without_provider_prints_local_joke(local_policy):
    out, err = _run(local_policy, "/o tell me a joke\n")

    assert out.startswith(BANNER)
    assert f"AI (local)> {JOKE_REPLY}" in out
    assert err == ""


def test_blank_lines_reprompt_without_reply(local_policy):
    out, _ = _run(local_policy, "\n   \nhello\n")

    assert out.count(PROMPT) == 4
    assert out.count("AI (") == 1
    assert f"AI (local)> {GREETING_REPLY}" in out


def test_remote_reply_is_tagged(mock_provider):
    policy = ResponderPolicy(provider=mock_provider, remote_enabled=False)
    out, _ = _run(policy, "/openai question\nhello\n")

    assert "AI (remote)> remote says hi" in out
    assert f"AI (local)> {GREETING_REPLY}" in out
    mock_provider.complete.assert_awaited_once_with("question")


def test_errors_go_to_stderr_and_session_continues(local_policy):
    local_policy.get_reply = AsyncMock(side_effect=[
        RuntimeError("kaboom"),
        Reply(reply="still here", source=ReplySource.LOCAL),
    ])
    out, err = _run(local_policy, "first\nsecond\n")

    assert "Error: kaboom" in err
    assert "AI (local)> still here" in out


def test_provider_closed_on_eof(mock_provider):
    policy = ResponderPolicy(provider=mock_provider)
    _run(policy, "")
    mock_provider.close.assert_awaited_once()


def test_ctrl_c_while_reading_ends_session_and_closes_provider(mock_provider):
    policy = ResponderPolicy(provider=mock_provider)
    stdout = io.StringIO()

    run_repl(policy, stdin=InterruptingStdin("hello\n"), stdout=stdout, stderr=io.StringIO())

    assert f"AI (local)> {GREETING_REPLY}" in stdout.getvalue()
    assert stdout.getvalue().endswith(PROMPT + "\n")
    mock_provider.close.assert_awaited_once()


def test_ctrl_c_during_reply_ends_session_and_closes_provider(mock_provider):
    mock_provider.complete = AsyncMock(side_effect=KeyboardInterrupt)
    policy = ResponderPolicy(provider=mock_provider, remote_enabled=True)

    out, _ = _run(policy, "question\nnever read\n")

    assert "AI (" not in out
    mock_provider.close.assert_awaited_once()


@pytest.mark.skipif(sys.platform == "win32", reason="SIGINT delivery is POSIX-only")
def test_process_exits_on_sigint_while_waiting_for_input():
    env = {k: v for k, v in os.environ.items() if k not in ("OPENAI_API_KEY", "USE_OPENAI")}
    env["PYTHONUNBUFFERED"] = "1"
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    proc = subprocess.Popen(
        [sys.executable, "-m", "lightai", "--cli"],
        cwd=str(PROJECT_ROOT),
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        encoding="utf-8",
    )
    try:
        assert proc.stdout.readline().strip() == BANNER
        proc.stdin.write("hello\n")
        proc.stdin.flush()
        assert GREETING_REPLY in proc.stdout.readline()

        # stdin stays open: the REPL is blocked reading the next line
        proc.send_signal(signal.SIGINT)
        returncode = proc.wait(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        proc.stdin.close()
        proc.stdout.close()

    assert returncode == 0
