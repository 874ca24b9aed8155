"""
Interactive line surface.

Reads one message per line, prints one reply per line. A line starting with
``/openai `` or ``/o `` forces the remote backend for that line only.

Lines are read on the main thread so Ctrl+C interrupts a pending read
directly. Replies run on a single event loop owned by the session, which
keeps the provider's aiohttp session bound to one loop.
"""
import asyncio
import logging
import sys
from typing import Optional, TextIO, Tuple

from .responders import ResponderPolicy

logger = logging.getLogger(__name__)

BANNER = "LightAI REPL. Type a message and press enter. Ctrl+C to exit."
PROMPT = "You> "
REMOTE_PREFIXES = ("/openai ", "/o ")


def parse_line(line: str) -> Optional[Tuple[str, bool]]:
    """
    Split a raw input line into (message, force_remote).

    Returns None for blank lines.
    """
    trimmed = (line or "").strip()
    if not trimmed:
        return None
    for prefix in REMOTE_PREFIXES:
        if trimmed.startswith(prefix):
            return trimmed[len(prefix):].strip(), True
    return trimmed, False


def _shutdown(loop: asyncio.AbstractEventLoop, policy: ResponderPolicy) -> None:
    """Cancel an interrupted reply, close the provider and the loop."""
    try:
        pending = asyncio.all_tasks(loop)
        for task in pending:
            task.cancel()
        if pending:
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        loop.run_until_complete(policy.close())
        loop.run_until_complete(loop.shutdown_asyncgens())
    finally:
        loop.close()


def run_repl(
    policy: ResponderPolicy,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """Run the read-reply loop until EOF or Ctrl+C."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    loop = asyncio.new_event_loop()
    print(BANNER, file=stdout)
    try:
        while True:
            stdout.write(PROMPT)
            stdout.flush()
            line = stdin.readline()
            if not line:
                print(file=stdout)
                break

            parsed = parse_line(line)
            if parsed is None:
                continue
            message, force_remote = parsed

            try:
                reply = loop.run_until_complete(policy.get_reply(message, use_remote=force_remote))
                print(f"AI ({reply.source.value})> {reply.reply}", file=stdout)
            except Exception as exc:
                logger.debug("REPL reply failed", exc_info=True)
                print(f"Error: {exc}", file=stderr)
    except KeyboardInterrupt:
        print(file=stdout)
    finally:
        stdout.flush()
        _shutdown(loop, policy)
