"""
Local rule-based responder.

No network, no state. Rules are evaluated in order and the first match wins,
so a greeting that mentions the time is still answered as a greeting.
"""
import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple

EMPTY_REPLY = "I didn't get any text — say something."
GREETING_REPLY = "Hello — I am LightAI, your local assistant."
HELP_REPLY = 'Try asking a question, say "time", or say "tell me a joke".'
JOKE_REPLY = "Why did the programmer quit his job? Because he didn’t get arrays (a raise)."
TIME_PREFIX = "Local server time:"

_GREETING = re.compile(r"^(hi|hello|hey)\b")

# (predicate on normalized text, responder on (normalized, original))
Rule = Tuple[Callable[[str], bool], Callable[[str, str], str]]


def _format_now() -> str:
    return datetime.now().strftime("%m/%d/%Y, %I:%M:%S %p")


def _echo(original: str) -> str:
    return (
        f'You said: "{original}". '
        "I can echo, answer simple questions, or route to OpenAI if configured."
    )


RULES: List[Rule] = [
    (lambda m: not m, lambda m, original: EMPTY_REPLY),
    (lambda m: bool(_GREETING.match(m)), lambda m, original: GREETING_REPLY),
    (lambda m: "time" in m, lambda m, original: f"{TIME_PREFIX} {_format_now()}"),
    (lambda m: "help" in m, lambda m, original: HELP_REPLY),
    (lambda m: "joke" in m, lambda m, original: JOKE_REPLY),
]


def local_reply(message: Optional[str]) -> str:
    """
    Produce a canned or pattern-matched reply for a message.

    Matching is case-insensitive on the trimmed text. The echo fallback
    quotes the message exactly as it was received.
    """
    original = "" if message is None else str(message)
    normalized = original.strip().lower()
    for matches, respond in RULES:
        if matches(normalized):
            return respond(normalized, original)
    return _echo(original)
