"""Parsing of inbound text into command variants."""

from dataclasses import dataclass, field
from enum import StrEnum


class CommandKind(StrEnum):
    """Everything the router knows how to handle."""

    START = "/start"
    LANGUAGE = "/language"
    PROGRESS = "/progress"
    PRACTICE = "/practice"
    CONTEXT = "/context"
    UNKNOWN = "unknown"
    TEXT = "text"


# Commands that work before a target language is chosen
UNGATED_COMMANDS = frozenset({CommandKind.START, CommandKind.LANGUAGE})

_COMMANDS_BY_TOKEN = {
    kind.value: kind
    for kind in CommandKind
    if kind.value.startswith("/")
}


@dataclass(frozen=True)
class Command:
    """One parsed inbound message.

    ``token`` is the command word as typed (``/Foo``), or the full text for
    plain messages. ``args`` are the remaining whitespace-separated words.
    """

    kind: CommandKind
    token: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def argument_text(self) -> str:
        return " ".join(self.args)

    @property
    def requires_target_language(self) -> bool:
        return self.kind not in UNGATED_COMMANDS


def parse_command(text: str) -> Command:
    """Split inbound text into a command kind, its token and its arguments.

    Matching is case-insensitive and ignores a Telegram ``@botname`` suffix.
    """
    stripped = text.strip()
    if not stripped.startswith("/"):
        return Command(kind=CommandKind.TEXT, token=text)

    token, *args = stripped.split()
    name = token.split("@", 1)[0].lower()
    kind = _COMMANDS_BY_TOKEN.get(name, CommandKind.UNKNOWN)
    return Command(kind=kind, token=token, args=tuple(args))
