"""Bot commands and their parser."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ChatCommand:
    """Keep the conversation going, the bot will keep context until /reset"""

    text: str


@dataclass(frozen=True)
class ImageCommand:
    """Create an image using Stable Diffusion v1.5"""

    text: str


@dataclass(frozen=True)
class GroupCommand:
    """Ask questions in the context of the group conversation"""

    text: str


@dataclass(frozen=True)
class ResetCommand:
    """Wipe chat from the bot's memory"""


Command = Union[ChatCommand, ImageCommand, GroupCommand, ResetCommand]

# command word -> (type, takes text argument)
COMMANDS: dict[str, tuple[type, bool]] = {
    "chat": (ChatCommand, True),
    "image": (ImageCommand, True),
    "group": (GroupCommand, True),
    "reset": (ResetCommand, False),
}


def command_descriptions() -> dict[str, str]:
    """Command word -> help text, in menu order."""
    return {name: cls.__doc__ for name, (cls, _) in COMMANDS.items()}


def parse_command(text: str | None, bot_name: str | None = None) -> Command | None:
    """
    Parse a chat message into a Command.

    Returns None when the text is not a recognized, well-formed command:
    unknown command words, a missing required argument, an argument given to
    /reset, or a ``/cmd@otherbot`` mention addressed to a different bot.
    """
    if not text or not text.startswith("/"):
        return None

    parts = text[1:].split(maxsplit=1)
    if not parts or text[1].isspace():
        return None
    head = parts[0]
    rest = parts[1] if len(parts) > 1 else ""
    word, _, mention = head.partition("@")
    if mention and (bot_name is None or mention.lower() != bot_name.lower()):
        return None

    entry = COMMANDS.get(word.lower())
    if entry is None:
        return None

    command_type, takes_text = entry
    argument = rest.strip()
    if not takes_text:
        return None if argument else command_type()
    if not argument:
        return None
    return command_type(text=argument)


def command_name(command: Command) -> str:
    """Command word for a parsed command, e.g. ChatCommand -> "chat"."""
    for name, (command_type, _) in COMMANDS.items():
        if isinstance(command, command_type):
            return name
    raise ValueError(f"Unknown command: {command!r}")
