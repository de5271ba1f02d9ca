"""History implementation."""

from ..models import GroupEntry, Turn


class History:
    """Per-chat memory: raw group transcript plus structured assistant dialogue."""

    def __init__(
        self,
        group_log: list[GroupEntry] | None = None,
        dialogue_log: list[Turn] | None = None,
    ):
        self._group_log: list[GroupEntry] = list(group_log or [])
        self._dialogue_log: list[Turn] = list(dialogue_log or [])

    @property
    def group_log(self) -> list[GroupEntry]:
        """Observed messages, oldest first."""
        return self._group_log.copy()

    @property
    def dialogue_log(self) -> list[Turn]:
        """Assistant dialogue turns, oldest first."""
        return self._dialogue_log.copy()

    def append_group(self, entry: GroupEntry) -> None:
        """Record an observed chat message."""
        self._group_log.append(entry)

    def append_turn(self, turn: Turn) -> None:
        """Add a turn to the assistant dialogue."""
        self._dialogue_log.append(turn)

    def reset_dialogue(self) -> None:
        """Forget the assistant dialogue. The group transcript is kept."""
        self._dialogue_log.clear()

    def copy(self) -> "History":
        """Independent copy; entries are immutable so a shallow copy suffices."""
        return History(self._group_log, self._dialogue_log)

    def __repr__(self) -> str:
        return (
            f"History(group_log={len(self._group_log)}, "
            f"dialogue_log={len(self._dialogue_log)})"
        )
