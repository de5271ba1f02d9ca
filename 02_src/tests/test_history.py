"""Tests for History."""

from datetime import datetime, timezone

from chatbot.models import GroupEntry, Role, Turn
from chatbot.session import History

TS = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestHistory:
    """Tests for History."""

    def test_starts_empty(self):
        history = History()
        assert history.group_log == []
        assert history.dialogue_log == []

    def test_append_group(self):
        history = History()
        history.append_group(GroupEntry(timestamp=TS, sender_name="alice", text="hi"))

        assert len(history.group_log) == 1
        assert history.dialogue_log == []

    def test_append_turn(self):
        history = History()
        history.append_turn(Turn(Role.USER, "hello", "alice"))
        history.append_turn(Turn(Role.ASSISTANT, "hi", "gptbot"))

        assert [t.role for t in history.dialogue_log] == [Role.USER, Role.ASSISTANT]
        assert history.group_log == []

    def test_reset_dialogue_keeps_group_log(self):
        entry = GroupEntry(timestamp=TS, sender_name="alice", text="left at 5")
        history = History(group_log=[entry], dialogue_log=[Turn(Role.USER, "hello")])

        history.reset_dialogue()

        assert history.dialogue_log == []
        assert history.group_log == [entry]

    def test_logs_are_returned_as_copies(self):
        history = History()
        history.dialogue_log.append(Turn(Role.USER, "sneaky"))
        history.group_log.append(GroupEntry(timestamp=TS))

        assert history.dialogue_log == []
        assert history.group_log == []

    def test_copy_is_independent(self):
        history = History(dialogue_log=[Turn(Role.USER, "hello")])
        clone = history.copy()

        clone.append_turn(Turn(Role.ASSISTANT, "hi"))
        clone.reset_dialogue()
        clone.append_group(GroupEntry(timestamp=TS))

        assert len(history.dialogue_log) == 1
        assert history.group_log == []

    def test_constructor_does_not_alias_lists(self):
        turns = [Turn(Role.USER, "hello")]
        history = History(dialogue_log=turns)
        turns.clear()

        assert len(history.dialogue_log) == 1
