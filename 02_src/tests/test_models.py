"""Tests for data models and command parsing."""

from datetime import datetime, timezone

import pytest

from chatbot.models import (
    ChatCommand,
    GroupCommand,
    GroupEntry,
    ImageCommand,
    IncomingUpdate,
    ResetCommand,
    Role,
    SessionState,
    Turn,
    command_descriptions,
    command_name,
    parse_command,
)


class TestParseCommand:
    """Tests for parse_command()."""

    def test_chat_command(self):
        assert parse_command("/chat hello there") == ChatCommand(text="hello there")

    def test_image_command(self):
        assert parse_command("/image a red cat") == ImageCommand(text="a red cat")

    def test_group_command(self):
        assert parse_command("/group what happened") == GroupCommand(text="what happened")

    def test_reset_command(self):
        assert parse_command("/reset") == ResetCommand()

    def test_command_word_is_case_insensitive(self):
        assert parse_command("/CHAT hi") == ChatCommand(text="hi")
        assert parse_command("/Reset") == ResetCommand()

    def test_argument_keeps_inner_text(self):
        """Newlines and case inside the argument are preserved."""
        assert parse_command("/chat Line one\nLine Two") == ChatCommand(text="Line one\nLine Two")

    def test_argument_after_newline(self):
        assert parse_command("/chat\nhello") == ChatCommand(text="hello")

    @pytest.mark.parametrize("text", ["/chat", "/chat   ", "/image", "/group"])
    def test_missing_argument_is_not_a_command(self, text):
        assert parse_command(text) is None

    def test_reset_with_argument_is_not_a_command(self):
        assert parse_command("/reset now") is None

    @pytest.mark.parametrize("text", [None, "", "hello", "chat hi", "/unknown hi", "/", "/ chat hi"])
    def test_plain_text_is_not_a_command(self, text):
        assert parse_command(text) is None

    def test_mention_of_this_bot(self):
        assert parse_command("/chat@GptBot hi", bot_name="gptbot") == ChatCommand(text="hi")

    def test_mention_of_other_bot(self):
        assert parse_command("/chat@otherbot hi", bot_name="gptbot") is None

    def test_mention_without_known_bot_name(self):
        assert parse_command("/reset@gptbot") is None


class TestCommandMetadata:
    """Tests for command names and descriptions."""

    def test_descriptions_cover_all_commands(self):
        descriptions = command_descriptions()
        assert list(descriptions) == ["chat", "image", "group", "reset"]
        assert descriptions["reset"] == "Wipe chat from the bot's memory"

    def test_command_name(self):
        assert command_name(ChatCommand(text="x")) == "chat"
        assert command_name(ResetCommand()) == "reset"

    def test_command_name_unknown(self):
        with pytest.raises(ValueError):
            command_name("not a command")


class TestSessionModels:
    """Tests for session-related models."""

    def test_turn_defaults(self):
        turn = Turn(Role.SYSTEM, "be nice")
        assert turn.speaker_name is None

    def test_turn_is_immutable(self):
        turn = Turn(Role.USER, "hi", "alice")
        with pytest.raises(AttributeError):
            turn.content = "changed"

    def test_enum_values(self):
        assert Role.ASSISTANT.value == "assistant"
        assert SessionState("offline") is SessionState.OFFLINE

    def test_group_entry_optional_fields(self):
        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
        entry = GroupEntry(timestamp=ts)
        assert entry.sender_name is None
        assert entry.text is None

    def test_incoming_update_default_timestamp(self):
        before = datetime.now(timezone.utc)
        update = IncomingUpdate(chat_id="1", text="hi")
        assert update.timestamp >= before
