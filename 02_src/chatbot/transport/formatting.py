"""MarkdownV2 helpers for outbound text."""

from telegram.helpers import escape_markdown


def escape(text: str) -> str:
    """Escape free text so it renders literally in MarkdownV2."""
    return escape_markdown(text, version=2)


def code(text: str) -> str:
    """Wrap text in an inline code span."""
    return f"`{escape_markdown(text, version=2, entity_type='code')}`"
