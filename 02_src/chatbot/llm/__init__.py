"""LLM module."""

from .llm_provider import (
    AnthropicProvider,
    ITextBackend,
    OpenAIProvider,
    create_text_backend,
    openai_name,
    to_backend_role,
    to_openai_message,
)

__all__ = [
    "AnthropicProvider",
    "ITextBackend",
    "OpenAIProvider",
    "create_text_backend",
    "openai_name",
    "to_backend_role",
    "to_openai_message",
]
