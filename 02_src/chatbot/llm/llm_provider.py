"""Text generation providers (OpenAI, Anthropic)."""

import os
import re
from typing import Protocol

import anthropic
import openai

from ..config import (
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_SYSTEM_PROMPT,
    MAX_OUTPUT_TOKENS,
    Settings,
)
from ..errors import TextBackendError
from ..models import Choice, Completion, Role, Turn, Usage


class ITextBackend(Protocol):
    """Abstraction for text completion."""

    async def complete(
        self,
        turns: list[Turn],
        system: str | None = None,
        model: str | None = None,
    ) -> Completion:
        """Complete the dialogue. Raises TextBackendError on failure."""
        ...


def to_backend_role(role: Role) -> str:
    """Role tag understood by the chat completion APIs."""
    return {
        Role.SYSTEM: "system",
        Role.USER: "user",
        Role.ASSISTANT: "assistant",
    }[role]


# OpenAI accepts message names matching ^[A-Za-z0-9_-]{1,64}$
_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")
MAX_NAME_LENGTH = 64


def openai_name(speaker_name: str | None) -> str | None:
    """Speaker name made acceptable to OpenAI, or None when nothing usable is left."""
    if not speaker_name:
        return None
    name = _INVALID_NAME_CHARS.sub("_", speaker_name)[:MAX_NAME_LENGTH]
    return name if name.strip("_") else None


def to_openai_message(turn: Turn) -> dict:
    """Turn -> {"role": ..., "content": ..., "name": ...}."""
    message = {"role": to_backend_role(turn.role), "content": turn.content}
    name = openai_name(turn.speaker_name)
    if name:
        message["name"] = name
    return message


class OpenAIProvider:
    """OpenAI chat completions provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_tokens: int = MAX_OUTPUT_TOKENS,
    ):
        self._api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self._api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self._model = model
        self._system_prompt = system_prompt
        self._max_tokens = max_tokens
        self._client = openai.AsyncOpenAI(api_key=self._api_key)

    async def complete(
        self,
        turns: list[Turn],
        system: str | None = None,
        model: str | None = None,
    ) -> Completion:
        """Generate completion with a leading system message."""
        messages = [{"role": "system", "content": system or self._system_prompt}]
        messages.extend(to_openai_message(turn) for turn in turns)

        try:
            response = await self._client.chat.completions.create(
                model=model or self._model,
                messages=messages,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            raise TextBackendError(f"OpenAI API error: {e}") from e

        usage = None
        if response.usage is not None:
            usage = Usage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        return Completion(
            choices=[Choice(content=c.message.content or "") for c in response.choices],
            usage=usage,
        )


class AnthropicProvider:
    """Anthropic Claude API provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_tokens: int = MAX_OUTPUT_TOKENS,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model
        self._system_prompt = system_prompt
        self._max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def complete(
        self,
        turns: list[Turn],
        system: str | None = None,
        model: str | None = None,
    ) -> Completion:
        """Generate completion using Claude API."""
        # Claude takes system text as a parameter and has no per-message names
        system_parts = [system or self._system_prompt]
        system_parts.extend(t.content for t in turns if t.role is Role.SYSTEM)
        messages = [
            {"role": to_backend_role(t.role), "content": t.content}
            for t in turns
            if t.role is not Role.SYSTEM
        ]

        try:
            response = await self._client.messages.create(
                model=model or self._model,
                system="\n\n".join(system_parts),
                messages=messages,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            raise TextBackendError(f"LLM API error: {e}") from e

        text = "".join(block.text for block in response.content if block.type == "text")

        usage = None
        if response.usage is not None:
            usage = Usage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
                total_tokens=response.usage.input_tokens + response.usage.output_tokens,
            )

        return Completion(choices=[Choice(content=text)], usage=usage)


def create_text_backend(settings: Settings) -> ITextBackend:
    """Build the provider selected by TEXT_PROVIDER."""
    if settings.text_provider == "openai":
        return OpenAIProvider(
            model=settings.text_model or DEFAULT_OPENAI_MODEL,
            system_prompt=settings.system_prompt,
        )
    if settings.text_provider == "anthropic":
        return AnthropicProvider(
            model=settings.text_model or DEFAULT_ANTHROPIC_MODEL,
            system_prompt=settings.system_prompt,
        )
    raise ValueError(f"Unknown TEXT_PROVIDER: {settings.text_provider}")
