"""Results returned by the generation backends."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Usage:
    """Token usage reported for one completion request."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class Choice:
    """A single completion choice."""

    content: str


@dataclass
class Completion:
    """Text backend response."""

    choices: list[Choice]
    usage: Usage | None = None

    @property
    def text(self) -> str:
        """All choices concatenated in order."""
        return "".join(choice.content for choice in self.choices)


@dataclass
class ImageResult:
    """Image backend response. Empty urls means nothing was produced."""

    urls: list[str] = field(default_factory=list)
    error: str | None = None
