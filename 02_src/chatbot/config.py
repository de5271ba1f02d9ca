"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "chatbot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_SYSTEM_PROMPT = "You are GPT-4 a Telegram chat bot"
DEFAULT_OPENAI_MODEL = "gpt-4"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_REPLICATE_MODEL = "stability-ai/stable-diffusion"
MAX_OUTPUT_TOKENS = 512
USAGE_ADVISORY_THRESHOLD = 6000


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _split_ids(raw: str | None) -> frozenset[str]:
    return frozenset(part.strip() for part in (raw or "").split(",") if part.strip())


@dataclass
class Settings:
    """Runtime settings collected from the environment."""

    telegram_token: str | None = None
    text_provider: str = "openai"
    text_model: str | None = None
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    replicate_model: str = DEFAULT_REPLICATE_MODEL
    replicate_model_version: str | None = None
    bot_name: str = "assistant"
    offline_chat_ids: frozenset[str] = field(default_factory=frozenset)
    api_host: str = "localhost"
    api_port: int = 8000
    database_url: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            telegram_token=os.getenv("TELEGRAM_TOKEN") or None,
            text_provider=os.getenv("TEXT_PROVIDER", "openai").lower(),
            text_model=os.getenv("TEXT_MODEL") or None,
            system_prompt=os.getenv("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT),
            replicate_model=os.getenv("REPLICATE_MODEL", DEFAULT_REPLICATE_MODEL),
            replicate_model_version=os.getenv("REPLICATE_MODEL_VERSION") or None,
            bot_name=os.getenv("BOT_NAME", "assistant"),
            offline_chat_ids=_split_ids(os.getenv("OFFLINE_CHAT_IDS")),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
            database_url=os.getenv("DATABASE_URL") or None,
        )
