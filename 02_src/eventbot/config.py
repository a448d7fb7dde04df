"""Project-level configuration, path helpers and bot settings."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = Path(os.getenv("EVENTBOT_DATA_DIR", PROJECT_ROOT / "03_data"))
LOGS_DIR = Path(os.getenv("EVENTBOT_LOGS_DIR", PROJECT_ROOT / "04_logs"))
DEFAULT_DB_PATH = DATA_DIR / "eventbot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_CANCEL_PATTERNS = ("cancel", "start over", "restart")


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_limit(name: str, default: int | None) -> int | None:
    """Read an optional non-negative limit. "none" disables the limit."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    if value.strip().lower() in ("none", "unlimited"):
        return None
    limit = int(value)
    if limit < 0:
        raise ValueError(f"{name} must be non-negative, got {limit}")
    return limit


@dataclass
class QnASettings:
    """Hosted knowledge base endpoint."""

    knowledge_base_id: str | None = None
    endpoint_key: str | None = None
    host: str | None = None
    score_threshold: float = 0.5
    timeout: float = 10.0

    @property
    def configured(self) -> bool:
        return bool(self.knowledge_base_id and self.endpoint_key and self.host)


@dataclass
class BotSettings:
    """Runtime settings for the bot, usually read from the environment."""

    api_host: str = "localhost"
    api_port: int = 3978
    storage_backend: str = "sqlite"  # "sqlite" or "memory"
    db_path: PathLike = DEFAULT_DB_PATH
    qna: QnASettings = field(default_factory=QnASettings)
    cancel_patterns: tuple[str, ...] = DEFAULT_CANCEL_PATTERNS
    max_prompt_retries: int | None = 3
    max_stack_depth: int | None = 10
    start_on_join: bool = False

    @classmethod
    def from_env(cls) -> "BotSettings":
        """Build settings from environment variables."""
        patterns = os.getenv("CANCEL_PATTERNS")
        cancel_patterns = (
            tuple(p.strip() for p in patterns.split(",") if p.strip())
            if patterns
            else DEFAULT_CANCEL_PATTERNS
        )

        backend = os.getenv("STORAGE_BACKEND", "sqlite").strip().lower()
        if backend not in ("sqlite", "memory"):
            raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")

        return cls(
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "3978")),
            storage_backend=backend,
            db_path=resolve_db_path(os.getenv("DATABASE_URL")),
            qna=QnASettings(
                knowledge_base_id=os.getenv("QNA_KNOWLEDGE_BASE_ID"),
                endpoint_key=os.getenv("QNA_ENDPOINT_KEY"),
                host=os.getenv("QNA_HOST"),
                score_threshold=float(os.getenv("QNA_SCORE_THRESHOLD", "0.5")),
                timeout=float(os.getenv("QNA_TIMEOUT", "10")),
            ),
            cancel_patterns=cancel_patterns,
            max_prompt_retries=_env_limit("MAX_PROMPT_RETRIES", 3),
            max_stack_depth=_env_limit("MAX_STACK_DEPTH", 10),
            start_on_join=_env_bool("START_ON_JOIN", False),
        )
