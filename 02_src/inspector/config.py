"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:5174")  # Vite default


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""

    api_host: str = "localhost"
    api_port: int = 8000
    log_level: str = "INFO"
    log_file: Path = DEFAULT_LOG_PATH
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    event_history_limit: int = 1000

    @property
    def api_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def resolve_log_path(env_value: str | None = None) -> Path:
    """Resolve LOG_FILE to an absolute path."""
    if not env_value:
        return DEFAULT_LOG_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def load_settings() -> Settings:
    """Build Settings from environment variables (call load_dotenv first)."""
    origins = os.getenv("CORS_ORIGINS")
    cors_origins = (
        tuple(o.strip() for o in origins.split(",") if o.strip())
        if origins
        else DEFAULT_CORS_ORIGINS
    )

    history_limit = _int_env("EVENT_HISTORY_LIMIT", 1000)
    if history_limit < 0:
        raise ConfigError("EVENT_HISTORY_LIMIT must not be negative")

    return Settings(
        api_host=os.getenv("API_HOST", "localhost"),
        api_port=_int_env("API_PORT", 8000),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=resolve_log_path(os.getenv("LOG_FILE")),
        cors_origins=cors_origins,
        event_history_limit=history_limit,
    )
