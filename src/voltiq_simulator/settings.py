"""Environment-backed runtime settings for the CLI and API.

Simulation inputs never come from here — only process-level knobs.
"""

from dataclasses import dataclass
import logging
import os


def _int_env(name: str, default: int) -> int:
    """Parse an integer env var with a fallback."""
    raw = os.getenv(name, "")
    if raw == "":
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    log_level: str = os.getenv("VOLTIQ_LOG_LEVEL", "INFO").upper()
    api_host: str = os.getenv("VOLTIQ_API_HOST", "0.0.0.0")
    api_port: int = _int_env("VOLTIQ_API_PORT", 8000)


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install the root handler; called by entry points only, never by the library."""
    logging.basicConfig(
        level=(level or settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
