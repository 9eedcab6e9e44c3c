from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime settings for the extraction pipeline.

    Read from environment variables, then from a .env file if present.
    """

    # Anthropic
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    request_timeout: float = 60.0  # seconds, per model call

    # Language used when the caller passes none and detection is disabled
    default_language: str = "he"
    detect_language: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings.

    A missing or unreadable .env (CI, tests) is not an error; the
    environment and the defaults above still apply.
    """
    try:
        return Settings()
    except Exception:
        return Settings(_env_file=None)  # type: ignore[call-arg]
