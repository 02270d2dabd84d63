# GPL-3.0-only
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


curr_dir = Path(__file__).parent


class Settings(BaseSettings):
    """Runtime configuration, read from the environment or a `.env` file."""

    model_config = SettingsConfigDict(
        env_file=curr_dir.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Server ---
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    json_logs: bool = False
    version: str = "1.0.0"

    # --- Provider ---
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model_name: str = "gpt-3.5-turbo"
    max_output_tokens: int = Field(default=200, gt=0)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    provider_timeout_seconds: float = Field(default=30.0, gt=0)
    max_prompt_chars: int = Field(default=15000, gt=0)

    # --- Rate limiting ---
    rate_limit_enabled: bool = True
    rate_limit_requests: int = Field(default=5, gt=0)
    rate_limit_window_seconds: int = Field(default=60, gt=0)
    rate_limit_sweep_seconds: float = Field(default=300.0, gt=0)

    @property
    def provider_configured(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
