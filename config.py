"""Application configuration."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from prompts import WEBFLOW_API_SUMMARY


class Settings(BaseSettings):
    """App settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    environment: str = "development"

    # Google Generative Language API
    google_ai_api_key: Optional[SecretStr] = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-pro-latest"
    system_prompt: str = WEBFLOW_API_SUMMARY
    system_prompt_file: Optional[Path] = None
    max_output_tokens: int = 1000

    # Relay behaviour
    relay_timeout_seconds: float = 9.5
    relay_fallback_reply: str = "Sorry, I couldn't generate a response."
    relay_include_history: bool = True
    relay_background_url: Optional[str] = None
    dispatch_timeout_seconds: float = 5.0

    # CORS
    cors_origins: list[str] = ["*"]

    @property
    def gemini_endpoint(self) -> str:
        return f"{self.gemini_base_url.rstrip('/')}/models/{self.gemini_model}:generateContent"

    @property
    def allow_origin(self) -> str:
        return self.cors_origins[0] if self.cors_origins else "*"

    def load_system_prompt(self) -> str:
        """Return the system prompt, preferring SYSTEM_PROMPT_FILE when set.

        The file may be JSON carrying a ``systemPromptSummary`` key or plain text.
        """
        if self.system_prompt_file is None:
            return self.system_prompt
        raw = self.system_prompt_file.read_text(encoding="utf-8")
        if self.system_prompt_file.suffix == ".json":
            return json.loads(raw)["systemPromptSummary"]
        return raw.strip()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
