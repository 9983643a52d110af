from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "HR Assistant"
    log_level: str = "INFO"

    google_api_key: str | None = None
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_model: str = "gemini-2.0-flash-exp"

    data_path: Path = Path("./data.md")

    max_tokens: int = Field(default=150, ge=1)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.9, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1)

    history_limit: int = Field(default=10, ge=0)

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    ws_url: str = "ws://localhost:8000/ws/chat"

    @property
    def generation_config(self) -> dict[str, Any]:
        return {
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "top_k": self.top_k,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
