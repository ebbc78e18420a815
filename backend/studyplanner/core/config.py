"""Application configuration managed via environment variables."""
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Synapse Schedule Backend"
    debug: bool = False
    log_level: str = "INFO"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "synapse-schedule"

    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_API_KEY", "GROQ_API_KEY", "OPENAI_API_KEY"),
    )
    llm_base_url: str | None = "https://api.groq.com/openai/v1"
    schedule_model: str = "llama-3.3-70b-versatile"
    tips_model: str = "llama-3.3-70b-versatile"
    llm_timeout_seconds: float = 60.0
    llm_max_retries: int = 2
    extra_prompt_path: str = "prompt.txt"

    horizon_floor_days: int = 4
    max_schedule_days: int = 10
    max_tip_topics: int = 5
    extra_study_keywords: List[str] = Field(default_factory=list)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
