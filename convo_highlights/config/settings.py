"""Application settings using Pydantic."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from convo_highlights.models.enums import Role


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HIGHLIGHTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Classification oracle (Ollama via LangChain)
    oracle_enabled: bool = False
    llm_ollama_base_url: str = "http://localhost:11434"
    llm_model_name: str = "llama3.1:8b"
    llm_temperature: float = 0.3
    llm_num_predict: int = 2000
    llm_enhance_num_predict: int = 1500
    llm_request_timeout: int = 60
    oracle_timeout_seconds: float = 60.0
    max_retries: int = 2

    # Reconstruction
    title_max_length: int = 100

    # Fallback extraction
    # All roles by default so a question asked by the user is extracted;
    # set to ["assistant"] for the assistant-only scan.
    extraction_roles: list[Role] = [Role.USER, Role.ASSISTANT, Role.SYSTEM]
    question_min_length: int = 10
    question_max_length: int = 200

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
