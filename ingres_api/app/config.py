from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    OLLAMA_URL: str = "http://localhost:11434"
    OLLAMA_API_KEY: Optional[str] = None
    CHAT_MODEL: str = "llama3.1:8b-instruct-q4_K_M"
    OLLAMA_KEEP_ALIVE: str = "15m"
    LLM_TIMEOUT_SECONDS: float = 120.0

    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    KNOWLEDGE_TABLE: str = "ingres_data"
    LOOKUP_TIMEOUT_SECONDS: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STATIC_DIR: Optional[Path] = None
    CORS_ORIGINS: List[str] = ["*"]

    LOG_DIR: Optional[Path] = Path("logs")
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("OLLAMA_API_KEY", "SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "STATIC_DIR", "LOG_DIR",
                     mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


settings = Settings()
