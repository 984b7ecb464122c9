"""
Configuration settings for Document Tagger.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Document Tagger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Completion API ===
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: Optional[str] = None  # Custom OpenAI-compatible endpoint
    
    # === LLM Generation Parameters ===
    LLM_TEMPERATURE: float = 0.0  # Deterministic tagging
    LLM_TIMEOUT_MS: int = 10000  # 10 seconds
    LLM_TOOL_USE: Optional[bool] = None  # None = use model registry
    
    # === Tag Catalog ===
    TAGS_FILE: Optional[str] = None  # One tag per line, or JSON list
    TAGS_MARKDOWN_DIR: Optional[str] = None  # Collect #tags from *.md notes
    
    # === Prompts ===
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = packaged templates
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
