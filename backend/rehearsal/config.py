"""Application configuration using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_debug_namespaces: str = Field(
        default="",
        description="Comma-separated list of namespaces to enable debug logging",
    )

    # ==========================================================================
    # CORS
    # ==========================================================================
    cors_allow_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    # ==========================================================================
    # Generative provider (talking points, flows, document extraction)
    # ==========================================================================
    llm_provider: Literal["gemini", "stub"] = "gemini"
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key",
    )
    llm_model_id: str = Field(
        default="gemini-2.0-flash-exp",
        description="Model used for talking points, flows and document extraction",
    )
    provider_timeout_llm_seconds: int = Field(
        default=60,
        description="Timeout in seconds for generative calls",
    )

    # ==========================================================================
    # Speech synthesis
    # ==========================================================================
    tts_enabled: bool = Field(
        default=True,
        description="Globally enable speech synthesis of agent lines",
    )
    tts_provider: Literal["fish_audio", "stub"] = "fish_audio"
    tts_endpoint: str = Field(
        default="https://api.fish.audio/v1/tts",
        description="Speech synthesis endpoint",
    )
    tts_api_key: str = Field(
        default="",
        description="Bearer token for the speech synthesis endpoint",
    )
    tts_model: str = Field(
        default="s1",
        description="Synthesis model sent in the 'model' header",
    )
    tts_default_voice_id: str = Field(
        default="bf322df2096a46f18c579d0baa36f41d",
        description="Voice used when a persona carries no voice id",
    )
    provider_timeout_tts_seconds: int = Field(
        default=90,
        description="Timeout in seconds for synthesis calls",
    )

    # ==========================================================================
    # Practice defaults
    # ==========================================================================
    talking_points_count_min: int = Field(default=8, ge=1)
    talking_points_count_max: int = Field(default=15, ge=1)
    flow_sections_min: int = Field(default=2, ge=1)
    flow_sections_max: int = Field(default=4, ge=1)
    session_talking_points_limit: int = Field(
        default=20,
        description="Maximum number of talking points carried into a session",
    )
    greeting_delay_seconds: float = Field(
        default=2.0,
        description="Delay before the first agent greets the user",
    )
    max_upload_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Largest document accepted for text extraction",
    )

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @computed_field
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @computed_field
    @property
    def debug_namespaces(self) -> list[str]:
        """Parse debug namespaces into a list."""
        if not self.log_debug_namespaces:
            return []
        return [ns.strip() for ns in self.log_debug_namespaces.split(",") if ns.strip()]

    @computed_field
    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Parse cors_allow_origins into a list."""
        if not self.cors_allow_origins:
            return []
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    def log_config_summary(self) -> None:
        """Log a summary of the configuration (redacting secrets)."""
        logger.info(
            "Configuration loaded",
            extra={
                "service": "config",
                "environment": self.environment,
                "log_level": self.log_level,
                "debug_namespaces": self.debug_namespaces,
                "llm_provider": self.llm_provider,
                "model_id": self.llm_model_id,
                "gemini_configured": bool(self.gemini_api_key),
                "tts_enabled": self.tts_enabled,
                "tts_provider": self.tts_provider,
                "tts_configured": bool(self.tts_api_key),
            },
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
