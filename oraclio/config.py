"""Configuration management using pydantic-settings."""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")

    # Assistant identity
    assistant_name: str = Field(default="Oraclio AI", description="Name the assistant introduces itself with")

    # Responder chain Configuration
    responder_chain: str = Field(default="openai,anthropic", description="Remote responders in priority order (comma separated)")
    provider_timeout: float = Field(default=30.0, description="Deadline for a single remote responder call in seconds")

    # OpenAI Configuration
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o", description="OpenAI chat model")
    openai_api_base: str = Field(default="https://api.openai.com/v1", description="OpenAI API base URL")

    # Anthropic Configuration
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API key")
    anthropic_model: str = Field(default="claude-sonnet-4-20250514", description="Anthropic model")
    anthropic_api_base: str = Field(default="https://api.anthropic.com/v1", description="Anthropic API base URL")

    # CRM Configuration
    crm_timeout: float = Field(default=15.0, description="CRM request timeout in seconds")
    crm_fetch_limit: int = Field(default=50, description="Maximum deals/contacts read per request")

    # Business context Configuration
    history_limit: int = Field(default=20, description="Stored exchanges folded into conversation history")
    top_customers_limit: int = Field(default=3, description="Number of top deals reported as customers")
    recent_activities_limit: int = Field(default=3, description="Number of recent deals reported as activities")

    # Real-time Configuration
    heartbeat_interval: float = Field(default=30.0, description="Seconds between liveness probes")

    # Database Configuration
    database_path: str = Field(default="./data/oraclio.db", description="DuckDB database path")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: str = Field(default="./logs/app.log", description="Log file path")

    def get_enabled_responders(self) -> List[str]:
        """Get remote responder names in chain order."""
        return [name.strip().lower() for name in self.responder_chain.split(",") if name.strip()]

    def get_responder_config(self, name: str) -> dict:
        """Get configuration for a specific remote responder."""
        if name == "openai":
            return {
                "api_key": self.openai_api_key,
                "model": self.openai_model,
                "api_base": self.openai_api_base,
                "timeout": self.provider_timeout,
                "assistant_name": self.assistant_name,
            }
        elif name == "anthropic":
            return {
                "api_key": self.anthropic_api_key,
                "model": self.anthropic_model,
                "api_base": self.anthropic_api_base,
                "timeout": self.provider_timeout,
                "assistant_name": self.assistant_name,
            }
        else:
            raise ValueError(f"Unknown responder: {name}")


# Global settings instance
settings = Settings()
