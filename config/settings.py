"""
Application settings and configuration
"""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


API_KEY_ENV_VAR = "HOOKWIRE_GITHUB_API_KEY"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server Configuration
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=9889, description="Port the webhook receiver listens on")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # GitHub Configuration
    GITHUB_API_URL: str = Field(
        default="https://api.github.com", description="GitHub API URL"
    )
    HOOKWIRE_GITHUB_API_KEY: Optional[str] = Field(
        default=None, description="GitHub API key used to register webhooks"
    )

    @property
    def github_api_key(self) -> Optional[str]:
        """API key with surrounding whitespace removed, None when blank"""
        if not self.HOOKWIRE_GITHUB_API_KEY:
            return None
        return self.HOOKWIRE_GITHUB_API_KEY.strip() or None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
