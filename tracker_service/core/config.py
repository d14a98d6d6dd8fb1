"""
Configuration settings for Task Tracker Service.
"""
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing."""


class Settings:
    """Application settings"""

    def __init__(self):
        # Service information
        self.service_name: str = os.getenv("SERVICE_NAME", "task_tracker")
        self.service_version: str = "1.0.0"
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        # Database configuration
        self.database_url: str = os.getenv(
            "DATABASE_URL",
            "sqlite:///./task_tracker.db"
        )

        # Security - no defaults, both must come from the environment
        self.jwt_secret: Optional[str] = os.getenv("JWT_SECRET") or None
        self.admin_secret: Optional[str] = os.getenv("ADMIN_SECRET") or None
        self.algorithm: str = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes: int = int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
        )

        # CORS
        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    def require_jwt_secret(self) -> str:
        """Return the signing key or fail loudly when it is not configured."""
        if not self.jwt_secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        return self.jwt_secret


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
