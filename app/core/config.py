"""Application configuration management"""
from pydantic import BaseModel
import os


class ConfigurationError(Exception):
    """Exception raised when required configuration is missing or invalid"""
    pass


class AppConfig(BaseModel):
    """Application configuration settings"""

    # Application settings
    title: str = "IngredientClassifier"
    description: str = "Classifies food ingredients as vegan, vegetarian or regular"
    version: str = "0.1.0"

    # Logging settings
    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True

    # Completion provider settings
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_api_url: str = "https://api.openai.com/v1/chat/completions"
    openai_timeout: float = 5.0  # seconds

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables"""
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            reload=os.getenv("RELOAD", "true").lower() == "true",
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_api_url=os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions"),
            openai_timeout=float(os.getenv("OPENAI_TIMEOUT", "5.0")),
        )

    def require_api_key(self) -> str:
        """Return the provider API key or fail if it is not configured"""
        if not self.openai_api_key.strip():
            raise ConfigurationError("OPENAI_API_KEY is not configured")
        return self.openai_api_key


# Global config instance
config = AppConfig.from_env()


def get_settings() -> AppConfig:
    """Get application settings instance"""
    return config
