"""
Application settings.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "Receipt Processor"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @property
    def log_level(self) -> str:
        """DEBUG forces debug logging regardless of LOG_LEVEL."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
