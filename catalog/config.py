from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./database.db"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 40
    DB_ECHO: bool = False

    # API
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Rate limiting
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    API_RATE_LIMIT: str = "100 per 15 minutes"
    AUTH_RATE_LIMIT: str = "10 per 15 minutes"

    # Sessions / CSRF
    SESSION_COOKIE_NAME: str = "session_token"
    CSRF_HEADER_NAME: str = "X-Requested-With"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"

settings = Settings()
