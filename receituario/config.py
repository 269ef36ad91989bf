from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/receitas.db"
    DB_BUSY_TIMEOUT: float = 15.0  # Seconds a SQLite writer waits for the lock

    # Application
    APP_NAME: str = "Receituário"
    DEBUG: bool = False
    ALLOWED_ORIGINS: str = ""  # Empty allows any origin

    # Server
    # Default to 0.0.0.0 for development, use env var HOST in production
    HOST: str = "0.0.0.0"  # nosec: B104
    PORT: int = 8080

    # Rate limiting (per client IP, fixed window)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 120
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    # Request bodies
    MAX_BODY_BYTES: int = 1048576  # 1MB

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @property
    def allowed_origins_list(self) -> List[str]:
        origins = [
            origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()
        ]
        return origins or ["*"]

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()
