import os
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database settings. DATABASE_URL wins; otherwise PostgreSQL when DB_HOST is set, else SQLite
    DATABASE_URL: Optional[str] = None
    DB_USER: str = "quizboard"
    DB_PASSWORD: str = ""
    DB_HOST: Optional[str] = None
    DB_PORT: str = "5432"
    DB_NAME: str = "quizboard"
    SQLITE_PATH: str = "quizboard.db"
    DB_ECHO: bool = False

    # JWT settings
    JWT_ACCESS_SECRET: str = "change-me-in-local-env"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Password hashing cost
    BCRYPT_ROUNDS: int = 12

    # Optional development settings
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Study tips: "heuristic" or "llm"
    TIPS_PROVIDER: str = "heuristic"
    # "openai-<model>" goes to OpenAI, anything else is treated as an Ollama model
    TIPS_MODEL: str = "openai-gpt-4o-mini"
    TIPS_TEMPERATURE: float = 0.4
    TIPS_MAX_TOKENS: int = 200
    LLM_TIMEOUT_SECONDS: float = 20.0
    OPENAI_API_KEY: Optional[str] = None

    # Analytics thresholds
    WEAK_ACCURACY_THRESHOLD: int = 60
    WEAK_LIMIT: int = 3

    # Listing defaults
    RECENT_QUIZ_LIMIT: int = 10
    DEFAULT_DUE_DAYS: int = 7

    class Config:
        # Look for env file in project root, even when running from subdirectories
        env_file = os.getenv("ENV_FILE") or str(Path(__file__).parent.parent.parent / "local.env")
        # Allow case-insensitive environment variable names
        case_sensitive = False
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return (f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
                    f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}")
        return f"sqlite:///{self.SQLITE_PATH}"


settings = Settings()
