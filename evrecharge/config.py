# evrecharge/config.py
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./evrecharge.db"
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: float = 60  # supports decimal durations

    # Google Generative Language API (charging time suggestions)
    GOOGLE_GENAI_API_KEY: Optional[str] = None
    GENAI_MODEL: str = "gemini-2.0-flash"
    GENAI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GENAI_TIMEOUT_SECONDS: float = 30.0

    # Passed through to map clients; absence is reported, not fatal
    GOOGLE_MAPS_API_KEY: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    return Settings()
