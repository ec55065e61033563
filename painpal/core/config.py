from typing import List, Literal
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from pydantic_settings import BaseSettings, SettingsConfigDict


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    # App
    APP_NAME: str = "PainPal API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Storage: "memory" is process-lifetime only, "database" persists via SQLAlchemy
    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str = "sqlite:///./painpal.db"

    # Streak recomputation reads at most this many logs per intervention
    STREAK_HISTORY_LIMIT: int = 1000

    # Companion
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


# =====================================================================
# DATABASE
# =====================================================================

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    """Create an engine, relaxing SQLite's same-thread check for the threadpool."""
    if "sqlite" not in database_url:
        return create_engine(database_url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    # An in-memory database lives on one connection; every session must share it
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)
