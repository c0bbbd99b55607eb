from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Record store
    store_backend: str = "sqlite"  # "sqlite" | "supabase"
    store_table: str = "team-health"
    sqlite_path: str = "data/team_health.db"

    # Hosted store (Supabase / PostgREST)
    supabase_url: str = ""
    supabase_key: str = ""  # anon key
    store_timeout: float = 10.0  # seconds

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # CLI client target
    api_base_url: str = "http://127.0.0.1:8000"

    # Logging
    log_level: str = "INFO"


settings = Settings()
