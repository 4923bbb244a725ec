from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Savrdeals"
    debug: bool = False

    # API
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "https://savrdeals.com",
        "https://www.savrdeals.com",
    ]

    # Supabase (hosted Postgres + auth + storage)
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_timeout_seconds: float = 10.0

    # Static deal catalog served by GET /api/deals
    deals_json_path: str = "data/deals.json"

    # Outbound mail
    public_site_url: str = "https://savrdeals.com"
    email_user: str = ""
    email_password: str = ""
    email_from: str = ""
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587


@lru_cache
def get_settings() -> Settings:
    return Settings()
