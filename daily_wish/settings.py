from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Service settings, read from ``DAILY_WISH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DAILY_WISH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "http://localhost:8000"
    vote_namespace: str = "dw:vote"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    card_cache_seconds: int = 3600


class KVSettings(BaseSettings):
    """Hosted key-value store credentials.

    Uses the store's own variable names (KV_REST_API_URL, KV_REST_API_TOKEN)
    so the same environment works for every client of the store.
    """

    model_config = SettingsConfigDict(
        env_prefix="KV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rest_api_url: str | None = None
    rest_api_token: str | None = None
    timeout: float = 5.0

    @property
    def configured(self) -> bool:
        return bool(self.rest_api_url and self.rest_api_token)


settings = AppSettings()
