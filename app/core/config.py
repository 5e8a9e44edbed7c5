from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "menu-service"
    environment: str = "local"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    write_rate_limit: str = "120/minute"
    rate_limit_enabled: bool = True
    seed_sample_data: bool = True

    sentry_dsn: str | None = None
    sentry_environment: str | None = None


settings = Settings()
