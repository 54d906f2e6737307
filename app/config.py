from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/alavancas.db"
    default_tz: str = "UTC"  # Calendar day used for "today" and "now"
    default_language: str = "pt"  # "pt" | "en" | "es"

    # Blob store keys are namespaced so several apps can share one database file
    storage_prefix: str = "alavancas_"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
