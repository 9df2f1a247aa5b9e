from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "altseo"
    db_username: str = "altseo"
    db_password: str = "secret"
    db_pool_max_size: int = 4
    db_connect_timeout_seconds: float = 10.0

    state_store: str = "postgres"

    bulk_lock_timeout_seconds: int = 120
    bulk_step_time_limit_seconds: int = 300
    bulk_poll_interval_seconds: float = 1.0
    bulk_document_types: list[str] = ["post", "page"]

    language_min_text_length: int = 5
    language_sample_length: int = 1000

    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_model_name: str = "gpt-4o-mini"
    openai_vision_model_name: str = "gpt-4o"
    openai_timeout_seconds: int = 45
    openai_vision_timeout_seconds: int = 60
    openai_max_attempts: int = 3
    openai_retry_initial_delay_seconds: float = 1.0

    keyword_count: int = 1
    global_keywords: str = ""
    seo_keywords_count: int = 3

    site_base_url: str | None = None
    image_max_bytes: int = 8 * 1024 * 1024
    image_download_timeout_seconds: int = 45
