from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # this must be set in the environment
    api_base_url: str

    # Optional Settings with default values
    request_timeout: float = 30.0
    storage_path: str = ".wallet_session.json"

    min_transaction_amount: int = 10_000
    max_transaction_amount: int = 2_000_000
    currency_label: str = "IDR"
    currency_symbol: str = "Rp"
    thousands_separator: str = ","

    default_page_size: int = 10
    retry_attempts: int = 3
    retry_backoff_seconds: float = 1.0

    debug: bool = False
    log_file: str = "wallet_client.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
