"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./wallet.db"
    db_pool_size: int = 10
    db_max_overflow: int = 10
    lock_timeout_seconds: float = 5.0

    # Service
    service_name: str = "wallet-transfer"
    log_level: str = "INFO"
    currency_symbol: str = "₱"

    # Transfer rules
    min_transfer_amount: Decimal = Decimal("1.00")
    max_transfer_amount: Decimal = Decimal("50000.00")
    mobile_number_pattern: str = r"^09\d{9}$"

    # Fees
    service_fee: Decimal = Decimal("5.00")
    free_transfer_threshold: Decimal = Decimal("500.00")

    # Daily limits (per sender account, UTC calendar day)
    max_daily_amount: Decimal = Decimal("100000.00")
    max_daily_transfers: int = 20


settings = Settings()
