"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class BankLedgerConfig(BaseSettings):
    """Bank ledger configuration"""

    # Transaction log configuration
    transaction_log_enabled: bool = True
    transaction_log_path: str = "bank_accounts.csv"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"

    # Business rules configuration
    reject_non_positive_amounts: bool = True  # Negative amounts are always rejected
    amount_precision: Optional[int] = 2  # None keeps full entered precision

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090

    class Config:
        env_prefix = "BANK_LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BankLedgerConfig()


def get_config() -> BankLedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankLedgerConfig:
    """Reload configuration from environment"""
    global config
    config = BankLedgerConfig()
    return config
