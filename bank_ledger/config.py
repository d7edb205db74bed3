"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Bank ledger configuration"""
    
    # Backing files
    accounts_file: str = "accounts.txt"
    transactions_file: str = "transactions.txt"
    encoding: str = "utf-8"
    
    # Rewrite the account file through a temp file and os.replace.
    # Off by default: plain truncate-and-write, not crash safe.
    atomic_writes: bool = False
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
