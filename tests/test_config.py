"""
Tests for configuration management
"""

from bank_ledger import config as config_module
from bank_ledger.config import LedgerConfig, get_config, reload_config


class TestLedgerConfig:
    """Test LedgerConfig defaults and environment overrides"""
    
    def test_defaults(self, monkeypatch):
        for name in ("LEDGER_ACCOUNTS_FILE", "LEDGER_TRANSACTIONS_FILE", "LEDGER_ATOMIC_WRITES"):
            monkeypatch.delenv(name, raising=False)
        
        config = LedgerConfig(_env_file=None)
        
        assert config.accounts_file == "accounts.txt"
        assert config.transactions_file == "transactions.txt"
        assert config.atomic_writes is False
        assert config.encoding == "utf-8"
    
    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LEDGER_ACCOUNTS_FILE", "/data/accounts.txt")
        monkeypatch.setenv("LEDGER_ATOMIC_WRITES", "true")
        monkeypatch.setenv("ledger_log_format", "text")
        
        config = LedgerConfig(_env_file=None)
        
        assert config.accounts_file == "/data/accounts.txt"
        assert config.atomic_writes is True
        assert config.log_format == "text"
    
    def test_reload_config(self, monkeypatch):
        original = get_config()
        monkeypatch.setenv("LEDGER_TRANSACTIONS_FILE", "journal.log")
        try:
            reloaded = reload_config()
            assert reloaded is get_config()
            assert reloaded.transactions_file == "journal.log"
        finally:
            config_module.config = original
