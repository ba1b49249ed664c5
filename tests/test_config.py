"""
Tests for configuration management
"""

from bank_ledger import config as config_module
from bank_ledger.config import BankLedgerConfig, get_config, reload_config


class TestBankLedgerConfig:
    """Test BankLedgerConfig defaults and environment overrides"""

    def test_defaults(self, monkeypatch):
        """Test default values"""
        for name in ("TRANSACTION_LOG_PATH", "REJECT_NON_POSITIVE_AMOUNTS", "AMOUNT_PRECISION", "API_PORT"):
            monkeypatch.delenv(f"BANK_LEDGER_{name}", raising=False)

        config = BankLedgerConfig(_env_file=None)

        assert config.transaction_log_enabled is True
        assert config.transaction_log_path == "bank_accounts.csv"
        assert config.timestamp_format == "%Y-%m-%d %H:%M:%S"
        assert config.reject_non_positive_amounts is True
        assert config.amount_precision == 2
        assert config.log_format == "json"
        assert config.log_file is None
        assert config.api_port == 8090

    def test_environment_overrides(self, monkeypatch):
        """Test BANK_LEDGER_ prefixed variables are honoured"""
        monkeypatch.setenv("BANK_LEDGER_TRANSACTION_LOG_PATH", "/tmp/ledger.csv")
        monkeypatch.setenv("BANK_LEDGER_REJECT_NON_POSITIVE_AMOUNTS", "false")
        monkeypatch.setenv("BANK_LEDGER_API_PORT", "9000")

        config = BankLedgerConfig(_env_file=None)

        assert config.transaction_log_path == "/tmp/ledger.csv"
        assert config.reject_non_positive_amounts is False
        assert config.api_port == 9000

    def test_reload_config(self, monkeypatch):
        """Test reload picks up environment changes"""
        original = get_config()
        monkeypatch.setenv("BANK_LEDGER_LOG_LEVEL", "DEBUG")
        try:
            reloaded = reload_config()
            assert reloaded.log_level == "DEBUG"
            assert get_config() is reloaded
        finally:
            config_module.config = original
