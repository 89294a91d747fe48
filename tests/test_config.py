"""
Test suite for config module

Tests environment-based configuration and its effect on the standard
checking account.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from account_core.checking import CheckingAccount
from account_core.config import AccountCoreConfig, get_config, reload_config
from account_core.currency import Currency


@pytest.fixture
def env(monkeypatch):
    yield monkeypatch
    monkeypatch.undo()
    reload_config()


class TestConfig:
    """Test AccountCoreConfig"""

    def test_defaults(self, env):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "DEFAULT_ACCOUNT_NUMBER",
                     "DEFAULT_OVERDRAFT_LIMIT", "DEFAULT_CURRENCY"):
            env.delenv(f"ACCOUNT_CORE_{name}", raising=False)
        cfg = AccountCoreConfig()
        assert cfg.log_level == "INFO"
        assert cfg.log_format == "json"
        assert cfg.default_account_number == 99887766
        assert cfg.default_overdraft_limit == Decimal('500')
        assert cfg.default_currency == "EUR"

    def test_environment_overrides(self, env):
        env.setenv("ACCOUNT_CORE_DEFAULT_OVERDRAFT_LIMIT", "750.50")
        env.setenv("ACCOUNT_CORE_DEFAULT_ACCOUNT_NUMBER", "1000")
        env.setenv("ACCOUNT_CORE_LOG_FORMAT", "TEXT")

        cfg = AccountCoreConfig()
        assert cfg.default_overdraft_limit == Decimal('750.50')
        assert cfg.default_account_number == 1000
        assert cfg.log_format == "text"

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            AccountCoreConfig(log_format="xml")
        with pytest.raises(ValidationError):
            AccountCoreConfig(default_overdraft_limit=Decimal('-1'))
        with pytest.raises(ValidationError):
            AccountCoreConfig(default_account_number=-5)

    def test_reload_config_feeds_standard_account(self, env):
        env.setenv("ACCOUNT_CORE_DEFAULT_OVERDRAFT_LIMIT", "1200")
        env.setenv("ACCOUNT_CORE_DEFAULT_CURRENCY", "DKK")
        reloaded = reload_config()
        assert get_config() is reloaded

        account = CheckingAccount.standard()
        assert account.overdraft_limit == Decimal('1200')
        assert account.currency == Currency.DKK
