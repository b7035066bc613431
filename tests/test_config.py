"""Tests for Library Ledger configuration.

These tests cover:
1. Default values
2. Environment variable loading
3. Validation rules
4. The configuration singleton
"""

import os
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from library_ledger.config import LedgerConfig, get_config, reset_config


class TestLedgerConfig:
    """Test configuration behavior."""

    def test_default_configuration(self):
        """Defaults give an in-memory ledger with the 14-day loan period."""
        with patch.dict(os.environ, {}, clear=True):
            config = LedgerConfig(_env_file=None)

        assert config.server_name == "library-ledger"
        assert config.server_version == "0.1.0"
        assert config.transport == "stdio"
        assert config.loan_period_days == 14
        assert config.loan_period == timedelta(days=14)
        assert config.loan_period.total_seconds() == 1_209_600
        assert config.snapshot_path is None
        assert config.persistence_enabled is False
        assert config.get_database_url() is None

    def test_environment_variable_loading(self, tmp_path: Path):
        env_vars = {
            "LIBRARY_LEDGER_SERVER_NAME": "branch-library",
            "LIBRARY_LEDGER_SERVER_VERSION": "2.0.0",
            "LIBRARY_LEDGER_LOAN_PERIOD_DAYS": "21",
            "LIBRARY_LEDGER_SNAPSHOT_PATH": str(tmp_path / "data" / "ledger.db"),
            "LIBRARY_LEDGER_DEBUG": "true",
            "LIBRARY_LEDGER_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars):
            config = LedgerConfig(_env_file=None)

        assert config.server_name == "branch-library"
        assert config.server_version == "2.0.0"
        assert config.loan_period == timedelta(days=21)
        assert config.snapshot_path == tmp_path / "data" / "ledger.db"
        assert config.debug is True
        assert config.log_level == "DEBUG"

    def test_snapshot_path_directory_created(self, tmp_path: Path):
        target = tmp_path / "nested" / "dir" / "ledger.db"

        config = LedgerConfig(snapshot_path=target)

        assert target.parent.is_dir()
        assert config.persistence_enabled is True
        assert config.get_database_url() == f"sqlite:///{target}"

    def test_server_name_validation(self):
        for name in ["ledger", "main-branch", "lib-123"]:
            assert LedgerConfig(server_name=name).server_name == name

        for name in ["Main_Branch", "main branch", "ab", "x" * 51]:
            with pytest.raises(ValidationError):
                LedgerConfig(server_name=name)

    def test_loan_period_bounds(self):
        with pytest.raises(ValidationError):
            LedgerConfig(loan_period_days=0)

        with pytest.raises(ValidationError):
            LedgerConfig(loan_period_days=366)

    def test_only_stdio_transport(self):
        with pytest.raises(ValidationError):
            LedgerConfig(transport="streamable_http")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LedgerConfig(log_level="VERBOSE")

    def test_server_info(self):
        config = LedgerConfig(server_name="branch-library", server_version="1.2.3")

        assert config.server_info == {
            "name": "branch-library",
            "version": "1.2.3",
            "transport": "stdio",
        }


class TestConfigSingleton:
    def test_get_config_returns_same_instance(self):
        reset_config()
        try:
            assert get_config() is get_config()
        finally:
            reset_config()

    def test_reset_config_reloads_environment(self):
        reset_config()
        try:
            with patch.dict(os.environ, {"LIBRARY_LEDGER_LOAN_PERIOD_DAYS": "7"}):
                reset_config()
                assert get_config().loan_period_days == 7

            reset_config()
            with patch.dict(os.environ, {"LIBRARY_LEDGER_LOAN_PERIOD_DAYS": "30"}):
                assert get_config().loan_period_days == 30
        finally:
            reset_config()
