"""Unit tests for config.py - Configuration management."""

import dataclasses
import os
from unittest.mock import patch

import pytest

import kuroko2.config as config
from kuroko2.config import (
    Config,
    LoggingConfig,
    ProviderConfig,
    configure_logging,
    get_config,
    load_config,
    reset_config,
)

PROVIDER_ENV = {
    "KUROKO2_ENDPOINT": "https://kuroko2.example.com/v1",
    "KUROKO2_USERNAME": "terraform",
    "KUROKO2_APIKEY": "envsecret",
}


class TestProviderConfig:
    """Tests for ProviderConfig class."""

    def test_values(self):
        cfg = ProviderConfig(
            endpoint="https://kuroko2.example.com/v1",
            username="terraform",
            apikey="secret",
        )
        assert cfg.endpoint == "https://kuroko2.example.com/v1"
        assert cfg.username == "terraform"
        assert cfg.apikey == "secret"
        assert cfg.timeout == 30.0

    def test_base_url_strips_trailing_slash(self):
        cfg = ProviderConfig(endpoint="http://k/v1//", username="u", apikey="k")
        assert cfg.base_url == "http://k/v1"

    def test_apikey_not_in_repr(self):
        cfg = ProviderConfig(endpoint="http://k", username="u", apikey="topsecret")
        assert "topsecret" not in repr(cfg)

    def test_immutable(self):
        cfg = ProviderConfig(endpoint="http://k", username="u", apikey="k")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.endpoint = "http://other"

    @pytest.mark.parametrize("missing", ["endpoint", "username", "apikey"])
    def test_required_values(self, missing):
        values = {"endpoint": "http://k", "username": "u", "apikey": "k"}
        values[missing] = ""
        with pytest.raises(ValueError, match=missing):
            ProviderConfig(**values)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError, match="timeout"):
            ProviderConfig(endpoint="http://k", username="u", apikey="k", timeout=0)

    def test_from_env(self):
        env_vars = {**PROVIDER_ENV, "KUROKO2_TIMEOUT": "12.5"}
        with patch.dict(os.environ, env_vars, clear=True):
            cfg = ProviderConfig.from_env()
            assert cfg.endpoint == "https://kuroko2.example.com/v1"
            assert cfg.username == "terraform"
            assert cfg.apikey == "envsecret"
            assert cfg.timeout == 12.5

    def test_from_env_missing_apikey_raises(self):
        env_vars = {**PROVIDER_ENV, "KUROKO2_APIKEY": ""}
        with patch.dict(os.environ, env_vars, clear=True):
            with pytest.raises(ValueError, match="KUROKO2_APIKEY"):
                ProviderConfig.from_env()

    def test_from_env_missing_endpoint_raises(self):
        env_vars = {k: v for k, v in PROVIDER_ENV.items() if k != "KUROKO2_ENDPOINT"}
        with patch.dict(os.environ, env_vars, clear=True):
            with pytest.raises(ValueError, match="endpoint"):
                ProviderConfig.from_env()

    def test_from_dict(self):
        cfg = ProviderConfig.from_dict(
            {"endpoint": "http://k", "username": "u", "apikey": "k", "timeout": 3}
        )
        assert cfg.endpoint == "http://k"
        assert cfg.timeout == 3.0


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_values(self):
        cfg = LoggingConfig()
        assert cfg.level == "INFO"
        assert "%(levelname)s" in cfg.format

    def test_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            cfg = LoggingConfig.from_env()
            assert cfg.level == "DEBUG"

    def test_configure_logging(self):
        with patch("kuroko2.config.logging.basicConfig") as mock_basic:
            configure_logging(LoggingConfig(level="WARNING"))

        mock_basic.assert_called_once_with(
            level="WARNING", format=LoggingConfig().format
        )


class TestConfigSingleton:
    """Tests for load_config/get_config/reset_config."""

    def setup_method(self):
        reset_config()

    def teardown_method(self):
        reset_config()

    def test_from_env(self):
        with patch.dict(os.environ, PROVIDER_ENV, clear=True):
            cfg = Config.from_env()
            assert cfg.provider.username == "terraform"
            assert cfg.logging.level == "INFO"

    def test_load_config_caches(self):
        with patch.dict(os.environ, PROVIDER_ENV, clear=True):
            first = load_config()
            second = get_config()
            assert first is second
            assert config.config is first

    def test_reset_config(self):
        with patch.dict(os.environ, PROVIDER_ENV, clear=True):
            load_config()
        reset_config()
        assert config.config is None
