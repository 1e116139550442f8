"""
Tests for configuration management module.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from tumblr_client.config import (
    ClientConfig,
    ConfigLoader,
    load_config,
    save_config,
)
from tumblr_client.exceptions import ConfigurationError
from tumblr_client.oauth import Token


class TestClientConfig:
    """Test ClientConfig dataclass."""

    def test_minimal_config(self):
        """Test creating config with minimal required fields."""
        config = ClientConfig(consumer_key="key", consumer_secret="secret")

        assert config.timeout == 30.0
        assert config.rate_limit is None
        assert config.verbose is False
        assert config.token is None

    def test_token(self):
        """Token is built when both parts are present."""
        config = ClientConfig(
            consumer_key="key",
            consumer_secret="secret",
            oauth_token="token",
            oauth_token_secret="token-secret",
        )

        assert config.token == Token("token", "token-secret")

    def test_to_dict(self):
        """Paths are serialized as strings."""
        config = ClientConfig(consumer_key="key", consumer_secret="secret", log_file=Path("/tmp/t.log"))

        data = config.to_dict()
        assert data["log_file"] == "/tmp/t.log"
        assert data["consumer_key"] == "key"

    def test_repr_hides_secrets(self):
        """Secrets are left out of the repr."""
        config = ClientConfig(
            consumer_key="key",
            consumer_secret="consumer-secret",
            oauth_token="token",
            oauth_token_secret="token-secret",
        )

        text = repr(config)
        assert "consumer_key='key'" in text
        assert "consumer-secret" not in text
        assert "token-secret" not in text
        assert "oauth_token" not in text


class TestConfigLoader:
    """Test ConfigLoader."""

    def test_load_from_env(self):
        """Test loading configuration from environment variables."""
        env_vars = {
            'TUMBLR_CONSUMER_KEY': 'env-key',
            'TUMBLR_CONSUMER_SECRET': 'env-secret',
            'TUMBLR_OAUTH_TOKEN': 'env-token',
            'TUMBLR_OAUTH_TOKEN_SECRET': 'env-token-secret',
            'TUMBLR_TIMEOUT': '12.5',
            'TUMBLR_RATE_LIMIT': '2',
            'TUMBLR_VERBOSE': 'true',
            'TUMBLR_LOG_FILE': '/tmp/tumblr.log',
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config = ConfigLoader.load_from_env(load_dotenv_file=False)

        assert config == {
            'consumer_key': 'env-key',
            'consumer_secret': 'env-secret',
            'oauth_token': 'env-token',
            'oauth_token_secret': 'env-token-secret',
            'timeout': 12.5,
            'rate_limit': 2.0,
            'verbose': True,
            'log_file': Path('/tmp/tumblr.log'),
        }

    @pytest.mark.parametrize("env_value, expected", [
        ('true', True),
        ('1', True),
        ('yes', True),
        ('on', True),
        ('false', False),
        ('0', False),
    ])
    def test_load_from_env_boolean_variations(self, env_value, expected):
        """Test different boolean representations."""
        with patch.dict(os.environ, {'TUMBLR_VERBOSE': env_value}, clear=True):
            config = ConfigLoader.load_from_env(load_dotenv_file=False)

        assert config['verbose'] is expected

    def test_load_from_env_invalid_float(self):
        """Test invalid float in environment."""
        with patch.dict(os.environ, {'TUMBLR_TIMEOUT': 'soon'}, clear=True):
            with pytest.raises(ConfigurationError):
                ConfigLoader.load_from_env(load_dotenv_file=False)

    def test_load_from_env_reads_dotenv(self):
        """The .env file is loaded when requested."""
        with patch.dict(os.environ, {}, clear=True):
            with patch('tumblr_client.config.load_dotenv') as mock_load:
                ConfigLoader.load_from_env()

        mock_load.assert_called_once()

    def test_load_from_file_json(self, temp_dir):
        """Test loading configuration from a JSON file."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({
            "consumer_key": "file-key",
            "consumer_secret": "file-secret",
            "log_file": "/tmp/file.log",
        }))

        config = ConfigLoader.load_from_file(path)

        assert config["consumer_key"] == "file-key"
        assert config["log_file"] == Path("/tmp/file.log")

    def test_load_from_file_parses_values(self, temp_dir):
        """String values in the file are parsed like environment values."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"timeout": "15", "verbose": "yes"}))

        config = ConfigLoader.load_from_file(path)

        assert config == {"timeout": 15.0, "verbose": True}

    def test_load_from_file_invalid_value(self, temp_dir):
        """Unparseable values name the setting."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"rate_limit": "fast"}))

        with pytest.raises(ConfigurationError, match="rate_limit"):
            ConfigLoader.load_from_file(path)

    def test_load_from_file_not_found(self, temp_dir):
        """Test loading from a missing file."""
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader.load_from_file(temp_dir / "missing.json")

    def test_load_from_file_invalid_json(self, temp_dir):
        """Test loading malformed JSON."""
        path = temp_dir / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigLoader.load_from_file(path)

    def test_load_from_file_unsupported_format(self, temp_dir):
        """Only JSON files are supported."""
        path = temp_dir / "config.yaml"
        path.write_text("consumer_key: x")

        with pytest.raises(ConfigurationError, match="Unsupported"):
            ConfigLoader.load_from_file(path)

    def test_load_from_file_not_an_object(self, temp_dir):
        """The file must hold a JSON object."""
        path = temp_dir / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError):
            ConfigLoader.load_from_file(path)

    def test_merge_configs(self):
        """Later configurations override earlier ones."""
        merged = ConfigLoader.merge_configs(
            {"timeout": 10.0, "consumer_key": "a"},
            {"timeout": 20.0},
        )

        assert merged == {"timeout": 20.0, "consumer_key": "a"}

    def test_merge_configs_none_values(self):
        """None never overrides a value."""
        merged = ConfigLoader.merge_configs({"rate_limit": 1.0}, {"rate_limit": None})

        assert merged == {"rate_limit": 1.0}

    def test_validate_valid_config(self):
        """A complete configuration passes."""
        ConfigLoader.validate(ClientConfig(consumer_key="key", consumer_secret="secret"))

    @pytest.mark.parametrize("kwargs, message", [
        ({"consumer_key": ""}, "consumer_key is required"),
        ({"consumer_secret": ""}, "consumer_secret is required"),
        ({"oauth_token": "token"}, "must be provided together"),
        ({"timeout": 0}, "timeout must be > 0"),
        ({"rate_limit": -1.0}, "rate_limit must be > 0"),
    ])
    def test_validate_errors(self, kwargs, message):
        """Each rule reports its own message."""
        values = {"consumer_key": "key", "consumer_secret": "secret", **kwargs}

        with pytest.raises(ConfigurationError, match=message):
            ConfigLoader.validate(ClientConfig(**values))

    def test_validate_multiple_errors(self):
        """All failing rules are reported together."""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.validate(ClientConfig(consumer_key="", consumer_secret="", timeout=-1))

        message = str(exc_info.value)
        assert "consumer_key" in message
        assert "consumer_secret" in message
        assert "timeout" in message


class TestLoadConfig:
    """Test load_config."""

    def test_precedence(self, temp_dir):
        """Overrides beat the environment, which beats the file."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({
            "consumer_key": "file-key",
            "consumer_secret": "file-secret",
            "timeout": 5.0,
        }))
        env_vars = {'TUMBLR_CONSUMER_KEY': 'env-key', 'TUMBLR_TIMEOUT': '7'}

        with patch.dict(os.environ, env_vars, clear=True):
            with patch('tumblr_client.config.load_dotenv'):
                config = load_config(overrides={"timeout": 9.0}, config_file=path)

        assert config.consumer_key == "env-key"
        assert config.consumer_secret == "file-secret"
        assert config.timeout == 9.0

    def test_without_env(self):
        """The environment can be skipped."""
        with patch.dict(os.environ, {'TUMBLR_CONSUMER_KEY': 'env-key'}, clear=True):
            config = load_config(
                overrides={"consumer_key": "key", "consumer_secret": "secret"},
                load_env=False,
            )

        assert config.consumer_key == "key"

    def test_missing_credentials(self):
        """Missing credentials fail validation."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                load_config(load_env=False)

    def test_unknown_key(self):
        """Unknown settings are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid configuration") as exc_info:
            load_config(
                overrides={"consumer_key": "k", "consumer_secret": "s", "colour": "blue"},
                load_env=False,
            )

        assert exc_info.value.details == "unknown settings: colour"

    def test_overrides_are_parsed(self):
        """Override values go through the same parsers."""
        config = load_config(
            overrides={"consumer_key": "k", "consumer_secret": "s", "timeout": "4", "log_file": "x.log"},
            load_env=False,
        )

        assert config.timeout == 4.0
        assert config.log_file == Path("x.log")


class TestSaveConfig:
    """Test save_config."""

    def test_round_trip(self, temp_dir):
        """A saved config loads back with the same values."""
        config = ClientConfig(consumer_key="key", consumer_secret="secret", rate_limit=1.5)
        path = temp_dir / "nested" / "config.json"

        save_config(config, path)
        loaded = load_config(config_file=path, load_env=False)

        assert loaded == config

    def test_unsupported_format(self, temp_dir):
        """Only JSON files can be written."""
        config = ClientConfig(consumer_key="key", consumer_secret="secret")

        with pytest.raises(ConfigurationError):
            save_config(config, temp_dir / "config.toml")
