"""
Configuration management for the Tumblr client.

This module loads credentials and transport settings from multiple sources
(explicit overrides, environment variables, config files). The client itself
never reads the environment: an application loads a ``ClientConfig`` here
and hands it to ``TumblrClient.from_config``.
"""

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from .constants import DEFAULT_TIMEOUT, USER_AGENT
from .exceptions import ConfigurationError
from .oauth import Token


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration settings for the Tumblr client.

    Attributes:
        consumer_key: OAuth consumer key (also used as ``api_key``)
        consumer_secret: OAuth consumer secret
        oauth_token: OAuth access token key
        oauth_token_secret: OAuth access token secret
        timeout: Transport timeout in seconds
        user_agent: User-Agent header sent with every request
        rate_limit: Optional self-imposed requests per second
        verbose: Enable verbose logging output
        log_file: Path to log file for persistent logging
    """

    consumer_key: str
    consumer_secret: str = field(repr=False)
    oauth_token: Optional[str] = field(default=None, repr=False)
    oauth_token_secret: Optional[str] = field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    rate_limit: Optional[float] = None
    verbose: bool = False
    log_file: Optional[Path] = None

    @property
    def token(self) -> Optional[Token]:
        """OAuth access token, or None when no token is configured."""
        if self.oauth_token and self.oauth_token_secret:
            return Token(self.oauth_token, self.oauth_token_secret)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the configuration."""
        data = asdict(self)
        if data.get('log_file'):
            data['log_file'] = str(data['log_file'])
        return data


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


def _parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(value)
    return float(value)


# Settings that are not plain strings, with the parser turning raw env or
# JSON values into the dataclass type
SETTING_PARSERS: Dict[str, Callable[[Any], Any]] = {
    'timeout': _parse_float,
    'rate_limit': _parse_float,
    'verbose': _parse_bool,
    'log_file': Path,
}


def _setting_names() -> List[str]:
    return [f.name for f in fields(ClientConfig)]


def _parse_settings(raw: Dict[str, Any], source: str) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    for key, value in raw.items():
        parser = SETTING_PARSERS.get(key)
        if value is None or parser is None:
            parsed[key] = value
            continue
        try:
            parsed[key] = parser(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid value for {key} in {source}: {value!r}")
    return parsed


class ConfigLoader:
    """
    Loads and merges client settings.

    Configuration precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables (``TUMBLR_*``, optionally from a ``.env`` file)
    3. JSON configuration file
    4. ``ClientConfig`` defaults
    """

    ENV_PREFIX = 'TUMBLR_'

    @staticmethod
    def load_from_env(load_dotenv_file: bool = True) -> Dict[str, Any]:
        """
        Read ``TUMBLR_<SETTING>`` variables for every ``ClientConfig`` field.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        if load_dotenv_file:
            load_dotenv()

        raw = {}
        for name in _setting_names():
            value = os.environ.get(ConfigLoader.ENV_PREFIX + name.upper())
            if value is not None:
                raw[name] = value

        return _parse_settings(raw, "environment")

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, Any]:
        """
        Load settings from a JSON object file.

        Raises:
            ConfigurationError: If the file is missing, not JSON or not an object
        """
        path = Path(path)

        if path.suffix != '.json':
            raise ConfigurationError(
                f"Unsupported config file format: {path.suffix}. Use .json"
            )
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ConfigurationError("Invalid JSON in config file", details=str(e))
        except OSError as e:
            raise ConfigurationError("Error reading config file", details=str(e))

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a JSON object: {path}")

        return _parse_settings(data, str(path))

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge setting dictionaries; later ones win, ``None`` never overrides."""
        merged: Dict[str, Any] = {}
        for config in configs:
            merged.update((key, value) for key, value in config.items() if value is not None)
        return merged

    @staticmethod
    def validate(config: ClientConfig) -> None:
        """
        Validate configuration values.

        Args:
            config: Configuration object to validate

        Raises:
            ConfigurationError: If any validation rule fails
        """
        errors = []

        if not config.consumer_key:
            errors.append(
                "consumer_key is required. "
                "Register an application at: https://www.tumblr.com/oauth/apps"
            )

        if not config.consumer_secret:
            errors.append("consumer_secret is required")

        if bool(config.oauth_token) != bool(config.oauth_token_secret):
            errors.append(
                "oauth_token and oauth_token_secret must be provided together"
            )

        if config.timeout <= 0:
            errors.append(f"timeout must be > 0, got: {config.timeout}")

        if config.rate_limit is not None and config.rate_limit <= 0:
            errors.append(f"rate_limit must be > 0, got: {config.rate_limit}")

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ConfigurationError(error_msg)


def save_config(config: ClientConfig, path: Path) -> None:
    """
    Export configuration to a JSON file for reuse.

    Args:
        config: Configuration object to save
        path: Destination path (must be .json)

    Raises:
        ConfigurationError: If file format is unsupported or write fails
    """
    path = Path(path)

    if path.suffix != '.json':
        raise ConfigurationError(
            f"Unsupported config file format: {path.suffix}. Use .json"
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
    except OSError as e:
        raise ConfigurationError("Error saving config file", details=str(e))


def load_config(
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[Path] = None,
    load_env: bool = True,
) -> ClientConfig:
    """
    Load and validate configuration from all sources.

    Args:
        overrides: Explicit values (highest precedence)
        config_file: Path to configuration file (lowest precedence)
        load_env: Whether to load from environment variables

    Returns:
        Validated ClientConfig object

    Raises:
        ConfigurationError: If configuration is invalid

    Example:
        >>> config = load_config(overrides={'timeout': 10.0})
        >>> client = TumblrClient.from_config(config)
    """
    configs_to_merge = []

    if config_file:
        configs_to_merge.append(ConfigLoader.load_from_file(config_file))

    if load_env:
        configs_to_merge.append(ConfigLoader.load_from_env())

    if overrides:
        configs_to_merge.append(_parse_settings(overrides, "overrides"))

    merged_config = ConfigLoader.merge_configs(*configs_to_merge)

    unknown = sorted(set(merged_config) - set(_setting_names()))
    if unknown:
        raise ConfigurationError(
            "Invalid configuration parameters", details=f"unknown settings: {', '.join(unknown)}"
        )

    config = ClientConfig(**{'consumer_key': '', 'consumer_secret': '', **merged_config})

    ConfigLoader.validate(config)

    return config
