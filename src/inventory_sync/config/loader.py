"""
Configuration loader for the inventory sync system.

Reads the YAML configuration file, applies environment overrides and
validates the result with the Pydantic models. Configuration is loaded
once at process start.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import InventorySyncConfig, SecretConfig

# Environment variable -> (section, key) it overrides
ENV_OVERRIDES = {
    "ERP_API_URL": ("source", "url"),
    "EASY_ORDER_BASE_URL": ("target", "base_url"),
}
API_KEY_ENV_VAR = "EASY_ORDER_API_KEY"


class ConfigLoader:
    """Loads and validates inventory sync configuration."""

    @staticmethod
    def load_from_file(
        config_path: Path, environ: Optional[Mapping[str, str]] = None
    ) -> InventorySyncConfig:
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            environ: Environment mapping used for overrides (defaults to os.environ)

        Returns:
            Validated InventorySyncConfig
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

        return ConfigLoader.load_from_dict(raw, environ)

    @staticmethod
    def load_from_env(environ: Optional[Mapping[str, str]] = None) -> InventorySyncConfig:
        """Load configuration from environment variables only."""
        return ConfigLoader.load_from_dict({}, environ)

    @staticmethod
    def load_from_dict(
        raw: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
    ) -> InventorySyncConfig:
        """
        Validate a raw configuration mapping after applying environment overrides.

        Args:
            raw: Parsed configuration mapping
            environ: Environment mapping used for overrides (defaults to os.environ)

        Returns:
            Validated InventorySyncConfig
        """
        environ = os.environ if environ is None else environ
        data = dict(raw)
        for section in ("source", "target"):
            data[section] = dict(data.get(section) or {})

        for env_var, (section, key) in ENV_OVERRIDES.items():
            if environ.get(env_var):
                data[section][key] = environ[env_var]

        target = data["target"]
        if not target.get("api_key"):
            target["api_key"] = {"env_var": API_KEY_ENV_VAR}
        elif isinstance(target["api_key"], str):
            target["api_key"] = {"value": target["api_key"]}

        try:
            config = InventorySyncConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        # Fail at startup rather than on the first request
        ConfigLoader.resolve_secret(config.target.api_key, environ)
        return config

    @staticmethod
    def resolve_secret(
        secret: SecretConfig, environ: Optional[Mapping[str, str]] = None
    ) -> str:
        """
        Resolve a secret to its value.

        Args:
            secret: SecretConfig with an inline value or an environment variable name
            environ: Environment mapping (defaults to os.environ)

        Returns:
            The secret value
        """
        environ = os.environ if environ is None else environ
        if secret.env_var:
            value = environ.get(secret.env_var)
            if value:
                return value
            if not secret.value:
                raise ConfigurationError(
                    f"Environment variable {secret.env_var} is not set"
                )
        return secret.value
