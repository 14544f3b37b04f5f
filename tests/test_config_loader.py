"""Tests for configuration loading and validation."""

import pytest

from inventory_sync.config.loader import ConfigLoader
from inventory_sync.config.models import FieldPolicy, SecretConfig
from inventory_sync.exceptions import ConfigurationError

ENV = {
    "ERP_API_URL": "https://erp.test/api/products",
    "EASY_ORDER_BASE_URL": "https://store.test/api/",
    "EASY_ORDER_API_KEY": "env-key",
}


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_load_from_env_only():
    config = ConfigLoader.load_from_env(ENV)

    assert config.source.url == "https://erp.test/api/products"
    assert config.target.base_url == "https://store.test/api"
    assert config.target.api_key.env_var == "EASY_ORDER_API_KEY"
    assert ConfigLoader.resolve_secret(config.target.api_key, ENV) == "env-key"
    assert config.target.page_size == 20
    assert config.sync.interval_seconds == 20
    assert config.sync.field_policy == FieldPolicy.FULL


def test_load_from_file(tmp_path):
    path = write_config(
        tmp_path,
        """
version: "1.0"
source:
  url: https://erp.example.com/products
target:
  base_url: https://store.example.com
  api_key: inline-key
  page_size: 50
sync:
  interval_seconds: 60
  field_policy: quantity_only
logging:
  level: debug
  format: JSON
""",
    )

    config = ConfigLoader.load_from_file(path, environ={})

    assert config.source.url == "https://erp.example.com/products"
    assert ConfigLoader.resolve_secret(config.target.api_key, {}) == "inline-key"
    assert config.target.page_size == 50
    assert config.sync.field_policy == FieldPolicy.QUANTITY_ONLY
    assert config.logging.level == "DEBUG"
    assert config.logging.format == "json"


def test_environment_overrides_file(tmp_path):
    path = write_config(
        tmp_path,
        """
source:
  url: https://erp.example.com/products
target:
  base_url: https://store.example.com
""",
    )

    config = ConfigLoader.load_from_file(path, environ=ENV)

    assert config.source.url == ENV["ERP_API_URL"]
    assert config.target.base_url == "https://store.test/api"


def test_missing_api_key_is_a_configuration_error():
    env = {k: v for k, v in ENV.items() if k != "EASY_ORDER_API_KEY"}

    with pytest.raises(ConfigurationError, match="EASY_ORDER_API_KEY"):
        ConfigLoader.load_from_env(env)


def test_missing_urls_are_a_configuration_error():
    with pytest.raises(ConfigurationError):
        ConfigLoader.load_from_env({"EASY_ORDER_API_KEY": "k"})


def test_missing_file_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigLoader.load_from_file(tmp_path / "nope.yaml", environ=ENV)


def test_invalid_yaml_is_a_configuration_error(tmp_path):
    path = write_config(tmp_path, "source: [unclosed")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        ConfigLoader.load_from_file(path, environ=ENV)


@pytest.mark.parametrize(
    "section",
    [
        "version: '2.0'",
        "sync:\n  field_policy: everything",
        "logging:\n  level: LOUD",
        "target:\n  page_size: 0",
    ],
)
def test_invalid_values_are_rejected(tmp_path, section):
    path = write_config(tmp_path, section)

    with pytest.raises(ConfigurationError):
        ConfigLoader.load_from_file(path, environ=ENV)


def test_secret_value_is_fallback_for_unset_env_var():
    secret = SecretConfig(value="fallback", env_var="UNSET_VAR")

    assert ConfigLoader.resolve_secret(secret, {}) == "fallback"
