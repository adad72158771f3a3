"""Tests for gateway configuration loading and validation."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from superstudy.gateway.config import (
    config_from_dict,
    default_config,
    load_config,
    resolve_api_key,
)
from superstudy.gateway.request import Provider


def create_test_config(content) -> Path:
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(content, f)
        return Path(f.name)


def test_default_config_tables():
    """Test built-in endpoints and default models."""
    config = default_config()

    assert set(config.providers) == set(Provider)
    assert config.providers[Provider.OPENAI].endpoint == "https://api.openai.com/v1/chat/completions"
    assert config.providers[Provider.ANTHROPIC].default_model == "claude-3-5-sonnet-20241022"
    assert config.providers[Provider.GOOGLE_GEMINI].default_model == "gemini-1.5-flash"
    assert config.providers[Provider.XAI_GROK].default_model == "grok-beta"
    assert config.providers[Provider.OPENROUTER].default_model == "openai/gpt-4o-mini"
    assert config.max_tokens == 4096
    assert config.temperature == 0.7
    assert config.generation_timeout_s == 120
    assert config.listing_timeout_s == 15


def test_load_valid_config():
    """Test loading a configuration that overrides some values."""
    config_path = create_test_config({
        "gateway": {
            "temperature": 0.3,
            "generation_timeout_s": 60,
            "providers": {
                "openrouter": {"default_model": "anthropic/claude-sonnet-4", "title": "MyApp"},
            },
        }
    })

    try:
        config = load_config(config_path)
        openrouter = config.providers[Provider.OPENROUTER]
        assert config.temperature == 0.3
        assert config.generation_timeout_s == 60
        assert openrouter.default_model == "anthropic/claude-sonnet-4"
        assert openrouter.title == "MyApp"
        assert openrouter.endpoint == "https://openrouter.ai/api/v1/chat/completions"
        assert config.providers[Provider.OPENAI].default_model == "gpt-4o-mini"
    finally:
        config_path.unlink()


def test_sample_config_loads():
    """Test the shipped sample configuration."""
    sample = Path(__file__).parent.parent / "config" / "gateway.yaml"
    config = load_config(sample)
    assert config == default_config()


def test_load_missing_file():
    """Test loading a non-existent config file."""
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/gateway.yaml")


def test_missing_gateway_section():
    config_path = create_test_config({"llm": {}})
    try:
        with pytest.raises(ValueError, match="missing 'gateway' section"):
            load_config(config_path)
    finally:
        config_path.unlink()


def test_unknown_provider():
    with pytest.raises(ValueError, match="Unknown AI provider 'cohere'"):
        config_from_dict({"providers": {"cohere": {"endpoint": "https://x"}}})


def test_unknown_provider_field():
    with pytest.raises(ValueError, match="unknown fields: api_key"):
        config_from_dict({"providers": {"openai": {"api_key": "sk-inline"}}})


def test_empty_endpoint():
    with pytest.raises(ValueError, match="missing 'endpoint'"):
        config_from_dict({"providers": {"openai": {"endpoint": ""}}})


@pytest.mark.parametrize("key", ["max_tokens", "generation_timeout_s", "listing_timeout_s"])
def test_non_positive_values(key):
    with pytest.raises(ValueError, match="must be positive"):
        config_from_dict({key: 0})


def test_resolve_api_key_explicit_wins():
    settings = default_config().providers[Provider.OPENAI]
    with patch.dict("os.environ", {"OPENAI_API_KEY": "env"}):
        assert resolve_api_key(settings, "explicit") == "explicit"
        assert resolve_api_key(settings) == "env"


@patch.dict("os.environ", {}, clear=True)
def test_resolve_api_key_missing():
    settings = default_config().providers[Provider.GOOGLE_GEMINI]
    with pytest.raises(ValueError, match="Missing environment variable: GEMINI_API_KEY"):
        resolve_api_key(settings)


def test_settings_for_accepts_string_ids():
    config = default_config()
    assert config.settings_for("openrouter") is config.providers[Provider.OPENROUTER]
    assert config.settings_for(Provider.ANTHROPIC).api_key_env == "ANTHROPIC_API_KEY"
    with pytest.raises(ValueError, match="Unknown AI provider 'mistral'"):
        config.settings_for("mistral")
