"""Gateway configuration loading and resolution."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict

import yaml

from .request import MAX_TOKENS, TEMPERATURE, Provider

DEFAULT_SYSTEM_PROMPT = "You are a helpful study assistant that creates educational content."
GENERATION_TIMEOUT_S = 120
LISTING_TIMEOUT_S = 15


@dataclass(frozen=True)
class ProviderSettings:
    """Endpoint and credential settings for one provider."""

    provider: Provider
    endpoint: str
    default_model: str
    api_key_env: str
    models_url: str | None = None
    api_version: str | None = None
    referer: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class GatewayConfig:
    """Complete gateway configuration."""

    providers: Dict[Provider, ProviderSettings]
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE
    generation_timeout_s: int = GENERATION_TIMEOUT_S
    listing_timeout_s: int = LISTING_TIMEOUT_S

    def settings_for(self, provider: "Provider | str") -> ProviderSettings:
        provider = Provider.parse(provider)
        if provider not in self.providers:
            raise ValueError(f"Provider '{provider.value}' is not configured")
        return self.providers[provider]


_DEFAULT_PROVIDERS = {
    Provider.OPENAI: ProviderSettings(
        provider=Provider.OPENAI,
        endpoint="https://api.openai.com/v1/chat/completions",
        models_url="https://api.openai.com/v1/models",
        default_model="gpt-4o-mini",
        api_key_env="OPENAI_API_KEY",
    ),
    Provider.ANTHROPIC: ProviderSettings(
        provider=Provider.ANTHROPIC,
        endpoint="https://api.anthropic.com/v1/messages",
        default_model="claude-3-5-sonnet-20241022",
        api_key_env="ANTHROPIC_API_KEY",
        api_version="2023-06-01",
    ),
    Provider.GOOGLE_GEMINI: ProviderSettings(
        provider=Provider.GOOGLE_GEMINI,
        endpoint="https://generativelanguage.googleapis.com/v1beta/models/",
        models_url="https://generativelanguage.googleapis.com/v1beta/models",
        default_model="gemini-1.5-flash",
        api_key_env="GEMINI_API_KEY",
    ),
    Provider.XAI_GROK: ProviderSettings(
        provider=Provider.XAI_GROK,
        endpoint="https://api.x.ai/v1/chat/completions",
        models_url="https://api.x.ai/v1/models",
        default_model="grok-beta",
        api_key_env="XAI_API_KEY",
    ),
    Provider.OPENROUTER: ProviderSettings(
        provider=Provider.OPENROUTER,
        endpoint="https://openrouter.ai/api/v1/chat/completions",
        models_url="https://openrouter.ai/api/v1/models",
        default_model="openai/gpt-4o-mini",
        api_key_env="OPENROUTER_API_KEY",
        referer="http://localhost",
        title="SuperStudy",
    ),
}

_PROVIDER_FIELDS = ("endpoint", "default_model", "api_key_env", "models_url",
                    "api_version", "referer", "title")


def default_config() -> GatewayConfig:
    """Return the built-in configuration (public endpoints, stock models)."""
    return GatewayConfig(providers=dict(_DEFAULT_PROVIDERS))


def load_config(path: str | Path) -> GatewayConfig:
    """Load and validate gateway configuration from a YAML file.

    Values in the file override the built-in defaults key by key.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated gateway configuration

    Raises:
        FileNotFoundError: If config file not found
        ValueError: If configuration is invalid
        yaml.YAMLError: If YAML is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not data or "gateway" not in data:
        raise ValueError("Configuration file missing 'gateway' section")

    return config_from_dict(data["gateway"] or {})


def config_from_dict(section: Dict[str, Any]) -> GatewayConfig:
    """Build a configuration from the contents of a ``gateway`` section."""
    base = default_config()

    providers = dict(base.providers)
    for provider_id, provider_data in (section.get("providers") or {}).items():
        provider = Provider.parse(provider_id)
        provider_data = provider_data or {}
        unknown = set(provider_data) - set(_PROVIDER_FIELDS)
        if unknown:
            raise ValueError(
                f"Provider '{provider_id}' has unknown fields: {', '.join(sorted(unknown))}"
            )
        overrides = {k: v for k, v in provider_data.items() if k in _PROVIDER_FIELDS}
        settings = replace(providers[provider], **overrides)
        if not settings.endpoint:
            raise ValueError(f"Provider '{provider_id}' missing 'endpoint' field")
        if not settings.api_key_env:
            raise ValueError(f"Provider '{provider_id}' missing 'api_key_env' field")
        providers[provider] = settings

    config = GatewayConfig(
        providers=providers,
        system_prompt=section.get("system_prompt", base.system_prompt),
        max_tokens=section.get("max_tokens", base.max_tokens),
        temperature=section.get("temperature", base.temperature),
        generation_timeout_s=section.get("generation_timeout_s", base.generation_timeout_s),
        listing_timeout_s=section.get("listing_timeout_s", base.listing_timeout_s),
    )

    if config.max_tokens <= 0:
        raise ValueError(f"max_tokens must be positive, got {config.max_tokens}")
    for name in ("generation_timeout_s", "listing_timeout_s"):
        value = getattr(config, name)
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    return config


def resolve_api_key(settings: ProviderSettings, api_key: str | None = None) -> str:
    """Return the API key to use for a provider.

    An explicit key wins; otherwise the provider's environment variable is read.

    Raises:
        ValueError: If no key is available
    """
    if api_key:
        return api_key
    env_key = os.getenv(settings.api_key_env)
    if not env_key:
        raise ValueError(f"Missing environment variable: {settings.api_key_env}")
    return env_key
