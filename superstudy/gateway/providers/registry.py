"""Provider adapter registration and lookup."""

from typing import Dict

from ..config import GatewayConfig
from ..request import Provider
from .anthropic import AnthropicAdapter
from .base import BaseAdapter, ProviderAdapter
from .gemini import GeminiAdapter
from .openai_compat import OpenAIAdapter, OpenRouterAdapter, XAIAdapter

ADAPTER_CLASSES: Dict[Provider, type[BaseAdapter]] = {
    Provider.OPENAI: OpenAIAdapter,
    Provider.ANTHROPIC: AnthropicAdapter,
    Provider.GOOGLE_GEMINI: GeminiAdapter,
    Provider.XAI_GROK: XAIAdapter,
    Provider.OPENROUTER: OpenRouterAdapter,
}


class ProviderRegistry:
    """Registry of configured provider adapters."""

    def __init__(self):
        self._adapters: Dict[Provider, ProviderAdapter] = {}

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "ProviderRegistry":
        """Build one adapter per configured provider.

        Args:
            config: Gateway configuration

        Returns:
            Populated registry
        """
        registry = cls()
        for provider, settings in config.providers.items():
            adapter_cls = ADAPTER_CLASSES[provider]
            registry.register(adapter_cls(settings, system_prompt=config.system_prompt))
        return registry

    def register(self, adapter: ProviderAdapter) -> None:
        """Register an adapter under its provider."""
        self._adapters[adapter.provider] = adapter

    def get(self, provider: Provider | str) -> ProviderAdapter:
        """Get the adapter for a provider.

        Raises:
            ValueError: If the provider is unknown or not configured
        """
        provider = Provider.parse(provider)
        if provider not in self._adapters:
            available = ", ".join(p.value for p in self._adapters)
            raise ValueError(
                f"Provider '{provider.value}' not configured. "
                f"Available providers: {available or 'none'}"
            )
        return self._adapters[provider]

    def list(self) -> list[Provider]:
        """List all registered providers."""
        return list(self._adapters.keys())
