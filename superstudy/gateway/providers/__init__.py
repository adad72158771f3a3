"""Provider adapter implementations."""

from .anthropic import AnthropicAdapter
from .base import BaseAdapter, ProviderAdapter
from .gemini import GeminiAdapter
from .openai_compat import OpenAIAdapter, OpenAICompatibleAdapter, OpenRouterAdapter, XAIAdapter
from .registry import ADAPTER_CLASSES, ProviderRegistry

__all__ = [
    "ProviderAdapter",
    "BaseAdapter",
    "OpenAICompatibleAdapter",
    "OpenAIAdapter",
    "XAIAdapter",
    "OpenRouterAdapter",
    "AnthropicAdapter",
    "GeminiAdapter",
    "ADAPTER_CLASSES",
    "ProviderRegistry",
]
