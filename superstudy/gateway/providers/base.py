"""Base provider adapter protocol/interface."""

import json
from typing import Any, Protocol, runtime_checkable

from ..config import ProviderSettings
from ..errors import provider_error_message
from ..request import GenerationRequest, Provider, WireCall


@runtime_checkable
class ProviderAdapter(Protocol):
    """Protocol for translating between canonical requests and a provider's wire schema."""

    provider: Provider
    static_models: tuple[str, ...]
    fallback_models: tuple[str, ...]

    def build_request(self, request: GenerationRequest, api_key: str) -> WireCall:
        """Build the provider-specific generation call.

        Args:
            request: Canonical generation request
            api_key: Provider API key

        Returns:
            Wire call ready for dispatch
        """
        ...

    def extract_text(self, body: bytes) -> str | None:
        """Return the generated text from a success body, or None if absent."""
        ...

    def extract_error_message(self, body: bytes) -> str | None:
        """Return the provider's error message from an error body, or None."""
        ...

    def build_models_request(self, api_key: str) -> WireCall | None:
        """Build the model-listing call, or None when the provider has no endpoint."""
        ...

    def parse_models(self, body: bytes) -> list[str]:
        """Return the usable model ids from a model-listing body."""
        ...


def parse_json(body: bytes | str | None) -> Any:
    """Decode a JSON body, returning None for empty or malformed input."""
    if not body:
        return None
    try:
        return json.loads(body)
    except (TypeError, ValueError):
        return None


def dig(data: Any, *path: str | int) -> Any:
    """Follow a path of keys/indexes through nested JSON, or return None."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(data, list) or len(data) <= step:
                return None
        elif not isinstance(data, dict) or step not in data:
            return None
        data = data[step]
    return data


class BaseAdapter:
    """Shared plumbing for the concrete adapters."""

    provider: Provider
    # JSON path to the generated text in a success body
    text_path: tuple = ()
    # Returned instead of a network call when the provider has no models endpoint
    static_models: tuple[str, ...] = ()
    # Returned when the models endpoint fails, instead of an error
    fallback_models: tuple[str, ...] = ()

    def __init__(self, settings: ProviderSettings, system_prompt: str = ""):
        self.settings = settings
        self.system_prompt = system_prompt

    def extract_text(self, body: bytes) -> str | None:
        text = dig(parse_json(body), *self.text_path)
        return text if isinstance(text, str) else None

    def extract_error_message(self, body: bytes) -> str | None:
        return provider_error_message(parse_json(body))

    def build_models_request(self, api_key: str) -> WireCall | None:
        if self.static_models or not self.settings.models_url:
            return None
        return WireCall(
            url=self.settings.models_url,
            headers={"Authorization": f"Bearer {api_key}"},
            method="GET",
        )

    def parse_models(self, body: bytes) -> list[str]:
        data = dig(parse_json(body), "data")
        if not isinstance(data, list):
            return []
        return [m["id"] for m in data if isinstance(m, dict) and isinstance(m.get("id"), str)]

    @staticmethod
    def _serialize(payload: dict) -> str:
        return json.dumps(payload)
