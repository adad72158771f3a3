"""Anthropic Messages API adapter."""

from ..request import GenerationRequest, Provider, WireCall
from .base import BaseAdapter

DEFAULT_API_VERSION = "2023-06-01"


class AnthropicAdapter(BaseAdapter):
    """Messages API; authenticates with ``x-api-key`` plus a version header."""

    provider = Provider.ANTHROPIC
    text_path = ("content", 0, "text")
    # No models endpoint is used
    static_models = (
        "claude-3-5-sonnet-20241022",
        "claude-3-5-haiku-20241022",
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
    )

    def build_request(self, request: GenerationRequest, api_key: str) -> WireCall:
        content = []
        if request.image is not None:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": request.image.mime_type,
                    "data": request.image.to_base64(),
                },
            })
        content.append({"type": "text", "text": request.prompt})

        payload = {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "messages": [{"role": "user", "content": content}],
        }

        headers = {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self.settings.api_version or DEFAULT_API_VERSION,
        }

        return WireCall(url=self.settings.endpoint, headers=headers, body=self._serialize(payload))
