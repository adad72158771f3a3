"""OpenAI-compatible chat-completions adapters (OpenAI, xAI Grok, OpenRouter)."""

from typing import Any

from ..request import GenerationRequest, Provider, WireCall
from .base import BaseAdapter, dig, parse_json

OPENROUTER_POPULAR = ("gpt-4", "claude", "gemini", "llama", "mistral")
OPENROUTER_PAID_LIMIT = 20


def _is_zero_price(value: Any) -> bool:
    """True for a zero price in any form OpenRouter reports ("0", "0.0", 0)."""
    if isinstance(value, bool):
        return False
    try:
        return float(value) == 0
    except (TypeError, ValueError):
        return False


class OpenAICompatibleAdapter(BaseAdapter):
    """Chat-completions schema shared by several providers."""

    text_path = ("choices", 0, "message", "content")

    def extra_headers(self) -> dict[str, str]:
        return {}

    def build_request(self, request: GenerationRequest, api_key: str) -> WireCall:
        if request.image is not None:
            user_content: Any = [
                {"type": "image_url", "image_url": {"url": request.image.to_data_uri()}},
                {"type": "text", "text": request.prompt},
            ]
        else:
            user_content = request.prompt

        payload = {
            "model": request.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": user_content},
            ],
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        headers.update(self.extra_headers())

        return WireCall(url=self.settings.endpoint, headers=headers, body=self._serialize(payload))


class OpenAIAdapter(OpenAICompatibleAdapter):
    provider = Provider.OPENAI

    def parse_models(self, body: bytes) -> list[str]:
        # Chat models only, newest first
        models = [m for m in super().parse_models(body) if "gpt" in m or "o1" in m]
        return sorted(models, reverse=True)


class XAIAdapter(OpenAICompatibleAdapter):
    provider = Provider.XAI_GROK
    fallback_models = ("grok-2", "grok-2-mini", "grok-beta")


class OpenRouterAdapter(OpenAICompatibleAdapter):
    provider = Provider.OPENROUTER

    def extra_headers(self) -> dict[str, str]:
        headers = {}
        if self.settings.referer:
            headers["HTTP-Referer"] = self.settings.referer
        if self.settings.title:
            headers["X-Title"] = self.settings.title
        return headers

    def parse_models(self, body: bytes) -> list[str]:
        data = dig(parse_json(body), "data")
        if not isinstance(data, list):
            return []

        free_models = []
        paid_models = []
        for model in data:
            if not isinstance(model, dict) or not isinstance(model.get("id"), str):
                continue
            model_id = model["id"]
            pricing = model.get("pricing")
            if not isinstance(pricing, dict):
                pricing = {}
            if ":free" in model_id or (
                _is_zero_price(pricing.get("prompt")) and _is_zero_price(pricing.get("completion"))
            ):
                free_models.append(model_id)
            elif any(name in model_id for name in OPENROUTER_POPULAR):
                paid_models.append(model_id)

        return free_models + paid_models[:OPENROUTER_PAID_LIMIT]
