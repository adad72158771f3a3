"""Google Gemini generateContent adapter."""

from urllib.parse import quote

from ..request import GenerationRequest, Provider, WireCall
from .base import BaseAdapter, dig, parse_json


class GeminiAdapter(BaseAdapter):
    """Gemini REST API; the key travels in the ``key`` query parameter."""

    provider = Provider.GOOGLE_GEMINI
    text_path = ("candidates", 0, "content", "parts", 0, "text")

    def build_request(self, request: GenerationRequest, api_key: str) -> WireCall:
        parts = []
        if request.image is not None:
            parts.append({
                "inline_data": {
                    "mime_type": request.image.mime_type,
                    "data": request.image.to_base64(),
                }
            })
        parts.append({"text": request.prompt})

        payload = {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_tokens,
            },
        }

        url = (
            f"{self.settings.endpoint}{quote(request.model, safe='/')}:generateContent"
            f"?key={quote(api_key, safe='')}"
        )
        return WireCall(
            url=url,
            headers={"Content-Type": "application/json"},
            body=self._serialize(payload),
        )

    def build_models_request(self, api_key: str) -> WireCall | None:
        if not self.settings.models_url:
            return None
        return WireCall(
            url=f"{self.settings.models_url}?key={quote(api_key, safe='')}",
            method="GET",
        )

    def parse_models(self, body: bytes) -> list[str]:
        data = dig(parse_json(body), "models")
        if not isinstance(data, list):
            return []

        models = []
        for model in data:
            if not isinstance(model, dict) or not isinstance(model.get("name"), str):
                continue
            name = model["name"].replace("models/", "")
            methods = model.get("supportedGenerationMethods") or []
            if "gemini" in name and "generateContent" in methods:
                models.append(name)
        return models
