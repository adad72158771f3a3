"""Canonical request and wire-level data structures for the generation gateway."""

import base64
from dataclasses import dataclass, field
from enum import Enum

MAX_TOKENS = 4096
TEMPERATURE = 0.7


class Provider(Enum):
    """Supported AI providers.

    The value is the identifier used in configuration files and by callers.
    """
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE_GEMINI = "google-gemini"
    XAI_GROK = "xai-grok"
    OPENROUTER = "openrouter"

    @classmethod
    def parse(cls, value: "str | Provider") -> "Provider":
        """Resolve a provider identifier.

        Raises:
            ValueError: If the identifier is not a known provider
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            available = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Unknown AI provider '{value}'. Available providers: {available}"
            ) from None


class ContentType(Enum):
    """Kinds of study content; selects the prompt and the normalizer path."""
    SUMMARY = "summary"
    NOTES = "notes"
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"


@dataclass(frozen=True)
class InlineImage:
    """Image sent alongside the prompt text."""
    data: bytes
    mime_type: str = "image/jpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass(frozen=True)
class GenerationRequest:
    """
    Provider-neutral request to generate text.

    Attributes:
        provider: Target provider; identifier strings are resolved to Provider
        model: Provider-side model identifier
        prompt: Complete prompt text (instructions plus source material)
        image: Optional inline image for multimodal prompts
        max_tokens: Maximum output tokens
        temperature: Sampling temperature
    """
    provider: Provider
    model: str
    prompt: str
    image: InlineImage | None = None
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE

    def __post_init__(self):
        object.__setattr__(self, "provider", Provider.parse(self.provider))


@dataclass(frozen=True)
class WireCall:
    """Provider-specific HTTP request produced by an adapter."""
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    method: str = "POST"


@dataclass(frozen=True)
class RawResponse:
    """
    Outcome of a single HTTP exchange.

    Exactly one of a completed exchange (status, headers, body) or a
    network failure (network_error) is present.
    """
    status: int = 0
    headers: str = ""
    body: bytes = b""
    network_error: str | None = None
    elapsed_ms: int = 0

    def __post_init__(self):
        if self.network_error is not None and self.status:
            raise ValueError("A network failure cannot carry an HTTP status")
        if self.network_error is None and not self.status:
            raise ValueError("RawResponse needs an HTTP status or a network error")

    @property
    def is_network_failure(self) -> bool:
        return self.network_error is not None

    @property
    def ok(self) -> bool:
        return not self.is_network_failure and 200 <= self.status < 300
