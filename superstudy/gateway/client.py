"""Main gateway client interface."""

from pathlib import Path
from typing import Callable

from superstudy.logger import get_logger

from .config import GatewayConfig, default_config, load_config, resolve_api_key
from .dispatcher import dispatch
from .errors import (
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    classify,
    empty_response,
    network_failure,
)
from .models import ModelListing, fetch_models
from .providers.base import parse_json
from .providers.registry import ProviderRegistry
from .request import GenerationRequest, InlineImage, Provider, RawResponse, WireCall

logger = get_logger(__name__)


class Gateway:
    """Executes generation requests against the configured providers.

    The gateway keeps no per-request state; one instance may serve
    concurrent callers.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        dispatcher: Callable[[WireCall, float], RawResponse] = dispatch,
    ):
        """Initialize gateway with configuration.

        Args:
            config: Gateway configuration (built-in defaults when omitted)
            dispatcher: Function performing one HTTP exchange
        """
        self.config = config or default_config()
        self.registry = ProviderRegistry.from_config(self.config)
        self._dispatch = dispatcher

    @classmethod
    def from_config(cls, config_path: str | Path) -> "Gateway":
        """Load gateway from YAML config file.

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If configuration is invalid
        """
        return cls(load_config(config_path))

    def build_request(
        self,
        provider: Provider | str,
        prompt: str,
        *,
        model: str | None = None,
        image: InlineImage | None = None,
    ) -> GenerationRequest:
        """Build a canonical request using configured defaults.

        Args:
            provider: Provider enum or identifier
            prompt: Prompt text
            model: Model id; the provider's default model when omitted
            image: Optional inline image

        Raises:
            ValueError: If the provider is unknown or not configured
        """
        provider = Provider.parse(provider)
        settings = self.config.settings_for(provider)
        return GenerationRequest(
            provider=provider,
            model=model or settings.default_model,
            prompt=prompt,
            image=image,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )

    def generate(self, request: GenerationRequest, api_key: str | None = None) -> GenerationResult:
        """Execute a generation request.

        API failures do not raise; they are returned as a classified
        GenerationFailure. Nothing is retried.

        Args:
            request: Canonical generation request
            api_key: Provider API key; read from the provider's environment
                variable when omitted

        Returns:
            GenerationSuccess with the generated text, or GenerationFailure

        Raises:
            ValueError: If the provider is not configured or no API key is available
        """
        adapter = self.registry.get(request.provider)
        settings = self.config.settings_for(request.provider)
        key = resolve_api_key(settings, api_key)

        call = adapter.build_request(request, key)

        logger.info(
            "gateway.generate.start",
            provider=request.provider.value,
            model=request.model,
            prompt_length=len(request.prompt),
            has_image=request.image is not None,
        )

        raw = self._dispatch(call, self.config.generation_timeout_s)

        if raw.is_network_failure:
            return self._failure(request, raw, network_failure(raw.network_error))

        if raw.status >= 400:
            classification = classify(raw.status, parse_json(raw.body), raw.headers)
            return self._failure(
                request, raw, classification,
                provider_error=adapter.extract_error_message(raw.body),
            )

        text = adapter.extract_text(raw.body)
        if text is None or not text.strip():
            return self._failure(request, raw, empty_response())

        logger.info(
            "gateway.generate.success",
            provider=request.provider.value,
            model=request.model,
            status=raw.status,
            elapsed_ms=raw.elapsed_ms,
            text_length=len(text),
        )
        return GenerationSuccess(text=text)

    def generate_text(
        self,
        provider: Provider | str,
        prompt: str,
        *,
        model: str | None = None,
        image: InlineImage | None = None,
        api_key: str | None = None,
    ) -> GenerationResult:
        """Shortcut: build a request with configured defaults and execute it."""
        request = self.build_request(provider, prompt, model=model, image=image)
        return self.generate(request, api_key=api_key)

    def list_models(self, provider: Provider | str, api_key: str | None = None) -> ModelListing:
        """List models available to an API key.

        Raises:
            ValueError: If the provider is unknown or no API key is available
        """
        adapter = self.registry.get(provider)
        if adapter.static_models:
            return ModelListing(adapter.provider, models=list(adapter.static_models))
        key = resolve_api_key(self.config.settings_for(adapter.provider), api_key)
        return fetch_models(adapter, key, self._dispatch, self.config.listing_timeout_s)

    def _failure(self, request, raw, classification, provider_error=None) -> GenerationFailure:
        logger.error(
            "gateway.generate.failure",
            provider=request.provider.value,
            model=request.model,
            kind=classification.kind.value,
            status=classification.status,
            retry_after_s=classification.retry_after_seconds,
            provider_error=provider_error,
            elapsed_ms=raw.elapsed_ms,
        )
        return GenerationFailure(classification)
