"""Model listing across providers."""

from dataclasses import dataclass, field
from typing import Callable

from superstudy.logger import get_logger

from .providers.base import ProviderAdapter
from .request import Provider, RawResponse, WireCall

logger = get_logger(__name__)

LISTING_ERROR = "Invalid API key or API error"


@dataclass
class ModelListing:
    """Models available to an API key, or the reason none could be listed."""

    provider: Provider
    models: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return not (self.error and not self.models)


def fetch_models(
    adapter: ProviderAdapter,
    api_key: str,
    dispatch: Callable[[WireCall, float], RawResponse],
    timeout_s: float,
) -> ModelListing:
    """List models for one provider.

    Providers without a models endpoint return their static list without any
    network call. Providers with a fallback list return it when the endpoint
    fails instead of reporting an error.

    Args:
        adapter: Adapter for the provider
        api_key: Provider API key
        dispatch: Function performing the HTTP exchange
        timeout_s: Listing timeout in seconds

    Returns:
        Model listing
    """
    provider = adapter.provider
    call = adapter.build_models_request(api_key)
    if call is None:
        return ModelListing(provider, models=list(adapter.static_models))

    raw = dispatch(call, timeout_s)
    if raw.status == 200:
        models = adapter.parse_models(raw.body)
        logger.info("gateway.models.success", provider=provider.value, count=len(models))
        return ModelListing(provider, models=models)

    logger.warning(
        "gateway.models.failure",
        provider=provider.value,
        status=raw.status or None,
        network_error=raw.network_error,
    )
    if adapter.fallback_models:
        return ModelListing(provider, models=list(adapter.fallback_models))
    return ModelListing(provider, error=LISTING_ERROR)
