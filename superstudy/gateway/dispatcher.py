"""Single-attempt HTTP dispatch for provider wire calls."""

import time

import requests

from superstudy.logger import get_logger

from .request import RawResponse, WireCall

logger = get_logger(__name__)


def _header_text(headers) -> str:
    return "".join(f"{name}: {value}\r\n" for name, value in headers.items())


def dispatch(call: WireCall, timeout_s: float) -> RawResponse:
    """Execute one HTTP exchange.

    Every completed exchange, 4xx and 5xx included, is returned as-is for
    the caller to interpret. Transport failures (DNS, TLS, connection
    reset, timeout) come back as a network-failure RawResponse.

    Args:
        call: Wire call built by a provider adapter
        timeout_s: Overall request timeout in seconds

    Returns:
        Raw response or network failure
    """
    start_time = time.time()
    try:
        response = requests.request(
            call.method,
            call.url,
            headers=call.headers,
            data=call.body.encode("utf-8") if call.body is not None else None,
            timeout=timeout_s,
        )
    except requests.Timeout:
        elapsed_ms = int((time.time() - start_time) * 1000)
        detail = f"Request timed out after {timeout_s}s"
        logger.warning(
            "gateway.dispatch.network_error",
            error_type="Timeout",
            error_detail=detail,
            elapsed_ms=elapsed_ms,
        )
        return RawResponse(network_error=detail, elapsed_ms=elapsed_ms)
    except requests.RequestException as e:
        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.warning(
            "gateway.dispatch.network_error",
            error_type=type(e).__name__,
            error_detail=str(e),
            elapsed_ms=elapsed_ms,
        )
        return RawResponse(network_error=str(e) or type(e).__name__, elapsed_ms=elapsed_ms)

    elapsed_ms = int((time.time() - start_time) * 1000)
    return RawResponse(
        status=response.status_code,
        headers=_header_text(response.headers),
        body=response.content,
        elapsed_ms=elapsed_ms,
    )
