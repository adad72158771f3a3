"""
Error classification for provider API failures.

Maps an HTTP status, the provider's parsed error body and the response
headers onto a small, provider-independent taxonomy with user-facing
messages and retry hints. Classification is pure: identical inputs always
produce identical output.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

DEFAULT_RETRY_AFTER_S = 60

_RETRY_AFTER_RE = re.compile(r"retry-after:\s*(\d+)", re.IGNORECASE)


class ErrorKind(Enum):
    NETWORK_ERROR = "network_error"
    RATE_LIMITED = "rate_limit"
    AUTH_ERROR = "auth_error"
    MODEL_NOT_FOUND = "model_error"
    REQUEST_ERROR = "request_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "api_error"
    EMPTY_RESPONSE = "empty_response"


class RequestErrorKind(Enum):
    """Refinement of ``ErrorKind.REQUEST_ERROR`` (HTTP 400)."""
    CONTENT_TOO_LARGE = "content_too_large"
    SAFETY_FILTERED = "safety_filtered"
    OTHER = "other"


@dataclass(frozen=True)
class ErrorClassification:
    kind: ErrorKind
    message: str
    status: int | None = None
    retry_after_seconds: int | None = None
    request_error_kind: RequestErrorKind | None = None

    @property
    def retryable(self) -> bool:
        return self.kind in (
            ErrorKind.NETWORK_ERROR,
            ErrorKind.RATE_LIMITED,
            ErrorKind.SERVER_ERROR,
        )


@dataclass(frozen=True)
class GenerationSuccess:
    text: str
    ok = True


@dataclass(frozen=True)
class GenerationFailure:
    classification: ErrorClassification
    ok = False

    @property
    def message(self) -> str:
        return self.classification.message


GenerationResult = Union[GenerationSuccess, GenerationFailure]


def parse_retry_after(headers: "str | Mapping[str, str] | None") -> int | None:
    """Extract a Retry-After value in seconds.

    Args:
        headers: Raw header block (``"Name: value"`` lines) or a header mapping

    Returns:
        Seconds to wait, or None when the header is absent or not numeric
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        for name, value in headers.items():
            if str(name).lower() == "retry-after":
                match = re.match(r"\s*(\d+)", str(value))
                if match:
                    return int(match.group(1))
        return None
    match = _RETRY_AFTER_RE.search(headers)
    return int(match.group(1)) if match else None


def provider_error_message(body: Any) -> str | None:
    """Return the provider's error text from a parsed error body.

    All supported providers nest it as ``{"error": {"message": ...}}``; some
    gateways send ``{"error": "..."}`` instead.
    """
    if not isinstance(body, Mapping):
        return None
    error = body.get("error")
    if isinstance(error, Mapping):
        message = error.get("message")
        return str(message) if message is not None else None
    if isinstance(error, str):
        return error
    return None


def classify(
    status: int,
    body: Any = None,
    headers: "str | Mapping[str, str] | None" = None,
) -> ErrorClassification:
    """Classify a failed HTTP exchange.

    Args:
        status: HTTP status code
        body: Parsed JSON error body, or None if the body was not JSON
        headers: Response headers as raw text or a mapping

    Returns:
        Normalized error classification
    """
    retry_after = parse_retry_after(headers)
    api_msg = provider_error_message(body)

    if status == 429:
        wait_time = retry_after if retry_after is not None else DEFAULT_RETRY_AFTER_S
        message = (
            f"Rate limit exceeded. Please wait {wait_time} seconds before trying again."
        )
        if api_msg and "quota" in api_msg:
            message = (
                "API quota exceeded. You may need to upgrade your plan "
                "or wait until your quota resets."
            )
        return ErrorClassification(
            kind=ErrorKind.RATE_LIMITED,
            message=message,
            status=status,
            retry_after_seconds=wait_time,
        )

    if status in (401, 403):
        message = "Invalid or expired API key. Please check your API key in project settings."
        if api_msg:
            if "incorrect" in api_msg:
                message = "Incorrect API key. Please verify your API key is correct."
            elif "permission" in api_msg:
                message = "API key lacks permission for this model. Try a different model."
        return ErrorClassification(ErrorKind.AUTH_ERROR, message, status)

    if status == 404:
        return ErrorClassification(
            ErrorKind.MODEL_NOT_FOUND,
            "Model not found. The selected model may not be available for your account.",
            status,
        )

    if status == 400:
        subkind = RequestErrorKind.OTHER
        message = api_msg or "Bad request. The content may have triggered safety filters."
        if api_msg:
            lowered = api_msg.lower()
            if "context" in lowered or "token" in lowered:
                subkind = RequestErrorKind.CONTENT_TOO_LARGE
                message = "Document is too large. Try uploading a smaller document."
            elif "safety" in lowered or "blocked" in lowered:
                subkind = RequestErrorKind.SAFETY_FILTERED
                message = "Content was blocked by safety filters. Try different document content."
        return ErrorClassification(
            ErrorKind.REQUEST_ERROR,
            message,
            status,
            request_error_kind=subkind,
        )

    if status >= 500:
        return ErrorClassification(
            ErrorKind.SERVER_ERROR,
            "AI service is temporarily unavailable. Please try again in a few minutes.",
            status,
        )

    return ErrorClassification(
        ErrorKind.UNKNOWN,
        api_msg or f"Unknown API error (HTTP {status})",
        status,
    )


def network_failure(detail: str) -> ErrorClassification:
    return ErrorClassification(ErrorKind.NETWORK_ERROR, f"Network error: {detail}")


def empty_response() -> ErrorClassification:
    return ErrorClassification(ErrorKind.EMPTY_RESPONSE, "AI returned empty response")
