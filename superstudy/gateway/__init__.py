"""AI generation gateway - provider adapters, error classification and content normalization."""

from .client import Gateway
from .config import GatewayConfig, ProviderSettings, default_config, load_config
from .content import StudyContent, StudyContentService
from .errors import (
    ErrorClassification,
    ErrorKind,
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    RequestErrorKind,
    classify,
)
from .models import ModelListing
from .normalizer import (
    Flashcard,
    NormalizedContent,
    ParseStatus,
    QuizOption,
    QuizQuestion,
    format_notes,
    normalize_content,
    parse_flashcards,
    parse_quiz,
)
from .request import ContentType, GenerationRequest, InlineImage, Provider

__all__ = [
    "Gateway",
    "GatewayConfig",
    "ProviderSettings",
    "default_config",
    "load_config",
    "StudyContent",
    "StudyContentService",
    "ErrorClassification",
    "ErrorKind",
    "RequestErrorKind",
    "GenerationFailure",
    "GenerationResult",
    "GenerationSuccess",
    "classify",
    "ModelListing",
    "Flashcard",
    "NormalizedContent",
    "ParseStatus",
    "QuizOption",
    "QuizQuestion",
    "format_notes",
    "normalize_content",
    "parse_flashcards",
    "parse_quiz",
    "ContentType",
    "GenerationRequest",
    "InlineImage",
    "Provider",
]
