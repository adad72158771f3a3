"""Study content generation: prompt, gateway call, normalization."""

from dataclasses import dataclass

from superstudy.logger import get_logger

from .client import Gateway
from .errors import GenerationResult, GenerationSuccess
from .normalizer import NormalizedContent, normalize_content
from .prompts import build_prompt
from .request import ContentType, InlineImage, Provider

logger = get_logger(__name__)


@dataclass
class StudyContent:
    """Outcome of one content generation.

    ``normalized`` is set only when generation succeeded.
    """

    content_type: ContentType
    result: GenerationResult
    normalized: NormalizedContent | None = None

    @property
    def ok(self) -> bool:
        return self.result.ok


class StudyContentService:
    """Generates summaries, notes, quizzes and flashcards from source material."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def generate(
        self,
        content_type: ContentType | str,
        provider: Provider | str,
        model: str | None,
        source_text: str,
        *,
        image: InlineImage | None = None,
        custom_prompt: str | None = None,
        api_key: str | None = None,
    ) -> StudyContent:
        """Generate one piece of study content.

        Args:
            content_type: Kind of content to produce
            provider: Provider enum or identifier
            model: Model id; the provider default when None
            source_text: Extracted document text (may be empty with an image)
            image: Optional document image
            custom_prompt: Replaces the default instructions
            api_key: Provider API key

        Returns:
            StudyContent with the generation result and, on success, the
            normalized content

        Raises:
            ValueError: If there is neither source text nor an image, or the
                content type or provider is unknown
        """
        content_type = ContentType(content_type)
        if not source_text and image is None:
            raise ValueError("No content available to process. Please upload a document first.")

        prompt = build_prompt(content_type, source_text, custom_prompt, has_image=image is not None)
        result = self.gateway.generate_text(
            provider, prompt, model=model, image=image, api_key=api_key
        )

        if not isinstance(result, GenerationSuccess):
            return StudyContent(content_type, result)

        normalized = normalize_content(content_type, result.text)
        logger.info(
            "content.generate.success",
            content_type=content_type.value,
            parse_status=normalized.status.value,
        )
        return StudyContent(content_type, result, normalized)
