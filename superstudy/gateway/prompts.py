"""Default study prompts and prompt assembly."""

from typing import Iterable

from .request import ContentType

IMAGE_PREFIX = "First, extract and read the text/content from this document image. Then, "

DEFAULT_PROMPTS = {
    ContentType.SUMMARY: (
        "Summarize the following document in clear, concise bullet points for studying. "
        "Focus on the key concepts, main ideas, and important details:\n\n"
    ),
    ContentType.NOTES: (
        "Create detailed study notes from the following content. Include:\n"
        "- Clear headings and subheadings\n"
        "- Key terms with definitions\n"
        "- Important concepts explained\n"
        "- Relationships between ideas\n\n"
        "Content:\n\n"
    ),
    ContentType.QUIZ: (
        "Generate 10 multiple-choice questions based on the following content. "
        "For each question:\n"
        "- Provide 4 answer options (A, B, C, D)\n"
        "- Mark the correct answer with [CORRECT]\n"
        "- Make questions test understanding, not just memorization\n\n"
        "Format example:\n"
        "Q1: What is...?\n"
        "A) Option 1\n"
        "B) Option 2 [CORRECT]\n"
        "C) Option 3\n"
        "D) Option 4\n\n"
        "Content:\n\n"
    ),
    ContentType.FLASHCARDS: (
        "Create 15 flashcard pairs from the following content. Return as JSON array:\n"
        '[{"front": "question or term", "back": "answer or definition"}]\n\n'
        "Focus on key concepts, definitions, and important facts.\n\n"
        "Content:\n\n"
    ),
}


def _lcfirst(text: str) -> str:
    return text[:1].lower() + text[1:]


def build_prompt(
    content_type: ContentType | str,
    source_text: str,
    custom_prompt: str | None = None,
    has_image: bool = False,
) -> str:
    """Assemble the full prompt for a content type.

    Args:
        content_type: Kind of study content
        source_text: Document text appended after the instructions
        custom_prompt: Replaces the default instructions when non-empty
        has_image: Whether an image accompanies the prompt

    Returns:
        Prompt text
    """
    base = custom_prompt or DEFAULT_PROMPTS[ContentType(content_type)]
    if has_image and not source_text:
        # Image-only source: ask the model to read the image first
        base = IMAGE_PREFIX + _lcfirst(base)
    return base + source_text


def merge_documents(documents: Iterable[tuple[str, str]]) -> str:
    """Concatenate ``(name, text)`` documents, skipping empty ones."""
    merged = ""
    for name, text in documents:
        if text:
            merged += f"\n\n--- {name} ---\n{text}"
    return merged
