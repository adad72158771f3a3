"""
Content Normalizer - turns generated free text into study artifacts.

Parsing is best-effort: a model that ignores the requested format yields an
empty structured result, never an exception. ``normalize_content`` reports
which of the two happened so callers can fall back to the raw text.
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from superstudy.logger import get_logger

from .request import ContentType

logger = get_logger(__name__)

QUESTION_RE = re.compile(r"Q(\d+):\s*(.+?)(?=Q\d+:|$)", re.DOTALL)
# Letter is case-insensitive, the [CORRECT] marker is not
OPTION_RE = re.compile(r"^([A-Da-d])\)\s*(.+?)(\s*\[CORRECT\])?$")
JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class ParseStatus(Enum):
    PARSED = "parsed"
    EMPTY_FALLBACK = "empty_fallback"
    RAW = "raw"


@dataclass
class QuizOption:
    letter: str
    text: str
    correct: bool = False


@dataclass
class QuizQuestion:
    number: int
    question: str
    options: list[QuizOption] = field(default_factory=list)

    @property
    def correct_letter(self) -> str | None:
        for option in self.options:
            if option.correct:
                return option.letter
        return None

    def option(self, letter: str) -> QuizOption | None:
        for candidate in self.options:
            if candidate.letter == letter.upper():
                return candidate
        return None


@dataclass(frozen=True)
class Flashcard:
    front: str
    back: str


@dataclass
class NormalizedContent:
    """Normalizer output; ``text`` always holds the raw generated text."""

    content_type: ContentType
    text: str
    status: ParseStatus
    questions: list[QuizQuestion] = field(default_factory=list)
    flashcards: list[Flashcard] = field(default_factory=list)
    markup: str | None = None

    @property
    def parsed(self) -> bool:
        return self.status is ParseStatus.PARSED


def _parse_options(lines: list[str]) -> list[QuizOption]:
    options: dict[str, QuizOption] = {}
    for line in lines:
        match = OPTION_RE.match(line.strip())
        if not match:
            continue
        letter = match.group(1).upper()
        is_correct = bool(match.group(3))
        if is_correct:
            # Last marker wins
            for other in options.values():
                other.correct = False
        if letter in options:
            options[letter].text = match.group(2).strip()
            options[letter].correct = is_correct or options[letter].correct
        else:
            options[letter] = QuizOption(letter, match.group(2).strip(), is_correct)
    return list(options.values())


def parse_quiz(text: str) -> list[QuizQuestion]:
    """Parse ``Q<n>:`` blocks with ``A)``-``D)`` option lines.

    Args:
        text: Generated quiz text

    Returns:
        Questions in source order; blocks without a question line or without
        any recognizable option are skipped
    """
    questions = []
    for match in QUESTION_RE.finditer(text):
        lines = match.group(2).strip().split("\n")
        question_text = lines[0].strip()
        options = _parse_options(lines[1:])
        if question_text and options:
            questions.append(QuizQuestion(int(match.group(1)), question_text, options))
    return questions


def _cards_from_json(candidate: str) -> list[Flashcard]:
    try:
        data: Any = json.loads(candidate)
    except (ValueError, RecursionError):
        # Pathologically nested brackets
        return []
    if not isinstance(data, list):
        return []
    return [
        Flashcard(front=str(item["front"]), back=str(item["back"]))
        for item in data
        if isinstance(item, dict) and "front" in item and "back" in item
    ]


def parse_flashcards(text: str) -> list[Flashcard]:
    """Parse a JSON array of ``{"front", "back"}`` objects out of free text.

    The first bracketed span (greedy, up to the last ``]``) is tried, then
    the whole text. Returns an empty list when neither yields cards.
    """
    match = JSON_ARRAY_RE.search(text)
    if match:
        cards = _cards_from_json(match.group(0))
        if cards:
            return cards
    return _cards_from_json(text)


def _wrap_list(match: re.Match) -> str:
    return f"<ul>{match.group(0)}</ul>"


def format_notes(text: str) -> str:
    """Convert lightweight markdown in study notes to HTML markup.

    Passes run in a fixed order; each later pass relies on the markup the
    earlier ones produced.
    """
    text = re.sub(r"^### (.+)$", r"<h5>\1</h5>", text, flags=re.MULTILINE)
    text = re.sub(r"^## (.+)$", r"<h4>\1</h4>", text, flags=re.MULTILINE)
    text = re.sub(r"^# (.+)$", r"<h3>\1</h3>", text, flags=re.MULTILINE)

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*(.+?)\*", r"<em>\1</em>", text)

    text = re.sub(r"^- (.+)$", r"<li>\1</li>", text, flags=re.MULTILINE)
    text = re.sub(r"(<li>.*</li>\n?)+", _wrap_list, text)

    return re.sub(r"(\r\n|\n\r|\n|\r)", r"<br />\1", text)


def normalize_content(content_type: ContentType | str, text: str) -> NormalizedContent:
    """Restructure generated text according to its content type.

    Args:
        content_type: Kind of content that was requested
        text: Raw generated text

    Returns:
        Normalized content carrying the parse status and the raw text
    """
    content_type = ContentType(content_type)
    result = NormalizedContent(content_type=content_type, text=text, status=ParseStatus.RAW)

    if content_type is ContentType.QUIZ:
        result.questions = parse_quiz(text)
        result.status = ParseStatus.PARSED if result.questions else ParseStatus.EMPTY_FALLBACK
    elif content_type is ContentType.FLASHCARDS:
        result.flashcards = parse_flashcards(text)
        result.status = ParseStatus.PARSED if result.flashcards else ParseStatus.EMPTY_FALLBACK
    elif content_type is ContentType.NOTES:
        result.markup = format_notes(text)
        result.status = ParseStatus.PARSED

    if result.status is ParseStatus.EMPTY_FALLBACK:
        logger.warning(
            "content.parse.empty_fallback",
            content_type=content_type.value,
            text_length=len(text),
        )

    return result
