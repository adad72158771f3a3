"""Tests for the content normalizer."""

from superstudy.gateway.normalizer import (
    Flashcard,
    ParseStatus,
    format_notes,
    normalize_content,
    parse_flashcards,
    parse_quiz,
)
from superstudy.gateway.request import ContentType


class TestParseQuiz:
    """Test quiz parsing."""

    def test_single_question(self):
        questions = parse_quiz("Q1: What is 2+2?\nA) 3\nB) 4 [CORRECT]\nC) 5\nD) 6")

        assert len(questions) == 1
        question = questions[0]
        assert question.number == 1
        assert question.question == "What is 2+2?"
        assert [o.letter for o in question.options] == ["A", "B", "C", "D"]
        assert question.correct_letter == "B"
        assert question.option("b").text == "4"

    def test_multiple_questions_in_order(self):
        text = (
            "Here is your quiz:\n\n"
            "Q1: Capital of France?\nA) Paris [CORRECT]\nB) Rome\n\n"
            "Q2: Largest planet?\nA) Mars\nB) Jupiter [CORRECT]\n"
        )
        questions = parse_quiz(text)
        assert [q.number for q in questions] == [1, 2]
        assert [q.correct_letter for q in questions] == ["A", "B"]

    def test_lowercase_letters(self):
        questions = parse_quiz("Q1: Pick one\na) first\nb) second [CORRECT]")
        assert [o.letter for o in questions[0].options] == ["A", "B"]
        assert questions[0].correct_letter == "B"

    def test_marker_is_case_sensitive(self):
        questions = parse_quiz("Q1: Pick one\nA) first [correct]\nB) second")
        assert questions[0].correct_letter is None
        assert questions[0].options[0].text == "first [correct]"

    def test_no_correct_marker(self):
        questions = parse_quiz("Q3: Open?\nA) yes\nB) no")
        assert questions[0].correct_letter is None

    def test_unrecognized_lines_ignored(self):
        text = "Q1: Question\nA) one\nExplanation: because\nE) five\nB) two [CORRECT]"
        question = parse_quiz(text)[0]
        assert [o.letter for o in question.options] == ["A", "B"]

    def test_segment_without_options_skipped(self):
        text = "Q1: No options here\nJust prose.\nQ2: Real one\nA) x [CORRECT]"
        questions = parse_quiz(text)
        assert len(questions) == 1
        assert questions[0].number == 2

    def test_at_most_one_correct(self):
        question = parse_quiz("Q1: Which?\nA) a [CORRECT]\nB) b [CORRECT]")[0]
        assert [o.correct for o in question.options] == [False, True]
        assert question.correct_letter == "B"

    def test_repeated_letter_replaces_text(self):
        question = parse_quiz("Q1: Which?\nA) first\nB) b\nA) second")[0]
        assert [(o.letter, o.text) for o in question.options] == [("A", "second"), ("B", "b")]

    def test_nothing_found(self):
        assert parse_quiz("I could not create a quiz.") == []


class TestParseFlashcards:
    """Test flashcard parsing."""

    def test_embedded_array(self):
        cards = parse_flashcards('Here you go: [{"front":"x","back":"y"}] enjoy')
        assert cards == [Flashcard(front="x", back="y")]

    def test_no_structured_data(self):
        assert parse_flashcards("no structured data here") == []

    def test_code_fenced_array(self):
        text = '```json\n[\n  {"front": "ATP", "back": "Energy currency"},\n  {"front": "DNA", "back": "Genetic code"}\n]\n```'
        cards = parse_flashcards(text)
        assert [c.front for c in cards] == ["ATP", "DNA"]

    def test_greedy_match_spans_to_last_bracket(self):
        # The greedy span includes trailing "[see notes]" and is invalid JSON
        text = '[{"front": "a", "back": "b"}] and also [see notes]'
        assert parse_flashcards(text) == []

    def test_entries_missing_fields_skipped(self):
        text = '[{"front": "a", "back": "b"}, {"front": "only"}, "stray", {"front": 1, "back": 2}]'
        assert parse_flashcards(text) == [Flashcard("a", "b"), Flashcard("1", "2")]

    def test_object_instead_of_array(self):
        assert parse_flashcards('{"front": "a", "back": "b"}') == []

    def test_duplicates_kept_in_order(self):
        text = '[{"front": "a", "back": "b"}, {"front": "a", "back": "b"}]'
        assert len(parse_flashcards(text)) == 2

    def test_deeply_nested_brackets(self):
        text = "Here: " + "[" * 100000 + "]" * 100000
        assert parse_flashcards(text) == []


class TestFormatNotes:
    """Test notes formatting."""

    def test_heading_then_list(self):
        markup = format_notes("# Title\n- a\n- b")
        assert markup == "<h3>Title</h3><br />\n<ul><li>a</li><br />\n<li>b</li></ul>"
        assert markup.index("<h3>Title</h3>") < markup.index("<ul>")

    def test_heading_levels(self):
        markup = format_notes("### Deep\n## Mid\n# Top")
        assert "<h5>Deep</h5>" in markup
        assert "<h4>Mid</h4>" in markup
        assert "<h3>Top</h3>" in markup
        assert "#" not in markup

    def test_bold_before_italic(self):
        assert format_notes("**bold** and *italic*") == "<strong>bold</strong> and <em>italic</em>"

    def test_separate_lists(self):
        markup = format_notes("- a\n\n- b")
        assert markup.count("<ul>") == 2

    def test_line_breaks(self):
        assert format_notes("one\r\ntwo") == "one<br />\r\ntwo"

    def test_heading_marker_needs_space(self):
        assert format_notes("#hashtag") == "#hashtag"


class TestNormalizeContent:
    """Test parse-status reporting."""

    def test_quiz_parsed(self):
        result = normalize_content(ContentType.QUIZ, "Q1: Q?\nA) a [CORRECT]")
        assert result.status is ParseStatus.PARSED
        assert result.parsed
        assert len(result.questions) == 1

    def test_quiz_empty_fallback_keeps_text(self):
        result = normalize_content("quiz", "The model ignored the format.")
        assert result.status is ParseStatus.EMPTY_FALLBACK
        assert result.questions == []
        assert result.text == "The model ignored the format."

    def test_flashcards_empty_fallback(self):
        result = normalize_content(ContentType.FLASHCARDS, "[]")
        assert result.status is ParseStatus.EMPTY_FALLBACK

    def test_flashcards_deeply_nested_falls_back(self):
        text = "[" * 100000 + "]" * 100000
        result = normalize_content("flashcards", text)
        assert result.status is ParseStatus.EMPTY_FALLBACK
        assert result.text == text

    def test_notes_markup(self):
        result = normalize_content(ContentType.NOTES, "# Cells")
        assert result.status is ParseStatus.PARSED
        assert result.markup == "<h3>Cells</h3>"

    def test_summary_is_raw(self):
        result = normalize_content(ContentType.SUMMARY, "- point")
        assert result.status is ParseStatus.RAW
        assert result.markup is None
        assert result.text == "- point"
