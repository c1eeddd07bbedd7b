"""Unit tests for span extractors."""

import re
import time

import pytest

from convo_highlights.extraction import (
    DEFAULT_EXTRACTORS,
    ActionItemExtractor,
    CodeBlockExtractor,
    QuestionExtractor,
    extract_spans,
)
from convo_highlights.extraction.spans import _question_spans
from convo_highlights.models import Conversation, ConversationSource, HighlightCategory, Message, Role


def _conversation(*messages: tuple[Role, str]) -> Conversation:
    return Conversation(
        title="Test",
        source=ConversationSource.CUSTOM,
        messages=tuple(Message(role=role, text=text) for role, text in messages),
    )


class TestCodeBlockExtractor:
    """Tests for fenced code extraction."""

    def test_single_block(self):
        text = "Run this:\n```bash\npip install rich\n```\nDone."
        [highlight] = CodeBlockExtractor().scan(text, 3)

        assert highlight.content == "```bash\npip install rich\n```"
        assert highlight.category == HighlightCategory.CODE
        assert highlight.confidence_score == 0.9
        assert highlight.tags == ["code"]
        assert highlight.position.message_index == 3
        assert text[highlight.position.start_offset:highlight.position.end_offset] == highlight.content

    def test_non_greedy(self):
        text = "```a``` then ```b```"
        highlights = CodeBlockExtractor().scan(text, 0)
        assert [h.content for h in highlights] == ["```a```", "```b```"]

    def test_unclosed_fence(self):
        assert CodeBlockExtractor().scan("```python\nprint(1)", 0) == []


class TestActionItemExtractor:
    """Tests for action item extraction."""

    def test_mid_line_after_sentence(self):
        text = "A closure is a function bundled with its lexical scope. TODO: read more."
        [highlight] = ActionItemExtractor().scan(text, 1)

        assert highlight.content == "read more."
        assert highlight.category == HighlightCategory.ACTION_ITEM
        assert highlight.confidence_score == 0.8
        assert highlight.tags == ["action", "todo"]
        assert highlight.position.start_offset == text.index("read more.")
        assert highlight.position.end_offset == len(text)

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("TODO: write tests", "write tests"),
            ("todo write tests", "write tests"),
            ("- TASK: update docs  ", "update docs"),
            ("  * Action: ping the team", "ping the team"),
            ("• Next step: deploy", "deploy"),
            ("FUTURE: consider caching", "consider caching"),
            ("Plan: refactor parser", "refactor parser"),
        ],
    )
    def test_markers(self, line, expected):
        [highlight] = ActionItemExtractor().scan(line, 0)
        assert highlight.content == expected
        assert line[highlight.position.start_offset:highlight.position.end_offset] == expected

    def test_marker_inside_sentence_ignored(self):
        assert ActionItemExtractor().scan("We have a plan: none yet", 0) == []

    def test_marker_must_be_a_whole_word(self):
        assert ActionItemExtractor().scan("Tasks: many", 0) == []

    def test_empty_capture_skipped(self):
        assert ActionItemExtractor().scan("TODO:\nsomething else", 0) == []

    def test_one_item_per_line(self):
        text = "TODO: first\nTODO: second"
        highlights = ActionItemExtractor().scan(text, 0)
        assert [h.content for h in highlights] == ["first", "second"]


class TestQuestionExtractor:
    """Tests for question extraction."""

    def test_simple_question(self):
        [highlight] = QuestionExtractor().scan("What is a closure?", 0)

        assert highlight.content == "What is a closure?"
        assert highlight.category == HighlightCategory.QUESTION
        assert highlight.confidence_score == 0.7
        assert highlight.tags == ["question"]
        assert (highlight.position.start_offset, highlight.position.end_offset) == (0, 18)

    def test_position_excludes_leading_whitespace(self):
        text = "Fine. Why does this fail here?"
        [highlight] = QuestionExtractor().scan(text, 0)

        assert highlight.content == "Why does this fail here?"
        assert highlight.position.start_offset == 6

    @pytest.mark.parametrize(
        "question, kept",
        [
            ("Why?", False),
            ("abcdefghi?", False),
            ("abcdefghij?", True),
            ("a" * 198 + "?", True),
            ("a" * 199 + "?", False),
        ],
    )
    def test_length_bounds_are_exclusive(self, question, kept):
        assert bool(QuestionExtractor().scan(question, 0)) is kept

    def test_custom_bounds(self):
        extractor = QuestionExtractor(min_length=20, max_length=200)
        assert extractor.scan("What is a closure?", 0) == []

    def test_known_truncation(self):
        [highlight] = QuestionExtractor().scan("Really! But why is that so?", 0)
        assert highlight.content == "But why is that so?"

    @pytest.mark.parametrize(
        "text",
        [
            "What? Why not?? Really! Is that so?",
            "Fine. Why does this fail here?\nNext line?",
            "no terminators at all",
            "a.b!c?d?",
            "?",
            "",
        ],
    )
    def test_spans_match_terminator_regex(self, text):
        expected = [m.span() for m in re.finditer(r"[^.!?]*\?", text)]
        assert list(_question_spans(text)) == expected

    def test_long_text_without_terminators(self):
        started = time.perf_counter()
        assert QuestionExtractor().scan("a" * 100_000, 0) == []
        assert QuestionExtractor().scan("a" * 100_000 + "?", 0) == []
        assert time.perf_counter() - started < 1.0


class TestExtractSpans:
    """Tests for running extractors over a conversation."""

    def test_order_by_message_then_extractor(self):
        conversation = _conversation(
            (Role.USER, "How should I install this package?"),
            (Role.ASSISTANT, "Is pip available to you? Run ```pip install x```\nTODO: pin versions"),
        )
        highlights = extract_spans(conversation)

        assert [(h.message_index, h.category) for h in highlights] == [
            (0, HighlightCategory.QUESTION),
            (1, HighlightCategory.CODE),
            (1, HighlightCategory.ACTION_ITEM),
            (1, HighlightCategory.QUESTION),
        ]

    def test_role_filter(self):
        conversation = _conversation(
            (Role.USER, "What is a closure?"),
            (Role.ASSISTANT, "Explained. TODO: read more."),
        )
        highlights = extract_spans(conversation, roles=[Role.ASSISTANT])

        assert [h.content for h in highlights] == ["read more."]

    def test_custom_extractor_list(self):
        conversation = _conversation((Role.ASSISTANT, "```x``` TODO: y"))
        highlights = extract_spans(conversation, extractors=[CodeBlockExtractor()])
        assert [h.category for h in highlights] == [HighlightCategory.CODE]

    def test_no_dedup_across_extractors(self):
        conversation = _conversation((Role.USER, "TODO: is this really worth doing?"))
        highlights = extract_spans(conversation, DEFAULT_EXTRACTORS)

        assert [h.category for h in highlights] == [
            HighlightCategory.ACTION_ITEM,
            HighlightCategory.QUESTION,
        ]

    def test_positions_point_at_content(self, chatgpt_transcript, settings):
        from convo_highlights.parsing import parse_conversation

        conversation = parse_conversation(chatgpt_transcript, settings=settings)
        highlights = extract_spans(conversation)

        assert highlights
        for h in highlights:
            text = conversation.messages[h.position.message_index].text
            assert text[h.position.start_offset:h.position.end_offset] == h.content
