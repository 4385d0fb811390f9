"""
tests/test_search.py
Keyword search and context snippets over transcript lines.
"""

from meetsense.models.record import TranscriptLine
from meetsense.search import context_snippet, search_lines


class TestContextSnippet:
    def test_short_content_untouched(self):
        assert context_snippet("short text here", "text") == "short text here"

    def test_window_with_ellipses(self):
        content = "a" * 100 + " target " + "b" * 200
        snippet = context_snippet(content, "target")
        assert snippet == "..." + content[51:251] + "..."

    def test_no_hit_returns_prefix(self):
        assert context_snippet("abc", "zzz") == "abc..."

    def test_first_query_word_found_wins(self):
        content = "alpha beta gamma"
        assert context_snippet(content, "missing gamma", max_length=5) == "alpha beta gamma"


class TestSearchLines:
    LINES = [
        TranscriptLine("Alice", "Release notes are late", 1),
        TranscriptLine("Bob", "Budget review on Friday", 2),
        TranscriptLine("Carol", "Notes look fine", 3),
    ]

    def test_any_word_matches_case_insensitive(self):
        hits = search_lines(self.LINES, "NOTES budget")
        assert [line.line_no for line, _ in hits] == [1, 2, 3]

    def test_no_hits(self):
        assert search_lines(self.LINES, "deploy") == []

    def test_blank_query(self):
        assert search_lines(self.LINES, "   ") == []
