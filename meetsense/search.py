"""
meetsense/search.py
Keyword search over transcript lines with context snippets.
"""

from typing import List, Tuple

from meetsense.models.record import TranscriptLine

LEAD_CHARS = 50


def context_snippet(content: str, query: str, max_length: int = 150) -> str:
    """
    Window around the first query word found in content.
    Starts LEAD_CHARS before the hit; '...' marks truncated sides.
    """
    lower = content.lower()
    best = -1
    for word in query.lower().split():
        idx = lower.find(word)
        if idx != -1:
            best = idx
            break

    if best == -1:
        return content[:max_length] + '...'

    start = max(0, best - LEAD_CHARS)
    end   = min(len(content), best + max_length)
    snippet = content[start:end]
    return ('...' if start > 0 else '') + snippet + ('...' if end < len(content) else '')


def search_lines(lines: List[TranscriptLine], query: str) -> List[Tuple[TranscriptLine, str]]:
    """Lines containing any query word (case-insensitive), with snippets."""
    words = query.lower().split()
    if not words:
        return []
    hits = []
    for line in lines:
        lower = line.text.lower()
        if any(w in lower for w in words):
            hits.append((line, context_snippet(line.text, query)))
    return hits
