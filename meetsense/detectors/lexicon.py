"""
meetsense/detectors/lexicon.py
Trigger word lists and key-point patterns used by the signal detectors.

Everything here is built once at import and never mutated: word lists are
tuples, the key-point table is a read-only mapping of compiled patterns.
Matching is word-boundary and case-insensitive unless noted.
"""

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Pattern, Tuple

# ── EMOTION ──────────────────────────────────────────────────

TENSION_WORDS: Tuple[str, ...] = (
    'frustrated', 'angry', 'upset', 'annoyed', 'irritated', 'stress',
    'pressure', 'urgent', 'critical', 'emergency', 'must', 'immediately',
)

ENTHUSIASM_WORDS: Tuple[str, ...] = (
    'excited', 'amazing', 'awesome', 'fantastic', 'love it', 'brilliant',
    'incredible', 'excellent', 'outstanding', 'wonderful', 'perfect',
)

# ── SENTIMENT ────────────────────────────────────────────────

CONFLICT_WORDS: Tuple[str, ...] = (
    'disagree', 'wrong', 'no way', 'however', 'issue', 'problem',
    'concern', 'worried', 'against', 'oppose', 'cannot accept', 'not good',
    'bad idea', 'mistake', 'incorrect',
)

AGREEMENT_WORDS: Tuple[str, ...] = (
    'agree', 'yes', 'exactly', 'right', 'correct', 'perfect', 'good idea',
    "let's do it", 'sounds good', 'i like', 'great', 'excellent', 'approve',
    'support', 'absolutely', 'definitely', 'makes sense',
)

# ── ACTION ITEMS / DECISIONS ─────────────────────────────────

ACTION_WORDS: Tuple[str, ...] = (
    'i will', "i'll", 'let me', 'i can', "i'll handle", "i'll take care",
    "i'll do", 'we should', 'we need to', 'follow up', 'next steps',
    'action item', 'to do', 'deadline', 'by', 'before',
)

DECISION_WORDS: Tuple[str, ...] = (
    'decided', 'decision', "we'll go with", "let's use", 'agreed to',
    'final decision', 'conclusion', 'settled on', 'choosing', 'selected',
)


def word_pattern(words: Iterable[str]) -> Pattern:
    """One alternation regex, anchored on word boundaries at both ends."""
    alternation = '|'.join(re.escape(w) for w in words)
    return re.compile(rf'\b(?:{alternation})\b', re.IGNORECASE)


TENSION_RE    = word_pattern(TENSION_WORDS)
ENTHUSIASM_RE = word_pattern(ENTHUSIASM_WORDS)
CONFLICT_RE   = word_pattern(CONFLICT_WORDS)
AGREEMENT_RE  = word_pattern(AGREEMENT_WORDS)
ACTION_RE     = word_pattern(ACTION_WORDS)
DECISION_RE   = word_pattern(DECISION_WORDS)

# ── KEY POINTS ───────────────────────────────────────────────
# Tried per type in order; the first matching pattern wins for that type.
# Group 1, when present and non-empty, is the snippet.

_END = r'(?:\.|$)'

_KEY_POINT_SOURCES = {
    'decision': (
        rf"(?:we(?:'ll| will| should)|let's|decided to|going to|planning to)\s+(.{{10,100}}?){_END}",
        rf"(?:final decision|conclusion|agreed to|settled on)\s+(.{{10,100}}?){_END}",
        rf"(?:we're choosing|selected|picking|opting for)\s+(.{{10,100}}?){_END}",
    ),
    'action': (
        rf"(?:i(?:'ll| will)|someone needs to|we need to|action item)\s+(.{{10,100}}?){_END}",
        rf"(?:follow up|next steps?|to do|deadline)\s+(.{{10,100}}?){_END}",
        rf"(?:i'll handle|take care of|work on|responsible for)\s+(.{{10,100}}?){_END}",
    ),
    'question': (
        r"(?:what|how|why|when|where|who|should we|can we|could we)\s+(.{10,100}?\?)",
        r"(?:do you think|any thoughts on|wondering if)\s+(.{10,100}?)(?:\?|\.)",
    ),
    'important': (
        rf"(?:critical|crucial|important|urgent|priority|key point)\s+(.{{10,100}}?){_END}",
        rf"(?:must|essential|vital|imperative)\s+(.{{10,100}}?){_END}",
        rf"(?:note that|remember|keep in mind)\s+(.{{10,100}}?){_END}",
    ),
    'agreement': (
        rf"(?:agreed|exactly|absolutely|definitely|makes sense|good idea)(?:\s+(.{{10,100}}?))?{_END}",
        rf"(?:i like|sounds good|perfect|approved|support)(?:\s+(.{{10,100}}?))?{_END}",
    ),
    'concern': (
        rf"(?:concerned about|worried about|issue with|problem with)\s+(.{{10,100}}?){_END}",
        rf"(?:risk|challenge|obstacle|blocker)\s+(.{{10,100}}?){_END}",
    ),
}

KEY_POINT_PATTERNS: Mapping[str, Tuple[Pattern, ...]] = MappingProxyType({
    kp_type: tuple(re.compile(src, re.IGNORECASE) for src in sources)
    for kp_type, sources in _KEY_POINT_SOURCES.items()
})

# Fallback snippet length when a pattern has no usable capture group
SNIPPET_LIMIT = 100
