"""
meetsense/detectors/signal_detector.py
Per-utterance signal detection — pure Python, no state, fully offline.

Every function here is total over str: empty, punctuation-only or very long
input falls through to the "no signal" branch instead of raising.
Each utterance is classified on its own; nothing carries over between calls.
"""

import logging
from typing import Any, Dict, List, Optional

from meetsense.detectors.lexicon import (
    ACTION_RE,
    AGREEMENT_RE,
    CONFLICT_RE,
    DECISION_RE,
    ENTHUSIASM_RE,
    KEY_POINT_PATTERNS,
    SNIPPET_LIMIT,
    TENSION_RE,
)
from meetsense.models.record import KEY_POINT_TYPES, AnalysisResult, KeyPoint

logger = logging.getLogger(__name__)

CAPS_RATIO_THRESHOLD = 0.3


def classify_emotion(text: str) -> str:
    """
    Return one of calm / tense / enthusiastic / neutral.

    Decision table, first match wins:
      tension >= 2            -> tense
      enthusiasm >= 1         -> enthusiastic
      tension == 1            -> tense
      caps ratio > 0.3        -> tense
      '!' with enthusiasm     -> enthusiastic
      '?'                     -> neutral
      otherwise               -> calm

    A bare '!' without an enthusiasm word is not enough on its own.
    """
    lower = text.lower()
    tension    = len(TENSION_RE.findall(lower))
    enthusiasm = len(ENTHUSIASM_RE.findall(lower))

    if tension >= 2:
        return 'tense'
    if enthusiasm >= 1:
        return 'enthusiastic'
    if tension == 1:
        return 'tense'

    if _caps_ratio(text) > CAPS_RATIO_THRESHOLD:
        return 'tense'
    if '!' in text and enthusiasm > 0:
        return 'enthusiastic'
    if '?' in text:
        return 'neutral'
    return 'calm'


def _caps_ratio(text: str) -> float:
    if not text:
        return 0.0
    upper = sum(1 for ch in text if 'A' <= ch <= 'Z')
    return upper / len(text)


def classify_sentiment(text: str) -> Optional[str]:
    """conflict / agreement / None. Equal non-zero counts give None."""
    lower = text.lower()
    conflict  = len(CONFLICT_RE.findall(lower))
    agreement = len(AGREEMENT_RE.findall(lower))

    if conflict > agreement and conflict >= 1:
        return 'conflict'
    if agreement > conflict and agreement >= 1:
        return 'agreement'
    return None


def extract_key_points(text: str) -> List[KeyPoint]:
    """
    At most one KeyPoint per type, in KEY_POINT_TYPES order.
    Patterns run against the original-case text.
    """
    key_points: List[KeyPoint] = []
    for kp_type in KEY_POINT_TYPES:
        for pattern in KEY_POINT_PATTERNS[kp_type]:
            match = pattern.search(text)
            if not match:
                continue
            captured = (match.group(1) or '').strip() if match.groups() else ''
            key_points.append(KeyPoint(
                type    = kp_type,
                text    = text,
                snippet = captured or _fallback_snippet(text),
            ))
            break
    return key_points


def _fallback_snippet(text: str) -> str:
    if len(text) <= SNIPPET_LIMIT:
        return text
    return text[:SNIPPET_LIMIT] + '...'


def detect_action_item(text: str) -> Optional[str]:
    """The whole utterance when any action phrase appears, else None."""
    return text if ACTION_RE.search(text.lower()) else None


def detect_decision(text: str) -> Optional[str]:
    """The whole utterance when any decision phrase appears, else None."""
    return text if DECISION_RE.search(text.lower()) else None


def analyze_utterance(text: str) -> AnalysisResult:
    """Run every detector on one utterance and combine the results."""
    result = AnalysisResult(
        emotion     = classify_emotion(text),
        sentiment   = classify_sentiment(text),
        key_points  = extract_key_points(text),
        action_item = detect_action_item(text),
        decision    = detect_decision(text),
    )
    logger.debug(
        f"Analyzed {len(text)} chars: emotion={result.emotion} "
        f"sentiment={result.sentiment} key_points={len(result.key_points)}"
    )
    return result


def analysis_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    """Wire format used by the HTTP API and the CLI --json output."""
    return {
        'emotion':    result.emotion,
        'sentiment':  result.sentiment,
        'keyPoints':  [
            {'type': kp.type, 'text': kp.text, 'snippet': kp.snippet}
            for kp in result.key_points
        ],
        'actionItem': result.action_item,
        'decision':   result.decision,
    }
