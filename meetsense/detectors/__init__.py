"""
meetsense/detectors — per-utterance signal detection.
"""

from meetsense.detectors.due_date import extract_due_date
from meetsense.detectors.signal_detector import (
    analysis_to_dict,
    analyze_utterance,
    classify_emotion,
    classify_sentiment,
    detect_action_item,
    detect_decision,
    extract_key_points,
)

__all__ = [
    "analysis_to_dict",
    "analyze_utterance",
    "classify_emotion",
    "classify_sentiment",
    "detect_action_item",
    "detect_decision",
    "extract_due_date",
    "extract_key_points",
]
