"""
meetsense/aggregators/meeting_aggregator.py
Meeting-level aggregation.

Folds per-utterance AnalysisResults into the display aggregates of a
meeting: talk balance, emotion timeline and distribution, conflict and
agreement moments, decisions, action items with due dates, key points.

NOTE ON SPEAK TIME:
  Plain-text transcripts carry no audio timings, so speak time is estimated
  from word count at a fixed speaking rate (150 wpm by default). Good enough
  for a balance meter; not a measurement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from meetsense.detectors.due_date import extract_due_date
from meetsense.detectors.signal_detector import analyze_utterance
from meetsense.models.record import (
    EMOTIONS,
    ActionItem,
    AnalysisResult,
    KeyPoint,
    Moment,
    Participant,
    TranscriptLine,
)

logger = logging.getLogger(__name__)

QUIET_SHARE_PERCENT    = 5.0
DOMINANT_SHARE_PERCENT = 50.0
WORDS_PER_MINUTE       = 150


# ── DATA MODEL ───────────────────────────────────────────────

@dataclass
class MeetingSummary:
    """Aggregated analytics for one meeting transcript."""
    utterance_count:      int                           = 0
    participants:         List[Participant]             = field(default_factory=list)
    speaker_balance:      Dict[str, float]              = field(default_factory=dict)
    balance_feedback:     List[str]                     = field(default_factory=list)

    # [(timestamp, emotion)] in transcript order
    emotion_timeline:     List[Tuple[Optional[str], str]] = field(default_factory=list)
    emotion_distribution: Dict[str, Tuple[int, float]]  = field(default_factory=dict)

    conflict_moments:     List[Moment]                  = field(default_factory=list)
    agreement_moments:    List[Moment]                  = field(default_factory=list)
    decisions:            List[Moment]                  = field(default_factory=list)
    action_items:         List[ActionItem]              = field(default_factory=list)
    key_points:           List[KeyPoint]                = field(default_factory=list)


# ── TALK BALANCE ─────────────────────────────────────────────

def speaker_balance(participants: List[Participant]) -> Dict[str, float]:
    """Share of total speak time per participant, in percent. {} if nobody spoke."""
    total = sum(p.speak_time_seconds for p in participants)
    if total <= 0:
        return {}
    return {p.name: (p.speak_time_seconds / total) * 100 for p in participants}


def balance_feedback(
    balance:  Dict[str, float],
    quiet:    float = QUIET_SHARE_PERCENT,
    dominant: float = DOMINANT_SHARE_PERCENT,
) -> List[str]:
    """Suggestions for speakers far below or above a fair share."""
    feedback: List[str] = []
    for name, pct in balance.items():
        if 0 < pct < quiet:
            feedback.append(
                f"Try to invite {name}'s input — they spoke only {pct:.1f}% of the time."
            )
        elif pct > dominant:
            feedback.append(
                f"{name} dominated the conversation at {pct:.1f}% — consider balancing participation."
            )
    return feedback


def estimate_speak_seconds(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> float:
    words = len(text.split())
    if words == 0 or words_per_minute <= 0:
        return 0.0
    return words * 60.0 / words_per_minute


# ── EMOTION ──────────────────────────────────────────────────

def emotion_distribution(emotions: List[str]) -> Dict[str, Tuple[int, float]]:
    """(count, percent) for every emotion label, zeros included."""
    counts: Dict[str, int] = {e: 0 for e in EMOTIONS}
    for e in emotions:
        if e in counts:
            counts[e] += 1
    total = len(emotions)
    return {
        e: (n, (n / total) * 100 if total else 0.0)
        for e, n in counts.items()
    }


# ── AGGREGATION ENGINE ───────────────────────────────────────

def build_meeting_summary(
    lines:            List[TranscriptLine],
    now:              Optional[datetime] = None,
    words_per_minute: int   = WORDS_PER_MINUTE,
    quiet:            float = QUIET_SHARE_PERCENT,
    dominant:         float = DOMINANT_SHARE_PERCENT,
) -> MeetingSummary:
    """
    Analyze every line and build the meeting aggregates.

    Due dates are resolved only for lines detected as action items, all
    against the same reference time so the summary is reproducible.
    """
    now = now or datetime.now().astimezone()
    summary = MeetingSummary(utterance_count=len(lines))

    speak_time: Dict[str, float] = {}
    results: List[Tuple[TranscriptLine, AnalysisResult]] = []

    for line in lines:
        result = analyze_utterance(line.text)
        results.append((line, result))
        speak_time[line.speaker] = (
            speak_time.get(line.speaker, 0.0)
            + estimate_speak_seconds(line.text, words_per_minute)
        )

    for line, result in results:
        moment = Moment(time=line.timestamp, content=line.text, speaker=line.speaker)
        summary.emotion_timeline.append((line.timestamp, result.emotion))

        if result.sentiment == 'conflict':
            summary.conflict_moments.append(moment)
        elif result.sentiment == 'agreement':
            summary.agreement_moments.append(moment)

        if result.decision:
            summary.decisions.append(moment)

        if result.action_item:
            summary.action_items.append(ActionItem(
                content  = result.action_item,
                assignee = line.speaker,
                due_date = extract_due_date(line.text, now),
            ))

        summary.key_points.extend(result.key_points)

    summary.participants = [
        Participant(name=name, speak_time_seconds=secs)
        for name, secs in speak_time.items()
    ]
    summary.speaker_balance      = speaker_balance(summary.participants)
    summary.balance_feedback     = balance_feedback(summary.speaker_balance, quiet, dominant)
    summary.emotion_distribution = emotion_distribution(
        [emotion for _, emotion in summary.emotion_timeline]
    )

    logger.info(
        f"Meeting summary: {summary.utterance_count} utterances, "
        f"{len(summary.participants)} speakers, {len(summary.decisions)} decisions, "
        f"{len(summary.action_items)} action items"
    )
    return summary


def summary_to_dict(summary: MeetingSummary) -> Dict:
    """Convert MeetingSummary to a JSON-serializable dict."""
    def _convert(obj):
        if hasattr(obj, "__dataclass_fields__"):
            return {k: _convert(getattr(obj, k)) for k in obj.__dataclass_fields__}
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, dict):
            return {k: _convert(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_convert(x) for x in obj]
        return obj

    return _convert(summary)
