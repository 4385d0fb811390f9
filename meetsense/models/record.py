"""
meetsense/models/record.py
Shared dataclass schema. Detectors, aggregators, parsers and the API
all use these types. Do not add logic here — data only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

EMOTIONS        = ('calm', 'tense', 'enthusiastic', 'neutral')
SENTIMENTS      = ('conflict', 'agreement')
KEY_POINT_TYPES = ('decision', 'action', 'question', 'important', 'agreement', 'concern')


@dataclass(frozen=True)
class KeyPoint:
    """One tagged highlight detected inside an utterance."""
    type:     str               # one of KEY_POINT_TYPES
    text:     str               # full utterance
    snippet:  str


@dataclass(frozen=True)
class AnalysisResult:
    """All per-utterance signals, computed together."""
    emotion:      str                       # one of EMOTIONS
    sentiment:    Optional[str]             # conflict / agreement / None
    key_points:   List[KeyPoint]  = field(default_factory=list)
    action_item:  Optional[str]   = None
    decision:     Optional[str]   = None


@dataclass
class TranscriptLine:
    """One parsed transcript line attributed to a speaker."""
    speaker:    str
    text:       str
    line_no:    int
    timestamp:  Optional[str]   = None      # raw "[HH:MM:SS]" offset if present


@dataclass
class Participant:
    name:               str
    speak_time_seconds: float   = 0.0


@dataclass
class ActionItem:
    content:    str
    assignee:   Optional[str]       = None
    due_date:   Optional[datetime]  = None
    completed:  bool                = False


@dataclass
class Moment:
    """A timestamped transcript excerpt (conflict / agreement / decision)."""
    time:     Optional[str]
    content:  str
    speaker:  str   = 'Unknown'
