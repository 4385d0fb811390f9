"""
meetsense/parsers/transcript_parser.py
Parses plain-text meeting transcripts, one utterance per line:

    [00:01:15] Alice: We decided to ship on Friday.
    Bob: I'll update the release notes by tomorrow.
    and the changelog too.            <- continues Bob

Timestamps are optional ([HH:MM:SS] or [MM:SS]). Lines with no speaker
prefix belong to the previous speaker ("Unknown" at the top of the file).
Blank lines and lines starting with '#' are skipped.

Any short prefix (up to 40 characters, no brackets) followed by ": " is read
as a speaker, so a label line such as "Note: the deadline moved" switches
the speaker to "Note".
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from meetsense.models.record import TranscriptLine

logger = logging.getLogger(__name__)

BOM_UTF8 = b'\xef\xbb\xbf'

UNKNOWN_SPEAKER = 'Unknown'

LINE_RE = re.compile(
    r'^\s*(?:\[(?P<ts>\d{1,2}:\d{2}(?::\d{2})?)\]\s*)?'
    r'(?:(?P<speaker>[^:\[\]]{1,40}?)\s*:(?:\s+|$))?'
    r'(?P<text>.*?)\s*$'
)


def _read_text(path: Path) -> str:
    """UTF-8 with BOM stripped; undecodable bytes replaced."""
    raw = path.read_bytes()
    if raw.startswith(BOM_UTF8):
        raw = raw[len(BOM_UTF8):]
    try:
        return raw.decode('utf-8', errors='strict')
    except UnicodeDecodeError:
        logger.warning(f"{path.name}: not valid UTF-8 — replacing bad bytes")
        return raw.decode('utf-8', errors='replace')


def parse_transcript_text(content: str) -> List[TranscriptLine]:
    lines: List[TranscriptLine] = []
    speaker: Optional[str] = None

    for line_no, raw in enumerate(content.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith('#'):
            continue

        m = LINE_RE.match(raw)
        named = (m.group('speaker') or '').strip()
        text  = m.group('text')
        if named:
            speaker = named
        if not text:
            continue

        lines.append(TranscriptLine(
            speaker   = speaker or UNKNOWN_SPEAKER,
            text      = text,
            line_no   = line_no,
            timestamp = m.group('ts'),
        ))

    return lines


def parse_transcript_file(path: Path) -> List[TranscriptLine]:
    """Parse one transcript file. Raises FileNotFoundError if missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript not found: {path}")
    lines = parse_transcript_text(_read_text(path))
    logger.info(f"Parsed {len(lines)} lines from {path.name}")
    return lines
