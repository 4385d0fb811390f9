"""
meetsense/cli.py
Command-line interface for meetsense.

USAGE:
  meetsense "We decided to ship on Friday, sounds good"
  meetsense --file standup.txt
  meetsense --file standup.txt --now 2026-10-14T09:00:00+08:00 --json
  meetsense --file standup.txt --search "release notes"

Transcript files hold one "Speaker: text" line per utterance
(see meetsense.parsers.transcript_parser).
"""

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

from meetsense.aggregators.meeting_aggregator import build_meeting_summary, summary_to_dict
from meetsense.aggregators.reminders import upcoming_reminders
from meetsense.config import load_config, reference_now, reference_timezone
from meetsense.detectors.due_date import extract_due_date
from meetsense.detectors.signal_detector import analysis_to_dict, analyze_utterance
from meetsense.parsers.transcript_parser import parse_transcript_file
from meetsense.search import search_lines

logger = logging.getLogger(__name__)

# ANSI colors
GREEN  = '\033[92m'
YELLOW = '\033[93m'
RED    = '\033[91m'
CYAN   = '\033[96m'
RESET  = '\033[0m'
BOLD   = '\033[1m'

EMOTION_COLORS = {
    'calm':         GREEN,
    'tense':        RED,
    'enthusiastic': CYAN,
    'neutral':      YELLOW,
}


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog        = 'meetsense',
        description = 'meetsense — keyword heuristics for meeting transcripts',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog = """
NOTE:
  Labels come from fixed word lists and patterns, not a language model.
  Treat them as highlights to review, not conclusions.
        """
    )

    parser.add_argument(
        'text',
        nargs   = '?',
        help    = 'A single utterance to analyze',
    )
    parser.add_argument(
        '--file', '-f',
        type    = Path,
        help    = 'Transcript file, one "Speaker: text" line per utterance',
    )
    parser.add_argument(
        '--now',
        help    = 'Reference time for due dates, ISO-8601 (default: now at the configured UTC offset)',
    )
    parser.add_argument(
        '--search', '-s',
        help    = 'With --file: list lines matching any of these words',
    )
    parser.add_argument(
        '--json',
        action  = 'store_true',
        help    = 'Print JSON instead of a formatted summary',
    )
    parser.add_argument(
        '--verbose', '-v',
        action  = 'store_true',
        help    = 'Enable debug logging',
    )

    args = parser.parse_args(argv)

    # ── LOGGING SETUP ────────────────────────────────────────
    logging.basicConfig(
        level   = logging.DEBUG if args.verbose else logging.INFO,
        format  = '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt = '%H:%M:%S',
    )

    if not args.text and not args.file:
        parser.error('provide an utterance or --file')

    config = load_config()

    # ── REFERENCE TIME ───────────────────────────────────────
    if args.now:
        try:
            now = datetime.fromisoformat(args.now.replace('Z', '+00:00'))
        except ValueError:
            _print(f"{RED}Error: --now is not an ISO-8601 timestamp: {args.now}{RESET}")
            sys.exit(1)
        if now.tzinfo is None:
            now = now.replace(tzinfo=reference_timezone(config))
    else:
        now = reference_now(config)

    if args.file:
        return _run_file(args, config, now)
    return _run_single(args, now)


def _run_single(args, now: datetime):
    result = analyze_utterance(args.text)
    due    = extract_due_date(args.text, now) if result.action_item else None

    if args.json:
        payload = analysis_to_dict(result)
        payload['dueDate'] = due.isoformat() if due else None
        _print(json.dumps(payload, indent=2))
        return 0

    color = EMOTION_COLORS.get(result.emotion, RESET)
    _print(f"Emotion     : {color}{result.emotion}{RESET}")
    _print(f"Sentiment   : {result.sentiment or '—'}")
    _print(f"Action item : {'yes' if result.action_item else 'no'}")
    if due:
        _print(f"Due         : {due.isoformat()}")
    _print(f"Decision    : {'yes' if result.decision else 'no'}")
    for kp in result.key_points:
        _print(f"  [{kp.type}] {kp.snippet}")
    return 0


def _run_file(args, config, now: datetime):
    path = args.file
    if not path.exists():
        _print(f"{RED}Error: File not found: {path}{RESET}")
        sys.exit(1)

    t0    = time.time()
    lines = parse_transcript_file(path)
    if not lines:
        _print(f"{YELLOW}No utterances found in {path}{RESET}")
        sys.exit(1)

    if args.search:
        hits = search_lines(lines, args.search)
        if args.json:
            _print(json.dumps([
                {'line': l.line_no, 'speaker': l.speaker, 'snippet': snip}
                for l, snip in hits
            ], indent=2))
            return 0
        _print(f"{BOLD}{len(hits)} matching line(s){RESET}")
        for line, snip in hits:
            _print(f"  {CYAN}{line.line_no:>4}{RESET} {line.speaker}: {snip}")
        return 0

    summary = build_meeting_summary(
        lines,
        now              = now,
        words_per_minute = int(config['words_per_minute']),
        quiet            = float(config['quiet_share_percent']),
        dominant         = float(config['dominant_share_percent']),
    )

    if args.json:
        _print(json.dumps(summary_to_dict(summary), indent=2))
        return 0

    _print(f"\n{BOLD}{GREEN}✓ {summary.utterance_count} utterances analyzed in {_elapsed(t0)}{RESET}")

    _section("Talk balance")
    for name, pct in sorted(summary.speaker_balance.items(), key=lambda kv: -kv[1]):
        bar = '█' * int(pct / 2.5)
        _print(f"  {name:<16} {bar} {pct:.1f}%")
    for tip in summary.balance_feedback:
        _print(f"  {YELLOW}→ {tip}{RESET}")

    _section("Emotion")
    for emotion, (count, pct) in summary.emotion_distribution.items():
        color = EMOTION_COLORS.get(emotion, RESET)
        _print(f"  {color}{emotion:<13}{RESET} {count:>3}  {pct:.1f}%")

    _section(f"Conflicts ({len(summary.conflict_moments)}) / Agreements ({len(summary.agreement_moments)})")
    for m in summary.conflict_moments:
        _print(f"  {RED}✗{RESET} {m.speaker}: {m.content}")
    for m in summary.agreement_moments:
        _print(f"  {GREEN}✓{RESET} {m.speaker}: {m.content}")

    _section(f"Decisions ({len(summary.decisions)})")
    for m in summary.decisions:
        _print(f"  • {m.content}")

    _section(f"Action items ({len(summary.action_items)})")
    for item in summary.action_items:
        _print(f"  → [{item.assignee}] {item.content}")
    reminders = upcoming_reminders(summary.action_items, now)
    if reminders:
        _print(f"\n  {BOLD}Upcoming{RESET}")
        for item, label, urgent in reminders:
            mark = f"{RED}!{RESET}" if urgent else ' '
            _print(f"  {mark} {label:<20} {item.content}")

    _section(f"Key points ({len(summary.key_points)})")
    for kp in summary.key_points:
        _print(f"  [{kp.type}] {kp.snippet}")
    _print("")
    return 0


# ── PRINT HELPERS ────────────────────────────────────────────

def _section(title): _print(f"\n{BOLD}{title}{RESET}")
def _print(msg):     print(msg)

def _elapsed(t0: float) -> str:
    s = time.time() - t0
    return f"{s:.1f}s" if s < 60 else f"{int(s//60)}m {int(s%60)}s"


if __name__ == '__main__':
    sys.exit(main())
