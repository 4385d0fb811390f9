"""
meetsense/detectors/due_date.py
Due-date inference from relative-date language.

Resolution is relative to a caller-supplied reference time ("now"). Relative
phrases shift the calendar date and keep the clock time; an explicit M/D
date resolves to midnight in now's timezone. Timezone normalization is the
caller's job (see meetsense.config.reference_now).
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

TODAY_RE     = re.compile(r'today|tonight', re.IGNORECASE)
TOMORROW_RE  = re.compile(r'tomorrow', re.IGNORECASE)
IN_DAYS_RE   = re.compile(r'in (\d+) days?', re.IGNORECASE)
NEXT_DAY_RE  = re.compile(r'next (' + '|'.join(WEEKDAYS) + r')', re.IGNORECASE)
# "1/2 of the slides" is a fraction, not a date
NUMERIC_RE   = re.compile(
    r'\b(\d{1,2})/(\d{1,2})(?:/(\d{4}|\d{2}))?\b(?![/\d]|\s+of\b)', re.IGNORECASE
)


def extract_due_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Resolve the first relative-date phrase in text against now.

    Priority (first match wins):
      today / tonight     -> now
      tomorrow            -> now + 1 day
      in N day(s)         -> now + N days
      next <weekday>      -> next occurrence strictly after today (1..7 days)
      M/D[/YY[YY]]        -> midnight on that date
    Returns None when nothing matches or the date cannot exist.
    """
    if now is None:
        now = datetime.now().astimezone()

    try:
        if TODAY_RE.search(text):
            return now

        if TOMORROW_RE.search(text):
            return now + timedelta(days=1)

        m = IN_DAYS_RE.search(text)
        if m:
            return now + timedelta(days=int(m.group(1)))

        m = NEXT_DAY_RE.search(text)
        if m:
            return now + timedelta(days=days_until_next(m.group(1), now))

        m = NUMERIC_RE.search(text)
        if m:
            return _numeric_date(m, now)
    except (OverflowError, ValueError):
        # day count past the datetime range, or too many digits for int()
        logger.debug("Due date out of calendar range — ignoring.")
    return None


def days_until_next(weekday: str, now: datetime) -> int:
    """Days from now to the named weekday; naming today means a week out."""
    target  = WEEKDAYS.index(weekday.lower())
    current = now.weekday()
    return (target - current + 7) % 7 or 7


def _numeric_date(m: re.Match, now: datetime) -> Optional[datetime]:
    month, day = int(m.group(1)), int(m.group(2))
    year_str   = m.group(3)
    if year_str is None:
        year = now.year
    elif len(year_str) == 2:
        year = 2000 + int(year_str)
    else:
        year = int(year_str)

    try:
        return datetime(year, month, day, tzinfo=now.tzinfo)
    except ValueError:
        logger.debug(f"Ignoring impossible date {month}/{day}/{year}")
        return None
