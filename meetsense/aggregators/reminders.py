"""
meetsense/aggregators/reminders.py
Upcoming-deadline labels for action items that carry a due date.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from meetsense.models.record import ActionItem

HOUR_SECONDS = 60 * 60
DAY_SECONDS  = 24 * HOUR_SECONDS


def time_until(due: datetime, now: datetime) -> Tuple[str, bool]:
    """
    Human label for how far away a due date is, plus an urgency flag.
    Urgent means overdue or due within 24 hours.
    """
    diff_s = (due - now).total_seconds()
    hours  = int(diff_s // HOUR_SECONDS)
    days   = int(diff_s // DAY_SECONDS)

    if diff_s < 0:
        return 'Overdue', True
    if hours < 1:
        return 'Due within an hour', True
    if hours < 24:
        return f'Due in {hours} hours', True
    if days == 1:
        return 'Due tomorrow', False
    if days < 7:
        return f'Due in {days} days', False
    return due.date().isoformat(), False


def upcoming_reminders(
    items: List[ActionItem],
    now:   Optional[datetime] = None,
) -> List[Tuple[ActionItem, str, bool]]:
    """Incomplete items with a due date, soonest first, with their labels."""
    now = now or datetime.now().astimezone()
    pending = [i for i in items if not i.completed and i.due_date is not None]
    pending.sort(key=lambda i: i.due_date)
    return [(item, *time_until(item.due_date, now)) for item in pending]
