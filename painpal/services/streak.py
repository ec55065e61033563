from datetime import date, datetime, timedelta
from typing import Iterable, Union


def to_day(value: Union[date, datetime]) -> date:
    """Reduce a timestamp to its local calendar day."""
    return value.date() if isinstance(value, datetime) else value


def compute_day_streak(days: Iterable[Union[date, datetime]], today: date) -> int:
    """
    Count consecutive calendar days ending at ``today`` that appear in ``days``.

    Several entries on the same day count once. If ``today`` itself is missing
    the streak is 0, even when an unbroken run ends yesterday.

    Args:
        days: Dates or timestamps of every qualifying log
        today: The day the run must end on

    Returns:
        Length of the run of consecutive days ending at ``today``
    """
    logged = {to_day(d) for d in days}

    streak = 0
    cursor = to_day(today)
    while cursor in logged:
        streak += 1
        cursor -= timedelta(days=1)
    return streak
