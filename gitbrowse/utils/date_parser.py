"""
Date parsing for --since / --until loader filters
"""
import re
from datetime import datetime, timedelta, timezone

RELATIVE_UNITS = {
    'second': timedelta(seconds=1),
    'minute': timedelta(minutes=1),
    'hour': timedelta(hours=1),
    'day': timedelta(days=1),
    'week': timedelta(weeks=1),
    'month': timedelta(days=30),  # Approximation
    'year': timedelta(days=365),  # Approximation
}

ABSOLUTE_FORMATS = ['%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%Y-%m-%dT%H:%M:%S', '%Y/%m/%d', '%d.%m.%Y']

_relative_pattern = re.compile(r'^\s*(\d+)\s+(second|minute|hour|day|week|month|year)s?\s+ago\s*$', re.IGNORECASE)


def parse_date(date_str, now=None):
    """
    Parse date string to unix timestamp

    Args:
        date_str (str): "3 days ago", "2024-01-31", "2024-01-31 12:00:00", ...
        now (datetime, optional): Reference time for relative dates

    Returns:
        int: Unix timestamp

    Raises:
        ValueError: If date string couldn't be parsed
    """
    relative_match = _relative_pattern.match(date_str)
    if relative_match:
        num, unit = relative_match.groups()
        now = now or datetime.now(timezone.utc)
        return int((now - int(num) * RELATIVE_UNITS[unit.lower()]).timestamp())

    if date_str.strip().lower() == 'yesterday':
        now = now or datetime.now(timezone.utc)
        return int((now - RELATIVE_UNITS['day']).timestamp())

    try:
        # ISO 8601 with offset, as printed by `git log --date=iso-strict`
        dt = datetime.fromisoformat(date_str.strip())
        return int(dt.timestamp())
    except ValueError:
        pass

    for fmt in ABSOLUTE_FORMATS:
        try:
            return int(datetime.strptime(date_str.strip(), fmt).timestamp())
        except ValueError:
            continue

    raise ValueError(f"Couldn't parse date: {date_str}")
