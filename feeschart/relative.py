"""Calendar style rendering of a point in time relative to now.

    Today at 3:00 PM
    Yesterday at 9:05 AM
    Last Monday at 11:30 PM
    09/01/2026
"""
from datetime import datetime


def clock_time(instant: datetime) -> str:
    hour = instant.hour % 12 or 12
    return "%d:%02d %s" % (hour, instant.minute, "AM" if instant.hour < 12 else "PM")


def calendar_phrase(instant: datetime, now: datetime) -> str:
    if instant.tzinfo is not None and now.tzinfo is not None:
        instant = instant.astimezone(now.tzinfo)
    diff = (instant.date() - now.date()).days
    at = clock_time(instant)

    if diff < -6 or diff >= 7:
        return instant.strftime("%m/%d/%Y")
    elif diff < -1:
        return "Last %s at %s" % (instant.strftime("%A"), at)
    elif diff < 0:
        return "Yesterday at %s" % at
    elif diff < 1:
        return "Today at %s" % at
    elif diff < 2:
        return "Tomorrow at %s" % at
    else:
        return "%s at %s" % (instant.strftime("%A"), at)
