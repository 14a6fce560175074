from datetime import date, datetime, time, timedelta

WEEK_END_TIME = time(23, 59, 59, 999000)


def local_date(value: datetime) -> date:
    """Calendar date of ``value`` in the local zone."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.date()


def week_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """
    Return the Monday 00:00:00.000 to Sunday 23:59:59.999 window containing ``now``.

    Both ends are inclusive and naive local datetimes. The window is computed
    on every call; "now" moves, so callers must not cache the result.
    """
    if now is None:
        now = datetime.now()
    today = local_date(now)
    # isoweekday: Monday=1 .. Sunday=7
    monday = today - timedelta(days=today.isoweekday() - 1)
    start = datetime.combine(monday, time.min)
    end = datetime.combine(monday + timedelta(days=6), WEEK_END_TIME)
    return start, end
