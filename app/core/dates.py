from datetime import date, datetime, time, timezone


def as_utc(value: datetime) -> datetime:
    # naive datetimes are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value) -> datetime:
    """
    Accepts a datetime, a date, or an ISO-8601 string and returns an aware UTC datetime.

    - "2023-10-01" -> midnight UTC
    - "2023-10-01T12:30:00Z" / "...+02:00" -> converted to UTC
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"not a timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))
