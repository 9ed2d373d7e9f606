from datetime import datetime, timezone


# every request gets its own "now", read once and reused for every due-date check
def get_now() -> datetime:
    return datetime.now(timezone.utc)
