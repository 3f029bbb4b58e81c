from datetime import datetime, timezone


def today_utc() -> str:
    """Current UTC calendar day as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()
