from datetime import datetime, timezone

from sqlalchemy import DateTime

# Timestamps are stored as naive UTC
NAIVE_DATETIME = DateTime(timezone=False)

def utc_now() -> datetime:
    """Current time as a naive UTC timestamp, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
