"""Time helpers for response timestamps and feed dates."""

from datetime import datetime, timezone
from typing import Optional, Union

from promptgate.core.logging import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat_utc(dt: Optional[datetime] = None) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision and a ``Z`` suffix.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt is None:
        dt = utc_now()
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def epoch_millis(dt: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch."""
    return int((dt or utc_now()).timestamp() * 1000)


def from_unix(value: Union[int, float, str, None]) -> Optional[datetime]:
    """Convert a Unix timestamp in seconds to an aware UTC datetime."""
    if value is None or value == "":
        return None
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.warning(f"Could not parse unix timestamp {value!r}: {e}")
        return None
