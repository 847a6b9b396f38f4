from datetime import datetime, timezone

COCOA_EPOCH_OFFSET = 978307200  # 2001-01-01T00:00:00Z in unix seconds


def _utc(moment: datetime) -> datetime:
    # naive datetimes are taken to be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_cocoa_timestamp(moment: datetime) -> float:
    """
    Convert an instant to seconds since 2001-01-01 UTC.

    Sub-second precision is dropped. Instants before the unix epoch map to 0.0.
    """
    unix_seconds = _utc(moment).timestamp()
    if unix_seconds < 0:
        return 0.0
    return float(int(unix_seconds) - COCOA_EPOCH_OFFSET)


def from_cocoa_timestamp(timestamp: float) -> datetime:
    return datetime.fromtimestamp(int(timestamp) + COCOA_EPOCH_OFFSET, tz=timezone.utc)
