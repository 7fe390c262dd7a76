"""
Time source for TTL computation and createdAt stamping.

Repositories never call the system clock directly; they receive a Clock so
tests can pin "now" and step over expiry boundaries deterministically.
"""

from datetime import datetime, timezone
from typing import Optional

# Wire format of ISO8601 timestamps stored on authors and books
TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


class Clock:
    """Base clock. Subclasses only need to implement now()."""

    def now(self) -> datetime:
        raise NotImplementedError

    def epoch_seconds(self) -> int:
        return int(self.now().timestamp())


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    Clock pinned to a given instant.

    Used by tests and local scripts; advance() moves time forward.
    """

    def __init__(self, now: Optional[datetime] = None):
        self._now = now or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: int) -> None:
        self._now = datetime.fromtimestamp(self._now.timestamp() + seconds, tz=timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format an aware datetime as YYYY-MM-DDTHH:MM:SSZ in UTC."""
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """
    Parse a stored ISO8601 timestamp.

    Accepts the canonical Z-suffixed form and any offset form understood by
    datetime.fromisoformat. Naive values are taken as UTC.
    """
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def has_expired(item: dict, clock: Clock, attribute: str = 'expiresAt') -> bool:
    """
    True when the item's epoch-seconds expiry lies in the past.

    DynamoDB's TTL sweep deletes such items eventually; until it does, they
    are still returned by reads and must not be served as valid. Items
    without the attribute never expire.
    """
    expires_at = item.get(attribute)
    if expires_at is None:
        return False
    try:
        return int(expires_at) <= clock.epoch_seconds()
    except (TypeError, ValueError):
        return True
