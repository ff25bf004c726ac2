"""
Instant value type.

An Instant is a point on the UTC timeline with no offset attached. It is
stored as an integer count of nanoseconds since the Unix epoch, so it can
hold database values with a finer precision than `datetime.datetime`.

Conversions:
- datetime: `from_datetime_utc`, `from_datetime_offset`, `to_datetime_utc`
- pandas: `from_timestamp`, `to_timestamp` (nanosecond exact)
- unix time: seconds, milliseconds and 100ns ticks
"""
import datetime
from dataclasses import dataclass
from typing import Any, Self

import numpy as np
import pandas as pd

__all__ = ['Instant', 'UNIX_EPOCH']

NANOSECONDS_PER_TICK = 100
NANOSECONDS_PER_MICROSECOND = 1_000
NANOSECONDS_PER_MILLISECOND = 1_000_000
NANOSECONDS_PER_SECOND = 1_000_000_000


def _timedelta_to_nanoseconds(delta: datetime.timedelta) -> int:
    return delta // datetime.timedelta(microseconds=1) * NANOSECONDS_PER_MICROSECOND


_DATETIME64_UNIT_NANOSECONDS = {
    'W': 7 * 86_400 * NANOSECONDS_PER_SECOND,
    'D': 86_400 * NANOSECONDS_PER_SECOND,
    'h': 3_600 * NANOSECONDS_PER_SECOND,
    'm': 60 * NANOSECONDS_PER_SECOND,
    's': NANOSECONDS_PER_SECOND,
    'ms': NANOSECONDS_PER_MILLISECOND,
    'us': NANOSECONDS_PER_MICROSECOND,
    'ns': 1,
}
_DATETIME64_UNIT_DIVISORS = {'ps': 1_000, 'fs': 1_000_000, 'as': 1_000_000_000}


def _datetime64_to_nanoseconds(value: np.datetime64) -> int:
    """Nanoseconds since the epoch, computed in the value's own unit.

    >>> _datetime64_to_nanoseconds(np.datetime64('3000-01-01'))
    32503680000000000000
    >>> _datetime64_to_nanoseconds(np.datetime64('2000-01'))
    946684800000000000
    """
    unit, count = np.datetime_data(value.dtype)
    if unit in ('Y', 'M'):
        value = value.astype('datetime64[D]')
        unit, count = 'D', 1
    raw = int(value.astype(np.int64)) * count
    if unit in _DATETIME64_UNIT_DIVISORS:
        return raw // _DATETIME64_UNIT_DIVISORS[unit]
    if unit not in _DATETIME64_UNIT_NANOSECONDS:
        raise ValueError(f'Unsupported datetime64 unit: {unit!r}')
    return raw * _DATETIME64_UNIT_NANOSECONDS[unit]


_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.UTC)
_MIN_NANOSECONDS = _timedelta_to_nanoseconds(
    datetime.datetime.min.replace(tzinfo=datetime.UTC) - _EPOCH)
_MAX_NANOSECONDS = _timedelta_to_nanoseconds(
    datetime.datetime.max.replace(tzinfo=datetime.UTC) - _EPOCH) + NANOSECONDS_PER_MICROSECOND - 1


@dataclass(frozen=True, order=True, slots=True)
class Instant:
    """A point on the UTC timeline.

    >>> Instant.from_utc(2024, 1, 1, 8, 30)
    Instant('2024-01-01T08:30:00Z')
    >>> Instant.from_unix_time_seconds(0) == UNIX_EPOCH
    True
    """

    nanoseconds: int

    def __post_init__(self):
        if not isinstance(self.nanoseconds, int) or isinstance(self.nanoseconds, bool):
            raise TypeError(f'nanoseconds must be int, not {type(self.nanoseconds).__name__}')
        if not _MIN_NANOSECONDS <= self.nanoseconds <= _MAX_NANOSECONDS:
            raise ValueError(f'Instant out of range: {self.nanoseconds} ns since epoch')

    # Construction

    @classmethod
    def from_unix_time_seconds(cls, seconds: int) -> Self:
        return cls(seconds * NANOSECONDS_PER_SECOND)

    @classmethod
    def from_unix_time_milliseconds(cls, milliseconds: int) -> Self:
        return cls(milliseconds * NANOSECONDS_PER_MILLISECOND)

    @classmethod
    def from_unix_time_ticks(cls, ticks: int) -> Self:
        """Create from 100ns ticks since the Unix epoch.
        """
        return cls(ticks * NANOSECONDS_PER_TICK)

    @classmethod
    def from_utc(cls, year: int, month: int, day: int, hour: int = 0,
                 minute: int = 0, second: int = 0) -> Self:
        """Create from UTC calendar and clock fields.
        """
        dt = datetime.datetime(year, month, day, hour, minute, second,
                               tzinfo=datetime.UTC)
        return cls.from_datetime_utc(dt)

    @classmethod
    def from_datetime_utc(cls, dt: datetime.datetime) -> Self:
        """Create from a datetime carrying a zero UTC offset.

        Raises ValueError for naive datetimes and for non-zero offsets, use
        `from_datetime_offset` for those.
        """
        offset = dt.utcoffset()
        if offset is None:
            raise ValueError('datetime must be timezone-aware with a UTC offset of zero')
        if offset:
            raise ValueError(f'datetime must be in UTC, got offset {offset}')
        return cls._from_aware(dt)

    @classmethod
    def from_datetime_offset(cls, dt: datetime.datetime) -> Self:
        """Create from an aware datetime, applying its offset.

        >>> tz = datetime.timezone(datetime.timedelta(hours=2))
        >>> Instant.from_datetime_offset(datetime.datetime(2024, 1, 1, 10, tzinfo=tz))
        Instant('2024-01-01T08:00:00Z')
        """
        if dt.utcoffset() is None:
            raise ValueError('datetime must be timezone-aware')
        return cls._from_aware(dt)

    @classmethod
    def from_timestamp(cls, ts: pd.Timestamp) -> Self:
        """Create from a pandas Timestamp, keeping nanoseconds.

        Naive timestamps are read as UTC. Any resolution is accepted, so
        second or microsecond timestamps outside the nanosecond range of
        pandas convert too.
        """
        if ts is pd.NaT:
            raise ValueError('NaT is not a point in time')
        return cls(_datetime64_to_nanoseconds(ts.asm8))

    @classmethod
    def from_datetime64(cls, value: np.datetime64) -> Self:
        """Create from a numpy datetime64 of any unit, read as UTC.

        Raises ValueError for NaT and for values outside the Instant range.
        """
        if np.isnat(value):
            raise ValueError('NaT is not a point in time')
        return cls(_datetime64_to_nanoseconds(value))

    @classmethod
    def now(cls) -> Self:
        return cls(pd.Timestamp.now(tz='UTC').value)

    @classmethod
    def _from_aware(cls, dt: datetime.datetime) -> Self:
        if isinstance(dt, pd.Timestamp):
            return cls.from_timestamp(dt)
        return cls(_timedelta_to_nanoseconds(dt - _EPOCH))

    # Projection

    def to_unix_time_seconds(self) -> int:
        return self.nanoseconds // NANOSECONDS_PER_SECOND

    def to_unix_time_milliseconds(self) -> int:
        return self.nanoseconds // NANOSECONDS_PER_MILLISECOND

    def to_unix_time_ticks(self) -> int:
        return self.nanoseconds // NANOSECONDS_PER_TICK

    def to_datetime_utc(self) -> datetime.datetime:
        """Return an aware UTC datetime, truncated to microseconds.

        >>> Instant.from_unix_time_seconds(86400).to_datetime_utc()
        datetime.datetime(1970, 1, 2, 0, 0, tzinfo=datetime.timezone.utc)
        """
        micros = self.nanoseconds // NANOSECONDS_PER_MICROSECOND
        return _EPOCH + datetime.timedelta(microseconds=micros)

    def to_timestamp(self) -> pd.Timestamp:
        """Return a UTC pandas Timestamp.

        Only instants inside the pandas Timestamp range (years 1677 to 2262)
        can be converted.
        """
        return pd.Timestamp(self.nanoseconds, unit='ns', tz='UTC')

    # Arithmetic

    def __add__(self, other: Any) -> Self:
        if isinstance(other, datetime.timedelta):
            return type(self)(self.nanoseconds + _timedelta_to_nanoseconds(other))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, Instant):
            micros = (self.nanoseconds - other.nanoseconds) // NANOSECONDS_PER_MICROSECOND
            return datetime.timedelta(microseconds=micros)
        if isinstance(other, datetime.timedelta):
            return type(self)(self.nanoseconds - _timedelta_to_nanoseconds(other))
        return NotImplemented

    # Formatting

    def __str__(self) -> str:
        """ISO-8601 in UTC, with as many fraction digits as needed.

        >>> str(Instant.from_unix_time_milliseconds(1500))
        '1970-01-01T00:00:01.500Z'
        >>> str(Instant(1))
        '1970-01-01T00:00:00.000000001Z'
        """
        text = self.to_datetime_utc().replace(tzinfo=None, microsecond=0).isoformat()
        fraction = self.nanoseconds % NANOSECONDS_PER_SECOND
        if fraction:
            digits = f'{fraction:09d}'
            if fraction % NANOSECONDS_PER_MILLISECOND == 0:
                digits = digits[:3]
            elif fraction % NANOSECONDS_PER_MICROSECOND == 0:
                digits = digits[:6]
            text = f'{text}.{digits}'
        return f'{text}Z'

    def __repr__(self) -> str:
        return f"Instant('{self}')"


UNIX_EPOCH = Instant(0)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
