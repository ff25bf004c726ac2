"""
sqlite3 adapters for Instant.

Instants are stored as ISO 8601 text holding the UTC clock fields, in the
same layout SQLAlchemy uses for DateTime columns on SQLite. Columns declared
with the converter name (`instant` by default) are read back as Instants when
the connection is opened with `detect_types=sqlite3.PARSE_DECLTYPES`.

Note:
    sqlite3 adapters and converters are global to the process, not
    per-connection.
"""
import logging
import sqlite3

import dateutil.parser
from database_instant.exceptions import TypeConversionError
from database_instant.handler import INSTANT_HANDLER
from database_instant.instant import Instant
from database_instant.parameter import Parameter

__all__ = ['adapt_instant', 'convert_instant', 'register_sqlite']

logger = logging.getLogger(__name__)


def adapt_instant(val: Instant) -> str:
    """Convert Instant to a UTC ISO 8601 string.

    >>> adapt_instant(Instant.from_utc(2024, 1, 1, 8, 30))
    '2024-01-01 08:30:00.000000'
    """
    param = Parameter()
    INSTANT_HANDLER.set_value(param, val)
    return param.value.isoformat(sep=' ', timespec='microseconds')


def convert_instant(val: bytes) -> Instant:
    """Convert ISO 8601 datetime string to Instant.

    Strings without an offset are read as UTC. Text that is not ISO 8601
    raises TypeConversionError.

    >>> convert_instant(b'2024-01-01 08:30:00.000000')
    Instant('2024-01-01T08:30:00Z')
    >>> convert_instant(b'2024-01-01T10:30:00+02:00')
    Instant('2024-01-01T08:30:00Z')
    """
    text = val.decode()
    try:
        value = dateutil.parser.isoparse(text)
    except ValueError as e:
        raise TypeConversionError(f'Cannot convert timestamp {text!r} to Instant') from e
    return INSTANT_HANDLER.parse(value)


def register_sqlite(connection: sqlite3.Connection | None = None,
                    converter_name: str = 'instant') -> None:
    """Register the Instant adapter and converter with sqlite3

    Args:
        connection: Optional SQLite connection the adapters will be used on
        converter_name: Declared column type read back as Instant

    Note:
        Registration is global rather than per-connection. A connection
        only reads `converter_name` columns as Instant when opened with
        `detect_types=sqlite3.PARSE_DECLTYPES`.
    """
    if connection is not None:
        # Ensure connection is established
        connection.execute('SELECT 1')

    sqlite3.register_adapter(Instant, adapt_instant)
    sqlite3.register_converter(converter_name, convert_instant)
    logger.debug(f'Registered sqlite3 Instant adapter, converter {converter_name!r}')


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
