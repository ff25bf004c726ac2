"""
Instant support for database access libraries.

Reads and writes UTC timestamps between a timezone-less datetime column and
the immutable Instant value type. One shared, stateless InstantHandler does
the conversion for every driver:

- Write: Instant → UTC clock fields, declared as DATETIME2
- Read: Instant, naive datetime (taken as UTC) or aware datetime → Instant

Driver wiring lives in `database_instant.adapters` (psycopg, sqlite3,
SQLAlchemy); `configure()` applies it from options.
"""
__version__ = '0.1.0'

from typing import Any

from database_instant.adapters import InstantType, register_postgres
from database_instant.adapters import register_sqlite
from database_instant.exceptions import DatabaseError, TypeConversionError
from database_instant.exceptions import UnsupportedSourceType
from database_instant.handler import INSTANT_HANDLER, InstantHandler
from database_instant.handler import TypeHandler
from database_instant.instant import UNIX_EPOCH, Instant
from database_instant.options import InstantOptions
from database_instant.parameter import DbType, Parameter
from database_instant.registration import configure
from database_instant.registry import TypeHandlerRegistry
from database_instant.registry import get_type_handler_registry

type_handler_registry = get_type_handler_registry()


def set_value(parameter: Parameter, value: Instant) -> None:
    """Bind an Instant to a parameter as UTC DATETIME2.
    """
    INSTANT_HANDLER.set_value(parameter, value)


def parse(value: Any) -> Instant:
    """Convert a raw database value to an Instant.

    Raises UnsupportedSourceType for values that are not an Instant or a
    datetime.
    """
    return INSTANT_HANDLER.parse(value)


__all__ = [
    'Instant',
    'UNIX_EPOCH',
    'InstantHandler',
    'INSTANT_HANDLER',
    'TypeHandler',
    'TypeHandlerRegistry',
    'get_type_handler_registry',
    'type_handler_registry',
    'DbType',
    'Parameter',
    'InstantOptions',
    'InstantType',
    'configure',
    'register_postgres',
    'register_sqlite',
    'set_value',
    'parse',
    'DatabaseError',
    'TypeConversionError',
    'UnsupportedSourceType',
]
