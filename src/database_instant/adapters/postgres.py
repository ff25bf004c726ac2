"""
psycopg adapters for Instant.

InstantDumper binds Instant parameters as `timestamp` text holding the UTC
clock fields. InstantLoader reads `timestamp` and `timestamptz` columns back
as Instants; it is opt-in since it changes the result type of every such
column on the connection.

Usage:
    conn = psycopg.connect(...)
    register_postgres(conn, load_timestamps=True)
"""
import logging
from typing import Any

import dateutil.parser
import psycopg
from database_instant.exceptions import TypeConversionError
from database_instant.handler import INSTANT_HANDLER
from database_instant.instant import Instant
from database_instant.parameter import Parameter
from psycopg.adapt import AdaptersMap, Dumper, Loader
from psycopg.postgres import types

__all__ = [
    'InstantDumper',
    'InstantLoader',
    'register_postgres',
    'TIMESTAMP_OID',
    'TIMESTAMPTZ_OID',
]

logger = logging.getLogger(__name__)

TIMESTAMP_OID = types.get('timestamp').oid
TIMESTAMPTZ_OID = types.get('timestamptz').oid


class InstantDumper(Dumper):
    """Dumper writing Instant as timestamp without time zone"""

    oid = TIMESTAMP_OID

    def dump(self, obj: Instant) -> bytes:
        """Dump the UTC clock fields as ISO text"""
        param = Parameter()
        INSTANT_HANDLER.set_value(param, obj)
        return param.value.isoformat(sep=' ').encode()


class InstantLoader(Loader):
    """Loader reading timestamp/timestamptz text as Instant"""

    def load(self, data) -> Instant:
        if isinstance(data, memoryview):
            data = bytes(data)
        text = data.decode()
        try:
            value = dateutil.parser.isoparse(text)
        except ValueError as e:
            raise TypeConversionError(f'Cannot convert timestamp {text!r} to Instant') from e
        return INSTANT_HANDLER.parse(value)


def register_postgres(adapters: Any | None = None,
                      load_timestamps: bool = False) -> AdaptersMap:
    """Register Instant adapters for PostgreSQL

    Args:
        adapters: AdaptersMap, or psycopg connection or cursor, to register
            on in place. When None a new AdaptersMap derived from the global
            `psycopg.adapters` is created.
        load_timestamps: Also load timestamp/timestamptz columns as Instant

    Returns
        AdaptersMap the adapters were registered on
    """
    if adapters is None:
        adapters = AdaptersMap(psycopg.adapters)
    elif not isinstance(adapters, AdaptersMap):
        adapters = adapters.adapters

    adapters.register_dumper(Instant, InstantDumper)
    logger.debug('Registered Instant dumper for PostgreSQL')

    if load_timestamps:
        for oid in (TIMESTAMP_OID, TIMESTAMPTZ_OID):
            adapters.register_loader(oid, InstantLoader)
        logger.debug('Registered Instant loaders for timestamp, timestamptz')

    return adapters
