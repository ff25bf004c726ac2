"""
Driver adapters for Instant.

- postgres: psycopg dumper/loader registered on an AdaptersMap
- sqlite: sqlite3 adapter/converter registered globally
- sqla: SQLAlchemy TypeDecorator for declaring Instant columns

All of them delegate to the shared InstantHandler, so the conversion rules
are the same whichever driver carries the value.
"""

from database_instant.adapters.postgres import InstantDumper, InstantLoader
from database_instant.adapters.postgres import register_postgres
from database_instant.adapters.sqla import InstantType
from database_instant.adapters.sqlite import adapt_instant, convert_instant
from database_instant.adapters.sqlite import register_sqlite
