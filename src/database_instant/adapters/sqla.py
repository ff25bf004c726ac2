"""
SQLAlchemy column type for Instant.

InstantType stores Instants in a timezone-less datetime column holding UTC
clock fields, using the best sub-second precision type of each dialect:

- mssql: DATETIME2(7)
- postgresql: TIMESTAMP(6) WITHOUT TIME ZONE
- others: DateTime

Usage:
    events = sa.Table('events', metadata,
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('created_at', InstantType()))
"""
from typing import Any

import sqlalchemy as sa
from database_instant.handler import InstantHandler
from database_instant.instant import Instant
from database_instant.parameter import Parameter
from sqlalchemy.dialects import mssql, postgresql
from sqlalchemy.engine import Dialect

__all__ = ['InstantType']


class InstantType(sa.types.TypeDecorator):
    """Instant stored as a UTC datetime without time zone.

    Bound values that are not Instants (naive or aware datetimes) are read
    through the handler first, with the same rules as column values.
    """

    impl = sa.DateTime
    cache_ok = True

    handler = InstantHandler.default

    def load_dialect_impl(self, dialect: Dialect) -> Any:
        if dialect.name == 'mssql':
            return dialect.type_descriptor(mssql.DATETIME2(precision=7))
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(postgresql.TIMESTAMP(timezone=False, precision=6))
        return dialect.type_descriptor(sa.DateTime(timezone=False))

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, Instant):
            value = self.handler.parse(value)
        param = Parameter()
        self.handler.set_value(param, value)
        return param.value

    def process_result_value(self, value: Any, dialect: Dialect) -> Instant | None:
        if value is None:
            return None
        return self.handler.parse(value)

    @property
    def python_type(self) -> type:
        return Instant
