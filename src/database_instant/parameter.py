"""
Database parameter target for the write path.

A Parameter is the mutable object a type handler fills in when a value is
bound to a query: the driver-ready value plus the declared storage type.
"""
import enum
from dataclasses import dataclass
from typing import Any

__all__ = ['DbType', 'Parameter']


class DbType(enum.Enum):
    """Declared storage types for date/time parameters.
    """
    DATE = 'date'
    TIME = 'time'
    DATETIME = 'datetime'
    DATETIME2 = 'datetime2'
    DATETIMEOFFSET = 'datetimeoffset'


@dataclass
class Parameter:
    """Query parameter being bound.
    """
    name: str | None = None
    value: Any = None
    db_type: DbType | None = None
