"""
Type handlers converting between column values and application types.

A type handler is the extension point a mapping layer calls for columns bound
to a custom Python type:

- set_value(parameter, value): Python → Database, when binding a parameter
- parse(value): Database → Python, when materializing a column value

InstantHandler implements it for Instant. It holds no state, so a single
shared instance (`InstantHandler.default`) serves every connection and thread.
"""
import datetime
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import numpy as np
import pandas as pd
from database_instant.exceptions import TypeConversionError, UnsupportedSourceType
from database_instant.instant import Instant
from database_instant.parameter import DbType, Parameter

__all__ = ['TypeHandler', 'InstantHandler', 'INSTANT_HANDLER']

T = TypeVar('T')


class TypeHandler(ABC, Generic[T]):
    """Base class for custom type handlers.
    """

    @abstractmethod
    def set_value(self, parameter: Parameter, value: T) -> None:
        """Assign the database representation of value to parameter.
        """

    @abstractmethod
    def parse(self, value: Any) -> T:
        """Convert a raw database value to the handled type.
        """


class InstantHandler(TypeHandler[Instant]):
    """Read and write Instant values in a timezone-less datetime column.

    Values are persisted as UTC clock fields in a sub-second precision
    datetime column (`DbType.DATETIME2`).

    On read the driver may hand back:
    1. An Instant, returned as is
    2. A naive datetime, whose clock fields are taken verbatim as UTC
    3. An aware datetime, converted to UTC by applying its offset

    pandas Timestamps follow the datetime rules and keep nanoseconds. numpy
    datetime64 values are naive, in any unit; those past the Instant range
    raise TypeConversionError. Anything else raises UnsupportedSourceType.
    """

    default: 'InstantHandler'

    def set_value(self, parameter: Parameter, value: Instant) -> None:
        parameter.value = value.to_datetime_utc().replace(tzinfo=None)
        parameter.db_type = DbType.DATETIME2

    def parse(self, value: Any) -> Instant:
        match value:
            case Instant():
                return value
            case np.datetime64() if not np.isnat(value):
                try:
                    return Instant.from_datetime64(value)
                except ValueError as e:
                    raise TypeConversionError(f'Cannot convert {value!r} to Instant: {e}') from e
            case datetime.datetime() if value is not pd.NaT and value.utcoffset() is None:
                # no conversion, naive values are stored UTC
                return Instant.from_datetime_utc(value.replace(tzinfo=datetime.UTC))
            case datetime.datetime() if value is not pd.NaT:
                return Instant.from_datetime_offset(value)
            case _:
                raise UnsupportedSourceType(type(value))


InstantHandler.default = InstantHandler()
INSTANT_HANDLER = InstantHandler.default
