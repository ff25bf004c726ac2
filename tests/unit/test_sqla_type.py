"""
Tests for the InstantType SQLAlchemy column type, without a database.
"""
import datetime

import pytest
from database_instant import Instant, InstantType, UnsupportedSourceType
from sqlalchemy.dialects import mssql, postgresql, sqlite


@pytest.fixture
def instant_type():
    return InstantType()


@pytest.mark.parametrize(('dialect', 'expected'), [
    (mssql.dialect(), 'DATETIME2(7)'),
    (postgresql.dialect(), 'TIMESTAMP(6) WITHOUT TIME ZONE'),
    (sqlite.dialect(), 'DATETIME'),
])
def test_column_type_per_dialect(instant_type, dialect, expected):
    """Test each dialect gets a timezone-less sub-second datetime column"""
    assert instant_type.compile(dialect=dialect) == expected


def test_bind_instant(instant_type):
    value = instant_type.process_bind_param(Instant.from_utc(2024, 1, 1, 8), sqlite.dialect())
    assert value == datetime.datetime(2024, 1, 1, 8)
    assert value.tzinfo is None


def test_bind_datetime_is_normalized(instant_type):
    """Test datetimes bound to an Instant column are stored as UTC"""
    plus_two = datetime.timezone(datetime.timedelta(hours=2))
    aware = datetime.datetime(2024, 1, 1, 10, tzinfo=plus_two)
    naive = datetime.datetime(2024, 1, 1, 10)

    assert instant_type.process_bind_param(aware, sqlite.dialect()) == datetime.datetime(2024, 1, 1, 8)
    assert instant_type.process_bind_param(naive, sqlite.dialect()) == naive


def test_bind_unsupported(instant_type):
    with pytest.raises(UnsupportedSourceType):
        instant_type.process_bind_param('2024-01-01', sqlite.dialect())


def test_null_passes_through(instant_type):
    assert instant_type.process_bind_param(None, sqlite.dialect()) is None
    assert instant_type.process_result_value(None, sqlite.dialect()) is None


def test_result_value(instant_type):
    value = instant_type.process_result_value(datetime.datetime(2024, 1, 1), sqlite.dialect())
    assert value == Instant.from_utc(2024, 1, 1)


def test_python_type(instant_type):
    assert instant_type.python_type is Instant


if __name__ == '__main__':
    __import__('pytest').main([__file__])
