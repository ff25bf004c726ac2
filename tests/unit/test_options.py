import pytest
from database_instant import InstantOptions, configure, get_type_handler_registry
from database_instant import Instant, INSTANT_HANDLER
from database_instant.adapters import InstantDumper, InstantLoader
from database_instant.adapters.postgres import TIMESTAMP_OID
from psycopg import pq
from psycopg.adapt import AdaptersMap, PyFormat


def test_init_defaults():
    """Test default initialization"""
    options = InstantOptions()

    assert options.drivername == 'postgresql'
    assert options.load_timestamps is False
    assert options.converter_name == 'instant'
    assert options.register_handler is True


def test_validation():
    """Test validation rules"""
    with pytest.raises(ValueError):
        InstantOptions(drivername='invalid')

    with pytest.raises(ValueError):
        InstantOptions(drivername='sqlite', converter_name='')


def test_configure_postgres_returns_adapters():
    """Test configure builds a psycopg adapters map"""
    adapters = configure(InstantOptions(drivername='postgresql'))

    assert isinstance(adapters, AdaptersMap)
    assert adapters.get_dumper(Instant, PyFormat.TEXT) is InstantDumper
    assert adapters.get_loader(TIMESTAMP_OID, pq.Format.TEXT) is not InstantLoader


def test_configure_postgres_load_timestamps():
    adapters = configure(InstantOptions(drivername='postgresql', load_timestamps=True))
    assert adapters.get_loader(TIMESTAMP_OID, pq.Format.TEXT) is InstantLoader


def test_configure_from_dict():
    adapters = configure({'drivername': 'postgresql', 'load_timestamps': True})
    assert adapters.get_loader(TIMESTAMP_OID, pq.Format.TEXT) is InstantLoader


def test_configure_sqlite_and_sqlalchemy_return_none():
    assert configure(InstantOptions(drivername='sqlite')) is None
    assert configure(InstantOptions(drivername='sqlalchemy')) is None


def test_configure_registers_handler():
    """Test the handler is (re)registered unless disabled"""
    registry = get_type_handler_registry()
    registry.remove_type_handler(Instant)

    configure(InstantOptions(drivername='sqlalchemy', register_handler=False))
    assert registry.get_handler(Instant) is None

    configure(InstantOptions(drivername='sqlalchemy'))
    assert registry.get_handler(Instant) is INSTANT_HANDLER


def test_configure_postgres_on_connection():
    """Test configure registers on the adapters of a given connection"""
    class Connection:
        adapters = AdaptersMap()

    connection = Connection()
    adapters = configure(InstantOptions(drivername='postgresql', load_timestamps=True),
                         connection=connection)

    assert adapters is connection.adapters
    assert adapters.get_dumper(Instant, PyFormat.TEXT) is InstantDumper
    assert adapters.get_loader(TIMESTAMP_OID, pq.Format.TEXT) is InstantLoader


if __name__ == '__main__':
    __import__('pytest').main([__file__])
