import pathlib
import site

import pytest
from database_instant.registry import TypeHandlerRegistry

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def reset_type_handlers():
    """Restore the default type handlers before and after each test."""
    TypeHandlerRegistry.get_instance().reset()
    yield
    TypeHandlerRegistry.get_instance().reset()


pytest_plugins = [
    'tests.fixtures.values',
    'tests.fixtures.sqlite',
    'tests.fixtures.postgres',
]
