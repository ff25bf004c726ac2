"""
Wire the Instant handler into a database driver from options.
"""
import logging
from dataclasses import fields
from typing import Any

from database_instant.adapters import register_postgres, register_sqlite
from database_instant.handler import InstantHandler
from database_instant.instant import Instant
from database_instant.options import InstantOptions
from database_instant.registry import get_type_handler_registry
from psycopg.adapt import AdaptersMap

from libb import load_options

__all__ = ['configure']

logger = logging.getLogger(__name__)


@load_options(cls=InstantOptions)
def configure(options: InstantOptions | dict[str, Any] | str,
              config: Any | None = None, connection: Any | None = None,
              **kw: Any) -> AdaptersMap | None:
    """Register Instant support for a driver

    Args:
        options: Can be:
                - InstantOptions object
                - String path to configuration
                - Dictionary of options
                - Options specified as keyword arguments
        config: Configuration object (for loading from config files)
        connection: Optional psycopg or sqlite3 connection. For `postgresql`
            the adapters are registered on it in place; without one a new
            AdaptersMap is returned.
        **kw: Additional keyword arguments to override options

    Returns
        psycopg AdaptersMap the adapters went to for `postgresql`, None
        otherwise. SQLAlchemy needs no registration beyond declaring
        InstantType columns.
    """
    if isinstance(options, InstantOptions):
        for field in fields(options):
            kw.pop(field.name, None)
    else:
        options_func = load_options(cls=InstantOptions)(lambda o, c: o)
        options = options_func(options, config, **kw)

    if options.register_handler:
        get_type_handler_registry().add_type_handler(Instant, InstantHandler.default)

    logger.debug(f'Configuring Instant support for {options.drivername}')

    if options.drivername == 'postgresql':
        return register_postgres(adapters=connection,
                                 load_timestamps=options.load_timestamps)
    if options.drivername == 'sqlite':
        register_sqlite(connection=connection, converter_name=options.converter_name)
    return None
