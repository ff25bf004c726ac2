"""
Registry of custom type handlers.

The registry is how a mapping layer finds the handler for a value it is about
to bind, or for the Python type a column should become. It is a process-wide
singleton, seeded with the Instant handler.

Usage:
    registry = TypeHandlerRegistry.get_instance()
    registry.add_type_handler(Instant, InstantHandler.default)

    param = Parameter(name='created_at')
    registry.set_parameter(param, Instant.now())

    created_at = registry.parse(Instant, row['created_at'])
"""
import logging
import threading
from typing import Any

from database_instant.exceptions import TypeConversionError
from database_instant.handler import InstantHandler, TypeHandler
from database_instant.instant import Instant
from database_instant.parameter import Parameter

__all__ = ['TypeHandlerRegistry', 'get_type_handler_registry']

logger = logging.getLogger(__name__)


class TypeHandlerRegistry:
    """Registry mapping Python types to type handlers.
    """

    _instance = None
    _instance_lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> 'TypeHandlerRegistry':
        """Get singleton instance.
        """
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._handlers: dict[type, TypeHandler] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._handlers[Instant] = InstantHandler.default

    def add_type_handler(self, python_type: type, handler: TypeHandler) -> None:
        """Register a handler for a Python type, replacing any existing one.
        """
        if not isinstance(handler, TypeHandler):
            raise TypeError(f'handler must be a TypeHandler, not {type(handler).__name__}')
        with self._lock:
            previous = self._handlers.get(python_type)
            self._handlers[python_type] = handler
        if previous is not None and previous is not handler:
            logger.debug(f'Replaced type handler for {python_type.__name__}')
        else:
            logger.debug(f'Registered type handler for {python_type.__name__}')

    def remove_type_handler(self, python_type: type) -> None:
        with self._lock:
            self._handlers.pop(python_type, None)

    def has_handler(self, python_type: type) -> bool:
        return self.get_handler(python_type) is not None

    def get_handler(self, python_type: type) -> TypeHandler | None:
        """Find the handler for a type, falling back to its base classes.
        """
        with self._lock:
            handler = self._handlers.get(python_type)
            if handler is not None:
                return handler
            for base in python_type.__mro__[1:]:
                handler = self._handlers.get(base)
                if handler is not None:
                    return handler
        return None

    def set_parameter(self, parameter: Parameter, value: Any) -> Parameter:
        """Bind value to parameter through its type handler.

        Values without a handler are stored unchanged and the declared
        storage type is left to the driver.
        """
        handler = None if value is None else self.get_handler(type(value))
        if handler is None:
            parameter.value = value
        else:
            handler.set_value(parameter, value)
        return parameter

    def parse(self, python_type: type, value: Any) -> Any:
        """Convert a raw database value to python_type through its handler.

        None (SQL NULL) is returned as is.
        """
        if value is None:
            return None
        handler = self.get_handler(python_type)
        if handler is None:
            raise TypeConversionError(f'No type handler registered for {python_type}')
        return handler.parse(value)

    def reset(self) -> None:
        """Drop custom handlers and restore the defaults.
        """
        with self._lock:
            self._handlers.clear()
            self._register_defaults()
        logger.debug('Type handler registry reset to defaults')


def get_type_handler_registry() -> TypeHandlerRegistry:
    """Get the process-wide type handler registry

    Returns
        TypeHandlerRegistry instance
    """
    return TypeHandlerRegistry.get_instance()
