"""
Exception classes for instant conversion.
"""


class DatabaseError(Exception):
    """Base class for all database_instant errors.
    """


class TypeConversionError(DatabaseError):
    """Error converting types between Python and database.
    """


class UnsupportedSourceType(TypeConversionError):
    """Raw database value has a type that cannot become an Instant.
    """

    def __init__(self, source_type: type, target: str = 'Instant') -> None:
        self.source_type = source_type
        super().__init__(f'Cannot convert {source_type} to {target}')
