from dataclasses import dataclass

from libb import ConfigOptions

__all__ = ['InstantOptions', 'SUPPORTED_DRIVERS']

SUPPORTED_DRIVERS = ('postgresql', 'sqlite', 'sqlalchemy')


@dataclass
class InstantOptions(ConfigOptions):
    """Options

    supported driver names: `postgresql`, `sqlite`, `sqlalchemy`

    - load_timestamps: Read timestamp columns back as Instant (postgresql, default: False)
    - converter_name: Declared column type read back as Instant (sqlite, default: 'instant')
    - register_handler: Register InstantHandler in the type handler registry (default: True)
    """
    drivername: str = 'postgresql'
    load_timestamps: bool = False
    converter_name: str = 'instant'
    register_handler: bool = True

    def __post_init__(self):
        if self.drivername not in SUPPORTED_DRIVERS:
            raise ValueError(f'drivername must be one of: {list(SUPPORTED_DRIVERS)}')
        if not self.converter_name:
            raise ValueError('converter_name must not be empty')
