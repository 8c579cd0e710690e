"""Exceptions raised by the sensor drivers."""


class SensorError(RuntimeError):
    """Base class for sensor driver failures."""


class TransportError(SensorError):
    """An I2C read or write failed."""


class DeviceNotFoundError(SensorError):
    """The chip at the configured address did not identify as expected."""

    def __init__(self, name: str, address: int, expected: int, actual: int) -> None:
        super().__init__(
            f"No {name} detected at 0x{address:02X}: "
            f"identity 0x{actual:02X}, expected 0x{expected:02X}"
        )
        self.name = name
        self.address = address
        self.expected = expected
        self.actual = actual
