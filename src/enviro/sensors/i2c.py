from smbus2 import SMBus, i2c_msg
from typing import Iterable, Union

from .errors import TransportError


class I2CDevice:
    """A single addressed device on an I2C bus.

    Exposes the raw byte transport the drivers are written against: plain
    writes and reads with no register byte implied, so that a register
    address followed by a read can be issued as two separate transfers.
    """

    def __init__(self, bus: Union[int, SMBus], address: int) -> None:
        """Open the bus.

        Args:
            bus: I2C bus number, or an already open SMBus
            address: 7-bit device address
        """
        self.bus = SMBus(bus) if isinstance(bus, int) else bus
        self.address = address

    def write_byte(self, value: int) -> None:
        """Write a single byte."""
        try:
            self.bus.write_byte(self.address, value)
        except OSError as e:
            raise TransportError(f"I2C write to 0x{self.address:02X} failed: {e}") from e

    def write(self, data: Iterable[int]) -> None:
        """Write a sequence of bytes in one transfer."""
        msg = i2c_msg.write(self.address, list(data))
        try:
            self.bus.i2c_rdwr(msg)
        except OSError as e:
            raise TransportError(f"I2C write to 0x{self.address:02X} failed: {e}") from e

    def read(self, length: int) -> bytes:
        """Read the next `length` bytes returned by the device."""
        msg = i2c_msg.read(self.address, length)
        try:
            self.bus.i2c_rdwr(msg)
        except OSError as e:
            raise TransportError(f"I2C read from 0x{self.address:02X} failed: {e}") from e
        return bytes(msg)

    def write_register(self, register: int, value: int) -> None:
        """Write one value byte to a register."""
        self.write([register, value])

    def read_registers(self, register: int, length: int) -> bytes:
        """Select a register, then read `length` bytes from it."""
        self.write_byte(register)
        return self.read(length)

    def close(self) -> None:
        self.bus.close()

    def __enter__(self) -> 'I2CDevice':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
