import ctypes
from unittest import mock

import pytest

from enviro.sensors.errors import TransportError
from enviro.sensors.i2c import I2CDevice


@pytest.fixture
def bus():
    return mock.MagicMock()


def test_write_byte(bus):
    device = I2CDevice(bus, 0x1D)
    device.write_byte(0x0F)
    bus.write_byte.assert_called_once_with(0x1D, 0x0F)


def test_write_sends_one_message(bus):
    device = I2CDevice(bus, 0x1D)
    device.write([0x20, 0x57])
    (msg,), _ = bus.i2c_rdwr.call_args
    assert msg.addr == 0x1D
    assert list(msg) == [0x20, 0x57]


def test_read_returns_bytes(bus):
    def fill(msg):
        ctypes.memmove(msg.buf, b'\x01\x02\x03', msg.len)

    bus.i2c_rdwr.side_effect = fill
    device = I2CDevice(bus, 0x1D)
    assert device.read(3) == b'\x01\x02\x03'


def test_read_registers_selects_then_reads(bus):
    bus.i2c_rdwr.side_effect = lambda msg: ctypes.memmove(msg.buf, b'\x49', msg.len)
    device = I2CDevice(bus, 0x1D)
    assert device.read_registers(0x0F, 1) == b'\x49'
    bus.write_byte.assert_called_once_with(0x1D, 0x0F)


@pytest.mark.parametrize("operation", [
    lambda device: device.write_byte(0x0F),
    lambda device: device.write([0x20, 0x57]),
    lambda device: device.read(6),
])
def test_os_errors_become_transport_errors(bus, operation):
    bus.write_byte.side_effect = OSError(121, 'Remote I/O error')
    bus.i2c_rdwr.side_effect = OSError(121, 'Remote I/O error')
    device = I2CDevice(bus, 0x1D)
    with pytest.raises(TransportError) as excinfo:
        operation(device)
    assert isinstance(excinfo.value.__cause__, OSError)
    assert '0x1D' in str(excinfo.value)


def test_context_manager_closes_bus(bus):
    with I2CDevice(bus, 0x1D):
        pass
    bus.close.assert_called_once_with()


def test_bus_number_opens_smbus():
    with mock.patch('enviro.sensors.i2c.SMBus') as smbus:
        device = I2CDevice(1, 0x77)
    smbus.assert_called_once_with(1)
    assert device.bus is smbus.return_value
