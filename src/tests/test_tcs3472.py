import struct

import pytest

from enviro.models import Color
from enviro.sensors.constants import TCS3472Gain
from enviro.sensors.errors import DeviceNotFoundError, TransportError
from enviro.sensors.tcs3472 import TCS3472


@pytest.fixture
def tcs3472(fake_device, sleeps):
    device = fake_device(bytes([0x44]), address=0x29)
    return TCS3472(device), device


def channels(clear, red, green, blue):
    return struct.pack('<HHHH', clear, red, green, blue)


def test_initialization_sequence(tcs3472, sleeps):
    _, device = tcs3472
    assert device.calls[:2] == [('write_byte', 0x92), ('read', 1)]
    assert device.writes() == [
        bytes([0x81, 0xFF]),   # ATIME: one 2.4ms cycle
        bytes([0x8F, 0x00]),   # gain x1
        bytes([0x80, 0x01]),   # PON
        bytes([0x80, 0x03]),   # PON | AEN
    ]
    assert sleeps == [0.003]


def test_accepts_tcs34723_id(fake_device, sleeps):
    TCS3472(fake_device(bytes([0x4D]), address=0x29), integration_time=0.024,
            gain=TCS3472Gain.X16)


def test_integration_time_and_gain(fake_device, sleeps):
    device = fake_device(bytes([0x44]), address=0x29)
    TCS3472(device, integration_time=0.024, gain=TCS3472Gain.X16)
    assert device.writes()[:2] == [bytes([0x81, 246]), bytes([0x8F, 0x02])]


def test_unknown_id(fake_device, sleeps):
    device = fake_device(bytes([0x00]), address=0x29)
    with pytest.raises(DeviceNotFoundError):
        TCS3472(device)
    assert device.closed


def test_read_raw_burst(tcs3472):
    sensor, device = tcs3472
    device.responses.append(channels(1000, 500, 250, 1000))
    assert sensor.read_raw() == (1000, 500, 250, 1000)
    assert device.calls[-2:] == [('write_byte', 0xB4), ('read', 8)]


def test_color_normalized_to_clear(tcs3472):
    sensor, device = tcs3472
    device.responses.append(channels(1000, 500, 250, 1200))
    assert sensor.get_color() == Color(127, 63, 255, 1000)


def test_dark_reading(tcs3472):
    sensor, device = tcs3472
    device.responses.append(channels(0, 0, 0, 0))
    color = sensor.get_color()
    assert color == Color(0, 0, 0, 0)
    assert color.brightness == 0.0


def test_brightness_is_hsl_lightness():
    assert Color(255, 63, 127).brightness == pytest.approx(62.35, abs=0.01)
    assert Color(255, 255, 255).brightness == 100.0


@pytest.mark.parametrize("status, valid", [(0x01, True), (0x11, True), (0x10, False)])
def test_is_valid(tcs3472, status, valid):
    sensor, device = tcs3472
    device.responses.append(bytes([status]))
    assert sensor.is_valid() is valid
    assert device.calls[-2] == ('write_byte', 0x93)


def test_close_powers_down_then_releases_device(tcs3472):
    sensor, device = tcs3472
    writes_at_close = []
    release = device.close

    def close():
        writes_at_close.extend(device.writes())
        release()

    device.close = close
    sensor.close()
    assert writes_at_close[-1] == bytes([0x80, 0x00])
    assert device.closed


def test_close_releases_device_when_power_down_fails(tcs3472):
    sensor, device = tcs3472

    def write(data):
        raise TransportError("I2C write to 0x29 failed")

    device.write = write
    with pytest.raises(TransportError):
        sensor.close()
    assert device.closed


def test_context_manager_powers_down(tcs3472):
    sensor, device = tcs3472
    with sensor:
        pass
    assert device.writes()[-1] == bytes([0x80, 0x00])
    assert device.closed
