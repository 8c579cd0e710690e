import time
from collections import deque

import pytest


class FakeI2CDevice:
    """Scripted stand-in for I2CDevice.

    Every read pops the next queued response; an exception queued in its
    place is raised instead. All transfers are appended to `calls`.
    """

    def __init__(self, responses=(), address=0x1D, calls=None):
        self.address = address
        self.responses = deque(responses)
        self.calls = calls if calls is not None else []
        self.closed = False

    def write_byte(self, value):
        self.calls.append(('write_byte', value))

    def write(self, data):
        self.calls.append(('write', bytes(data)))

    def read(self, length):
        self.calls.append(('read', length))
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        assert len(response) == length
        return bytes(response)

    def write_register(self, register, value):
        self.write([register, value])

    def read_registers(self, register, length):
        self.write_byte(register)
        return self.read(length)

    def close(self):
        self.closed = True

    def writes(self):
        return [data for kind, data in self.calls if kind == 'write']


@pytest.fixture
def fake_device():
    def _make(*responses, address=0x1D, calls=None):
        return FakeI2CDevice(responses, address=address, calls=calls)
    return _make


@pytest.fixture
def sleeps(monkeypatch):
    """Replace time.sleep, recording requested delays."""
    recorded = []
    monkeypatch.setattr(time, 'sleep', recorded.append)
    return recorded
