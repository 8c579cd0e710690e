import pytest

from enviro.indicators.led import StatusLed


class FakeGPIO:
    BCM = 'BCM'
    OUT = 'OUT'
    LOW = 0
    HIGH = 1

    def __init__(self):
        self.calls = []
        self.levels = {}

    def setmode(self, mode):
        self.calls.append(('setmode', mode))

    def setwarnings(self, flag):
        self.calls.append(('setwarnings', flag))

    def setup(self, pin, mode):
        self.calls.append(('setup', pin, mode))

    def output(self, pin, level):
        self.levels[pin] = level

    def cleanup(self, pin):
        self.calls.append(('cleanup', pin))


@pytest.fixture
def gpio():
    return FakeGPIO()


def test_starts_off_on_bcm_pin(gpio):
    led = StatusLed(4, gpio=gpio)
    assert ('setmode', 'BCM') in gpio.calls
    assert ('setup', 4, 'OUT') in gpio.calls
    assert gpio.levels[4] == gpio.LOW
    assert led.state is False


def test_toggle(gpio):
    led = StatusLed(4, gpio=gpio)
    led.toggle()
    assert gpio.levels[4] == gpio.HIGH
    led.toggle()
    assert gpio.levels[4] == gpio.LOW


def test_on_off(gpio):
    led = StatusLed(17, gpio=gpio)
    led.on()
    assert led.state is True
    assert gpio.levels[17] == gpio.HIGH
    led.off()
    assert gpio.levels[17] == gpio.LOW


def test_close_switches_off_and_cleans_only_its_pin(gpio):
    with StatusLed(4, gpio=gpio) as led:
        led.on()
    assert gpio.levels[4] == gpio.LOW
    assert gpio.calls[-1] == ('cleanup', 4)
