"""Status LED on a Raspberry Pi GPIO pin."""
import logging

from ..sensors.constants import LED_PIN

logger = logging.getLogger(__name__)


class StatusLed:
    """Single LED driven from a BCM-numbered output pin. Starts off."""

    def __init__(self, pin: int = LED_PIN, gpio=None) -> None:
        """
        Args:
            pin: BCM pin number
            gpio: RPi.GPIO compatible module, RPi.GPIO itself when None
        """
        if gpio is None:
            import RPi.GPIO as gpio
        self.gpio = gpio
        self.pin = pin
        self.state = False

        self.gpio.setmode(self.gpio.BCM)
        self.gpio.setwarnings(False)
        self.gpio.setup(self.pin, self.gpio.OUT)
        self.gpio.output(self.pin, self.gpio.LOW)
        logger.info("Status LED on GPIO%d", pin)

    def set(self, state: bool) -> None:
        self.state = state
        self.gpio.output(self.pin, self.gpio.HIGH if state else self.gpio.LOW)

    def on(self) -> None:
        self.set(True)

    def off(self) -> None:
        self.set(False)

    def toggle(self) -> None:
        self.set(not self.state)

    def close(self) -> None:
        """Switch off and release only this pin."""
        self.off()
        self.gpio.cleanup(self.pin)

    def __enter__(self) -> 'StatusLed':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
