import logging
import time
from typing import Tuple

from .constants import *
from .errors import DeviceNotFoundError
from .i2c import I2CDevice
from ..models import Color

logger = logging.getLogger(__name__)


class TCS3472:
    """TCS3472x RGB color and light sensor."""

    def __init__(self, device: I2CDevice, integration_time: float = 0.0024,
                 gain: TCS3472Gain = TCS3472Gain.X1) -> None:
        """Initialize TCS3472x sensor.

        Args:
            device: I2C device addressed at the TCS3472x (0x29)
            integration_time: ADC integration time in seconds, 2.4ms steps up to 614.4ms
            gain: Analog gain
        """
        self.device = device
        self.integration_time = integration_time
        self.gain = gain

        try:
            chip_id = self.read_register(TCS3472Register.ID)
            if chip_id not in TCS3472_IDS:
                raise DeviceNotFoundError('TCS3472x', device.address, TCS3472_IDS[0], chip_id)

            self.configure()
            self.power_on()

            logger.info("TCS3472x initialized on address 0x%02X", device.address)

        except Exception as e:
            logger.error("Failed to initialize TCS3472x: %s", e)
            self.device.close()
            raise

    def read_register(self, register: int) -> int:
        return self.device.read_registers(TCS3472_COMMAND_BIT | register, 1)[0]

    def write_register(self, register: int, value: int) -> None:
        self.device.write_register(TCS3472_COMMAND_BIT | register, value)

    def configure(self) -> None:
        """Set integration time and gain."""
        # ATIME counts down from 256 in 2.4ms cycles
        cycles = min(256, max(1, round(self.integration_time / 0.0024)))
        self.write_register(TCS3472Register.ATIME, 256 - cycles)
        self.write_register(TCS3472Register.CONTROL, self.gain)

    def power_on(self) -> None:
        """Power on the oscillator, then enable the RGBC ADC."""
        self.write_register(TCS3472Register.ENABLE, TCS3472_ENABLE_PON)
        time.sleep(0.003)
        self.write_register(TCS3472Register.ENABLE, TCS3472_ENABLE_PON | TCS3472_ENABLE_AEN)

    def power_off(self) -> None:
        """Disable the RGBC ADC and the oscillator."""
        self.write_register(TCS3472Register.ENABLE, 0x00)

    def is_valid(self) -> bool:
        """True once an integration cycle has completed."""
        return bool(self.read_register(TCS3472Register.STATUS) & TCS3472_STATUS_AVALID)

    def read_raw(self) -> Tuple[int, int, int, int]:
        """Read the four 16-bit channels.

        Returns:
            (clear, red, green, blue)
        """
        data = self.device.read_registers(
            TCS3472_COMMAND_BIT | TCS3472_AUTO_INCREMENT | TCS3472Register.CDATAL, 8)
        clear = data[1] << 8 | data[0]
        red = data[3] << 8 | data[2]
        green = data[5] << 8 | data[4]
        blue = data[7] << 8 | data[6]
        return clear, red, green, blue

    def get_color(self) -> Color:
        """Read the color, RGB normalized against the clear channel to 0-255."""
        clear, red, green, blue = self.read_raw()
        if clear == 0:
            return Color(0, 0, 0, clear)

        def scale(channel: int) -> int:
            return min(255, int(channel * 255 / clear))

        return Color(scale(red), scale(green), scale(blue), clear)

    def close(self) -> None:
        """Power the sensor down and release the I2C device."""
        try:
            self.power_off()
        finally:
            self.device.close()

    def __enter__(self) -> 'TCS3472':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
