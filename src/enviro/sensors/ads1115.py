import logging
import time

from .constants import *
from .i2c import I2CDevice

logger = logging.getLogger(__name__)


class ADS1115:
    """ADS1115 16-bit 4-channel ADC, used in single-shot mode."""

    def __init__(self, device: I2CDevice,
                 measuring_range: MeasuringRange = MeasuringRange.FS4096,
                 data_rate: DataRate = DataRate.SPS128) -> None:
        """
        Args:
            device: I2C device addressed at the ADS1115 (0x49 on the Enviro board)
            measuring_range: Programmable gain amplifier setting
            data_rate: Conversion rate
        """
        self.device = device
        self.measuring_range = measuring_range
        self.data_rate = data_rate
        logger.info("ADS1115 ready on address 0x%02X", device.address)

    @property
    def full_scale(self) -> float:
        """Full scale voltage of the current range."""
        return ADS1115_FULL_SCALE[self.measuring_range]

    def config_word(self, mux: InputMultiplexer) -> int:
        """Single-shot conversion request for the given input."""
        return (ADS1115_CONFIG_OS
                | (mux << 12)
                | (self.measuring_range << 9)
                | ADS1115_CONFIG_MODE_SINGLE
                | (self.data_rate << 5)
                | ADS1115_CONFIG_COMP_DISABLE)

    def conversion_ready(self) -> bool:
        data = self.device.read_registers(ADS1115Register.CONFIG, 2)
        return bool(((data[0] << 8) | data[1]) & ADS1115_CONFIG_OS)

    def read_raw(self, mux: InputMultiplexer) -> int:
        """Start a conversion and return the signed 16-bit result."""
        config = self.config_word(mux)
        self.device.write([ADS1115Register.CONFIG, (config >> 8) & 0xFF, config & 0xFF])

        # One conversion period, then poll OS until the conversion is done
        time.sleep(1.0 / ADS1115_SAMPLES_PER_SECOND[self.data_rate] + 0.0001)
        while not self.conversion_ready():
            time.sleep(0.0001)

        data = self.device.read_registers(ADS1115Register.CONVERSION, 2)
        value = (data[0] << 8) | data[1]
        if value > 32767:
            value -= 65536
        return value

    def read_voltage(self, mux: InputMultiplexer) -> float:
        """Read the input voltage in volts."""
        return self.read_raw(mux) * self.full_scale / 32768.0

    def close(self) -> None:
        self.device.close()

    def __enter__(self) -> 'ADS1115':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
