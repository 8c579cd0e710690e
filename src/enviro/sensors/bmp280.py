import logging
import time

from .constants import *
from .errors import DeviceNotFoundError
from .i2c import I2CDevice
from ..models import BMP280Reading

logger = logging.getLogger(__name__)


class BMP280:
    """BMP280 temperature and pressure sensor."""

    def __init__(self, device: I2CDevice,
                 temperature_sampling: BMP280Sampling = BMP280Sampling.ULTRA_HIGH_RESOLUTION,
                 pressure_sampling: BMP280Sampling = BMP280Sampling.ULTRA_HIGH_RESOLUTION) -> None:
        """Initialize BMP280 sensor.

        Args:
            device: I2C device addressed at the BMP280 (0x77 on the Enviro board)
            temperature_sampling: Temperature oversampling
            pressure_sampling: Pressure oversampling
        """
        self.device = device
        self.temperature_sampling = temperature_sampling
        self.pressure_sampling = pressure_sampling
        self.t_fine = 0

        try:
            chip_id = self.device.read_registers(BMP280Register.CHIP_ID, 1)[0]
            if chip_id != BMP280_CHIP_ID_VALUE:
                raise DeviceNotFoundError('BMP280', device.address, BMP280_CHIP_ID_VALUE, chip_id)

            self.reset()
            self.read_calibration()
            self.configure()

            logger.info("BMP280 initialized on address 0x%02X", device.address)

        except Exception as e:
            logger.error("Failed to initialize BMP280: %s", e)
            self.device.close()
            raise

    def reset(self) -> None:
        """Reset the BMP280 sensor."""
        self.device.write_register(BMP280Register.RESET, BMP280_RESET_VALUE)
        time.sleep(0.2)  # Wait for reset to complete

    def configure(self) -> None:
        """Configure BMP280 settings."""
        # osrs_t (bits 7-5), osrs_p (bits 4-2), mode = 11 (normal mode)
        ctrl_meas = (self.temperature_sampling << 5) | (self.pressure_sampling << 2) | BMP280_MODE_NORMAL
        self.device.write_register(BMP280Register.CTRL_MEAS, ctrl_meas)

        # t_sb = 000 (0.5ms standby)
        # filter = 010 (filter coefficient 4)
        # spi3w_en = 0 (3-wire SPI disabled)
        config = (0 << 5) | (2 << 2) | 0
        self.device.write_register(BMP280Register.CONFIG, config)

    def read_calibration(self) -> None:
        """Read factory calibration data."""
        data = self.device.read_registers(BMP280Register.CALIB_START, BMP280_CALIB_LENGTH)

        # Temperature calibration data
        self.dig_T1 = self.word(data, 0)  # Unsigned
        self.dig_T2 = self.signed_word(data, 2)
        self.dig_T3 = self.signed_word(data, 4)

        # Pressure calibration data
        self.dig_P1 = self.word(data, 6)  # Unsigned
        self.dig_P2 = self.signed_word(data, 8)
        self.dig_P3 = self.signed_word(data, 10)
        self.dig_P4 = self.signed_word(data, 12)
        self.dig_P5 = self.signed_word(data, 14)
        self.dig_P6 = self.signed_word(data, 16)
        self.dig_P7 = self.signed_word(data, 18)
        self.dig_P8 = self.signed_word(data, 20)
        self.dig_P9 = self.signed_word(data, 22)

    @staticmethod
    def word(data: bytes, offset: int) -> int:
        """Unsigned little-endian 16-bit word at offset."""
        return data[offset + 1] << 8 | data[offset]

    @staticmethod
    def signed_word(data: bytes, offset: int) -> int:
        """Signed little-endian 16-bit word at offset."""
        val = BMP280.word(data, offset)
        if val >= 32768:
            val -= 65536
        return val

    def read_raw(self):
        """Read raw 20-bit temperature and pressure data.

        Returns:
            (adc_T, adc_P)
        """
        # Pressure and temperature registers are contiguous: press MSB/LSB/XLSB, temp MSB/LSB/XLSB
        data = self.device.read_registers(BMP280Register.PRESS_MSB, 6)
        raw_press = ((data[0] << 16) | (data[1] << 8) | data[2]) >> 4
        raw_temp = ((data[3] << 16) | (data[4] << 8) | data[5]) >> 4
        return raw_temp, raw_press

    def compensate_temperature(self, raw_temp: int) -> float:
        """Compensate raw temperature reading, in degrees Celsius."""
        var1 = ((raw_temp / 16384.0) - (self.dig_T1 / 1024.0)) * self.dig_T2
        var2 = ((raw_temp / 131072.0) - (self.dig_T1 / 8192.0)) * \
            ((raw_temp / 131072.0) - (self.dig_T1 / 8192.0)) * self.dig_T3

        self.t_fine = int(var1 + var2)
        return (var1 + var2) / 5120.0

    def compensate_pressure(self, raw_press: int) -> float:
        """Compensate raw pressure reading, in hPa.

        Uses t_fine from the last compensate_temperature() call.
        """
        var1 = (self.t_fine / 2.0) - 64000.0
        var2 = var1 * var1 * self.dig_P6 / 32768.0
        var2 = var2 + var1 * self.dig_P5 * 2.0
        var2 = (var2 / 4.0) + (self.dig_P4 * 65536.0)
        var1 = (self.dig_P3 * var1 * var1 / 524288.0 + self.dig_P2 * var1) / 524288.0
        var1 = (1.0 + var1 / 32768.0) * self.dig_P1

        if var1 == 0:
            return 0.0

        pressure = 1048576.0 - raw_press
        pressure = ((pressure - var2 / 4096.0) * 6250.0) / var1
        var1 = self.dig_P9 * pressure * pressure / 2147483648.0
        var2 = pressure * self.dig_P8 / 32768.0
        pressure = pressure + (var1 + var2 + self.dig_P7) / 16.0

        # Pa to hPa
        return pressure / 100.0

    def read(self) -> BMP280Reading:
        """Read and calculate temperature and pressure."""
        raw_temp, raw_press = self.read_raw()
        temperature = self.compensate_temperature(raw_temp)
        pressure = self.compensate_pressure(raw_press)
        return BMP280Reading(temperature, pressure)

    def close(self) -> None:
        self.device.close()

    def __enter__(self) -> 'BMP280':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
