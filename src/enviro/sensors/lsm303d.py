import logging
import time
from math import degrees
from typing import Optional

from .constants import *
from .errors import DeviceNotFoundError
from .i2c import I2CDevice
from ..models import Vector3
from ..processing.heading import raw_heading, tilt_compensate, tilt_heading

logger = logging.getLogger(__name__)

ACCEL_CONVERSION = LSM303D_ACCEL_FULL_SCALE / (1 << 15)


def to_signed16(low: int, high: int) -> int:
    """Combine a little-endian byte pair into a signed 16-bit value."""
    value = (high << 8) | low
    if value > 32767:
        value -= 65536
    return value


class LSM303D:
    """LSM303D 3D accelerometer and magnetometer.

    Accelerometer readings are in g, magnetometer readings in gauss. The
    session owns its I2C device and closes it on close() or when
    construction fails.
    """

    settle_delay = LSM303D_SETTLE_DELAY

    def __init__(self, device: I2CDevice) -> None:
        """Verify the chip identity and configure it.

        Args:
            device: I2C device addressed at the LSM303D (0x1D on the Enviro board)

        Raises:
            DeviceNotFoundError: WHO_AM_I did not return 0x49
            TransportError: a bus transfer failed
        """
        self.device = device

        self._accelerometer = Vector3()
        self._magnetometer = Vector3()
        self._tilt_comp = Vector3()
        self._heading = 0.0
        self._heading_degrees = 0.0
        self._tilt_heading = 0.0
        self._tilt_heading_degrees = 0.0

        try:
            self.verify_identity()
            self.configure()
            logger.info("LSM303D initialized on address 0x%02X", device.address)
        except Exception:
            self.device.close()
            raise

    def verify_identity(self) -> None:
        """Check the WHO_AM_I register."""
        self.device.write_byte(LSM303DRegister.WHO_AM_I)
        identity = self.device.read(1)[0]
        if identity != LSM303D_WHO_AM_I_VALUE:
            raise DeviceNotFoundError('LSM303D', self.device.address,
                                      LSM303D_WHO_AM_I_VALUE, identity)

    def configure(self) -> None:
        """Write the power-up register sequence: both sensors at 50Hz, +/-2g, +/-2 gauss."""
        for register, value in LSM303D_INIT_SEQUENCE:
            self.device.write([register, value])

    # Last computed values

    @property
    def accelerometer(self) -> Vector3:
        """Last accelerometer reading in g."""
        return self._accelerometer

    @property
    def magnetometer(self) -> Vector3:
        """Last magnetometer reading in gauss."""
        return self._magnetometer

    @property
    def tilt_compensated_magnetometer(self) -> Vector3:
        """Magnetometer vector rotated into the horizontal plane."""
        return self._tilt_comp

    @property
    def heading(self) -> float:
        """Raw heading in radians."""
        return self._heading

    @property
    def heading_degrees(self) -> float:
        """Raw heading in degrees."""
        return self._heading_degrees

    @property
    def tilt_heading(self) -> float:
        """Tilt-compensated heading in radians."""
        return self._tilt_heading

    @property
    def tilt_heading_degrees(self) -> float:
        """Tilt-compensated heading in degrees."""
        return self._tilt_heading_degrees

    # Register reads

    def read_burst(self, register: int, length: int) -> bytes:
        """Read consecutive registers, setting the auto-increment bit on the address."""
        self.device.write([register | LSM303D_AUTO_INCREMENT])
        return self.device.read(length)

    def read_raw_vector(self, register: int) -> Vector3:
        """Read an X, Y, Z triple of signed 16-bit codes."""
        data = self.read_burst(register, 6)
        return Vector3(
            to_signed16(data[0], data[1]),
            to_signed16(data[2], data[3]),
            to_signed16(data[4], data[5])
        )

    def read_temperature(self) -> float:
        """Read the die temperature.

        Returns:
            Temperature in degrees Celsius (uncalibrated)
        """
        self.device.write_byte(LSM303DRegister.TEMP_OUT_L)
        data = self.device.read(2)
        return to_signed16(data[0], data[1]) / 8.0

    def read_magnetometer(self) -> Vector3:
        """Read the magnetometer.

        With the +/-2 gauss scale set at init the raw codes are used as gauss
        directly.
        """
        raw = self.read_raw_vector(LSM303DRegister.OUT_X_L_M)
        self._magnetometer = Vector3(float(raw.x), float(raw.y), float(raw.z))
        return self._magnetometer

    def read_accelerometer(self) -> Vector3:
        """Read the accelerometer, scaled from the +/-2g range to g."""
        raw = self.read_raw_vector(LSM303DRegister.OUT_X_L_A)
        self._accelerometer = Vector3(
            raw.x * ACCEL_CONVERSION,
            raw.y * ACCEL_CONVERSION,
            raw.z * ACCEL_CONVERSION
        )
        return self._accelerometer

    def is_magnetometer_ready(self) -> bool:
        """True when the status register flags new magnetometer data."""
        self.device.write_byte(LSM303DRegister.STATUS_REG_M)
        status = self.device.read(1)[0]
        return (status & 0x03) > 0

    def update(self) -> None:
        """Read accelerometer then magnetometer and let the sensor settle."""
        self.read_accelerometer()
        self.read_magnetometer()

        time.sleep(self.settle_delay)

    # Headings

    def get_raw_heading(self) -> float:
        """Heading from the last magnetometer reading, without tilt correction.

        Does not read the sensor.

        Returns:
            Heading in degrees (0-360)
        """
        self._heading = raw_heading(self._magnetometer)
        self._heading_degrees = degrees(self._heading)
        return self._heading_degrees

    def get_tilt_compensated_heading(self) -> Optional[float]:
        """Update both sensors and compute the tilt-compensated heading.

        Returns:
            Heading in degrees (0-360), or None when the trigonometry has no
            solution for this sample.
        """
        self.update()

        try:
            tilt_comp = tilt_compensate(self._magnetometer, self._accelerometer)
            heading = tilt_heading(tilt_comp)
        except (ValueError, ArithmeticError) as e:
            logger.debug("Tilt compensation unavailable: %s", e)
            return None

        self._tilt_comp = tilt_comp
        self._tilt_heading = heading
        self._tilt_heading_degrees = degrees(heading)
        return self._tilt_heading_degrees

    def close(self) -> None:
        """Release the I2C device."""
        self.device.close()

    def __enter__(self) -> 'LSM303D':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def open_lsm303d(bus: int = I2C_BUS_1, address: int = LSM303D_ADDR) -> LSM303D:
    """Open the I2C device and start an LSM303D session on it."""
    return LSM303D(I2CDevice(bus, address))
