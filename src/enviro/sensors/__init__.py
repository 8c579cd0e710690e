"""
Sensor package initialization
Makes sensors available for import directly from the package
"""

from .ads1115 import ADS1115
from .bmp280 import BMP280
from .errors import DeviceNotFoundError, SensorError, TransportError
from .i2c import I2CDevice
from .lsm303d import LSM303D, open_lsm303d
from .tcs3472 import TCS3472

__all__ = ['ADS1115', 'BMP280', 'LSM303D', 'TCS3472', 'I2CDevice', 'open_lsm303d',
           'SensorError', 'TransportError', 'DeviceNotFoundError']
