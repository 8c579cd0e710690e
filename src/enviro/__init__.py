"""
Enviro Sensor System Package
A Python package for polling the sensors of an environmental add-on board
(LSM303D, BMP280, TCS3472x, ADS1115) over I2C.
"""

__version__ = '0.1.0'
__description__ = 'Enviro board sensor aggregator with LSM303D tilt-compensated compass'
