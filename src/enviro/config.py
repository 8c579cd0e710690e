"""Configuration dataclasses for the Enviro sensor poller."""
from dataclasses import dataclass

from .sensors.constants import (ADS1115_ADDR, BMP280_ADDR, I2C_BUS_1, LED_PIN,
                                LSM303D_ADDR, TCS3472_ADDR)


@dataclass
class SensorConfig:
    bus: int = I2C_BUS_1
    lsm303d_address: int = LSM303D_ADDR
    bmp280_address: int = BMP280_ADDR
    tcs3472_address: int = TCS3472_ADDR
    ads1115_address: int = ADS1115_ADDR


@dataclass
class LoopConfig:
    interval: float = 10.0     # seconds between reports
    startup_delay: float = 0.1  # initial measurement delay
    led_pin: int = LED_PIN
    use_led: bool = True
    log_level: str = 'WARNING'
