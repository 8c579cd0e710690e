"""Register maps and fixed chip constants for the Enviro board sensors."""
from enum import IntEnum

# Bus and addresses as wired on the board
I2C_BUS_1 = 1
LSM303D_ADDR = 0x1D
BMP280_ADDR = 0x77
TCS3472_ADDR = 0x29
ADS1115_ADDR = 0x49

# LSM303D
LSM303D_WHO_AM_I_VALUE = 0x49
LSM303D_AUTO_INCREMENT = 0x80
LSM303D_ACCEL_FULL_SCALE = 2.0  # g
LSM303D_SETTLE_DELAY = 0.3      # seconds


class LSM303DRegister(IntEnum):
    TEMP_OUT_L = 0x05
    TEMP_OUT_H = 0x06
    STATUS_REG_M = 0x07
    OUT_X_L_M = 0x08
    OUT_X_H_M = 0x09
    OUT_Y_L_M = 0x0A
    OUT_Y_H_M = 0x0B
    OUT_Z_L_M = 0x0C
    OUT_Z_H_M = 0x0D
    WHO_AM_I = 0x0F
    CTRL_REG1 = 0x20
    CTRL_REG2 = 0x21
    CTRL_REG3 = 0x22
    CTRL_REG4 = 0x23
    CTRL_REG5 = 0x24
    CTRL_REG6 = 0x25
    CTRL_REG7 = 0x26
    STATUS_REG_A = 0x27
    OUT_X_L_A = 0x28
    OUT_X_H_A = 0x29
    OUT_Y_L_A = 0x2A
    OUT_Y_H_A = 0x2B
    OUT_Z_L_A = 0x2C
    OUT_Z_H_A = 0x2D


class LSM303DMagScale(IntEnum):
    """CTRL_REG6 magnetometer full-scale settings."""
    GAUSS_2 = 0x00
    GAUSS_4 = 0x20
    GAUSS_8 = 0x40
    GAUSS_12 = 0x60


# (register, value) pairs written in order at power-up
LSM303D_INIT_SEQUENCE = (
    (LSM303DRegister.CTRL_REG1, 0x57),                  # ODR=50Hz, all accel axes on
    (LSM303DRegister.CTRL_REG2, (3 << 6) | (0 << 3)),   # accel full scale +/-2g
    (LSM303DRegister.CTRL_REG3, 0x00),                  # no interrupt
    (LSM303DRegister.CTRL_REG4, 0x00),                  # no interrupt
    (LSM303DRegister.CTRL_REG5, 0x80 | (4 << 2)),       # temp sensor on, mag 50Hz
    (LSM303DRegister.CTRL_REG6, LSM303DMagScale.GAUSS_2),
    (LSM303DRegister.CTRL_REG7, 0x00),                  # continuous conversion
)

# BMP280
BMP280_CHIP_ID_VALUE = 0x58
BMP280_RESET_VALUE = 0xB6


class BMP280Register(IntEnum):
    CALIB_START = 0x88
    CHIP_ID = 0xD0
    RESET = 0xE0
    STATUS = 0xF3
    CTRL_MEAS = 0xF4
    CONFIG = 0xF5
    PRESS_MSB = 0xF7
    TEMP_MSB = 0xFA


class BMP280Sampling(IntEnum):
    SKIPPED = 0
    ULTRA_LOW_POWER = 1       # x1
    LOW_POWER = 2             # x2
    STANDARD = 3              # x4
    HIGH_RESOLUTION = 4       # x8
    ULTRA_HIGH_RESOLUTION = 5  # x16


BMP280_MODE_NORMAL = 0x03
BMP280_CALIB_LENGTH = 24

# TCS3472x
TCS3472_COMMAND_BIT = 0x80
TCS3472_AUTO_INCREMENT = 0x20
TCS3472_IDS = (0x44, 0x4D)
TCS3472_ENABLE_PON = 0x01
TCS3472_ENABLE_AEN = 0x02
TCS3472_STATUS_AVALID = 0x01


class TCS3472Register(IntEnum):
    ENABLE = 0x00
    ATIME = 0x01
    CONTROL = 0x0F
    ID = 0x12
    STATUS = 0x13
    CDATAL = 0x14


class TCS3472Gain(IntEnum):
    X1 = 0x00
    X4 = 0x01
    X16 = 0x02
    X60 = 0x03


# ADS1115
ADS1115_CONFIG_OS = 0x8000
ADS1115_CONFIG_MODE_SINGLE = 0x0100
ADS1115_CONFIG_COMP_DISABLE = 0x0003


class ADS1115Register(IntEnum):
    CONVERSION = 0x00
    CONFIG = 0x01


class InputMultiplexer(IntEnum):
    AIN0_AIN1 = 0
    AIN0_AIN3 = 1
    AIN1_AIN3 = 2
    AIN2_AIN3 = 3
    AIN0 = 4
    AIN1 = 5
    AIN2 = 6
    AIN3 = 7


class MeasuringRange(IntEnum):
    """PGA settings, named by full scale in millivolts."""
    FS6144 = 0
    FS4096 = 1
    FS2048 = 2
    FS1024 = 3
    FS0512 = 4
    FS0256 = 5


ADS1115_FULL_SCALE = {
    MeasuringRange.FS6144: 6.144,
    MeasuringRange.FS4096: 4.096,
    MeasuringRange.FS2048: 2.048,
    MeasuringRange.FS1024: 1.024,
    MeasuringRange.FS0512: 0.512,
    MeasuringRange.FS0256: 0.256,
}


class DataRate(IntEnum):
    SPS8 = 0
    SPS16 = 1
    SPS32 = 2
    SPS64 = 3
    SPS128 = 4
    SPS250 = 5
    SPS475 = 6
    SPS860 = 7


ADS1115_SAMPLES_PER_SECOND = {
    DataRate.SPS8: 8,
    DataRate.SPS16: 16,
    DataRate.SPS32: 32,
    DataRate.SPS64: 64,
    DataRate.SPS128: 128,
    DataRate.SPS250: 250,
    DataRate.SPS475: 475,
    DataRate.SPS860: 860,
}

# Status LED
LED_PIN = 4
