import argparse
import logging
import signal
import sys
import time
from contextlib import ExitStack
from datetime import datetime
from typing import Dict, List, Optional

from .config import LoopConfig, SensorConfig
from .indicators.led import StatusLed
from .sensors.ads1115 import ADS1115
from .sensors.bmp280 import BMP280
from .sensors.constants import DataRate, InputMultiplexer
from .sensors.i2c import I2CDevice
from .sensors.lsm303d import LSM303D
from .sensors.tcs3472 import TCS3472

logger = logging.getLogger(__name__)

# Global flag for program control
running = True

ADC_CHANNELS = (InputMultiplexer.AIN0, InputMultiplexer.AIN1,
                InputMultiplexer.AIN2, InputMultiplexer.AIN3)


def signal_handler(signum, frame):
    """Handle Ctrl+C and other signals"""
    global running
    running = False


def initialize_sensors(config: SensorConfig, stack: ExitStack):
    """Initialize all sensors and return their instances.

    Each sensor is registered with the stack so it is closed on exit.
    """
    bmp280 = stack.enter_context(BMP280(I2CDevice(config.bus, config.bmp280_address)))
    tcs3472 = stack.enter_context(TCS3472(I2CDevice(config.bus, config.tcs3472_address)))
    ads1115 = stack.enter_context(
        ADS1115(I2CDevice(config.bus, config.ads1115_address), data_rate=DataRate.SPS128))
    lsm303d = stack.enter_context(LSM303D(I2CDevice(config.bus, config.lsm303d_address)))
    logger.info("All sensors initialized")
    return bmp280, tcs3472, ads1115, lsm303d


def read_sensors(bmp280: BMP280, tcs3472: TCS3472, ads1115: ADS1115, lsm303d: LSM303D) -> Dict:
    """Read data from all sensors and return it."""
    bmp = bmp280.read()
    color = tcs3472.get_color()
    voltages = [ads1115.read_voltage(mux) for mux in ADC_CHANNELS]

    tilt_heading = lsm303d.get_tilt_compensated_heading()

    return {
        'timestamp': datetime.now(),
        'temperature': bmp.temperature,
        'pressure': bmp.pressure,
        'color': color,
        'voltages': voltages,
        'lsm303d_temperature': lsm303d.read_temperature(),
        'accelerometer': lsm303d.accelerometer,
        'magnetometer': lsm303d.magnetometer,
        'heading': lsm303d.get_raw_heading(),
        'tilt_heading': tilt_heading,
    }


def format_report(readings: Dict) -> List[str]:
    """Render one polling cycle as console lines."""
    color = readings['color']
    accel = readings['accelerometer']
    mag = readings['magnetometer']
    tilt = readings['tilt_heading']
    tilt_text = 'n/a' if tilt is None else f'{tilt:.1f}°'

    lines = [
        f"Timestamp: {readings['timestamp']:%H:%M:%S}",
        "",
        "BMP280 Sensor Readings:",
        f"    Temperature: {readings['temperature']:.2f}°C",
        f"    Pressure: {readings['pressure']:.2f} hPa",
        "",
        "TCS34725 Sensor Readings:",
        f"    R: {color.r:02X}, G: {color.g:02X}, B: {color.b:02X}",
        f"    Brightness: {color.brightness:.2f}%",
        "",
        "ADS1115 Readings:",
    ]
    lines += [f"    Channel #{i}: {volts:.3f}V" for i, volts in enumerate(readings['voltages'])]
    lines += [
        "",
        "LSM303D Sensor Readings:",
        f"    Temperature: {readings['lsm303d_temperature']:.1f}°C",
        f"    Accel: X:{accel.x:.2f} Y:{accel.y:.2f} Z:{accel.z:.2f} g",
        f"    Mag:   X:{mag.x:.0f} Y:{mag.y:.0f} Z:{mag.z:.0f} gauss",
        f"    Heading: {readings['heading']:.1f}°",
        f"    Tilt heading: {tilt_text}",
        "",
    ]
    return lines


def display_data(readings: Dict) -> None:
    """Display sensor data."""
    for line in format_report(readings):
        print(line)


def poll_once(sensors, led: Optional[StatusLed] = None) -> bool:
    """Run one read/display cycle.

    Returns:
        True if every sensor was read
    """
    if led:
        led.toggle()
    try:
        display_data(read_sensors(*sensors))
        return True
    except Exception as e:
        logger.debug("Polling cycle failed", exc_info=True)
        print(f"Error reading sensors: {e}")
        if led:
            led.off()
        return False


def wait(seconds: float) -> None:
    """Sleep, returning early once a signal has cleared the running flag."""
    deadline = time.monotonic() + seconds
    while running and time.monotonic() < deadline:
        time.sleep(min(0.1, max(0.0, deadline - time.monotonic())))


def run(sensor_config: SensorConfig, loop_config: LoopConfig, cycles: Optional[int] = None) -> int:
    """Initialize the board and poll until stopped.

    Args:
        sensor_config: Bus and addresses
        loop_config: Loop timing and LED
        cycles: Stop after this many cycles, run until signalled when None

    Returns:
        Process exit status
    """
    with ExitStack() as stack:
        try:
            led = None
            if loop_config.use_led:
                led = stack.enter_context(StatusLed(loop_config.led_pin))
            sensors = initialize_sensors(sensor_config, stack)
        except Exception as e:
            print(f"Failed to initialize sensors: {e}")
            return 1

        time.sleep(loop_config.startup_delay)
        print("Sensors initialized. Press Ctrl+C to exit")

        count = 0
        while running and (cycles is None or count < cycles):
            poll_once(sensors, led)
            count += 1
            if cycles is None or count < cycles:
                wait(loop_config.interval)

    print("\nProgram terminated")
    return 0


def parse_args(argv=None):
    default_sensors = SensorConfig()
    default_loop = LoopConfig()

    parser = argparse.ArgumentParser(description='Enviro board sensor poller')
    parser.add_argument('--bus', type=int, default=default_sensors.bus,
                        help=f'I2C bus number (default: {default_sensors.bus})')
    parser.add_argument('--interval', type=float, default=default_loop.interval,
                        help=f'Seconds between readings (default: {default_loop.interval})')
    parser.add_argument('--led-pin', type=int, default=default_loop.led_pin,
                        help=f'BCM pin of the status LED (default: {default_loop.led_pin})')
    parser.add_argument('--no-led', action='store_true',
                        help='Do not drive the status LED')
    parser.add_argument('--cycles', type=int, default=None,
                        help='Stop after this many readings')
    parser.add_argument('--log-level', default=default_loop.log_level,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help=f'Logging level (default: {default_loop.log_level})')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    # Set up signal handler
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    sensor_config = SensorConfig(bus=args.bus)
    loop_config = LoopConfig(interval=args.interval, led_pin=args.led_pin,
                             use_led=not args.no_led, log_level=args.log_level)
    return run(sensor_config, loop_config, cycles=args.cycles)


if __name__ == "__main__":
    sys.exit(main())
