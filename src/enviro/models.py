"""Reading types returned by the sensor drivers."""
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class Vector3(NamedTuple):
    """Three-axis sample (x, y, z)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, values) -> 'Vector3':
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)


@dataclass(frozen=True)
class BMP280Reading:
    """Compensated BMP280 sample."""
    temperature: float  # degrees Celsius
    pressure: float     # hPa


@dataclass(frozen=True)
class Color:
    """TCS3472x color, RGB scaled to 0-255 plus the raw clear channel."""
    r: int
    g: int
    b: int
    clear: int = 0

    @property
    def brightness(self) -> float:
        """HSL lightness as a percentage."""
        return (max(self.r, self.g, self.b) + min(self.r, self.g, self.b)) / 2 / 255 * 100
