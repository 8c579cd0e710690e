"""Compass heading and tilt compensation for accelerometer/magnetometer pairs."""
import numpy as np
from math import asin, atan2, cos, pi, sin
from typing import Tuple

from ..models import Vector3

TWO_PI = 2 * pi


def normalize_heading(heading: float) -> float:
    """Fold a heading in radians into [0, 2pi).

    One conditional add and one conditional subtract, so only inputs within
    one turn of the range are handled. atan2 output always is.
    """
    if heading < 0:
        heading += TWO_PI
    if heading >= TWO_PI:
        heading -= TWO_PI
    return heading


def truncate_accelerometer(accel: Vector3) -> Vector3:
    """Clamp every axis to [-1, 1] g keeping its sign."""
    return Vector3.from_array(np.clip(accel.as_array(), -1.0, 1.0))


def pitch_and_roll(accel: Vector3) -> Tuple[float, float]:
    """Pitch and roll in radians from a gravity vector already within [-1, 1].

    Roll is 0 when |cos(pitch)| < |y|, where y / cos(pitch) would leave the
    domain of asin.
    """
    pitch = asin(-accel.x)
    cos_pitch = cos(pitch)
    if abs(cos_pitch) >= abs(accel.y):
        roll = asin(accel.y / cos_pitch)
    else:
        roll = 0.0
    return pitch, roll


def tilt_rotation_matrix(pitch: float, roll: float) -> np.ndarray:
    """Rotation taking body-frame magnetometer readings to the horizontal plane."""
    cos_p, sin_p = cos(pitch), sin(pitch)
    cos_r, sin_r = cos(roll), sin(roll)

    return np.array([
        [cos_p, 0.0, sin_p],
        [sin_r * sin_p, cos_r, -sin_r * cos_p],
        [cos_r * sin_p, sin_r, cos_r * cos_p]
    ])


def tilt_compensate(mag: Vector3, accel: Vector3) -> Vector3:
    """Tilt-compensated magnetometer vector.

    Args:
        mag: Magnetometer reading (gauss)
        accel: Accelerometer reading (g), clamped to [-1, 1] here

    Raises:
        ValueError: on a math domain error
        ArithmeticError: e.g. division by a zero cos(pitch)
    """
    pitch, roll = pitch_and_roll(truncate_accelerometer(accel))
    return Vector3.from_array(tilt_rotation_matrix(pitch, roll) @ mag.as_array())


def raw_heading(mag: Vector3) -> float:
    """Heading in radians from the magnetometer alone.

    Note the argument order atan2(x, y). atan2(0, 0) is 0.0, so a zero
    vector reads as north.
    """
    return normalize_heading(atan2(mag.x, mag.y))


def tilt_heading(tilt_compensated: Vector3) -> float:
    """Heading in radians from a tilt-compensated magnetometer vector."""
    return normalize_heading(atan2(tilt_compensated.y, tilt_compensated.x))
