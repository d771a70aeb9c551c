"""
Quaternion to discrete orientation conversion.

Each axis is mapped onto ``scale + 1`` integer levels (0..18 by default):

    roll  = floor((roll_rad  + pi)   / 2pi * scale)
    pitch = floor((pitch_rad + pi/2) / pi  * scale)
    yaw   = floor((yaw_rad   + pi)   / 2pi * scale)

An angle exactly at the upper bound lands on level ``scale`` itself. The
result is not clamped; the matching tolerance absorbs that extra level.
"""

import math
import logging
from typing import Sequence, Tuple

import numpy as np

from ..core.types import DiscreteOrientation

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 18


def quaternion_to_euler(w: float, x: float, y: float, z: float) -> Tuple[float, float, float]:
    """Convert a unit quaternion to (roll, pitch, yaw) in radians."""
    roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
    # Clamp against float overshoot at the gimbal poles
    sinp = max(-1.0, min(1.0, 2.0 * (w * y - z * x)))
    pitch = math.asin(sinp)
    yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
    return roll, pitch, yaw


def euler_to_quaternion(roll: float, pitch: float, yaw: float) -> Tuple[float, float, float, float]:
    """Inverse of quaternion_to_euler, returns (w, x, y, z)."""
    cr, sr = math.cos(roll / 2.0), math.sin(roll / 2.0)
    cp, sp = math.cos(pitch / 2.0), math.sin(pitch / 2.0)
    cy, sy = math.cos(yaw / 2.0), math.sin(yaw / 2.0)
    return (
        cr * cp * cy + sr * sp * sy,
        sr * cp * cy - cr * sp * sy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
    )


class OrientationQuantizer:
    """Maps orientations onto the discrete level band."""

    def __init__(self, config: dict = None):
        config = config or {}
        self._scale = int(config.get("scale", DEFAULT_SCALE))

    @property
    def scale(self) -> int:
        return self._scale

    def quantize_euler(self, roll: float, pitch: float, yaw: float) -> DiscreteOrientation:
        """Quantize angles in radians."""
        return DiscreteOrientation(
            roll=math.floor((roll + math.pi) / (2.0 * math.pi) * self._scale),
            pitch=math.floor((pitch + math.pi / 2.0) / math.pi * self._scale),
            yaw=math.floor((yaw + math.pi) / (2.0 * math.pi) * self._scale),
        )

    def quantize(self, quaternion: Sequence[float]) -> DiscreteOrientation:
        """Quantize a unit quaternion given as (w, x, y, z)."""
        w, x, y, z = quaternion
        return self.quantize_euler(*quaternion_to_euler(w, x, y, z))

    def quantize_batch(self, quaternions) -> np.ndarray:
        """Vectorised quantize over an (N, 4) array of (w, x, y, z) rows.

        Returns:
            (N, 3) int array of roll, pitch, yaw levels
        """
        q = np.asarray(quaternions, dtype=np.float64).reshape(-1, 4)
        w, x, y, z = q[:, 0], q[:, 1], q[:, 2], q[:, 3]

        roll = np.arctan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
        pitch = np.arcsin(np.clip(2.0 * (w * y - z * x), -1.0, 1.0))
        yaw = np.arctan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))

        levels = np.stack([
            np.floor((roll + np.pi) / (2.0 * np.pi) * self._scale),
            np.floor((pitch + np.pi / 2.0) / np.pi * self._scale),
            np.floor((yaw + np.pi) / (2.0 * np.pi) * self._scale),
        ], axis=1)
        return levels.astype(np.int64)

    def center_quaternion(self, sample: DiscreteOrientation) -> Tuple[float, float, float, float]:
        """Quaternion at the centre of the bucket described by ``sample``.

        Quantizing the result gives ``sample`` back. Only levels
        0..scale-1 have a bucket; the top level is reached solely at the
        exact upper bound.
        """
        for axis, level in zip(("roll", "pitch", "yaw"), sample.as_tuple()):
            if not 0 <= level < self._scale:
                raise ValueError(f"{axis} level {level} outside 0..{self._scale - 1}")

        roll = (sample.roll + 0.5) / self._scale * 2.0 * math.pi - math.pi
        pitch = (sample.pitch + 0.5) / self._scale * math.pi - math.pi / 2.0
        yaw = (sample.yaw + 0.5) / self._scale * 2.0 * math.pi - math.pi
        return euler_to_quaternion(roll, pitch, yaw)
