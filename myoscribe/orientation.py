"""
MyoScribe Orientation Utilities.
================================

Handles the conversion of raw armband orientation into display units.
Raw quaternions are awkward for gesture logic because:
1. They have four coupled components instead of one number per axis.
2. Angles come out in radians with different ranges per axis.

This module turns a unit quaternion into roll/pitch/yaw on one bounded scale,
[0, SCALE], where SCALE / 2 is "level".
"""

import math
from typing import Optional, Tuple

import numpy as np

from myoscribe.config import CONFIG
from myoscribe.core.types import OrientationSample, Quaternion

def quaternion_to_euler(q: Quaternion) -> Tuple[float, float, float]:
    """
    Standard ZYX conversion. Returns (roll, pitch, yaw) in radians.
    Roll and yaw lie in [-pi, pi], pitch in [-pi/2, pi/2].
    """
    w, x, y, z = q.w, q.x, q.y, q.z
    roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
    # Clamp guards float overshoot only; non-unit input is the caller's problem.
    pitch = math.asin(float(np.clip(2.0 * (w * y - z * x), -1.0, 1.0)))
    yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
    return roll, pitch, yaw

def normalize(q: Quaternion, scale: Optional[float] = None) -> OrientationSample:
    """
    Maps a unit quaternion onto the [0, scale] display scale.
    The identity quaternion lands at mid-scale on all three axes.
    """
    scale = scale or CONFIG["SCALE"]
    roll, pitch, yaw = quaternion_to_euler(q)
    return OrientationSample(
        roll=(roll + math.pi) / (2 * math.pi) * scale,
        pitch=(pitch + math.pi / 2) / math.pi * scale,
        yaw=(yaw + math.pi) / (2 * math.pi) * scale,
    )

def scaled_to_quaternion(roll_w: float, pitch_w: float, yaw_w: float,
                         scale: Optional[float] = None) -> Quaternion:
    """
    Inverse of `normalize`: builds the unit quaternion for scale readings.
    Used to synthesize sessions; pitch_w must stay strictly inside (0, scale).
    """
    scale = scale or CONFIG["SCALE"]
    roll = roll_w / scale * 2 * math.pi - math.pi
    pitch = pitch_w / scale * math.pi - math.pi / 2
    yaw = yaw_w / scale * 2 * math.pi - math.pi

    cr, sr = math.cos(roll / 2), math.sin(roll / 2)
    cp, sp = math.cos(pitch / 2), math.sin(pitch / 2)
    cy, sy = math.cos(yaw / 2), math.sin(yaw / 2)

    q = np.array([
        cr * cp * cy + sr * sp * sy,
        sr * cp * cy - cr * sp * sy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
    ])
    q /= np.linalg.norm(q)
    return Quaternion(*q.tolist())
