"""
MyoScribe Calibration Tracker (The Anchor).
Holds the "home" orientation and measures how far a sample strays from it.
"""
from typing import Iterable, Optional

import numpy as np

from myoscribe.config import CONFIG
from myoscribe.core.types import AXES, Axis, OrientationSample

def circular_distance(a, b, period: float):
    """
    Shortest distance between two readings on a scale that wraps at `period`.
    A yaw of 0.2 and a yaw of 17.9 are 0.3 apart on an 18-unit scale, not 17.7.
    """
    d = np.abs(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)) % period
    return np.minimum(d, period - d)

class CalibrationTracker:
    def __init__(self, scale: Optional[float] = None, circular_axes: Optional[Iterable[str]] = None):
        self.scale = float(scale or CONFIG["SCALE"])
        circular = circular_axes if circular_axes is not None else CONFIG["CIRCULAR_AXES"]
        names = {Axis(a) if not isinstance(a, Axis) else a for a in circular}
        self._circular_mask = np.array([axis in names for axis in AXES])
        self.home: Optional[OrientationSample] = None

    @property
    def is_set(self) -> bool:
        return self.home is not None

    def calibrate(self, sample: OrientationSample):
        self.home = sample

    def reset(self):
        self.home = None

    def deviation(self, sample: OrientationSample) -> np.ndarray:
        """
        Per-axis absolute deviation from home, in AXES order.
        Circular axes use wrap-around distance. Caller guarantees home is set.
        """
        cur = sample.as_array()
        ref = self.home.as_array()
        dev = np.abs(cur - ref)
        if self._circular_mask.any():
            wrapped = circular_distance(cur, ref, self.scale)
            dev = np.where(self._circular_mask, wrapped, dev)
        return dev

    def is_home(self, sample: OrientationSample, epsilon: Optional[float] = None) -> bool:
        """True iff every axis is within `epsilon` (inclusive) of home."""
        if epsilon is None:
            epsilon = CONFIG["HOME_EPSILON"]
        return bool(np.all(self.deviation(sample) <= epsilon))
