"""
MyoScribe Dominant-Axis Accumulator.
Remembers the largest deviation seen on each axis since the last decision.
"""
from typing import Dict, Optional

import numpy as np

from myoscribe.core.types import AXES, Axis

class DominantAxisAccumulator:
    def __init__(self):
        self.max_dev = np.zeros(len(AXES))

    def update(self, deviation: np.ndarray):
        np.maximum(self.max_dev, deviation, out=self.max_dev)

    def dominant_axis(self) -> Optional[Axis]:
        """
        The axis whose maximum is strictly greater than both others.
        Any tie for the top spot (all-zero included) means no winner.
        """
        best = int(np.argmax(self.max_dev))
        others = np.delete(self.max_dev, best)
        if np.all(self.max_dev[best] > others):
            return AXES[best]
        return None

    def reset(self):
        self.max_dev[:] = 0.0

    @property
    def maxima(self) -> Dict[Axis, float]:
        return {axis: float(v) for axis, v in zip(AXES, self.max_dev)}
