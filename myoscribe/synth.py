"""
MyoScribe Session Synthesizer.
Generates the event stream an operator would produce while spelling a word.

For each letter the alphabet is read backwards (letter -> gesture sequence), and
each token becomes one excursion along its axis followed by a return home.
A calibration pose closes every letter. The very first calibration pose decodes
an empty sequence, so the decoded word always starts with the fallback letter.
"""
import re
from typing import List, Optional, Sequence

import numpy as np

from myoscribe.config import CONFIG
from myoscribe.core.letters import LetterTable
from myoscribe.core.types import (
    AXES, Arm, ArmSync, Axis, DeviceEvent, OrientationUpdate, Pose, PoseChange, Unlocked,
)
from myoscribe.orientation import scaled_to_quaternion

AXIS_PATTERN = re.compile("|".join(a.value for a in AXES))

def split_key(key: str) -> List[Axis]:
    """'rollpitch' -> [ROLL, PITCH]."""
    tokens = AXIS_PATTERN.findall(key)
    if "".join(tokens) != key:
        raise ValueError(f"Not a gesture sequence: {key!r}")
    return [Axis(t) for t in tokens]

class SessionSynthesizer:
    def __init__(self, table: LetterTable, config: Optional[dict] = None,
                 home: Sequence[float] = None):
        self.table = table
        self.config = config or CONFIG
        scale = self.config["SCALE"]
        self.home = np.array(home if home is not None else [scale / 2.0] * 3, dtype=float)
        self.dt = 1.0 / self.config["SYNTH_RATE_HZ"]
        self.t = 0.0
        self.events: List[DeviceEvent] = []

    # --- PRIMITIVES ---
    def _sample(self, values: np.ndarray):
        q = scaled_to_quaternion(*values.tolist(), scale=self.config["SCALE"])
        self.events.append(OrientationUpdate(self.t, q))
        self.t += self.dt

    def _pose(self, pose: Pose):
        self.events.append(PoseChange(self.t, pose))
        self.t += self.dt

    def settle(self, seconds: float):
        for _ in range(max(1, int(round(seconds / self.dt)))):
            self._sample(self.home)

    def excursion(self, axis: Axis):
        idx = AXES.index(axis)
        ramp = self.config["SYNTH_RAMP_FRAMES"]
        peak = self.config["SYNTH_EXCURSION"]
        profile = (list(range(1, ramp + 1))
                   + [ramp] * self.config["SYNTH_HOLD_FRAMES"]
                   + list(range(ramp - 1, -1, -1)))
        for step in profile:
            values = self.home.copy()
            values[idx] += peak * step / ramp
            self._sample(values)

    def calibrate(self):
        self._pose(Pose.from_label(self.config["CALIBRATION_POSE"]))
        self._pose(Pose.REST)
        self.settle(self.config["SYNTH_SETTLE"])

    # --- SCRIPT ---
    def spell(self, word: str, dispatch: Optional[Pose] = None) -> List[DeviceEvent]:
        keys = []
        for letter in word:
            key = self.table.key_for(letter)
            if key is None:
                raise ValueError(f"No gesture sequence spells {letter!r}")
            keys.append(key)

        self.events.append(ArmSync(self.t, Arm.RIGHT))
        self.events.append(Unlocked(self.t))
        self.settle(0.5)
        self.calibrate()

        for key in keys:
            for axis in split_key(key):
                self.excursion(axis)
                self.settle(self.config["SYNTH_SETTLE"])
            self.calibrate()

        if dispatch is not None:
            self._pose(dispatch)
            self._pose(Pose.REST)
        return self.events

def synthesize_word(word: str, table: LetterTable, config: Optional[dict] = None,
                    dispatch: Optional[Pose] = None) -> List[DeviceEvent]:
    return SessionSynthesizer(table, config).spell(word, dispatch=dispatch)
