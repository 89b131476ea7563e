"""
MyoScribe Types.
Central definition of Data Contracts to prevent circular imports.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import re

import numpy as np

# --- ORIENTATION TYPES ---
class Axis(Enum):
    ROLL = "roll"
    PITCH = "pitch"
    YAW = "yaw"

# Fixed axis order used by every vector in the decoder
AXES = (Axis.ROLL, Axis.PITCH, Axis.YAW)

@dataclass(frozen=True)
class Quaternion:
    w: float
    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(1.0, 0.0, 0.0, 0.0)

@dataclass(frozen=True)
class OrientationSample:
    """Roll/pitch/yaw on the [0, SCALE] display scale."""
    roll: float
    pitch: float
    yaw: float

    def as_array(self) -> np.ndarray:
        return np.array([self.roll, self.pitch, self.yaw], dtype=float)

    def get(self, axis: Axis) -> float:
        return getattr(self, axis.value)

class HomePhase(Enum):
    UNSET = auto()  # No calibration yet
    HOME = auto()   # Within epsilon of the home reference
    AWAY = auto()   # On an excursion

# --- DEVICE TYPES ---
class Pose(Enum):
    REST = "rest"
    FIST = "fist"
    WAVE_IN = "waveIn"
    WAVE_OUT = "waveOut"
    FINGERS_SPREAD = "fingersSpread"
    DOUBLE_TAP = "doubleTap"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, raw_label: str) -> "Pose":
        if not raw_label or not isinstance(raw_label, str):
            return cls.UNKNOWN
        clean = re.sub(r'^pose[._:]', '', raw_label.strip(), flags=re.IGNORECASE)
        for member in cls:
            if member.value.lower() == clean.lower():
                return member
        return cls.UNKNOWN

class Arm(Enum):
    LEFT = "L"
    RIGHT = "R"
    UNKNOWN = "?"

    @classmethod
    def from_label(cls, raw_label: str) -> "Arm":
        if not raw_label or not isinstance(raw_label, str):
            return cls.UNKNOWN
        head = raw_label.strip()[:1].upper()
        for member in cls:
            if member.value == head:
                return member
        return cls.UNKNOWN

class ActionKind(Enum):
    GRID = "grid"
    MESSAGE = "message"

# --- EVENT TYPES ---
@dataclass(frozen=True)
class DeviceEvent:
    timestamp: float

@dataclass(frozen=True)
class OrientationUpdate(DeviceEvent):
    quaternion: Quaternion

@dataclass(frozen=True)
class PoseChange(DeviceEvent):
    pose: Pose

@dataclass(frozen=True)
class ArmSync(DeviceEvent):
    arm: Arm = Arm.UNKNOWN

@dataclass(frozen=True)
class ArmUnsync(DeviceEvent):
    pass

@dataclass(frozen=True)
class Unlocked(DeviceEvent):
    pass

@dataclass(frozen=True)
class Locked(DeviceEvent):
    pass

@dataclass(frozen=True)
class Unpaired(DeviceEvent):
    pass

# --- DECODER OUTPUT ---
@dataclass(frozen=True)
class LetterDecoded:
    key: str
    letter: str
    word: str
    known: bool

    @property
    def is_fallback(self) -> bool:
        return not self.known
