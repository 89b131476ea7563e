"""
MyoScribe State Management.
Session state for the armband, and the single state struct owned by the decoder.
"""
from typing import Optional

from myoscribe.core.accumulator import DominantAxisAccumulator
from myoscribe.core.calibration import CalibrationTracker
from myoscribe.core.letters import GestureSequenceBuffer
from myoscribe.core.types import Arm, HomePhase, OrientationSample, Pose

class SessionState:
    def __init__(self):
        # --- POSE HISTORY ---
        self.prev_pose = Pose.REST
        self.curr_pose = Pose.REST

        # --- DEVICE FLAGS ---
        self.on_arm = False
        self.arm = Arm.UNKNOWN
        self.is_unlocked = False

        # --- LAST ORIENTATION (always kept, for the HUD) ---
        self.last_sample: Optional[OrientationSample] = None

    def update_pose(self, pose: Pose):
        """Updates history with strictly typed Enums."""
        self.prev_pose = self.curr_pose
        self.curr_pose = pose

    def reset(self):
        self.prev_pose = Pose.REST
        self.curr_pose = Pose.REST
        self.on_arm = False
        self.arm = Arm.UNKNOWN
        self.is_unlocked = False
        self.last_sample = None

class DecoderState:
    """
    Everything one decoder mutates for one armband session.
    Only GestureDecoder writes to it.
    """
    def __init__(self, tracker: Optional[CalibrationTracker] = None):
        self.tracker = tracker or CalibrationTracker()
        self.accumulator = DominantAxisAccumulator()
        self.sequence = GestureSequenceBuffer()
        self.phase = HomePhase.UNSET
        self.cooldown_until = 0.0
        self.word = ""

    def reset(self):
        self.tracker.reset()
        self.accumulator.reset()
        self.sequence.clear()
        self.phase = HomePhase.UNSET
        self.cooldown_until = 0.0
        self.word = ""
