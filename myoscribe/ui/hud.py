"""
MyoScribe HUD.
Visualizes the Decoder: three orientation gauges, device flags and the word so far.
`ConsoleHUD` redraws one status line in place; `OverlayHUD` paints the same
information on an OpenCV canvas.
"""

import sys
from typing import Callable, Optional

import cv2
import numpy as np

from myoscribe.config import CONFIG
from myoscribe.core.types import AXES, HomePhase, OrientationSample

def _write_inline(text: str):
    sys.stdout.write(text)
    sys.stdout.flush()

class ConsoleHUD:
    def __init__(self, emit: Optional[Callable[[str], None]] = None, scale: Optional[int] = None):
        self.emit = emit or _write_inline
        self.scale = int(scale or CONFIG["SCALE"])

    def gauge(self, value: float) -> str:
        filled = int(np.clip(value, 0, self.scale))
        return '[' + '*' * filled + ' ' * (self.scale - filled) + ']'

    def status_line(self, session) -> str:
        sample = session.last_sample or OrientationSample(0.0, 0.0, 0.0)
        # Clear the current line
        line = '\r' + ''.join(self.gauge(sample.get(axis)) for axis in AXES)

        if session.on_arm:
            lock = "unlocked" if session.is_unlocked else "locked  "
            line += f"[{lock}][{session.arm.value}][{session.curr_pose.value:<14}]"
        else:
            # Placeholder while the band does not know which arm it is on
            line += '[' + ' ' * 8 + ']' + '[?]' + '[' + ' ' * 14 + ']'
        return line

    def render(self, pilot):
        self.emit(self.status_line(pilot.state))

class OverlayHUD:
    def __init__(self, width: int = 480, height: int = 200, scale: Optional[int] = None):
        self.width = width
        self.height = height
        self.scale = float(scale or CONFIG["SCALE"])

        # --- THEME COLORS (BGR) ---
        self.C_CYAN   = (255, 255, 0)    # Standard UI
        self.C_RED    = (0, 0, 255)      # Not calibrated
        self.C_ORANGE = (0, 165, 255)    # On an excursion
        self.C_GREEN  = (0, 255, 0)      # Home
        self.C_DARK   = (20, 20, 20)     # Backgrounds

    def _phase_color(self, phase: HomePhase):
        if phase is HomePhase.HOME:
            return self.C_GREEN
        if phase is HomePhase.AWAY:
            return self.C_ORANGE
        return self.C_RED

    def render(self, pilot) -> np.ndarray:
        frame = np.full((self.height, self.width, 3), self.C_DARK, dtype=np.uint8)
        session, decoder = pilot.state, pilot.decoder
        sample = session.last_sample or OrientationSample(0.0, 0.0, 0.0)
        color = self._phase_color(decoder.phase)

        # 1. GAUGES
        bar_x, bar_w, bar_h = 80, self.width - 100, 18
        for i, axis in enumerate(AXES):
            y = 20 + i * 35
            cv2.putText(frame, axis.value.upper(), (10, y + 14),
                        cv2.FONT_HERSHEY_PLAIN, 1.0, self.C_CYAN, 1)
            cv2.rectangle(frame, (bar_x, y), (bar_x + bar_w, y + bar_h), self.C_CYAN, 1)
            fill = int(bar_w * np.clip(sample.get(axis) / self.scale, 0.0, 1.0))
            cv2.rectangle(frame, (bar_x, y), (bar_x + fill, y + bar_h), color, -1)

            # Home marker
            if decoder.home is not None:
                hx = bar_x + int(bar_w * decoder.home.get(axis) / self.scale)
                cv2.line(frame, (hx, y - 3), (hx, y + bar_h + 3), self.C_RED, 2)

        # 2. STATUS
        cv2.putText(frame, f"SEQ: {decoder.sequence_key}", (10, 140),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_CYAN, 1)
        cv2.putText(frame, f"WORD: {decoder.word}", (10, 175),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, color, 2)
        return frame
