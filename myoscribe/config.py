"""
MyoScribe Configuration Management.
===================================

This module defines the tunable constants for the MyoScribe decoder.
The parameters are organized into the same "Layer Cake" model the runtime
follows: Signal -> Calibration -> Gestures -> Letters -> Actions.

! WARNING !
Changing `SCALE` changes the meaning of every threshold below it
(`HOME_EPSILON` is expressed in scale-units, not radians).
Changing `LETTER_ENTRIES` changes the alphabet operators have memorised.
"""

from pathlib import Path
import os

# --- SYSTEM PATHS ---
FILE_PATH = Path(__file__).resolve()
PROJECT_ROOT = FILE_PATH.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

PATHS = {
    "SESSIONS_DIR": DATA_DIR / "sessions",
    "SCRIPTS_DIR": PROJECT_ROOT / "scripts",
}

# --- LETTER DEFINITIONS (CRITICAL) ---
# Literal alphabet, in the order it was first written down.
# Two keys appear twice with different letters. The duplicates are kept here
# on purpose so the table cannot be built until each one is resolved through
# LETTER_RESOLUTIONS below.
LETTER_ENTRIES = [
    ("",              " "),
    ("pitchyawpitch", "a"),
    ("rollpitch",     "b"),
    ("roll",          "c"),
    ("rollpitch",     "d"),   # Duplicate of "b"
    ("rollpitchyaw",  "e"),
    ("pitchpitchyaw", "f"),
    ("rollpitchyaw",  "g"),   # Duplicate of "e"
    ("pitchroll",     "h"),
    ("yawpitchyaw",   "i"),
    ("yawpitchroll",  "j"),
    ("pitchyawyaw",   "k"),
]

# Last-write-wins mapping of the first armband build. Use this to replay
# sessions recorded against that build letter-for-letter.
REFERENCE_RESOLUTIONS = {
    "rollpitch": "d",
    "rollpitchyaw": "g",
}

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: INPUT SIGNAL (The Normalizer)
    # =========================================================
    "SCALE": 18,                    # Angles are mapped onto [0, SCALE]
    "POLL_HZ": 20,                  # Event slices drained per second
    "REQUIRE_ARM_SYNC": True,       # Ignore poses/gestures until the band knows its arm

    # =========================================================
    # LAYER 2: CALIBRATION (The Home Reference)
    # =========================================================
    "HOME_EPSILON": 0.7,            # Max per-axis deviation still counted as "home"
    "CIRCULAR_AXES": ("yaw",),      # Axes measured with wrap-around distance
    "CALIBRATION_COOLDOWN": 2.0,    # Seconds to re-settle after a letter is decoded

    # =========================================================
    # LAYER 3: GESTURE TOKENS (The Accumulator)
    # =========================================================
    "TOKEN_COOLDOWN": 2.0,          # Seconds to re-settle after a home-reached decision

    # =========================================================
    # LAYER 4: LETTERS (The Lookup Table)
    # =========================================================
    "FALLBACK_LETTER": " ",         # Letter for unknown gesture sequences
    "LETTER_RESOLUTIONS": {         # Explicit choice for every duplicated key
        "rollpitch": "b",
        "rollpitchyaw": "e",
    },

    # =========================================================
    # LAYER 5: POSES & ACTIONS
    # =========================================================
    "CALIBRATION_POSE": "fist",     # Sets home and flushes the sequence into a letter
    "DISPATCH_POSES": {             # Pose label -> action kind
        "fingersSpread": "grid",
        "waveOut": "message",
    },
    "DISPATCH_SCRIPTS": {           # Action kind -> script run with the word as argument
        "grid": "testgrid.py",
        "message": "testtwil.py",
    },

    # =========================================================
    # SYNTHETIC SESSIONS (tools/synth_session.py)
    # =========================================================
    "SYNTH_RATE_HZ": 50,            # Orientation samples per second
    "SYNTH_EXCURSION": 4.0,         # Scale-units travelled per gesture
    "SYNTH_RAMP_FRAMES": 6,         # Frames to reach the excursion peak
    "SYNTH_HOLD_FRAMES": 4,         # Frames held at the peak
    "SYNTH_SETTLE": 2.2,            # Seconds spent at home after each decision

    "LOG_LEVEL": "INFO",
}

def init_environment():
    """
    Creates necessary directories safely at runtime.
    """
    os.makedirs(PATHS["SESSIONS_DIR"], exist_ok=True)
