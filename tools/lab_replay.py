"""
MyoScribe Replay Lab.

Replays a recorded session through a fresh decoder and plots the normalized
roll/pitch/yaw traces, the home reference, and every token and letter decision.
Useful for tuning HOME_EPSILON and the cooldowns against real recordings.

Usage:
    python tools/lab_replay.py data/sessions/hi.csv
"""

import sys
import os

import matplotlib.pyplot as plt
import numpy as np

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from myoscribe.config import CONFIG
from myoscribe.control.action_dispatcher import MockDispatcher
from myoscribe.control.controller import MyoController
from myoscribe.core.types import AXES, OrientationUpdate, PoseChange
from myoscribe.gesture_engine import GestureDecoder
from myoscribe.hub import load_session_csv

def run_lab(path):
    print("🔬 REPLAY LAB")
    print(f"   -> Session: {path}")

    pilot = MyoController(decoder=GestureDecoder(emit=lambda text: None),
                          dispatcher=MockDispatcher())

    times, traces, homes = [], [], []
    token_marks, letter_marks = [], []

    for event in load_session_csv(path):
        before = len(pilot.decoder.sequence_key), pilot.decoder.word
        pilot.process(event)

        if isinstance(event, OrientationUpdate) and pilot.state.last_sample is not None:
            times.append(event.timestamp)
            traces.append(pilot.state.last_sample.as_array())
            home = pilot.decoder.home
            homes.append(home.as_array() if home is not None else [np.nan] * 3)
            if len(pilot.decoder.sequence_key) > before[0]:
                token_marks.append((event.timestamp, pilot.decoder.sequence_key))

        if isinstance(event, PoseChange) and pilot.decoder.word != before[1]:
            letter = pilot.decoder.word[len(before[1]):]
            letter_marks.append((event.timestamp, letter))

    if not times:
        print("⚠️ No orientation data in session.")
        return

    traces = np.array(traces)
    homes = np.array(homes)

    fig, axes = plt.subplots(3, 1, sharex=True, figsize=(12, 8))
    for i, axis in enumerate(AXES):
        ax = axes[i]
        ax.plot(times, traces[:, i], label=axis.value)
        ax.plot(times, homes[:, i], '--', color='grey', label='home')
        ax.fill_between(times, homes[:, i] - CONFIG["HOME_EPSILON"], homes[:, i] + CONFIG["HOME_EPSILON"],
                        color='green', alpha=0.1)
        ax.set_ylim(0, CONFIG["SCALE"])
        ax.set_ylabel(axis.value)
        for t, key in token_marks:
            ax.axvline(t, color='orange', alpha=0.5)
        for t, letter in letter_marks:
            ax.axvline(t, color='red', alpha=0.7)
    for t, letter in letter_marks:
        axes[0].annotate(repr(letter), (t, CONFIG["SCALE"] - 1), color='red')

    axes[-1].set_xlabel("time (s)")
    fig.suptitle(f"Decoded word: {pilot.decoder.word!r}")
    print(f"📝 Decoded: {pilot.decoder.word!r}")
    plt.tight_layout()
    plt.show()

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python tools/lab_replay.py SESSION.csv")
        sys.exit(1)
    run_lab(sys.argv[1])
