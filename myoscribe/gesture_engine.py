"""
MyoScribe Gesture Engine (The Brain).
=====================================

This module turns a stream of normalized orientation samples into letters.
The protocol is "calibrate, move, come back":
1. **Calibrate:** The calibration pose stores the current orientation as home.
2. **Excursion:** The arm moves away; the largest deviation per axis is tracked.
3. **Return:** When the arm is back within HOME_EPSILON of home, the axis that
   dominated the excursion becomes one gesture token (roll, pitch or yaw).
4. **Flush:** The next calibration pose decodes the tokens gathered since the
   previous one into a letter and appends it to the word.

Why edge-triggered?
The return test is a level ("is the arm home?"). Acting on the level would
re-decide on every sample spent at home. The engine instead runs a two-state
machine (AWAY -> HOME) and decides exactly once per return.

Why cooldowns instead of sleeping?
Operators need a moment to settle after a letter or a token. Sleeping would
stall event delivery, so the engine records a deadline and ignores samples
whose timestamps fall before it.
"""

import logging
from typing import Callable, Dict, Optional

from myoscribe.config import CONFIG, LETTER_ENTRIES
from myoscribe.core.calibration import CalibrationTracker
from myoscribe.core.letters import LetterTable
from myoscribe.core.state_manager import DecoderState
from myoscribe.core.types import Axis, HomePhase, LetterDecoded, OrientationSample, Quaternion
from myoscribe.orientation import normalize

def load_letter_table(config: Optional[dict] = None) -> LetterTable:
    """Builds the alphabet from LETTER_ENTRIES and the configured resolutions."""
    config = config or CONFIG
    return LetterTable.from_entries(
        LETTER_ENTRIES,
        resolutions=config.get("LETTER_RESOLUTIONS", {}),
        fallback=config.get("FALLBACK_LETTER", " "),
    )

class GestureDecoder:
    """
    The Decoder for one armband session.

    Attributes:
        state (DecoderState): Home reference, accumulator, token buffer and word.
        table (LetterTable): Sequence key -> letter.
        emit (callable): Console-like sink for decoded letters and the word.
    """
    def __init__(self,
                 table: Optional[LetterTable] = None,
                 emit: Callable[[str], None] = print,
                 config: Optional[dict] = None):
        self.config = config or CONFIG
        self.table = table or load_letter_table(self.config)
        self.emit = emit
        self.epsilon = self.config["HOME_EPSILON"]
        self.state = DecoderState(
            CalibrationTracker(self.config["SCALE"], self.config["CIRCULAR_AXES"])
        )

    # --- READ-ONLY VIEWS ---
    @property
    def word(self) -> str:
        return self.state.word

    @property
    def phase(self) -> HomePhase:
        return self.state.phase

    @property
    def home(self) -> Optional[OrientationSample]:
        return self.state.tracker.home

    @property
    def sequence_key(self) -> str:
        return self.state.sequence.key

    @property
    def maxima(self) -> Dict[Axis, float]:
        return self.state.accumulator.maxima

    def in_cooldown(self, timestamp: float) -> bool:
        return timestamp < self.state.cooldown_until

    # --- OPERATIONS ---
    def process_quaternion(self, quat: Quaternion, timestamp: float) -> Optional[Axis]:
        return self.process_sample(normalize(quat, self.config["SCALE"]), timestamp)

    def process_sample(self, sample: OrientationSample, timestamp: float) -> Optional[Axis]:
        """
        Feeds one sample through the accumulator and the home state machine.

        Returns:
            The gesture token emitted on this sample, if any.
        """
        st = self.state
        if st.phase is HomePhase.UNSET or self.in_cooldown(timestamp):
            return None

        st.accumulator.update(st.tracker.deviation(sample))
        at_home = st.tracker.is_home(sample, self.epsilon)

        if st.phase is HomePhase.HOME:
            if not at_home:
                st.phase = HomePhase.AWAY
                logging.debug(f"Left home at t={timestamp:.3f}")
            return None

        if not at_home:
            return None

        # AWAY -> HOME: one decision per excursion
        st.phase = HomePhase.HOME
        token = st.accumulator.dominant_axis()
        maxima = st.accumulator.maxima
        st.accumulator.reset()
        st.cooldown_until = timestamp + self.config["TOKEN_COOLDOWN"]

        if token is None:
            logging.info(f"🏠 Home reached, no dominant axis ({_fmt_maxima(maxima)})")
            return None

        st.sequence.append(token)
        logging.info(f"🏠 Home reached -> {token.value} ({_fmt_maxima(maxima)})")
        return token

    def flush(self) -> LetterDecoded:
        """
        Decodes the buffered sequence into a letter and appends it to the word.
        The buffer is emptied whether or not the key is in the table.
        """
        st = self.state
        key = st.sequence.key
        letter, known = self.table.lookup(key)
        st.sequence.clear()
        st.word += letter
        decoded = LetterDecoded(key=key, letter=letter, word=st.word, known=known)
        if decoded.is_fallback:
            logging.warning(f"Unknown gesture sequence {key!r}, using fallback")
        self.emit(letter)
        self.emit(st.word)
        return decoded

    def calibrate(self, sample: Optional[OrientationSample], timestamp: float) -> LetterDecoded:
        """
        Calibration pose: flush the previous sequence, then take `sample` as home.
        """
        decoded = self.flush()
        st = self.state
        st.cooldown_until = timestamp + self.config["CALIBRATION_COOLDOWN"]

        if sample is None:
            logging.warning("Calibration pose before any orientation data; home unchanged")
            return decoded

        st.tracker.calibrate(sample)
        st.accumulator.reset()
        st.phase = HomePhase.HOME
        logging.debug(f"Home set to ({sample.roll:.2f}, {sample.pitch:.2f}, {sample.yaw:.2f})")
        return decoded

    def clear_word(self) -> str:
        word, self.state.word = self.state.word, ""
        return word

    def reset(self):
        """Full session reset: home unset, maxima zero, buffer and word empty."""
        self.state.reset()
        logging.info("Decoder state cleared")

def _fmt_maxima(maxima: Dict[Axis, float]) -> str:
    return ", ".join(f"{axis.value}={value:.2f}" for axis, value in maxima.items())
