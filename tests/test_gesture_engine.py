import unittest

from myoscribe.config import CONFIG
from myoscribe.core.types import Axis, HomePhase, OrientationSample, Quaternion
from myoscribe.gesture_engine import GestureDecoder

HOME = OrientationSample(9, 9, 9)

class TestGestureDecoder(unittest.TestCase):
    def setUp(self):
        # Enforce known config for deterministic testing
        self.config = dict(CONFIG)
        self.config["HOME_EPSILON"] = 0.7
        self.config["CALIBRATION_COOLDOWN"] = 2.0
        self.config["TOKEN_COOLDOWN"] = 2.0
        self.emitted = []
        self.decoder = GestureDecoder(emit=self.emitted.append, config=self.config)
        self.t = 0.0

    # --- HELPERS ---
    def feed(self, *samples, dt=0.05):
        tokens = []
        for s in samples:
            self.t += dt
            token = self.decoder.process_sample(s, self.t)
            if token is not None:
                tokens.append(token)
        return tokens

    def calibrate(self, sample=HOME):
        decoded = self.decoder.calibrate(sample, self.t)
        self.t += self.config["CALIBRATION_COOLDOWN"]
        return decoded

    def excursion(self, roll=0.0, pitch=0.0, yaw=0.0):
        """Moves away by the given deviations and comes straight back."""
        tokens = self.feed(OrientationSample(9 + roll, 9 + pitch, 9 + yaw), HOME)
        self.t += self.config["TOKEN_COOLDOWN"]
        return tokens

    # --- TESTS ---
    def test_no_calibration_no_tokens(self):
        """Without a home reference nothing is accumulated or emitted."""
        tokens = self.feed(OrientationSample(14, 9, 9), HOME, OrientationSample(9, 3, 9), HOME)
        self.assertEqual(tokens, [])
        self.assertEqual(self.decoder.phase, HomePhase.UNSET)
        self.assertEqual(self.decoder.sequence_key, "")
        self.assertEqual(self.decoder.maxima[Axis.ROLL], 0.0)

    def test_dominant_roll(self):
        """roll 5, pitch 1, yaw 0.5, then back home -> 'roll'."""
        self.calibrate()
        tokens = self.feed(
            OrientationSample(11, 9.5, 9.2),
            OrientationSample(14, 10, 9.5),
            OrientationSample(12, 9.4, 9.1),
            OrientationSample(9.3, 9.2, 9.0),
        )
        self.assertEqual(tokens, [Axis.ROLL])
        self.assertEqual(self.decoder.sequence_key, "roll")
        self.assertEqual(self.decoder.phase, HomePhase.HOME)

    def test_token_decision_is_logged(self):
        self.calibrate()
        with self.assertLogs(level="INFO") as logs:
            self.excursion(roll=5)
        self.assertIn("🏠 Home reached -> roll (roll=5.00, pitch=0.00, yaw=0.00)", logs.output[-1])

    def test_accumulator_resets_after_emission(self):
        self.calibrate()
        self.excursion(roll=5)
        self.assertEqual(self.decoder.maxima, {Axis.ROLL: 0.0, Axis.PITCH: 0.0, Axis.YAW: 0.0})

    def test_tie_emits_nothing(self):
        self.calibrate()
        self.assertEqual(self.excursion(roll=3, pitch=3), [])
        self.assertEqual(self.decoder.sequence_key, "")

    def test_edge_triggered(self):
        """Staying at home after a return does not emit again."""
        self.calibrate()
        self.assertEqual(self.excursion(pitch=4), [Axis.PITCH])
        self.assertEqual(self.feed(*[HOME] * 100), [])
        self.assertEqual(self.decoder.sequence_key, "pitch")

    def test_small_wobble_stays_home(self):
        self.calibrate()
        wobble = [OrientationSample(9.5, 8.6, 9.3), OrientationSample(8.5, 9.4, 8.8)] * 20
        self.assertEqual(self.feed(*wobble), [])
        self.assertEqual(self.decoder.phase, HomePhase.HOME)

    def test_cooldown_after_calibration(self):
        """Samples inside the calibration cooldown are ignored."""
        self.decoder.calibrate(HOME, 0.0)
        self.assertTrue(self.decoder.in_cooldown(1.0))
        self.assertIsNone(self.decoder.process_sample(OrientationSample(14, 9, 9), 0.5))
        self.assertIsNone(self.decoder.process_sample(HOME, 1.0))
        self.assertEqual(self.decoder.phase, HomePhase.HOME)
        self.assertEqual(self.decoder.maxima[Axis.ROLL], 0.0)

        # After the window the same motion counts
        self.decoder.process_sample(OrientationSample(14, 9, 9), 2.5)
        self.assertEqual(self.decoder.process_sample(HOME, 2.6), Axis.ROLL)

    def test_cooldown_after_token(self):
        self.decoder.calibrate(HOME, 0.0)
        self.decoder.process_sample(OrientationSample(9, 14, 9), 3.0)
        self.assertEqual(self.decoder.process_sample(HOME, 3.1), Axis.PITCH)
        # An excursion inside the token cooldown is not seen
        self.decoder.process_sample(OrientationSample(9, 9, 14), 3.5)
        self.assertIsNone(self.decoder.process_sample(HOME, 3.6))
        self.assertEqual(self.decoder.sequence_key, "pitch")

    def test_yaw_wraparound_is_not_a_gesture(self):
        """Crossing the 0/SCALE seam counts as a small yaw deviation."""
        home = OrientationSample(9, 9, 17.9)
        self.calibrate(home)
        tokens = self.feed(OrientationSample(9, 9, 0.1), OrientationSample(9, 9, 17.8))
        self.assertEqual(tokens, [])
        self.assertEqual(self.decoder.phase, HomePhase.HOME)

    def test_yaw_across_seam_still_measured(self):
        home = OrientationSample(9, 9, 16.0)
        self.calibrate(home)
        tokens = self.feed(OrientationSample(9, 9, 2.0), home)
        self.assertEqual(tokens, [Axis.YAW])
        self.assertEqual(self.decoder.maxima[Axis.YAW], 0.0)

    def test_rollpitch_decodes_to_resolved_letter(self):
        self.calibrate()
        self.excursion(roll=4)
        self.excursion(pitch=4)
        self.assertEqual(self.decoder.sequence_key, "rollpitch")

        decoded = self.calibrate()
        self.assertEqual(decoded.key, "rollpitch")
        self.assertEqual(decoded.letter, "b")
        self.assertTrue(decoded.known)
        self.assertFalse(decoded.is_fallback)
        self.assertEqual(self.decoder.sequence_key, "")

    def test_calibrate_twice_decodes_fallback(self):
        first = self.calibrate()
        second = self.calibrate()
        self.assertEqual(first.letter, " ")
        self.assertEqual(second.letter, " ")
        self.assertEqual(self.decoder.word, "  ")

    def test_flush_clears_on_miss(self):
        self.calibrate()
        for _ in range(4):
            self.excursion(yaw=4)
        self.assertEqual(self.decoder.sequence_key, "yawyawyawyaw")

        with self.assertLogs(level="WARNING"):
            decoded = self.decoder.flush()
        self.assertFalse(decoded.known)
        self.assertTrue(decoded.is_fallback)
        self.assertEqual(decoded.letter, " ")
        self.assertEqual(self.decoder.sequence_key, "")

    def test_flush_emits_letter_and_word(self):
        self.calibrate()
        self.excursion(roll=4)
        self.emitted.clear()
        self.decoder.flush()
        self.assertEqual(self.emitted, ["c", " c"])

    def test_calibrate_without_sample_keeps_home_unset(self):
        decoded = self.decoder.calibrate(None, 0.0)
        self.assertEqual(decoded.letter, " ")
        self.assertIsNone(self.decoder.home)
        self.assertEqual(self.decoder.phase, HomePhase.UNSET)

    def test_recalibration_moves_home(self):
        self.calibrate()
        self.calibrate(OrientationSample(4, 12, 1))
        self.assertEqual(self.decoder.home, OrientationSample(4, 12, 1))
        self.assertEqual(self.decoder.phase, HomePhase.HOME)

    def test_process_quaternion(self):
        self.decoder.calibrate(OrientationSample(9, 9, 9), 0.0)
        self.assertIsNone(self.decoder.process_quaternion(Quaternion.identity(), 5.0))
        self.assertEqual(self.decoder.phase, HomePhase.HOME)

    def test_reset(self):
        self.calibrate()
        self.excursion(roll=4)
        self.decoder.flush()
        self.excursion(pitch=4)

        self.decoder.reset()

        self.assertIsNone(self.decoder.home)
        self.assertEqual(self.decoder.phase, HomePhase.UNSET)
        self.assertEqual(self.decoder.sequence_key, "")
        self.assertEqual(self.decoder.word, "")

    def test_clear_word(self):
        self.calibrate()
        self.assertEqual(self.decoder.clear_word(), " ")
        self.assertEqual(self.decoder.word, "")

if __name__ == '__main__':
    unittest.main()
