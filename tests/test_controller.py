import unittest

from myoscribe.config import CONFIG
from myoscribe.control.action_dispatcher import MockDeviceLink, MockDispatcher
from myoscribe.control.controller import MyoController
from myoscribe.core.types import (
    ActionKind, Arm, ArmSync, ArmUnsync, DeviceEvent, HomePhase, Locked,
    OrientationUpdate, Pose, PoseChange, Quaternion, Unlocked, Unpaired,
)
from myoscribe.gesture_engine import GestureDecoder
from myoscribe.orientation import scaled_to_quaternion

HOME_Q = Quaternion.identity()

class TestMyoController(unittest.TestCase):
    def setUp(self):
        self.config = dict(CONFIG)
        self.dispatcher = MockDispatcher()
        self.device = MockDeviceLink()
        self.decoder = GestureDecoder(emit=lambda text: None, config=self.config)
        self.pilot = MyoController(self.decoder, self.dispatcher, self.device, self.config)

    def sync(self, t=0.0):
        self.pilot.process(ArmSync(t, Arm.RIGHT))
        self.pilot.process(Unlocked(t))

    def test_orientation_tracked_off_arm(self):
        """The last sample is kept for the HUD even before arm sync."""
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.assertIsNotNone(self.pilot.state.last_sample)
        self.assertAlmostEqual(self.pilot.state.last_sample.roll, 9.0)

    def test_poses_gated_until_arm_sync(self):
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FIST))
        self.assertEqual(self.decoder.phase, HomePhase.UNSET)
        self.assertEqual(self.decoder.word, "")

    def test_fist_held_through_arm_sync_calibrates(self):
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FIST))
        self.pilot.process(ArmSync(0.2, Arm.RIGHT))
        self.assertEqual(self.decoder.phase, HomePhase.HOME)
        self.assertEqual(self.decoder.word, " ")

        # Repeated sync while on arm does not calibrate again
        self.pilot.process(ArmSync(0.3, Arm.RIGHT))
        self.assertEqual(self.decoder.word, " ")

    def test_released_pose_before_sync_does_nothing(self):
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FINGERS_SPREAD))
        self.pilot.process(PoseChange(0.2, Pose.REST))
        self.sync(0.3)
        self.assertEqual(self.decoder.phase, HomePhase.UNSET)
        self.assertEqual(self.dispatcher.calls, [])

    def test_gate_can_be_disabled(self):
        self.config["REQUIRE_ARM_SYNC"] = False
        pilot = MyoController(self.decoder, self.dispatcher, self.device, self.config)
        pilot.process(OrientationUpdate(0.0, HOME_Q))
        pilot.process(PoseChange(0.1, Pose.FIST))
        self.assertEqual(self.decoder.phase, HomePhase.HOME)

    def test_fist_calibrates_on_last_sample(self):
        self.sync()
        self.pilot.process(OrientationUpdate(0.0, scaled_to_quaternion(5, 9, 12)))
        self.pilot.process(PoseChange(0.1, Pose.FIST))

        home = self.decoder.home
        self.assertAlmostEqual(home.roll, 5.0)
        self.assertAlmostEqual(home.yaw, 12.0)
        self.assertEqual(self.decoder.word, " ")

    def test_held_pose_does_not_repeat(self):
        self.sync()
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FIST))
        self.pilot.process(PoseChange(0.2, Pose.FIST))
        self.assertEqual(self.decoder.word, " ")

        self.pilot.process(PoseChange(0.3, Pose.REST))
        self.pilot.process(PoseChange(0.4, Pose.FIST))
        self.assertEqual(self.decoder.word, "  ")

    def test_dispatch_poses(self):
        self.sync()
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FIST))
        self.pilot.process(PoseChange(0.2, Pose.FINGERS_SPREAD))
        self.pilot.process(PoseChange(0.3, Pose.WAVE_OUT))
        self.assertEqual(self.dispatcher.calls, [(" ", ActionKind.GRID), (" ", ActionKind.MESSAGE)])

    def test_gesture_routed_to_decoder(self):
        self.sync()
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FIST))
        self.pilot.process(PoseChange(0.2, Pose.REST))
        self.pilot.process(OrientationUpdate(3.0, scaled_to_quaternion(9, 9, 13)))
        self.pilot.process(OrientationUpdate(3.1, HOME_Q))
        self.assertEqual(self.decoder.sequence_key, "yaw")

    def test_device_acknowledgements(self):
        self.sync()
        self.pilot.process(PoseChange(0.1, Pose.WAVE_IN))
        self.pilot.process(PoseChange(0.2, Pose.REST))
        self.pilot.process(Locked(0.3))
        self.assertEqual(self.device.unlocks, [True, False, False])
        self.assertEqual(self.device.notifications, 1)
        self.assertFalse(self.pilot.state.is_unlocked)

    def test_arm_flags(self):
        self.sync()
        self.assertTrue(self.pilot.state.on_arm)
        self.assertEqual(self.pilot.state.arm, Arm.RIGHT)
        self.assertTrue(self.pilot.state.is_unlocked)
        self.pilot.process(ArmUnsync(1.0))
        self.assertFalse(self.pilot.state.on_arm)

    def test_unpair_resets_session(self):
        self.sync()
        self.pilot.process(OrientationUpdate(0.0, HOME_Q))
        self.pilot.process(PoseChange(0.1, Pose.FIST))
        self.pilot.process(PoseChange(0.2, Pose.REST))
        self.pilot.process(OrientationUpdate(3.0, scaled_to_quaternion(13, 9, 9)))
        self.pilot.process(OrientationUpdate(3.1, HOME_Q))

        self.pilot.process(Unpaired(4.0))

        self.assertIsNone(self.decoder.home)
        self.assertEqual(self.decoder.sequence_key, "")
        self.assertEqual(self.decoder.word, "")
        self.assertFalse(self.pilot.state.on_arm)
        self.assertIsNone(self.pilot.state.last_sample)

    def test_unknown_event_ignored(self):
        self.pilot.process(DeviceEvent(0.0))
        self.pilot.process(object())
        self.assertEqual(self.decoder.phase, HomePhase.UNSET)

if __name__ == '__main__':
    unittest.main()
