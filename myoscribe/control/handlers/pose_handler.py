"""MyoScribe Pose Handler (Calibration / Word Dispatch)."""
import logging

from myoscribe.control.handlers import HandlerContext
from myoscribe.core.types import ActionKind, ArmSync, Pose, PoseChange

class PoseHandler:
    def __init__(self, config):
        self.calibration_pose = Pose.from_label(config["CALIBRATION_POSE"])
        self.dispatch_poses = {
            Pose.from_label(label): ActionKind(kind)
            for label, kind in config["DISPATCH_POSES"].items()
        }

    def handle(self, ctx: HandlerContext):
        ev = ctx.event

        # A pose held through arm sync acts as soon as routing opens
        if isinstance(ev, ArmSync):
            if ctx.was_gated and not ctx.gated:
                self._act(ctx, ctx.state.curr_pose)
            return

        if not isinstance(ev, PoseChange) or ctx.gated:
            return

        # Edge-triggered: holding a pose does not repeat its action.
        # curr_pose is still the pose before this event here.
        if ev.pose == ctx.state.curr_pose:
            return
        self._act(ctx, ev.pose)

    def _act(self, ctx: HandlerContext, pose: Pose):
        # 1. CALIBRATION (flush previous letter, set home)
        if pose == self.calibration_pose:
            print(f"✊ {pose.value.upper()}")
            ctx.decoder.calibrate(ctx.state.last_sample, ctx.now)

        # 2. WORD DISPATCH
        elif pose in self.dispatch_poses:
            kind = self.dispatch_poses[pose]
            word = ctx.decoder.word
            logging.info(f"Dispatching {word!r} to {kind.value}")
            ctx.dispatcher.dispatch(word, kind)
