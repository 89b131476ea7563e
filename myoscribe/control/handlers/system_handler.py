"""MyoScribe System Handler (Arm Sync / Lock / Pairing)."""
import logging

from myoscribe.control.handlers import HandlerContext
from myoscribe.core.types import (
    ArmSync, ArmUnsync, Locked, Pose, PoseChange, Unlocked, Unpaired,
)

class SystemHandler:
    def handle(self, ctx: HandlerContext):
        ev = ctx.event

        # 1. ARM SYNC
        if isinstance(ev, ArmSync):
            ctx.state.on_arm = True
            ctx.state.arm = ev.arm
            print(f"💪 ARM SYNCED [{ev.arm.value}]")

        elif isinstance(ev, ArmUnsync):
            ctx.state.on_arm = False
            print("💤 ARM UNSYNCED")

        # 2. LOCKING
        elif isinstance(ev, Unlocked):
            ctx.state.is_unlocked = True

        elif isinstance(ev, Locked):
            ctx.state.is_unlocked = False
            # Keep the band responsive: ask for a short unlock right away
            ctx.device.unlock(hold=False)

        # 3. POSE ACKNOWLEDGEMENT
        elif isinstance(ev, PoseChange):
            if ev.pose not in {Pose.UNKNOWN, Pose.REST}:
                # Hold the unlock so the pose can be kept, and buzz to confirm it
                ctx.device.unlock(hold=True)
                ctx.device.notify_user_action()
            else:
                ctx.device.unlock(hold=False)

        # 4. LOST DEVICE
        elif isinstance(ev, Unpaired):
            logging.warning("Armband unpaired, resetting session")
            ctx.state.reset()
            ctx.decoder.reset()
