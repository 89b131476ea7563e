"""MyoScribe Gesture Handler (Orientation -> Decoder)."""
from myoscribe.control.handlers import HandlerContext
from myoscribe.core.types import OrientationUpdate
from myoscribe.orientation import normalize

class GestureHandler:
    def handle(self, ctx: HandlerContext):
        ev = ctx.event
        if not isinstance(ev, OrientationUpdate):
            return

        # Orientation is always tracked, even off-arm, so the HUD has something to draw
        sample = normalize(ev.quaternion, ctx.config["SCALE"])
        ctx.state.last_sample = sample

        if ctx.gated:
            return
        ctx.decoder.process_sample(sample, ctx.now)
