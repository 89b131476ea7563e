"""
Handler Context Definition.
Defines the Data Transfer Object (DTO) for the Control Layer.
"""

from myoscribe.core.types import DeviceEvent

class HandlerContext:
    """
    A unified context object containing all data required for a Handler to make decisions.
    Wraps the Event, Session State, Decoder, Collaborators, and Configuration.
    """
    def __init__(self, event: DeviceEvent, state, decoder, dispatcher, device, config):
        # 1. The event being routed
        self.event = event
        self.now = event.timestamp

        # 2. Global Resources
        self.state = state            # Shared SessionState
        self.decoder = decoder        # GestureDecoder
        self.dispatcher = dispatcher  # IWordDispatcher
        self.device = device          # IDeviceLink
        self.config = config          # Master Config Dict

        # 3. Gate state before any handler ran
        self.was_gated = self.gated

    @property
    def gated(self) -> bool:
        """True while pose/gesture routing must wait for arm sync."""
        return self.config["REQUIRE_ARM_SYNC"] and not self.state.on_arm
