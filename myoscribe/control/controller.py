"""
MyoScribe Controller.
Acts as the central nervous system: routes every device event, in arrival order,
through the handlers that own each concern.
"""

import logging
from typing import Iterable, Optional

from myoscribe.config import CONFIG
from myoscribe.core.interfaces import IDeviceLink, IWordDispatcher
from myoscribe.core.state_manager import SessionState
from myoscribe.core.types import DeviceEvent, PoseChange
from myoscribe.control.action_dispatcher import ActionDispatcher, MockDeviceLink
from myoscribe.control.handlers import HandlerContext
from myoscribe.gesture_engine import GestureDecoder

# HANDLERS
from myoscribe.control.handlers.system_handler import SystemHandler
from myoscribe.control.handlers.pose_handler import PoseHandler
from myoscribe.control.handlers.gesture_handler import GestureHandler

KNOWN_EVENTS = tuple(DeviceEvent.__subclasses__())

class MyoController:
    def __init__(self,
                 decoder: Optional[GestureDecoder] = None,
                 dispatcher: Optional[IWordDispatcher] = None,
                 device: Optional[IDeviceLink] = None,
                 config: Optional[dict] = None):
        self.config = config or CONFIG
        self.state = SessionState()
        self.decoder = decoder or GestureDecoder(config=self.config)
        self.dispatcher = dispatcher or ActionDispatcher(self.config)
        self.device = device or MockDeviceLink()

        # Handlers
        self.system_handler = SystemHandler()
        self.pose_handler = PoseHandler(self.config)
        self.gesture_handler = GestureHandler()

    def process(self, event: DeviceEvent):
        if not isinstance(event, KNOWN_EVENTS):
            logging.debug(f"Ignoring unsupported event {type(event).__name__}")
            return

        # 1. Context Creation
        ctx = HandlerContext(event, self.state, self.decoder, self.dispatcher, self.device, self.config)

        # 2. Execution Pipeline
        self.system_handler.handle(ctx)
        self.pose_handler.handle(ctx)
        self.gesture_handler.handle(ctx)

        # 3. State Update
        if isinstance(event, PoseChange):
            self.state.update_pose(event.pose)

    def process_all(self, events: Iterable[DeviceEvent]):
        for event in events:
            self.process(event)
