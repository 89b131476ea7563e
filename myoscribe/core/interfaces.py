"""
MyoScribe Core Interfaces.
Defines the abstract contracts for the collaborators around the decoder.
"""

from abc import ABC, abstractmethod
from typing import List

from myoscribe.core.types import ActionKind, DeviceEvent

class IEventSource(ABC):
    """
    Abstract Protocol for event delivery (the "Hub").
    Each call drains one bounded time slice, preserving arrival order.
    """
    @abstractmethod
    def run(self, duration_ms: float) -> List[DeviceEvent]: pass
    @property
    @abstractmethod
    def exhausted(self) -> bool: pass

class IWordDispatcher(ABC):
    """
    Abstract Protocol for the word actions (grid display, message send).
    """
    @abstractmethod
    def dispatch(self, word: str, action_kind: ActionKind) -> None: pass

class IDeviceLink(ABC):
    """
    Abstract Protocol for commands sent back to the armband.
    """
    @abstractmethod
    def unlock(self, hold: bool) -> None: pass
    @abstractmethod
    def notify_user_action(self) -> None: pass
