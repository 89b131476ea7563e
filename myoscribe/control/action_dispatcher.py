"""
MyoScribe Action Dispatcher (The Actuator).
===========================================

This module implements the Command Pattern to decouple the high-level intent
("Show this word on the grid") from how it happens ("python testgrid.py word").

Features:
- **Non-blocking:** Scripts are started with `subprocess.Popen`; the event loop
  never waits for them to finish.
- **Graceful Fallback:** Uses a Mock Dispatcher if the scripts are missing (CI/CD safe).
- **Fault Isolation:** A script that fails to start is logged, never raised.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from myoscribe.config import CONFIG, PATHS
from myoscribe.core.interfaces import IDeviceLink, IWordDispatcher
from myoscribe.core.types import ActionKind

# =============================================================================
# SUBPROCESS BACKEND (Production)
# =============================================================================
class SubprocessDispatcher(IWordDispatcher):
    """
    Runs one Python script per action kind, passing the word as its argument.
    """
    def __init__(self, scripts: Mapping[ActionKind, Path], python: Optional[str] = None):
        self.scripts = dict(scripts)
        self.python = python or sys.executable
        self.processes: List[subprocess.Popen] = []

    def command_for(self, word: str, action_kind: ActionKind) -> List[str]:
        return [self.python, str(self.scripts[action_kind]), word]

    def dispatch(self, word: str, action_kind: ActionKind) -> None:
        if action_kind not in self.scripts:
            logging.error(f"❌ No script configured for action '{action_kind.value}'")
            return
        cmd = self.command_for(word, action_kind)
        try:
            self.processes.append(subprocess.Popen(cmd))
        except OSError as e:
            logging.error(f"❌ Failed to start {cmd}: {e}")
            return
        # Drop handles of scripts that already finished
        self.processes = [p for p in self.processes if p.poll() is None]

# =============================================================================
# MOCK BACKEND (Testing / Missing Scripts)
# =============================================================================
class MockDispatcher(IWordDispatcher):
    """
    Silent implementation for Unit Tests or machines without the action scripts.
    Prints actions to stdout and remembers them instead of executing them.
    """
    def __init__(self):
        self.calls = []

    def dispatch(self, word, action_kind):
        self.calls.append((word, action_kind))
        print(f"[MOCK] Dispatch {action_kind.value} {word!r}")

class MockDeviceLink(IDeviceLink):
    """Stand-in for the armband's command channel."""
    def __init__(self):
        self.unlocks = []
        self.notifications = 0

    def unlock(self, hold):
        self.unlocks.append(hold)

    def notify_user_action(self):
        self.notifications += 1

def resolve_scripts(config: Optional[dict] = None, scripts_dir: Optional[Path] = None) -> Dict[ActionKind, Path]:
    """Maps each action kind to its configured script inside `scripts_dir`."""
    config = config or CONFIG
    scripts_dir = Path(scripts_dir or PATHS["SCRIPTS_DIR"])
    return {ActionKind(kind): scripts_dir / name for kind, name in config["DISPATCH_SCRIPTS"].items()}

def ActionDispatcher(config: Optional[dict] = None, scripts_dir: Optional[Path] = None) -> IWordDispatcher:
    """Factory method to return the subprocess backend when every script exists."""
    scripts = resolve_scripts(config, scripts_dir)
    missing = [str(p) for p in scripts.values() if not p.exists()]
    if missing:
        print(f"⚠️ Action scripts missing ({', '.join(missing)}). Using MOCK Action Dispatcher.")
        return MockDispatcher()
    return SubprocessDispatcher(scripts)
