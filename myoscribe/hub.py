"""
MyoScribe Event Hubs.
=====================

The runtime never talks to the armband directly. It asks a hub for "everything
that happened in the next N milliseconds" and gets back an ordered list of
events, exactly like the vendor hub's `run(duration)` call.

This module ships hubs that replay recorded sessions:
- `RecordedHub`: replays an in-memory event list on a virtual clock.
- `ReplayHub.from_csv`: loads a session recorded to CSV (one event per row).

CSV columns: timestamp, kind, w, x, y, z, pose, arm
"""

import csv
import logging
import math
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from myoscribe.core.interfaces import IEventSource
from myoscribe.core.types import (
    Arm, ArmSync, ArmUnsync, DeviceEvent, Locked, OrientationUpdate, Pose,
    PoseChange, Quaternion, Unlocked, Unpaired,
)

CSV_FIELDS = ["timestamp", "kind", "w", "x", "y", "z", "pose", "arm"]

# Event class <-> "kind" column
EVENT_KINDS = {
    OrientationUpdate: "orientation",
    PoseChange: "pose",
    ArmSync: "arm_sync",
    ArmUnsync: "arm_unsync",
    Unlocked: "unlocked",
    Locked: "locked",
    Unpaired: "unpaired",
}
KIND_EVENTS = {kind: cls for cls, kind in EVENT_KINDS.items()}

def event_to_row(event: DeviceEvent) -> Dict[str, object]:
    row = dict.fromkeys(CSV_FIELDS, "")
    row["timestamp"] = event.timestamp
    row["kind"] = EVENT_KINDS[type(event)]
    if isinstance(event, OrientationUpdate):
        q = event.quaternion
        row.update(w=q.w, x=q.x, y=q.y, z=q.z)
    elif isinstance(event, PoseChange):
        row["pose"] = event.pose.value
    elif isinstance(event, ArmSync):
        row["arm"] = event.arm.value
    return row

def _finite(value) -> Optional[float]:
    """float(value), or None for blanks, NaN, inf and text."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None

def row_to_event(row: Dict[str, object]) -> Optional[DeviceEvent]:
    """
    Parses one CSV record.
    Returns None for rows of an unknown kind, a missing timestamp,
    or an orientation with a missing component.
    """
    cls = KIND_EVENTS.get(str(row.get("kind", "")).strip())
    if cls is None:
        logging.warning(f"⚠️ Skipping row with unknown kind: {row.get('kind')!r}")
        return None

    ts = _finite(row.get("timestamp"))
    if ts is None:
        logging.warning(f"⚠️ Skipping {EVENT_KINDS[cls]} row without a timestamp")
        return None

    if cls is OrientationUpdate:
        parts = [_finite(row.get(c)) for c in ("w", "x", "y", "z")]
        if None in parts:
            logging.warning(f"⚠️ Skipping orientation row at t={ts} with a missing component")
            return None
        return OrientationUpdate(ts, Quaternion(*parts))
    if cls is PoseChange:
        return PoseChange(ts, Pose.from_label(str(row.get("pose", ""))))
    if cls is ArmSync:
        return ArmSync(ts, Arm.from_label(str(row.get("arm", ""))))
    return cls(ts)

def save_session_csv(events: Iterable[DeviceEvent], path) -> int:
    """Writes a session to CSV. Returns the number of rows written."""
    rows = [event_to_row(e) for e in events]
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)

def load_session_csv(path) -> List[DeviceEvent]:
    df = pd.read_csv(path, dtype={"kind": str, "pose": str, "arm": str}, float_precision="round_trip")
    df = df.fillna({"pose": "", "arm": ""})
    events = []
    for row in df.to_dict('records'):
        event = row_to_event(row)
        if event is not None:
            events.append(event)
    return events

class RecordedHub(IEventSource):
    """
    Replays events on a virtual clock.

    Each `run(duration_ms)` advances the clock by `duration_ms` and returns the
    events stamped up to the new clock time, in their recorded order.
    With `realtime=True` each slice also takes `duration_ms` of wall time.
    """
    def __init__(self, events: Sequence[DeviceEvent], realtime: bool = False):
        self.events = list(events)
        self.realtime = realtime
        self._idx = 0
        self.clock = self.events[0].timestamp if self.events else 0.0

    @property
    def exhausted(self) -> bool:
        return self._idx >= len(self.events)

    def run(self, duration_ms: float) -> List[DeviceEvent]:
        if self.realtime:
            time.sleep(duration_ms / 1000.0)
        self.clock += duration_ms / 1000.0

        batch = []
        while self._idx < len(self.events) and self.events[self._idx].timestamp <= self.clock:
            batch.append(self.events[self._idx])
            self._idx += 1
        return batch

class ReplayHub(RecordedHub):
    @classmethod
    def from_csv(cls, path, realtime: bool = False) -> "ReplayHub":
        events = load_session_csv(path)
        print(f"📂 LOADED SESSION: {path} ({len(events)} events)")
        return cls(events, realtime=realtime)
