"""
Recording sink: keeps every pose it receives in memory.

Runs playback without hardware, as fast as the caller allows: wait() does
not sleep.
"""
import threading
from typing import List, Tuple

import numpy as np

from ..base import PoseSink
from ..geometry import Pose


class RecordingSink(PoseSink):
    """
    Stores (time, pose) pairs.

    Args:
        name: Drone name
        realtime: If True, wait() sleeps like a real link
        verbose: Print status messages
    """

    def __init__(self, name: str = "drone", realtime: bool = False, verbose: bool = False):
        super().__init__(name=name, verbose=verbose)
        self.realtime = realtime
        self.records: List[Tuple[float, Pose]] = []
        self._lock = threading.Lock()

    def _connect(self) -> None:
        self._log("Recording...")

    def _disconnect(self) -> None:
        self._log(f"Recorded {len(self.records)} poses")

    def _send_pose(self, time_s: float, pose: Pose) -> None:
        with self._lock:
            self.records.append((time_s, pose))

    def wait(self, duration: float) -> None:
        if self.realtime:
            super().wait(duration)

    def as_array(self) -> np.ndarray:
        """Records as an (N, 5) array with columns t, x, y, z, yaw."""
        with self._lock:
            rows = [(t, p.x, p.y, p.z, p.yaw) for t, p in self.records]
        return np.array(rows, dtype=float).reshape(-1, 5)
