"""
Pose sink base class and utilities.

A pose sink is the flight-control end of playback: it receives the desired
pose of one drone at every control tick. This module contains shared code
for all sink implementations:
- deg2rad/rad2deg helpers
- PoseSink abstract base class
"""
import math
import time
from abc import ABC, abstractmethod

from .geometry import Pose


def deg2rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def rad2deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


class PoseSink(ABC):
    """
    Abstract base class for pose sinks.

    Provides the common connect/send/wait API. Subclasses implement the
    transport via _connect(), _disconnect() and _send_pose().
    """

    def __init__(self, name: str = "drone", verbose: bool = True):
        self.name = name
        self.verbose = verbose
        self._connected = False
        self.last_pose: Pose | None = None

    def _log(self, msg: str):
        if self.verbose:
            print(f"[{self.name}] {msg}")

    @abstractmethod
    def _connect(self) -> None:
        """Open the link to the drone."""

    @abstractmethod
    def _disconnect(self) -> None:
        """Close the link to the drone."""

    @abstractmethod
    def _send_pose(self, time_s: float, pose: Pose) -> None:
        """Deliver one desired pose."""

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """Connect to the drone."""
        self._connect()
        self._connected = True
        self._log("Connected")

    def disconnect(self) -> None:
        """Disconnect from the drone."""
        if self._connected:
            self._disconnect()
            self._connected = False
            self._log("Disconnected")

    def send_pose(self, time_s: float, pose: Pose) -> None:
        """Send the desired pose for show time time_s."""
        self._send_pose(time_s, pose)
        self.last_pose = pose

    def wait(self, duration: float) -> None:
        """Wait for specified duration. Override for simulated time."""
        if duration > 0:
            time.sleep(duration)

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *args):
        self.disconnect()
