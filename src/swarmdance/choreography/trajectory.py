"""
Finite trajectories: bounded-duration functions from elapsed time to pose.

Every segment, decorator, act and choreography timeline implements
FiniteTrajectory. Sampling outside [0, duration] clamps to the nearest end,
so desired_position never raises for any float time.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from itertools import accumulate
from typing import Iterable, Tuple

from ..geometry import Pose
from .errors import ConfigurationError
from .interpolation import find_segment


def clamp_time(time_s: float, duration_s: float) -> float:
    """
    Clamp a query time into [0, duration].

    NaN and negative times map to 0, times past the end map to duration.
    """
    if not time_s > 0.0:
        return 0.0
    if time_s > duration_s:
        return duration_s
    return time_s


def check_duration(duration_s: float, what: str = "duration") -> float:
    """Validate a segment duration and return it as float."""
    duration_s = float(duration_s)
    if math.isnan(duration_s) or math.isinf(duration_s) or duration_s < 0.0:
        raise ConfigurationError(f"{what} must be a finite value >= 0, got {duration_s}")
    return duration_s


class FiniteTrajectory(ABC):
    """
    A bounded-duration, pure function of elapsed time returning a pose.

    Implementations are immutable once constructed and safe to sample from
    several threads at once.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def duration(self) -> float:
        """Total duration in seconds (>= 0)."""

    @abstractmethod
    def _pose_at(self, time_s: float) -> Pose:
        """Pose at a time already clamped to [0, duration]."""

    def desired_position(self, time_s: float) -> Pose:
        """
        Desired pose at the given elapsed time.

        Args:
            time_s: Seconds since the start of the trajectory

        Returns:
            Pose at time_s, clamped to the start/end pose outside the range
        """
        return self._pose_at(clamp_time(time_s, self.duration))

    @property
    def start_pose(self) -> Pose:
        return self.desired_position(0.0)

    @property
    def end_pose(self) -> Pose:
        return self.desired_position(self.duration)


class StaticTrajectory(FiniteTrajectory):
    """Holds one pose for a fixed duration."""

    __slots__ = ("_pose", "_duration")

    def __init__(self, pose: Pose, duration_s: float = 0.0):
        self._pose = pose
        self._duration = check_duration(duration_s)

    @property
    def duration(self) -> float:
        return self._duration

    def _pose_at(self, time_s: float) -> Pose:
        return self._pose

    def __repr__(self) -> str:
        return f"StaticTrajectory({self._pose!r}, {self._duration})"


class SequenceTrajectory(FiniteTrajectory):
    """
    Ordered concatenation of trajectories.

    Part i+1 starts at the summed duration of parts 0..i. Offsets are
    computed once; lookup is a binary search, so sampling cost does not
    depend on t. A boundary time resolves to the start of the later part.
    """

    __slots__ = ("_parts", "_offsets", "_duration")

    def __init__(self, parts: Iterable[FiniteTrajectory]):
        self._parts: Tuple[FiniteTrajectory, ...] = tuple(parts)
        if not self._parts:
            raise ConfigurationError("A sequence needs at least one trajectory")
        durations = [part.duration for part in self._parts]
        self._offsets: Tuple[float, ...] = (0.0,) + tuple(accumulate(durations[:-1]))
        self._duration = self._offsets[-1] + durations[-1]

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def parts(self) -> Tuple[FiniteTrajectory, ...]:
        return self._parts

    @property
    def offsets(self) -> Tuple[float, ...]:
        """Start time of every part."""
        return self._offsets

    def _pose_at(self, time_s: float) -> Pose:
        index, local_t = find_segment(self._offsets, time_s)
        return self._parts[index].desired_position(local_t)

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        return f"SequenceTrajectory(parts={len(self._parts)}, duration={self._duration:.3f})"


class HoldTrajectory(FiniteTrajectory):
    """Extends a trajectory to a longer duration by holding its end pose."""

    __slots__ = ("_trajectory", "_duration")

    def __init__(self, trajectory: FiniteTrajectory, duration_s: float):
        duration_s = check_duration(duration_s)
        if duration_s < trajectory.duration:
            raise ConfigurationError(
                f"Hold duration {duration_s}s is shorter than trajectory ({trajectory.duration}s)"
            )
        self._trajectory = trajectory
        self._duration = duration_s

    @property
    def duration(self) -> float:
        return self._duration

    def _pose_at(self, time_s: float) -> Pose:
        return self._trajectory.desired_position(time_s)


def concatenate(trajectories: Iterable[FiniteTrajectory]) -> FiniteTrajectory:
    """
    Concatenate trajectories into one timeline.

    A single trajectory is returned unchanged.
    """
    parts = tuple(trajectories)
    if len(parts) == 1:
        return parts[0]
    return SequenceTrajectory(parts)
