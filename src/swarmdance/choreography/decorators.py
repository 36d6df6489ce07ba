"""
Trajectory decorators.

A decorator wraps a finite trajectory and is itself a finite trajectory with
the same duration, so decorators can be stacked. The wrapped trajectory is
never modified.
"""
from __future__ import annotations

import math

from ..geometry import Point3D, Pose, horizontal_distance
from .errors import ConfigurationError
from .trajectory import FiniteTrajectory


class TrajectoryDecorator(FiniteTrajectory):
    """Base class forwarding duration to the wrapped trajectory."""

    def __init__(self, trajectory: FiniteTrajectory):
        self._trajectory = trajectory

    @property
    def trajectory(self) -> FiniteTrajectory:
        """The wrapped trajectory."""
        return self._trajectory

    @property
    def duration(self) -> float:
        return self._trajectory.duration


class HorizontalCircleDecorator(TrajectoryDecorator):
    """
    Sweeps the wrapped trajectory around a vertical axis through center.

    The radius follows the wrapped trajectory's horizontal distance to the
    center at every instant, so the circle grows and shrinks with it.
    Altitude and yaw pass through unchanged.

    The initial phase is taken from the wrapped trajectory's start, so at t=0
    the output lies on the ray from center to that start position.
    """

    def __init__(self, trajectory: FiniteTrajectory, center: Point3D, frequency_hz: float):
        """
        Args:
            trajectory: Trajectory to decorate
            center: Axis of rotation; only x and y are used
            frequency_hz: Revolutions per second, > 0
        """
        super().__init__(trajectory)
        frequency_hz = float(frequency_hz)
        if not frequency_hz > 0.0 or math.isinf(frequency_hz):
            raise ConfigurationError(f"frequency must be a finite value > 0, got {frequency_hz}")

        self._center = Point3D(center.x, center.y, 0.0)
        self._frequency = frequency_hz
        first = trajectory.desired_position(0.0)
        self._phase = math.atan2(first.x - self._center.x, first.y - self._center.y)

    @property
    def center(self) -> Point3D:
        return self._center

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def phase(self) -> float:
        """Angle of the start position seen from center (0 = +y axis)."""
        return self._phase

    def _pose_at(self, time_s: float) -> Pose:
        pose = self._trajectory.desired_position(time_s)
        radius = horizontal_distance(pose, self._center)
        angle = 2.0 * math.pi * self._frequency * time_s + self._phase
        return Pose(
            self._center.x + radius * math.sin(angle),
            self._center.y + radius * math.cos(angle),
            pose.z,
            pose.yaw,
        )

    def __repr__(self) -> str:
        return (
            f"HorizontalCircleDecorator(center=({self._center.x}, {self._center.y}), "
            f"frequency={self._frequency}, duration={self.duration:.3f})"
        )
