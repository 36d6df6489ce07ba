"""
Particle: builds one drone's trajectory from primitive motion segments.

Segments are appended in order; each one starts where the previous one
ended, so the resulting trajectory is continuous without any stitching.

Usage:
    particle = Particle(Pose(0, 0, 1, 0))
    particle.hover(2)
    particle.move_to_point_with_velocity(Point4D(4, 0, 1, 0), 2.0)
    particle.rotate_to_angle(math.pi / 2, 3)
    trajectory = particle.get_trajectory()   # duration 7s
"""
from __future__ import annotations

import math
from typing import List, Tuple, Union

from ..geometry import Point3D, Point4D, Pose, poses_close
from .errors import ConfigurationError
from .interpolation import interpolate_points, linear_interpolate, triangle_wave
from .trajectory import (
    FiniteTrajectory,
    SequenceTrajectory,
    StaticTrajectory,
    check_duration,
)

PointLike = Union[Point4D, Pose]

# Max distance between a followed trajectory's start and the particle's pose
FOLLOW_TOLERANCE = 1e-6


def _as_point(point: PointLike) -> Point4D:
    if isinstance(point, Pose):
        return point.to_point()
    return point


def _check_positive(value: float, name: str) -> float:
    value = float(value)
    if not value > 0.0 or math.isinf(value):
        raise ConfigurationError(f"{name} must be a finite value > 0, got {value}")
    return value


class LinearSegment(FiniteTrajectory):
    """Straight move from start to end, yaw interpolated alongside."""

    __slots__ = ("_start", "_end", "_end_pose", "_duration")

    def __init__(self, start: Point4D, end: Point4D, duration_s: float):
        self._start = start
        self._end = end
        self._end_pose = end.to_pose()
        self._duration = check_duration(duration_s)

    @property
    def duration(self) -> float:
        return self._duration

    def _pose_at(self, time_s: float) -> Pose:
        if time_s >= self._duration:
            return self._end_pose
        ratio = time_s / self._duration
        return interpolate_points(self._start, self._end, ratio).to_pose()


class TriangleSegment(FiniteTrajectory):
    """
    Straight move with a triangular zig-zag across the path.

    The deviation is horizontal and perpendicular to the path (along x when
    the path is vertical). The duration is a whole number of wave periods,
    so the deviation is zero at both ends.
    """

    __slots__ = ("_start", "_end", "_end_pose", "_duration", "_amplitude", "_frequency", "_lateral")

    def __init__(
        self,
        start: Point4D,
        end: Point4D,
        duration_s: float,
        amplitude: float,
        frequency_hz: float,
    ):
        self._start = start
        self._end = end
        self._end_pose = end.to_pose()
        self._duration = check_duration(duration_s)
        self._amplitude = amplitude
        self._frequency = frequency_hz

        dx = end.x - start.x
        dy = end.y - start.y
        length = math.hypot(dx, dy)
        if length < 1e-12:
            self._lateral = (1.0, 0.0)
        else:
            self._lateral = (-dy / length, dx / length)

    @property
    def duration(self) -> float:
        return self._duration

    def _pose_at(self, time_s: float) -> Pose:
        if time_s >= self._duration:
            return self._end_pose
        base = interpolate_points(self._start, self._end, time_s / self._duration)
        offset = self._amplitude * triangle_wave(time_s, self._frequency)
        return Pose(
            base.x + offset * self._lateral[0],
            base.y + offset * self._lateral[1],
            base.z,
            base.yaw,
        )


class RotationSegment(FiniteTrajectory):
    """Turns in place from one yaw to another."""

    __slots__ = ("_position", "_start_yaw", "_end_yaw", "_end_pose", "_duration")

    def __init__(self, position: Point3D, start_yaw: float, end_yaw: float, duration_s: float):
        self._position = position
        self._start_yaw = start_yaw
        self._end_yaw = end_yaw
        self._end_pose = Pose(position.x, position.y, position.z, end_yaw)
        self._duration = check_duration(duration_s)

    @property
    def duration(self) -> float:
        return self._duration

    def _pose_at(self, time_s: float) -> Pose:
        if time_s >= self._duration:
            return self._end_pose
        yaw = linear_interpolate(self._start_yaw, self._end_yaw, time_s / self._duration)
        return Pose(self._position.x, self._position.y, self._position.z, yaw)


class Particle:
    """
    Ordered-append builder for a single drone's trajectory.

    The current pose and time are derived from the appended segments, so the
    segment list is the only mutable state.
    """

    def __init__(self, initial_pose: PointLike):
        self._initial = _as_point(initial_pose)
        self._segments: List[FiniteTrajectory] = []

    @property
    def initial_pose(self) -> Pose:
        return self._initial.to_pose()

    @property
    def current_pose(self) -> Point4D:
        """Pose where the next segment starts."""
        if not self._segments:
            return self._initial
        return self._segments[-1].end_pose.to_point()

    @property
    def current_time(self) -> float:
        """Summed duration of all segments so far."""
        return sum(segment.duration for segment in self._segments)

    @property
    def segments(self) -> Tuple[FiniteTrajectory, ...]:
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def hover(self, duration_s: float) -> "Particle":
        """Hold the current pose for duration_s seconds."""
        duration_s = check_duration(duration_s, "hover duration")
        self._segments.append(StaticTrajectory(self.current_pose.to_pose(), duration_s))
        return self

    def move_to_point_with_velocity(self, target: PointLike, velocity: float) -> "Particle":
        """
        Fly in a straight line to target at constant speed.

        Yaw is interpolated alongside the position. A target at the current
        position gives a zero-length segment.

        Args:
            target: End point (position + yaw)
            velocity: Speed in m/s, must be > 0
        """
        velocity = _check_positive(velocity, "velocity")
        start = self.current_pose
        end = _as_point(target)
        duration = Point4D.distance(start, end) / velocity
        self._segments.append(LinearSegment(start, end, duration))
        return self

    def move_triangle_to_point(
        self,
        target: PointLike,
        amplitude: float,
        frequency_hz: float,
        velocity: float = 1.0,
    ) -> "Particle":
        """
        Fly to target while zig-zagging sideways in a triangle wave.

        The straight-line travel time at the given velocity is rounded up to a
        whole number of wave periods (at least one).

        Args:
            target: End point (position + yaw)
            amplitude: Peak sideways deviation in meters, >= 0
            frequency_hz: Zig-zag frequency, > 0
            velocity: Nominal speed along the path in m/s, > 0
        """
        frequency_hz = _check_positive(frequency_hz, "frequency")
        velocity = _check_positive(velocity, "velocity")
        amplitude = check_duration(amplitude, "amplitude")
        start = self.current_pose
        end = _as_point(target)

        distance = Point4D.distance(start, end)
        if distance == 0.0:
            self._segments.append(LinearSegment(start, end, 0.0))
            return self

        periods = max(1, math.ceil(distance / velocity * frequency_hz))
        duration = periods / frequency_hz
        self._segments.append(TriangleSegment(start, end, duration, amplitude, frequency_hz))
        return self

    def move_nervously_to_point(
        self,
        target: PointLike,
        pause_1: float,
        dash_1: float,
        pause_2: float,
        dash_2: float,
        pause_3: float,
        dash_3: float,
        pause_4: float,
        dash_4: float,
        repeat_count: int,
    ) -> "Particle":
        """
        Fly to target in a stop-and-go rhythm.

        The path is cut into repeat_count equal legs. Each leg plays four
        beats of (pause, dash): hover for the pause, then dart forward for the
        dash. Each dash covers a share of the leg proportional to its duration.
        The drone stays on the direct path, so it ends exactly on target.

        Args:
            target: End point (position + yaw)
            pause_1..pause_4: Hover time of each beat in seconds, >= 0
            dash_1..dash_4: Move time of each beat in seconds, >= 0, sum > 0
            repeat_count: Number of legs, >= 1
        """
        beats = [
            (check_duration(pause_1, "pause_1"), check_duration(dash_1, "dash_1")),
            (check_duration(pause_2, "pause_2"), check_duration(dash_2, "dash_2")),
            (check_duration(pause_3, "pause_3"), check_duration(dash_3, "dash_3")),
            (check_duration(pause_4, "pause_4"), check_duration(dash_4, "dash_4")),
        ]
        total_dash = sum(dash for _, dash in beats)
        if total_dash <= 0.0:
            raise ConfigurationError("Nervous move needs at least one dash with duration > 0")
        if int(repeat_count) != repeat_count or repeat_count < 1:
            raise ConfigurationError(f"repeat_count must be an integer >= 1, got {repeat_count}")
        repeat_count = int(repeat_count)

        start = self.current_pose
        end = _as_point(target)
        steps: List[FiniteTrajectory] = []
        position = start

        for leg in range(repeat_count):
            covered = 0.0
            for pause, dash in beats:
                if pause > 0.0:
                    steps.append(StaticTrajectory(position.to_pose(), pause))
                if dash > 0.0:
                    covered += dash
                    fraction = (leg + covered / total_dash) / repeat_count
                    if leg == repeat_count - 1 and covered >= total_dash:
                        next_position = end
                    else:
                        next_position = interpolate_points(start, end, fraction)
                    steps.append(LinearSegment(position, next_position, dash))
                    position = next_position

        self._segments.append(SequenceTrajectory(steps))
        return self

    def rotate_to_angle(self, target_yaw: float, duration_s: float) -> "Particle":
        """
        Turn in place to target_yaw over duration_s seconds.

        A zero duration is only accepted when the yaw does not change.
        """
        duration_s = check_duration(duration_s, "rotation duration")
        start = self.current_pose
        if duration_s == 0.0 and target_yaw != start.yaw:
            raise ConfigurationError(
                f"Rotation from {start.yaw:.3f} to {target_yaw:.3f} rad needs a duration > 0"
            )
        self._segments.append(
            RotationSegment(Point3D.project(start), start.yaw, float(target_yaw), duration_s)
        )
        return self

    def follow(self, trajectory: FiniteTrajectory) -> "Particle":
        """
        Append an already built trajectory, e.g. a decorated one.

        Raises:
            ConfigurationError: if it does not start at the current pose
        """
        current = self.current_pose.to_pose()
        if not poses_close(trajectory.start_pose, current, FOLLOW_TOLERANCE):
            raise ConfigurationError(
                f"Trajectory starts at {trajectory.start_pose}, particle is at {current}"
            )
        self._segments.append(trajectory)
        return self

    def get_trajectory(self) -> FiniteTrajectory:
        """
        Snapshot of the segments appended so far.

        Later appends do not change the returned trajectory.
        """
        if not self._segments:
            return StaticTrajectory(self._initial.to_pose(), 0.0)
        return SequenceTrajectory(self._segments)
