"""
Interpolation helpers for trajectory segments.

Provides linear interpolation between points, the triangle wave used for
zig-zag moves and the segment lookup shared by concatenated trajectories.
"""
from __future__ import annotations

import math
from bisect import bisect_right
from typing import Sequence, Tuple

from ..geometry import Point4D


def linear_interpolate(start: float, end: float, t: float) -> float:
    """
    Linear interpolation between two values.

    Args:
        start: Starting value
        end: Ending value
        t: Interpolation factor in [0, 1]

    Returns:
        Interpolated value
    """
    return start + (end - start) * t


def interpolate_points(start: Point4D, end: Point4D, t: float) -> Point4D:
    """
    Interpolate position and yaw between two points.

    Args:
        start: Point at t=0
        end: Point at t=1
        t: Interpolation factor in [0, 1]

    Returns:
        Interpolated point
    """
    return Point4D(
        linear_interpolate(start.x, end.x, t),
        linear_interpolate(start.y, end.y, t),
        linear_interpolate(start.z, end.z, t),
        linear_interpolate(start.yaw, end.yaw, t),
    )


def triangle_wave(time_s: float, frequency_hz: float) -> float:
    """
    Unit triangle wave.

    Starts at 0, peaks at +1 a quarter period in, crosses 0 at half a period,
    bottoms at -1 at three quarters and is back at 0 after a full period.

    Args:
        time_s: Time in seconds
        frequency_hz: Wave frequency

    Returns:
        Value in [-1, 1]
    """
    if frequency_hz <= 0.0:
        return 0.0

    phase = math.fmod(time_s * frequency_hz, 1.0)
    if phase < 0.0:
        phase += 1.0

    if phase < 0.25:
        return 4.0 * phase
    if phase < 0.75:
        return 2.0 - 4.0 * phase
    return 4.0 * phase - 4.0


def find_segment(offsets: Sequence[float], t: float) -> Tuple[int, float]:
    """
    Find which segment contains time t and the local time inside it.

    Segments are half-open [start, end) except the last one, so a time that
    falls exactly on a boundary belongs to the later segment.

    Args:
        offsets: Start time of every segment, ascending, offsets[0] == 0
        t: Time already clamped to the overall duration

    Returns:
        (segment_index, local_t)
    """
    index = bisect_right(offsets, t) - 1
    if index < 0:
        index = 0
    return index, t - offsets[index]
