"""
Drone swarm show choreography.

Builds continuous pose trajectories (x, y, z, yaw) for every drone of a
swarm and sequences them into a show.

Usage:
    from swarmdance import Pose, create_sink
    from swarmdance.shows import create_intro_choreography
    from swarmdance.choreography import run_choreography

    view = create_intro_choreography()
    sinks = {drone: create_sink("console", name=drone) for drone in view.drones}
    run_choreography(sinks, view)
"""
from typing import Literal

from .base import PoseSink, deg2rad, rad2deg
from .geometry import Point3D, Point4D, Pose


__all__ = [
    "Point3D",
    "Point4D",
    "Pose",
    "PoseSink",
    "create_sink",
    "deg2rad",
    "rad2deg",
]


SinkType = Literal["console", "recording"]


def create_sink(kind: SinkType = "console", **kwargs) -> PoseSink:
    """
    Create a pose sink.

    Args:
        kind: Sink type - 'console' or 'recording'
        **kwargs: Additional arguments passed to the sink constructor

    Returns:
        PoseSink instance (not yet connected)

    Raises:
        ValueError: If an unknown sink type is specified
    """
    if kind == "console":
        from .adapters import ConsoleSink
        return ConsoleSink(**kwargs)
    elif kind == "recording":
        from .adapters import RecordingSink
        return RecordingSink(**kwargs)
    else:
        raise ValueError(f"Unknown sink type: {kind}")
