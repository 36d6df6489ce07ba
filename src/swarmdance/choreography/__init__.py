"""
Choreography engine for drone swarm shows.

Usage:
    from swarmdance import Pose, Point4D
    from swarmdance.choreography import Act, Choreography, DronePositionConfiguration, Particle

    def hop(initial, final, start_delay_s):
        p = Particle(initial)
        p.hover(start_delay_s)
        p.move_to_point_with_velocity(Point4D(0, 0, 2, 0), 1.0)
        p.move_to_point_with_velocity(Point4D.from_pose(final), 1.0)
        return p.get_trajectory()

    act = Act("hop", hop)
    act.add_drone(DronePositionConfiguration("a", Pose(1, 0, 0), Pose(1, 0, 0)))
    choreo = Choreography("a")
    choreo.add_act(act.lock_and_build())
    view = choreo.view()
    view.desired_position("a", 1.5)

    # From a show file:
    view = build_choreography(load_show("show.json"))

CLI:
    python -m swarmdance.choreography --show show.json --dry-run
    python -m swarmdance.choreography --builtin intro --export intro.json
"""
from .errors import (
    ChoreographyError,
    ConfigurationError,
    LifecycleError,
    ActLockedError,
    ChoreographyClosedError,
)
from .trajectory import (
    FiniteTrajectory,
    StaticTrajectory,
    SequenceTrajectory,
    HoldTrajectory,
    clamp_time,
    concatenate,
)
from .interpolation import (
    linear_interpolate,
    interpolate_points,
    triangle_wave,
)
from .particle import (
    Particle,
    LinearSegment,
    TriangleSegment,
    RotationSegment,
)
from .decorators import (
    TrajectoryDecorator,
    HorizontalCircleDecorator,
)
from .act import (
    Act,
    ActConfiguration,
    ActState,
    DronePositionConfiguration,
    LockedAct,
    MovementFactory,
)
from .show import (
    ActSlot,
    Choreography,
    ChoreographyView,
)
from .script import (
    ActEntry,
    ShowConfiguration,
    build_choreography,
    default_movements,
    hover_movement,
    linear_movement,
    load_show,
    parse_pose,
    parse_show,
)
from .sampling import (
    sample_times,
    sample_trajectory,
    sample_choreography,
    format_summary,
    to_json,
)
from .runner import (
    run_trajectory,
    run_choreography,
)

__all__ = [
    # Errors
    "ChoreographyError",
    "ConfigurationError",
    "LifecycleError",
    "ActLockedError",
    "ChoreographyClosedError",
    # Trajectories
    "FiniteTrajectory",
    "StaticTrajectory",
    "SequenceTrajectory",
    "HoldTrajectory",
    "clamp_time",
    "concatenate",
    "linear_interpolate",
    "interpolate_points",
    "triangle_wave",
    # Building
    "Particle",
    "LinearSegment",
    "TriangleSegment",
    "RotationSegment",
    "TrajectoryDecorator",
    "HorizontalCircleDecorator",
    # Acts and choreography
    "Act",
    "ActConfiguration",
    "ActState",
    "DronePositionConfiguration",
    "LockedAct",
    "MovementFactory",
    "ActSlot",
    "Choreography",
    "ChoreographyView",
    # Loading
    "ActEntry",
    "ShowConfiguration",
    "build_choreography",
    "default_movements",
    "hover_movement",
    "linear_movement",
    "load_show",
    "parse_pose",
    "parse_show",
    # Sampling
    "sample_times",
    "sample_trajectory",
    "sample_choreography",
    "format_summary",
    "to_json",
    # Playback
    "run_trajectory",
    "run_choreography",
]
