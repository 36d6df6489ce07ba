"""
Introduction act of the "rats" show.

Five drones enter one by one: Nerve bobs and twitches, Fievel zig-zags
across the stage, Romeo circles the center, Juliet spirals out and turns,
Dumbo lumbers along. Each movement starts at the drone's initial pose and
ends at its final pose.
"""
from __future__ import annotations

import math
from typing import Dict, List

from ..choreography.act import (
    Act,
    ActConfiguration,
    DronePositionConfiguration,
    MovementFactory,
)
from ..choreography.decorators import HorizontalCircleDecorator
from ..choreography.particle import Particle
from ..choreography.show import Choreography, ChoreographyView
from ..choreography.trajectory import FiniteTrajectory
from ..geometry import Point3D, Point4D, Pose

YAW = -math.pi / 2.0

DRONES = ("nerve", "romeo", "juliet", "fievel", "dumbo")

STAGE_CENTER = Point3D(3.35, 2.5, 0.0)


def _start(initial: Pose, start_delay_s: float) -> Particle:
    particle = Particle(initial)
    if start_delay_s > 0:
        particle.hover(start_delay_s)
    return particle


def nerve_movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
    """Bob up and down, twitch the head, then creep to the final spot."""
    nerve = _start(initial, start_delay_s)

    # bobbing with decreasing amplitude
    for z in (3.5, 1.0, 3.0, 1.5, 2.5, 2.0):
        nerve.move_to_point_with_velocity(Point4D(5, 3, z, YAW), 1.0)
    nerve.hover(6)
    for delta, duration in ((0.13, 3), (-0.17, 2), (0.10, 2.5), (-0.16, 1),
                            (0.08, 2.5), (-0.12, 3), (0.17, 1), (-0.15, 2)):
        nerve.rotate_to_angle(YAW + delta * 3, duration)

    nerve.move_to_point_with_velocity(Point4D(3.0, 3.55, 1.0, YAW), 1.0)
    nerve.move_to_point_with_velocity(Point4D(2, 1, 1.0, YAW), 1.0)
    nerve.move_nervously_to_point(
        Point4D(2, 1, 3.2, YAW), 0.3, 0.19, 0.0, 1.0, 3.5, 0.19, 1.5, 0.19, 4)
    for delta, duration in ((0.13, 2), (0.10, 3), (-0.16, 4), (0.08, 2),
                            (-0.12, 3), (-0.15, 2.5)):
        nerve.rotate_to_angle(YAW + delta * 3, duration)

    nerve.move_to_point_with_velocity(Point4D.from_pose(final), 0.5)
    return nerve.get_trajectory()


def fievel_movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
    """Zig-zag back and forth across the stage."""
    fievel = _start(initial, start_delay_s)
    for x, y in ((5, 2), (2, 2.5), (5, 3), (2, 3), (3.5, 2.8), (2.0, 2.8)):
        fievel.move_triangle_to_point(Point4D(x, y, 3, YAW), 1, 1)
    fievel.move_triangle_to_point(Point4D.from_pose(final), 1, 1)
    return fievel.get_trajectory()


def romeo_movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
    """Rise, fly two full circles around the stage center, land on the mark."""
    romeo = _start(initial, start_delay_s)
    romeo.move_to_point_with_velocity(Point4D(1.5, 4.5, 2.0, YAW), 1.0)

    anchor = Particle(romeo.current_pose).hover(10.0).get_trajectory()
    romeo.follow(HorizontalCircleDecorator(anchor, STAGE_CENTER, 0.2))

    romeo.move_to_point_with_velocity(Point4D.from_pose(final), 1.0)
    return romeo.get_trajectory()


def juliet_movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
    """Spiral outwards around the stage center, look back, then leave."""
    juliet = _start(initial, start_delay_s)
    juliet.move_to_point_with_velocity(Point4D(2.5, 3.0, 2.0, YAW), 1.0)

    # radius grows while the underlying path drifts away from the center
    drift = (
        Particle(juliet.current_pose)
        .move_to_point_with_velocity(Point4D(1.0, 3.55, 2.5, YAW), 0.25)
        .get_trajectory()
    )
    juliet.follow(HorizontalCircleDecorator(drift, STAGE_CENTER, 0.25))

    juliet.rotate_to_angle(YAW + math.pi, 2)
    juliet.rotate_to_angle(YAW, 2)
    juliet.move_to_point_with_velocity(Point4D.from_pose(final), 1.0)
    return juliet.get_trajectory()


def dumbo_movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
    """Slow climb, a lazy sway across, then a hesitant approach."""
    dumbo = _start(initial, start_delay_s)
    dumbo.move_to_point_with_velocity(Point4D(initial.x, initial.y, 2.5, YAW), 0.5)
    dumbo.hover(3)
    dumbo.move_triangle_to_point(Point4D(4.0, 1.0, 2.5, YAW), 0.3, 0.5, velocity=0.5)
    dumbo.move_nervously_to_point(
        Point4D.from_pose(final), 0.5, 0.4, 0.2, 0.8, 1.0, 0.4, 0.5, 0.4, 2)
    return dumbo.get_trajectory()


INTRO_MOVEMENTS: Dict[str, MovementFactory] = {
    "nerve": nerve_movement,
    "romeo": romeo_movement,
    "juliet": juliet_movement,
    "fievel": fievel_movement,
    "dumbo": dumbo_movement,
}


def create_intro_configuration(start_delay_s: float = 0.0) -> ActConfiguration:
    """Initial and final poses of the introduction act."""
    positions: List[DronePositionConfiguration] = [
        DronePositionConfiguration("nerve", Pose(6.7, 5.0, 1.0, YAW), Pose(2.0, 0.0, 3.0, YAW)),
        DronePositionConfiguration("romeo", Pose(0.0, 5.0, 1.0, YAW), Pose(6.0, 5.0, 1.0, YAW)),
        DronePositionConfiguration("juliet", Pose(0.0, 3.55, 1.0, YAW), Pose(6.7, 5.0, 1.0, YAW)),
        DronePositionConfiguration("fievel", Pose(0.0, 2.0, 1.0, YAW), Pose(3.5, 0.0, 1.5, YAW)),
        DronePositionConfiguration("dumbo", Pose(6.7, 1.0, 1.0, YAW), Pose(4.0, 3.5, 2.5, YAW)),
    ]
    return ActConfiguration("intro", tuple(positions), start_delay_s)


def create_intro_act(config: ActConfiguration | None = None) -> Act:
    """Unlocked introduction act."""
    if config is None:
        config = create_intro_configuration()
    return Act.from_configuration(config, INTRO_MOVEMENTS)


def create_intro_choreography() -> ChoreographyView:
    """Playback view of a show made of the introduction act only."""
    act = create_intro_act()
    choreo = Choreography(*DRONES)
    choreo.add_act(act.lock_and_build())
    return choreo.view()
