#!/usr/bin/env python3
"""
Swarm Show Demo

Builds a two-act show for three drones and plays it to the console.
"""
import math

from swarmdance import Point3D, Point4D, Pose, create_sink
from swarmdance.choreography import (
    Act,
    Choreography,
    DronePositionConfiguration,
    HorizontalCircleDecorator,
    Particle,
    run_choreography,
)

CENTER = Point3D(0.0, 0.0, 0.0)


def rise(initial, final, start_delay_s):
    p = Particle(initial)
    p.hover(start_delay_s)
    p.move_to_point_with_velocity(Point4D.from_pose(final), 0.5)
    return p.get_trajectory()


def orbit(initial, final, start_delay_s):
    p = Particle(initial)
    anchor = Particle(initial).hover(10.0).get_trajectory()
    p.follow(HorizontalCircleDecorator(anchor, CENTER, 0.1))
    p.rotate_to_angle(final.yaw, 2.0)
    return p.get_trajectory()


def main():
    print("=== Swarm Show Demo ===")
    print()

    drones = ["alpha", "bravo", "charlie"]
    takeoff = Act("takeoff", rise)
    circle = Act("circle", orbit)
    for i, drone in enumerate(drones):
        angle = 2 * math.pi * i / len(drones)
        ground = Pose(2 * math.sin(angle), 2 * math.cos(angle), 0.0, 0.0)
        air = Pose(ground.x, ground.y, 2.0, 0.0)
        takeoff.add_drone(DronePositionConfiguration(drone, ground, air))
        circle.add_drone(DronePositionConfiguration(drone, air, Pose(air.x, air.y, air.z, math.pi)))

    choreo = Choreography(*drones)
    choreo.add_act(takeoff.lock_and_build())
    choreo.add_act(circle.lock_and_build())
    view = choreo.view()

    sinks = {drone: create_sink("console", name=drone) for drone in drones}
    for sink in sinks.values():
        sink.connect()
    try:
        run_choreography(sinks, view, rate_hz=10)
    finally:
        for sink in sinks.values():
            sink.disconnect()

    print()
    print("=== Demo Complete ===")


if __name__ == "__main__":
    main()
