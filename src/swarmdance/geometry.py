"""
Point and pose value types.

Point3D / Point4D carry the vector algebra used while building trajectories.
Pose is the position + yaw value exchanged with flight control.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Pose:
    """Position (meters) and yaw (radians) handed to flight control."""
    x: float
    y: float
    z: float
    yaw: float = 0.0

    def to_point(self) -> "Point4D":
        return Point4D(self.x, self.y, self.z, self.yaw)


@dataclass(frozen=True)
class Point3D:
    """A point in 3D space."""
    x: float
    y: float
    z: float

    @staticmethod
    def origin() -> "Point3D":
        return Point3D(0.0, 0.0, 0.0)

    @staticmethod
    def project(point: "Point4D | Pose") -> "Point3D":
        """Drop the yaw of a 4D point or pose."""
        return Point3D(point.x, point.y, point.z)

    @staticmethod
    def distance(p0: "Point3D", p1: "Point3D") -> float:
        """Euclidean distance between two points."""
        return math.sqrt(
            (p0.x - p1.x) ** 2 + (p0.y - p1.y) ** 2 + (p0.z - p1.z) ** 2
        )

    @staticmethod
    def point_at_angle(center: "Point3D", radius: float, angle: float) -> "Point3D":
        """
        Point on the horizontal circle of given radius around center.

        Angle 0 points along +y, pi/2 along +x.
        """
        return Point3D(
            center.x + radius * math.sin(angle),
            center.y + radius * math.cos(angle),
            center.z,
        )

    def plus(self, other: "Point3D") -> "Point3D":
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def minus(self, other: "Point3D") -> "Point3D":
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)


@dataclass(frozen=True)
class Point4D:
    """A point in 3D space with a yaw angle as fourth component."""
    x: float
    y: float
    z: float
    yaw: float = 0.0

    @staticmethod
    def origin() -> "Point4D":
        return Point4D(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_point3d(point: Point3D, yaw: float = 0.0) -> "Point4D":
        return Point4D(point.x, point.y, point.z, yaw)

    @staticmethod
    def from_pose(pose: Pose) -> "Point4D":
        return Point4D(pose.x, pose.y, pose.z, pose.yaw)

    @staticmethod
    def distance(p0: "Point4D", p1: "Point4D") -> float:
        """Euclidean distance between the positions, yaw ignored."""
        return Point3D.distance(Point3D.project(p0), Point3D.project(p1))

    @staticmethod
    def point_at_angle(center: "Point4D", radius: float, angle: float) -> "Point4D":
        """Same as Point3D.point_at_angle, keeping the center's yaw."""
        return Point4D(
            center.x + radius * math.sin(angle),
            center.y + radius * math.cos(angle),
            center.z,
            center.yaw,
        )

    def plus(self, other: "Point4D") -> "Point4D":
        return Point4D(
            self.x + other.x,
            self.y + other.y,
            self.z + other.z,
            self.yaw + other.yaw,
        )

    def minus(self, other: "Point4D") -> "Point4D":
        return Point4D(
            self.x - other.x,
            self.y - other.y,
            self.z - other.z,
            self.yaw - other.yaw,
        )

    def to_pose(self) -> Pose:
        return Pose(self.x, self.y, self.z, self.yaw)


def horizontal_distance(p0: "Point3D | Point4D | Pose", p1: "Point3D | Point4D | Pose") -> float:
    """Distance in the xy plane, altitude and yaw ignored."""
    return math.hypot(p0.x - p1.x, p0.y - p1.y)


def poses_close(a: Pose, b: Pose, tolerance: float = 1e-6) -> bool:
    """True when position and yaw of both poses agree within tolerance."""
    return (
        abs(a.x - b.x) <= tolerance
        and abs(a.y - b.y) <= tolerance
        and abs(a.z - b.z) <= tolerance
        and abs(a.yaw - b.yaw) <= tolerance
    )
