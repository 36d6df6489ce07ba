import math
import unittest

from helpers import PoseAssertions

from swarmdance.geometry import Point4D, Pose
from swarmdance.choreography import (
    ConfigurationError,
    HorizontalCircleDecorator,
    Particle,
    SequenceTrajectory,
    StaticTrajectory,
)


def assert_continuous(test, trajectory, eps=1e-6):
    """Sample both sides of every part boundary of a sequence."""
    for boundary in trajectory.offsets[1:]:
        before = trajectory.desired_position(boundary - 1e-9)
        at = trajectory.desired_position(boundary)
        with test.subTest(boundary=boundary):
            test.assertLess(abs(before.x - at.x), eps)
            test.assertLess(abs(before.y - at.y), eps)
            test.assertLess(abs(before.z - at.z), eps)
            test.assertLess(abs(before.yaw - at.yaw), eps)


class TestParticle(PoseAssertions, unittest.TestCase):
    def test_duration_is_sum_of_segments(self):
        p = Particle(Pose(0, 0, 1, 0))
        p.hover(2)
        p.move_to_point_with_velocity(Point4D(4, 0, 1, 0), 2.0)
        p.rotate_to_angle(1.0, 3)
        self.assertAlmostEqual(p.get_trajectory().duration, 7.0)
        self.assertAlmostEqual(p.current_time, 7.0)
        self.assertEqual(len(p), 3)

    def test_segments_are_continuous(self):
        p = Particle(Pose(0, 0, 1, 0))
        p.hover(1.5)
        p.move_to_point_with_velocity(Point4D(3, 1, 2, 0.5), 1.3)
        p.move_triangle_to_point(Point4D(0, 4, 2, 0.5), 0.7, 0.9)
        p.move_nervously_to_point(Point4D(0, 4, 4, 1.0), 0.3, 0.19, 0.0, 1.0, 3.5, 0.19, 1.5, 0.19, 3)
        p.rotate_to_angle(-1.0, 2.5)
        p.move_to_point_with_velocity(Point4D(1, 1, 1, -1.0), 0.7)
        trajectory = p.get_trajectory()
        assert_continuous(self, trajectory)
        # the nervous move is a sequence of its own
        assert_continuous(self, p.segments[3])

    def test_starts_at_initial_and_ends_at_last_target(self):
        p = Particle(Pose(1, 2, 3, 0.1))
        p.move_to_point_with_velocity(Point4D(4, 6, 3, 0.3), 1.0)
        p.move_triangle_to_point(Point4D(0, 0, 1, 0.2), 0.5, 2.0)
        trajectory = p.get_trajectory()
        self.assertPoseAlmostEqual(trajectory.desired_position(0), Pose(1, 2, 3, 0.1))
        self.assertPoseAlmostEqual(trajectory.desired_position(trajectory.duration), Pose(0, 0, 1, 0.2))

    def test_current_pose_follows_last_segment(self):
        p = Particle(Pose(0, 0, 0, 0))
        self.assertEqual(p.current_pose, Point4D(0, 0, 0, 0))
        p.move_to_point_with_velocity(Point4D(1, 0, 0, 0.5), 1.0)
        self.assertEqual(p.current_pose, Point4D(1, 0, 0, 0.5))
        p.rotate_to_angle(2.0, 1.0)
        self.assertEqual(p.current_pose, Point4D(1, 0, 0, 2.0))

    def test_move_interpolates_position_and_yaw(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.move_to_point_with_velocity(Point4D(2, 0, 0, 1.0), 1.0)
        trajectory = p.get_trajectory()
        self.assertAlmostEqual(trajectory.duration, 2.0)
        self.assertPoseAlmostEqual(trajectory.desired_position(1.0), Pose(1, 0, 0, 0.5))

    def test_zero_distance_move_has_zero_duration(self):
        p = Particle(Pose(1, 1, 1, 0))
        p.hover(1)
        p.move_to_point_with_velocity(Point4D(1, 1, 1, 0), 2.0)
        self.assertEqual(len(p), 2)
        self.assertAlmostEqual(p.get_trajectory().duration, 1.0)

    def test_boundary_resolves_to_later_segment(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.hover(1)
        # zero-length move that only changes yaw
        p.move_to_point_with_velocity(Point4D(0, 0, 0, 1.0), 1.0)
        p.hover(1)
        trajectory = p.get_trajectory()
        self.assertEqual(trajectory.desired_position(0.999).yaw, 0.0)
        self.assertEqual(trajectory.desired_position(1.0).yaw, 1.0)

    def test_out_of_range_times_are_clamped(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.move_to_point_with_velocity(Point4D(3, 0, 0, 0), 1.0)
        trajectory = p.get_trajectory()
        start = trajectory.desired_position(0)
        end = trajectory.desired_position(trajectory.duration)
        self.assertEqual(trajectory.desired_position(-5), start)
        self.assertEqual(trajectory.desired_position(1e12), end)
        self.assertEqual(trajectory.desired_position(float("nan")), start)
        self.assertEqual(trajectory.desired_position(float("inf")), end)
        self.assertEqual(trajectory.desired_position(float("-inf")), start)

    def test_trajectory_is_a_snapshot(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.hover(2)
        trajectory = p.get_trajectory()
        p.move_to_point_with_velocity(Point4D(5, 0, 0, 0), 1.0)
        self.assertAlmostEqual(trajectory.duration, 2.0)
        self.assertEqual(trajectory.desired_position(10), Pose(0, 0, 0, 0))

    def test_empty_particle_yields_static_trajectory(self):
        trajectory = Particle(Pose(1, 2, 3, 4)).get_trajectory()
        self.assertIsInstance(trajectory, StaticTrajectory)
        self.assertEqual(trajectory.duration, 0.0)
        self.assertEqual(trajectory.desired_position(3), Pose(1, 2, 3, 4))

    def test_invalid_parameters_are_rejected(self):
        p = Particle(Pose(0, 0, 0, 0))
        with self.assertRaises(ConfigurationError):
            p.hover(-1)
        with self.assertRaises(ConfigurationError):
            p.move_to_point_with_velocity(Point4D(1, 0, 0, 0), 0.0)
        with self.assertRaises(ConfigurationError):
            p.move_to_point_with_velocity(Point4D(1, 0, 0, 0), -1.0)
        with self.assertRaises(ConfigurationError):
            p.move_triangle_to_point(Point4D(1, 0, 0, 0), 1.0, 0.0)
        with self.assertRaises(ConfigurationError):
            p.rotate_to_angle(1.0, 0.0)
        with self.assertRaises(ConfigurationError):
            p.rotate_to_angle(1.0, -2.0)
        # a bad call leaves the particle untouched
        self.assertEqual(len(p), 0)

    def test_configuration_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Particle(Pose(0, 0, 0, 0)).hover(float("nan"))


class TestRotation(PoseAssertions, unittest.TestCase):
    def test_rotation_keeps_position(self):
        p = Particle(Pose(1, 2, 3, 0))
        p.rotate_to_angle(math.pi, 2.0)
        trajectory = p.get_trajectory()
        self.assertPoseAlmostEqual(trajectory.desired_position(1.0), Pose(1, 2, 3, math.pi / 2))
        self.assertPoseAlmostEqual(trajectory.desired_position(2.0), Pose(1, 2, 3, math.pi))

    def test_zero_duration_without_yaw_change_is_allowed(self):
        p = Particle(Pose(0, 0, 0, 0.5))
        p.rotate_to_angle(0.5, 0.0)
        self.assertEqual(p.get_trajectory().duration, 0.0)


class TestTriangleMove(PoseAssertions, unittest.TestCase):
    def test_lateral_deviation(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.move_triangle_to_point(Point4D(4, 0, 0, 0), 0.5, 1.0)
        trajectory = p.get_trajectory()
        self.assertAlmostEqual(trajectory.duration, 4.0)
        self.assertPoseAlmostEqual(trajectory.desired_position(0.25), Pose(0.25, 0.5, 0, 0))
        self.assertPoseAlmostEqual(trajectory.desired_position(0.5), Pose(0.5, 0.0, 0, 0))
        self.assertPoseAlmostEqual(trajectory.desired_position(0.75), Pose(0.75, -0.5, 0, 0))
        self.assertPoseAlmostEqual(trajectory.desired_position(4.0), Pose(4, 0, 0, 0))

    def test_duration_rounds_up_to_whole_periods(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.move_triangle_to_point(Point4D(2.5, 0, 0, 0), 1.0, 1.0)
        self.assertAlmostEqual(p.get_trajectory().duration, 3.0)

    def test_velocity_scales_duration(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.move_triangle_to_point(Point4D(2.7, 0, 0, 0), 0.3, 0.5, velocity=0.5)
        # 5.4s of travel at 0.5 Hz rounds up to 3 periods
        self.assertAlmostEqual(p.get_trajectory().duration, 6.0)

    def test_vertical_path_deviates_along_x(self):
        p = Particle(Pose(0, 0, 0, 0))
        p.move_triangle_to_point(Point4D(0, 0, 2, 0), 1.0, 1.0)
        trajectory = p.get_trajectory()
        self.assertPoseAlmostEqual(trajectory.desired_position(0.25), Pose(1.0, 0, 0.25, 0))

    def test_zero_distance(self):
        p = Particle(Pose(1, 1, 1, 0))
        p.move_triangle_to_point(Point4D(1, 1, 1, 0), 1.0, 1.0)
        self.assertEqual(p.get_trajectory().duration, 0.0)


class TestNervousMove(PoseAssertions, unittest.TestCase):
    def setUp(self):
        self.particle = Particle(Pose(0, 0, 0, 0))
        self.particle.move_nervously_to_point(Point4D(4, 0, 0, 0), 1, 1, 0, 1, 1, 0, 0, 2, 2)
        self.trajectory = self.particle.get_trajectory()

    def test_duration(self):
        # per leg: pauses 2s + dashes 4s
        self.assertAlmostEqual(self.trajectory.duration, 12.0)
        self.assertEqual(len(self.particle), 1)

    def test_stop_and_go_positions(self):
        self.assertAlmostEqual(self.trajectory.desired_position(0.5).x, 0.0)
        self.assertAlmostEqual(self.trajectory.desired_position(2.0).x, 0.5)
        self.assertAlmostEqual(self.trajectory.desired_position(3.5).x, 1.0)
        self.assertAlmostEqual(self.trajectory.desired_position(6.0).x, 2.0)
        self.assertAlmostEqual(self.trajectory.desired_position(6.5).x, 2.0)

    def test_ends_exactly_on_target(self):
        self.assertEqual(self.trajectory.desired_position(12.0), Pose(4, 0, 0, 0))
        self.assertEqual(self.particle.current_pose, Point4D(4, 0, 0, 0))

    def test_invalid_shape(self):
        p = Particle(Pose(0, 0, 0, 0))
        with self.assertRaises(ConfigurationError):
            p.move_nervously_to_point(Point4D(1, 0, 0, 0), 1, 0, 1, 0, 1, 0, 1, 0, 2)
        with self.assertRaises(ConfigurationError):
            p.move_nervously_to_point(Point4D(1, 0, 0, 0), 1, 1, 1, 1, 1, 1, 1, 1, 0)
        with self.assertRaises(ConfigurationError):
            p.move_nervously_to_point(Point4D(1, 0, 0, 0), -1, 1, 1, 1, 1, 1, 1, 1, 1)


class TestFollow(PoseAssertions, unittest.TestCase):
    def test_follow_appends_trajectory(self):
        p = Particle(Pose(0, 2, 1, 0))
        anchor = Particle(p.current_pose).hover(4).get_trajectory()
        p.follow(HorizontalCircleDecorator(anchor, Point4D(0, 0, 0, 0), 0.25))
        p.move_to_point_with_velocity(Point4D(0, 0, 1, 0), 1.0)
        trajectory = p.get_trajectory()
        self.assertIsInstance(trajectory, SequenceTrajectory)
        self.assertAlmostEqual(trajectory.duration, 6.0)
        self.assertPoseAlmostEqual(trajectory.desired_position(1.0), Pose(2, 0, 1, 0))
        assert_continuous(self, trajectory)

    def test_follow_rejects_jump(self):
        p = Particle(Pose(0, 0, 0, 0))
        elsewhere = Particle(Pose(1, 0, 0, 0)).hover(1).get_trajectory()
        with self.assertRaises(ConfigurationError):
            p.follow(elsewhere)


if __name__ == '__main__':
    unittest.main()
