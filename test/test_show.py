import unittest

from helpers import PoseAssertions

from swarmdance.geometry import Point4D, Pose
from swarmdance.choreography import (
    Act,
    Choreography,
    ChoreographyClosedError,
    ConfigurationError,
    DronePositionConfiguration,
    LifecycleError,
    Particle,
)


def straight(initial, final, start_delay_s):
    return (
        Particle(initial)
        .move_to_point_with_velocity(Point4D.from_pose(final), 1.0)
        .get_trajectory()
    )


def locked_act(name, *positions):
    act = Act(name, straight)
    for drone, initial, final in positions:
        act.add_drone(DronePositionConfiguration(drone, initial, final))
    return act.lock_and_build()


class TestChoreography(PoseAssertions, unittest.TestCase):
    def setUp(self):
        # act A lasts 5s, act B 3s
        self.act_a = locked_act("a", ("d", Pose(0, 0, 0, 0), Pose(5, 0, 0, 0)))
        self.act_b = locked_act("b", ("d", Pose(5, 0, 0, 0), Pose(5, 3, 0, 0)))
        choreo = Choreography("d")
        choreo.add_act(self.act_a).add_act(self.act_b)
        self.view = choreo.view()

    def test_duration_is_sum_of_acts(self):
        self.assertAlmostEqual(self.view.duration, 8.0)
        self.assertAlmostEqual(self.view.trajectory("d").duration, 8.0)

    def test_second_act_starts_after_first(self):
        act_b = self.act_b.trajectory("d")
        self.assertEqual(self.view.desired_position("d", 5.0), act_b.desired_position(0.0))
        self.assertPoseAlmostEqual(self.view.desired_position("d", 6.0), act_b.desired_position(1.0))
        self.assertPoseAlmostEqual(self.view.desired_position("d", 6.0), Pose(5, 1, 0, 0))

    def test_act_slots(self):
        names = [slot.name for slot in self.view.acts]
        self.assertEqual(names, ["a", "b"])
        self.assertAlmostEqual(self.view.acts[1].start_s, 5.0)
        self.assertAlmostEqual(self.view.acts[1].end_s, 8.0)
        self.assertEqual(self.view.act_at(4.9).name, "a")
        self.assertEqual(self.view.act_at(5.0).name, "b")
        self.assertEqual(self.view.act_at(100).name, "b")
        self.assertEqual(self.view.act_at(-1).name, "a")

    def test_view_access(self):
        self.assertEqual(list(self.view), ["d"])
        self.assertEqual(len(self.view), 1)
        self.assertIs(self.view["d"], self.view.trajectory("d"))
        with self.assertRaises(TypeError):
            self.view.trajectories["e"] = self.view["d"]
        with self.assertRaises(ConfigurationError):
            self.view.trajectory("e")


class TestChoreographyAssembly(unittest.TestCase):
    def test_short_drones_hold_until_act_ends(self):
        act = locked_act(
            "uneven",
            ("fast", Pose(0, 0, 0, 0), Pose(1, 0, 0, 0)),
            ("slow", Pose(0, 1, 0, 0), Pose(4, 1, 0, 0)),
        )
        follow_up = locked_act(
            "next",
            ("fast", Pose(1, 0, 0, 0), Pose(1, 1, 0, 0)),
            ("slow", Pose(4, 1, 0, 0), Pose(4, 2, 0, 0)),
        )
        choreo = Choreography("fast", "slow").add_act(act).add_act(follow_up)
        view = choreo.view()
        self.assertAlmostEqual(view.duration, 5.0)
        self.assertEqual(view.desired_position("fast", 3.0), Pose(1, 0, 0, 0))
        self.assertAlmostEqual(view.desired_position("fast", 4.5).y, 0.5)
        self.assertAlmostEqual(view.trajectory("fast").duration, view.trajectory("slow").duration)

    def test_roster_mismatch(self):
        choreo = Choreography("a", "b")
        only_a = locked_act("x", ("a", Pose(0, 0, 0, 0), Pose(1, 0, 0, 0)))
        with self.assertRaises(ConfigurationError):
            choreo.add_act(only_a)
        extra = locked_act(
            "y",
            ("a", Pose(0, 0, 0, 0), Pose(1, 0, 0, 0)),
            ("b", Pose(0, 0, 0, 0), Pose(1, 0, 0, 0)),
            ("c", Pose(0, 0, 0, 0), Pose(1, 0, 0, 0)),
        )
        with self.assertRaises(ConfigurationError):
            choreo.add_act(extra)
        self.assertEqual(choreo.acts, ())

    def test_accepts_locked_act_object(self):
        act = Act("x", straight).add_drone(DronePositionConfiguration("a", Pose(0, 0, 0), Pose(1, 0, 0)))
        choreo = Choreography("a")
        with self.assertRaises(LifecycleError):
            choreo.add_act(act)
        act.lock_and_build()
        choreo.add_act(act)
        self.assertEqual(len(choreo.acts), 1)

    def test_closed_after_view(self):
        act = locked_act("x", ("a", Pose(0, 0, 0, 0), Pose(1, 0, 0, 0)))
        choreo = Choreography("a").add_act(act)
        view = choreo.view()
        self.assertTrue(choreo.closed)
        self.assertIs(choreo.view(), view)
        with self.assertRaises(ChoreographyClosedError):
            choreo.add_act(act)

    def test_invalid_roster(self):
        with self.assertRaises(ConfigurationError):
            Choreography()
        with self.assertRaises(ConfigurationError):
            Choreography("a", "a")

    def test_no_acts(self):
        with self.assertRaises(ConfigurationError):
            Choreography("a").view()

    def test_single_act_is_not_wrapped(self):
        act = locked_act("solo", ("a", Pose(0, 0, 0, 0), Pose(2, 0, 0, 0)))
        view = Choreography("a").add_act(act).view()
        self.assertIs(view.trajectory("a"), act.trajectory("a"))

    def test_same_act_twice(self):
        act = locked_act("loop", ("a", Pose(0, 0, 0, 0), Pose(2, 0, 0, 0)))
        view = Choreography("a").add_act(act).add_act(act).view()
        self.assertAlmostEqual(view.duration, 4.0)
        # no continuity enforcement across acts: the drone jumps back
        self.assertEqual(view.desired_position("a", 2.0), Pose(0, 0, 0, 0))


if __name__ == '__main__':
    unittest.main()
