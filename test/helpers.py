"""Shared assertions for the test suite."""
from swarmdance.geometry import Pose


class PoseAssertions:
    """Mixin for unittest.TestCase."""

    def assertPoseAlmostEqual(self, actual: Pose, expected: Pose, places: int = 6):
        self.assertAlmostEqual(actual.x, expected.x, places=places, msg=f"x: {actual} != {expected}")
        self.assertAlmostEqual(actual.y, expected.y, places=places, msg=f"y: {actual} != {expected}")
        self.assertAlmostEqual(actual.z, expected.z, places=places, msg=f"z: {actual} != {expected}")
        self.assertAlmostEqual(actual.yaw, expected.yaw, places=places, msg=f"yaw: {actual} != {expected}")
