"""
Console sink: prints desired poses instead of flying.

Useful to eyeball a show on a machine without a radio link.
"""
from ..base import PoseSink, rad2deg
from ..geometry import Pose


class ConsoleSink(PoseSink):
    """
    Prints at most one pose per print_interval_s of show time.

    Args:
        name: Drone name used as log prefix
        print_interval_s: Minimum show time between two printed poses
        verbose: Print connect/disconnect messages
    """

    def __init__(self, name: str = "drone", print_interval_s: float = 1.0, verbose: bool = True):
        super().__init__(name=name, verbose=verbose)
        self.print_interval_s = print_interval_s
        self._last_print_s: float | None = None

    def _connect(self) -> None:
        self._last_print_s = None

    def _disconnect(self) -> None:
        pass

    def _send_pose(self, time_s: float, pose: Pose) -> None:
        if self._last_print_s is not None and time_s - self._last_print_s < self.print_interval_s:
            return
        self._last_print_s = time_s
        print(
            f"[{self.name}] {time_s:6.1f}s "
            f"x={pose.x:+6.2f} y={pose.y:+6.2f} z={pose.z:+6.2f} yaw={rad2deg(pose.yaw):+7.1f}°"
        )
