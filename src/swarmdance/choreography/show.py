"""
Choreography: an ordered sequence of locked acts for a fixed drone roster.

Each drone's show trajectory is the concatenation of its per-act
trajectories. Every act lasts as long as its longest drone; drones that
finish early hold their last pose until the next act starts.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..geometry import Pose
from .act import Act, LockedAct
from .errors import ChoreographyClosedError, ConfigurationError, LifecycleError
from .interpolation import find_segment
from .trajectory import FiniteTrajectory, HoldTrajectory, clamp_time, concatenate


@dataclass(frozen=True)
class ActSlot:
    """Where an act sits on the show timeline."""
    name: str
    start_s: float
    duration_s: float

    @property
    def end_s(self) -> float:
        return self.start_s + self.duration_s


class Choreography:
    """
    Collects locked acts for a fixed roster.

    Acts can be added until view() is called; the view is then fixed.

    Usage:
        choreo = Choreography("nerve", "romeo")
        choreo.add_act(intro.lock_and_build())
        view = choreo.view()
        pose = view.desired_position("nerve", 12.5)
    """

    def __init__(self, *drones: str):
        if not drones:
            raise ConfigurationError("A choreography needs at least one drone")
        if len(set(drones)) != len(drones):
            raise ConfigurationError(f"Duplicate drone in roster: {list(drones)}")
        self._drones: Tuple[str, ...] = tuple(drones)
        self._acts: List[LockedAct] = []
        self._view: Optional[ChoreographyView] = None

    @property
    def drones(self) -> Tuple[str, ...]:
        return self._drones

    @property
    def acts(self) -> Tuple[LockedAct, ...]:
        return tuple(self._acts)

    @property
    def closed(self) -> bool:
        return self._view is not None

    def add_act(self, act: Union[LockedAct, Act]) -> "Choreography":
        """
        Append a locked act.

        Raises:
            ChoreographyClosedError: if view() was already called
            LifecycleError: if an Act was passed that is not locked yet
            ConfigurationError: if the act's drones differ from the roster
        """
        if self._view is not None:
            raise ChoreographyClosedError("Choreography is already in playback, cannot add acts")
        if isinstance(act, Act):
            act = act.locked
        if not isinstance(act, LockedAct):
            raise LifecycleError(f"Expected a locked act, got {type(act).__name__}")

        act_drones = set(act.drones)
        roster = set(self._drones)
        unknown = act_drones - roster
        missing = roster - act_drones
        if unknown or missing:
            problems = []
            if unknown:
                problems.append(f"not in roster: {', '.join(sorted(unknown))}")
            if missing:
                problems.append(f"missing: {', '.join(sorted(missing))}")
            raise ConfigurationError(f"Act '{act.name}' does not match roster ({'; '.join(problems)})")

        self._acts.append(act)
        return self

    def view(self) -> "ChoreographyView":
        """
        Build (once) and return the read-only playback view.

        After this call no more acts can be added.
        """
        if self._view is None:
            if not self._acts:
                raise ConfigurationError("Choreography has no acts")
            self._view = ChoreographyView(self._drones, tuple(self._acts))
        return self._view


class ChoreographyView:
    """
    Read-only playback view of a choreography.

    trajectory(drone) is that drone's full show timeline; all timelines have
    the same duration.
    """

    def __init__(self, drones: Tuple[str, ...], acts: Tuple[LockedAct, ...]):
        self._drones = drones

        slots: List[ActSlot] = []
        start = 0.0
        for act in acts:
            slots.append(ActSlot(act.name, start, act.duration))
            start += act.duration
        self._slots: Tuple[ActSlot, ...] = tuple(slots)
        self._slot_starts: Tuple[float, ...] = tuple(slot.start_s for slot in slots)

        trajectories: Dict[str, FiniteTrajectory] = {}
        for drone in drones:
            parts = [_padded(act.trajectory(drone), act.duration) for act in acts]
            trajectories[drone] = concatenate(parts)
        self._trajectories: Mapping[str, FiniteTrajectory] = MappingProxyType(trajectories)
        self._duration = start

    @property
    def drones(self) -> Tuple[str, ...]:
        return self._drones

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def acts(self) -> Tuple[ActSlot, ...]:
        return self._slots

    @property
    def trajectories(self) -> Mapping[str, FiniteTrajectory]:
        return self._trajectories

    def trajectory(self, drone: str) -> FiniteTrajectory:
        try:
            return self._trajectories[drone]
        except KeyError:
            raise ConfigurationError(f"Drone '{drone}' is not in this choreography") from None

    def desired_position(self, drone: str, time_s: float) -> Pose:
        return self.trajectory(drone).desired_position(time_s)

    def act_at(self, time_s: float) -> ActSlot:
        """Act playing at the given show time (clamped to the show)."""
        index, _ = find_segment(self._slot_starts, clamp_time(time_s, self._duration))
        return self._slots[index]

    def __getitem__(self, drone: str) -> FiniteTrajectory:
        return self.trajectory(drone)

    def __iter__(self) -> Iterator[str]:
        return iter(self._drones)

    def __len__(self) -> int:
        return len(self._drones)

    def __repr__(self) -> str:
        return f"ChoreographyView(drones={len(self._drones)}, acts={len(self._slots)}, duration={self._duration:.1f}s)"


def _padded(trajectory: FiniteTrajectory, duration_s: float) -> FiniteTrajectory:
    if trajectory.duration >= duration_s:
        return trajectory
    return HoldTrajectory(trajectory, duration_s)
