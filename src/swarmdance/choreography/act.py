"""
Acts: named show segments binding each drone to a built trajectory.

An Act collects per-drone position configurations while unlocked.
lock_and_build() builds every drone's trajectory once and returns a
LockedAct, an immutable value that is what a Choreography accepts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..geometry import Pose
from .errors import ActLockedError, ConfigurationError, LifecycleError
from .trajectory import FiniteTrajectory, check_duration

# Builds one drone's trajectory: (initial_pose, final_pose, start_delay_s)
MovementFactory = Callable[[Pose, Pose, float], FiniteTrajectory]
Movements = Union[MovementFactory, Mapping[str, MovementFactory]]


@dataclass(frozen=True)
class DronePositionConfiguration:
    """Where a drone starts and ends an act."""
    drone: str
    initial_pose: Pose
    final_pose: Pose


@dataclass(frozen=True)
class ActConfiguration:
    """Name, per-drone positions and start delay of one act."""
    name: str
    positions: Tuple[DronePositionConfiguration, ...]
    start_delay_s: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "positions", tuple(self.positions))
        check_duration(self.start_delay_s, "start delay")
        seen = set()
        for position in self.positions:
            if position.drone in seen:
                raise ConfigurationError(
                    f"Drone '{position.drone}' configured twice in act '{self.name}'"
                )
            seen.add(position.drone)

    @property
    def drones(self) -> Tuple[str, ...]:
        return tuple(position.drone for position in self.positions)


class ActState(Enum):
    """Lifecycle of an Act."""
    UNLOCKED = "unlocked"
    LOCKED = "locked"


@dataclass(frozen=True, eq=False)
class LockedAct:
    """
    Built, immutable act.

    trajectories maps drone name to its trajectory for this act; duration is
    the longest of them.
    """
    name: str
    trajectories: Mapping[str, FiniteTrajectory]
    positions: Mapping[str, DronePositionConfiguration] = field(default_factory=dict)

    def __post_init__(self):
        if not self.trajectories:
            raise ConfigurationError(f"Act '{self.name}' has no drones")
        object.__setattr__(self, "trajectories", MappingProxyType(dict(self.trajectories)))
        object.__setattr__(self, "positions", MappingProxyType(dict(self.positions)))

    @property
    def drones(self) -> Tuple[str, ...]:
        return tuple(self.trajectories)

    @property
    def duration(self) -> float:
        return max(trajectory.duration for trajectory in self.trajectories.values())

    def trajectory(self, drone: str) -> FiniteTrajectory:
        try:
            return self.trajectories[drone]
        except KeyError:
            raise ConfigurationError(f"Drone '{drone}' is not part of act '{self.name}'") from None


class Act:
    """
    Mutable act under construction.

    Args:
        name: Act name
        movements: One movement factory for every drone, or a mapping from
            drone name to its factory
        start_delay_s: Passed to every factory; drones hover this long first
    """

    def __init__(self, name: str, movements: Movements, start_delay_s: float = 0.0):
        self.name = name
        self.start_delay_s = check_duration(start_delay_s, "start delay")
        self._movements = movements
        self._positions: Dict[str, DronePositionConfiguration] = {}
        self._state = ActState.UNLOCKED
        self._locked: Optional[LockedAct] = None

    @classmethod
    def from_configuration(cls, config: ActConfiguration, movements: Movements) -> "Act":
        act = cls(config.name, movements, config.start_delay_s)
        act.add_drones(config.positions)
        return act

    @property
    def state(self) -> ActState:
        return self._state

    @property
    def drones(self) -> Tuple[str, ...]:
        return tuple(self._positions)

    @property
    def positions(self) -> Mapping[str, DronePositionConfiguration]:
        return MappingProxyType(self._positions)

    def add_drone(self, config: DronePositionConfiguration) -> "Act":
        """
        Add a drone's initial and final pose.

        Raises:
            ActLockedError: if the act is already locked
            ConfigurationError: if the drone is already in this act
        """
        if self._state is ActState.LOCKED:
            raise ActLockedError(f"Act '{self.name}' is locked, cannot add '{config.drone}'")
        if config.drone in self._positions:
            raise ConfigurationError(f"Drone '{config.drone}' configured twice in act '{self.name}'")
        self._positions[config.drone] = config
        return self

    def add_drones(self, configs: Iterable[DronePositionConfiguration]) -> "Act":
        for config in configs:
            self.add_drone(config)
        return self

    def _movement_for(self, drone: str) -> MovementFactory:
        if callable(self._movements):
            return self._movements
        try:
            return self._movements[drone]
        except KeyError:
            raise ConfigurationError(
                f"Act '{self.name}' has no movement for drone '{drone}'"
            ) from None

    def lock_and_build(self) -> LockedAct:
        """
        Build every drone's trajectory and lock the act.

        Returns:
            The LockedAct, also available afterwards as act.locked

        Raises:
            ActLockedError: if called a second time
            ConfigurationError: if the act is empty or a drone has no movement
        """
        if self._state is ActState.LOCKED:
            raise ActLockedError(f"Act '{self.name}' is already locked")
        if not self._positions:
            raise ConfigurationError(f"Act '{self.name}' has no drones")

        trajectories: Dict[str, FiniteTrajectory] = {}
        for drone, position in self._positions.items():
            factory = self._movement_for(drone)
            trajectories[drone] = factory(position.initial_pose, position.final_pose, self.start_delay_s)

        self._locked = LockedAct(self.name, trajectories, dict(self._positions))
        self._state = ActState.LOCKED
        return self._locked

    @property
    def locked(self) -> LockedAct:
        """The built act; only available after lock_and_build()."""
        if self._locked is None:
            raise LifecycleError(f"Act '{self.name}' is not locked yet")
        return self._locked

    def __repr__(self) -> str:
        return f"Act({self.name!r}, drones={len(self._positions)}, state={self._state.value})"
