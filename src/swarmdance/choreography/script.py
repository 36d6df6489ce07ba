"""
Show file parsing.

A show file is JSON describing the roster, the acts in order, and for each
act the movement to use plus every drone's initial and final pose:

{
  "name": "rats",
  "drones": ["nerve", "romeo"],
  "acts": [
    {
      "name": "intro",
      "movement": "intro",
      "start_delay_s": 0.0,
      "positions": {
        "nerve": {"initial": [6.7, 5.0, 1.0, -1.5708], "final": [2.0, 0.0, 3.0, -1.5708]},
        "romeo": {"initial": {"x": 0, "y": 5, "z": 1, "yaw_deg": -90}, "final": [6, 5, 1, -1.5708]}
      }
    }
  ]
}
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from ..base import deg2rad
from ..geometry import Point4D, Pose, poses_close
from .act import Act, ActConfiguration, DronePositionConfiguration, MovementFactory, Movements
from .errors import ConfigurationError
from .particle import Particle
from .show import Choreography, ChoreographyView
from .trajectory import FiniteTrajectory

# Cross-act pose mismatch (meters / radians) reported as a warning
CONTINUITY_TOLERANCE = 1e-3

DEFAULT_VELOCITY = 1.0
DEFAULT_HOVER_S = 1.0


@dataclass(frozen=True)
class ActEntry:
    """One act of a show file: its configuration and movement name."""
    config: ActConfiguration
    movement: str


@dataclass
class ShowConfiguration:
    """Complete show: roster + acts in order."""
    name: str
    drones: Tuple[str, ...]
    acts: List[ActEntry]
    warnings: List[str] = field(default_factory=list)


def linear_movement(velocity: float = DEFAULT_VELOCITY) -> MovementFactory:
    """Movement factory flying straight from initial to final pose."""

    def movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
        particle = Particle(initial)
        if start_delay_s > 0:
            particle.hover(start_delay_s)
        particle.move_to_point_with_velocity(Point4D.from_pose(final), velocity)
        return particle.get_trajectory()

    return movement


def hover_movement(duration_s: float = DEFAULT_HOVER_S) -> MovementFactory:
    """
    Movement factory holding the initial pose for start_delay_s + duration_s.

    The drone does not move, so the final pose must equal the initial one
    (within CONTINUITY_TOLERANCE).
    """

    def movement(initial: Pose, final: Pose, start_delay_s: float = 0.0) -> FiniteTrajectory:
        if not poses_close(initial, final, CONTINUITY_TOLERANCE):
            raise ConfigurationError(
                f"hover: final pose {final} differs from initial pose {initial}"
            )
        return Particle(initial).hover(start_delay_s + duration_s).get_trajectory()

    return movement


def default_movements() -> Dict[str, Movements]:
    """Movements available to show files by name."""
    from ..shows.intro import INTRO_MOVEMENTS

    return {
        "linear": linear_movement(),
        "hover": hover_movement(),
        "intro": INTRO_MOVEMENTS,
    }


def parse_pose(value: Any, where: str = "pose") -> Pose:
    """
    Parse a pose from a show file.

    Accepts [x, y, z], [x, y, z, yaw] or {"x", "y", "z", "yaw" | "yaw_deg"};
    yaw is in radians and defaults to 0.
    """
    try:
        if isinstance(value, (list, tuple)):
            if len(value) not in (3, 4):
                raise ConfigurationError(f"{where}: expected 3 or 4 values, got {len(value)}")
            coords = [float(v) for v in value]
            yaw = coords[3] if len(coords) == 4 else 0.0
            pose = Pose(coords[0], coords[1], coords[2], yaw)
        elif isinstance(value, dict):
            if "yaw_deg" in value:
                yaw = deg2rad(float(value["yaw_deg"]))
            else:
                yaw = float(value.get("yaw", 0.0))
            pose = Pose(float(value["x"]), float(value["y"]), float(value["z"]), yaw)
        else:
            raise ConfigurationError(f"{where}: expected a list or an object, got {type(value).__name__}")
    except ConfigurationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"{where}: invalid pose {value!r} ({e})") from e

    if not all(math.isfinite(c) for c in (pose.x, pose.y, pose.z, pose.yaw)):
        raise ConfigurationError(f"{where}: pose values must be finite, got {value!r}")
    return pose


def parse_show(
    data: Mapping[str, Any],
    movements: Mapping[str, Movements] | None = None,
) -> ShowConfiguration:
    """
    Validate a decoded show document.

    Raises ConfigurationError for unknown movements and for acts whose drones
    do not match the roster. Pose jumps between consecutive acts are only
    reported in warnings.
    """
    if movements is None:
        movements = default_movements()

    name = str(data.get("name", "show"))
    raw_drones = data.get("drones", [])
    if not isinstance(raw_drones, list):
        raise ConfigurationError(f"drones: expected a list of names, got {type(raw_drones).__name__}")
    drones = tuple(str(d) for d in raw_drones)
    if not drones:
        raise ConfigurationError("Show file lists no drones")
    if len(set(drones)) != len(drones):
        raise ConfigurationError(f"Duplicate drone in roster: {list(drones)}")

    raw_acts = data.get("acts", [])
    if not isinstance(raw_acts, list):
        raise ConfigurationError(f"acts: expected a list, got {type(raw_acts).__name__}")
    if not raw_acts:
        raise ConfigurationError("Show file has no acts")

    acts: List[ActEntry] = []
    warnings: List[str] = []

    for index, raw in enumerate(raw_acts):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"acts[{index}]: expected an object, got {type(raw).__name__}")
        act_name = str(raw.get("name", f"act{index + 1}"))
        movement = str(raw.get("movement", "linear"))
        if movement not in movements:
            raise ConfigurationError(
                f"Act '{act_name}': movement '{movement}' not found. "
                f"Available: {', '.join(sorted(movements))}"
            )

        positions = raw.get("positions", {})
        if not isinstance(positions, dict):
            raise ConfigurationError(f"Act '{act_name}': positions must be an object")
        unknown = sorted(set(positions) - set(drones))
        missing = [d for d in drones if d not in positions]
        if unknown:
            raise ConfigurationError(f"Act '{act_name}': drones not in roster: {', '.join(unknown)}")
        if missing:
            raise ConfigurationError(f"Act '{act_name}': no positions for: {', '.join(missing)}")

        configs = []
        for drone in drones:
            entry = positions[drone]
            where = f"act '{act_name}', drone '{drone}'"
            if not isinstance(entry, dict):
                raise ConfigurationError(f"{where}: expected an object with 'initial' and 'final'")
            if "initial" not in entry or "final" not in entry:
                raise ConfigurationError(f"{where}: needs 'initial' and 'final'")
            configs.append(
                DronePositionConfiguration(
                    drone,
                    parse_pose(entry["initial"], f"{where} initial"),
                    parse_pose(entry["final"], f"{where} final"),
                )
            )

        try:
            start_delay_s = float(raw.get("start_delay_s", 0.0))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Act '{act_name}': invalid start_delay_s ({e})") from e
        config = ActConfiguration(act_name, tuple(configs), start_delay_s)
        acts.append(ActEntry(config=config, movement=movement))

    # Consecutive acts should hand over where the previous one left off
    for prev, curr in zip(acts, acts[1:]):
        prev_positions = {p.drone: p for p in prev.config.positions}
        for position in curr.config.positions:
            end = prev_positions[position.drone].final_pose
            if not poses_close(end, position.initial_pose, CONTINUITY_TOLERANCE):
                warnings.append(
                    f"Discontinuity: '{position.drone}' ends '{prev.config.name}' at "
                    f"({end.x:.2f}, {end.y:.2f}, {end.z:.2f}, {end.yaw:.2f}) but starts "
                    f"'{curr.config.name}' at ({position.initial_pose.x:.2f}, "
                    f"{position.initial_pose.y:.2f}, {position.initial_pose.z:.2f}, "
                    f"{position.initial_pose.yaw:.2f})"
                )

    return ShowConfiguration(name=name, drones=drones, acts=acts, warnings=warnings)


def load_show(
    path: Path | str,
    movements: Mapping[str, Movements] | None = None,
) -> ShowConfiguration:
    """Load and validate a show file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object at top level")
    return parse_show(data, movements)


def build_choreography(
    show: ShowConfiguration,
    movements: Mapping[str, Movements] | None = None,
) -> ChoreographyView:
    """Build, lock and sequence every act of a show."""
    if movements is None:
        movements = default_movements()

    choreo = Choreography(*show.drones)
    for entry in show.acts:
        act = Act.from_configuration(entry.config, movements[entry.movement])
        choreo.add_act(act.lock_and_build())
    return choreo.view()
