"""
Sampling and export of trajectories.

Evaluates trajectories on a fixed time grid into numpy arrays with columns
[t, x, y, z, yaw], and formats whole shows for console or JSON output.
"""
from __future__ import annotations

import json
from typing import Dict

import numpy as np

from .errors import ConfigurationError
from .show import ChoreographyView
from .trajectory import FiniteTrajectory

COLUMNS = ("t", "x", "y", "z", "yaw")


def sample_times(duration_s: float, interval_ms: int = 100) -> np.ndarray:
    """
    Time grid 0, dt, 2*dt, ... ending exactly at duration_s.

    Args:
        duration_s: Length of the grid in seconds
        interval_ms: Grid spacing in milliseconds, > 0

    Returns:
        1-D array of sample times
    """
    if interval_ms <= 0:
        raise ConfigurationError(f"interval_ms must be > 0, got {interval_ms}")
    interval_s = interval_ms / 1000.0
    count = int(np.floor(duration_s / interval_s + 1e-9)) + 1
    times = np.arange(count, dtype=float) * interval_s
    if duration_s - times[-1] > 1e-9:
        times = np.append(times, duration_s)
    return times


def sample_trajectory(trajectory: FiniteTrajectory, interval_ms: int = 100) -> np.ndarray:
    """
    Sample a trajectory on a regular grid.

    Returns:
        Array of shape (N, 5) with columns t, x, y, z, yaw
    """
    times = sample_times(trajectory.duration, interval_ms)
    samples = np.empty((len(times), len(COLUMNS)), dtype=float)
    for i, t in enumerate(times):
        pose = trajectory.desired_position(float(t))
        samples[i] = (t, pose.x, pose.y, pose.z, pose.yaw)
    return samples


def sample_choreography(view: ChoreographyView, interval_ms: int = 100) -> Dict[str, np.ndarray]:
    """Sample every drone of a show on the same grid."""
    return {drone: sample_trajectory(view.trajectory(drone), interval_ms) for drone in view.drones}


def max_speed(samples: np.ndarray) -> float:
    """Largest speed (m/s) between consecutive samples of an (N, 5) array."""
    if len(samples) < 2:
        return 0.0
    dt = np.diff(samples[:, 0])
    dist = np.linalg.norm(np.diff(samples[:, 1:4], axis=0), axis=1)
    valid = dt > 0
    if not np.any(valid):
        return 0.0
    return float(np.max(dist[valid] / dt[valid]))


def format_timestamp(seconds: float) -> str:
    """Format seconds as MM:SS.mmm."""
    total_ms = int(round(seconds * 1000))
    mins, rem = divmod(total_ms, 60000)
    secs, ms = divmod(rem, 1000)
    return f"{mins:02d}:{secs:02d}.{ms:03d}"


def format_summary(view: ChoreographyView, interval_ms: int = 100) -> str:
    """
    Human-readable console output.

    Lists the acts with their start times and, per drone, start/end pose and
    the peak sampled speed.
    """
    lines = [
        f"Drones: {len(view.drones)}",
        f"Duration: {format_timestamp(view.duration)}",
        f"Acts: {len(view.acts)}",
    ]
    for slot in view.acts:
        lines.append(f"  {format_timestamp(slot.start_s)} - {slot.name} ({slot.duration_s:.1f}s)")

    lines.append("")
    lines.append("Drones:")
    samples = sample_choreography(view, interval_ms)
    for drone in view.drones:
        trajectory = view.trajectory(drone)
        start = trajectory.start_pose
        end = trajectory.end_pose
        lines.append(
            f"  {drone}: ({start.x:.2f}, {start.y:.2f}, {start.z:.2f}) -> "
            f"({end.x:.2f}, {end.y:.2f}, {end.z:.2f}), "
            f"max speed {max_speed(samples[drone]):.2f} m/s"
        )

    return "\n".join(lines)


def to_json(view: ChoreographyView, interval_ms: int = 100) -> str:
    """
    JSON export of a sampled show.

    Returns:
        JSON string with duration, acts and per-drone sample rows
    """
    samples = sample_choreography(view, interval_ms)
    data = {
        "duration_s": round(view.duration, 3),
        "interval_ms": interval_ms,
        "columns": list(COLUMNS),
        "acts": [
            {"name": slot.name, "start_s": round(slot.start_s, 3), "duration_s": round(slot.duration_s, 3)}
            for slot in view.acts
        ],
        "drones": {
            drone: np.round(samples[drone], 4).tolist()
            for drone in view.drones
        },
    }
    return json.dumps(data, indent=2)
