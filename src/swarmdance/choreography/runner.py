"""
Show playback - samples trajectories at a fixed rate and feeds pose sinks.

Playback is pull-based: every control tick asks each drone's trajectory for
its desired pose at the current show time. Supports parallel sending for
better synchronization across drones.
"""
from __future__ import annotations

import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Dict, List, Tuple

from .errors import ConfigurationError
from .sampling import format_timestamp
from .show import ChoreographyView
from .trajectory import FiniteTrajectory

if TYPE_CHECKING:
    from ..base import PoseSink
    from ..geometry import Pose

DEFAULT_RATE_HZ = 20.0


def _tick_times(duration_s: float, rate_hz: float) -> List[float]:
    if not rate_hz > 0 or math.isinf(rate_hz):
        raise ConfigurationError(f"rate_hz must be a finite value > 0, got {rate_hz}")
    interval_s = 1.0 / rate_hz
    count = int(math.floor(duration_s * rate_hz + 1e-9)) + 1
    times = [i * interval_s for i in range(count)]
    if duration_s - times[-1] > 1e-9:
        times.append(duration_s)
    return times


def run_trajectory(
    sink: PoseSink,
    trajectory: FiniteTrajectory,
    *,
    rate_hz: float = DEFAULT_RATE_HZ,
    dry_run: bool = False,
    verbose: bool = True,
) -> int:
    """
    Play a single drone's trajectory.

    Args:
        sink: Connected PoseSink instance
        trajectory: Trajectory to play
        rate_hz: Control loop rate
        dry_run: If True, sample and time the loop but send nothing
        verbose: Print status messages

    Returns:
        Number of ticks played
    """
    ticks = _tick_times(trajectory.duration, rate_hz)

    if verbose:
        print(f"[Playback] {len(ticks)} ticks over {trajectory.duration:.1f}s at {rate_hz:g} Hz")

    start_time = time.perf_counter()
    last_print_time = 0.0

    for i, tick in enumerate(ticks):
        pose = trajectory.desired_position(tick)
        if not dry_run:
            sink.send_pose(tick, pose)

        if i + 1 < len(ticks):
            wait_time = ticks[i + 1] - (time.perf_counter() - start_time)
            if wait_time > 0:
                sink.wait(wait_time)

        if verbose and (tick - last_print_time >= 10.0 or tick == ticks[-1]):
            print(f"[Playback] {format_timestamp(tick)} (elapsed: {time.perf_counter() - start_time:.2f}s)")
            last_print_time = tick

    if verbose:
        print(f"[Playback] Completed in {time.perf_counter() - start_time:.2f}s")
    return len(ticks)


def _send(sink: PoseSink, time_s: float, pose: Pose) -> None:
    """Send one pose to one sink (for threading)."""
    sink.send_pose(time_s, pose)


def run_choreography(
    sinks: Dict[str, PoseSink],
    view: ChoreographyView,
    *,
    rate_hz: float = DEFAULT_RATE_HZ,
    dry_run: bool = False,
    verbose: bool = True,
    parallel: bool = True,
) -> int:
    """
    Play a whole show with synchronized ticks across drones.

    All drones receive the pose for the same show time at each tick.

    Args:
        sinks: Dict mapping drone name to connected sink
        view: Choreography playback view
        rate_hz: Control loop rate
        dry_run: If True, sample and time the loop but send nothing
        verbose: Print status messages
        parallel: If True, send to all sinks concurrently

    Returns:
        Number of ticks played
    """
    if set(sinks.keys()) != set(view.drones):
        raise ValueError(
            f"Sinks and drones must have matching keys. "
            f"Sinks: {sorted(sinks.keys())}, Drones: {sorted(view.drones)}"
        )

    ticks = _tick_times(view.duration, rate_hz)
    trajectories = [(drone, view.trajectory(drone)) for drone in view.drones]
    first_sink = sinks[view.drones[0]]

    if verbose:
        print(f"[Playback] {len(view.drones)} drones, {len(view.acts)} acts, {view.duration:.1f}s")
        print(f"[Playback] {len(ticks)} ticks at {rate_hz:g} Hz")
        if parallel and not dry_run:
            print("[Playback] Parallel send mode enabled")

    executor = ThreadPoolExecutor(max_workers=len(sinks)) if parallel and not dry_run else None
    start_time = time.perf_counter()
    last_print_time = 0.0
    current_act = None

    try:
        for i, tick in enumerate(ticks):
            commands: List[Tuple[str, Pose]] = [
                (drone, trajectory.desired_position(tick)) for drone, trajectory in trajectories
            ]

            if not dry_run:
                if executor:
                    futures = [
                        executor.submit(_send, sinks[drone], tick, pose)
                        for drone, pose in commands
                    ]
                    for future in futures:
                        future.result()
                else:
                    for drone, pose in commands:
                        sinks[drone].send_pose(tick, pose)

            if verbose:
                act = view.act_at(tick)
                if act is not current_act:
                    print(f"[Playback] {format_timestamp(tick)} Act '{act.name}'")
                    current_act = act
                if tick - last_print_time >= 10.0:
                    actual_elapsed = time.perf_counter() - start_time
                    print(f"[Playback] {format_timestamp(tick)} (elapsed: {actual_elapsed:.2f}s)")
                    last_print_time = tick

            if i + 1 < len(ticks):
                wait_time = ticks[i + 1] - (time.perf_counter() - start_time)
                if wait_time > 0:
                    first_sink.wait(wait_time)
    finally:
        if executor:
            executor.shutdown(wait=False)

    if verbose:
        print(f"[Playback] Completed in {time.perf_counter() - start_time:.2f}s")
    return len(ticks)
