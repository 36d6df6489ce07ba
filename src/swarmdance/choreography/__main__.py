#!/usr/bin/env python3
"""
CLI entry point for building and playing swarm shows.

Validate and summarize a show file:
    python -m swarmdance.choreography --show show.json --dry-run

Built-in introduction act:
    python -m swarmdance.choreography --builtin intro --dry-run

Export sampled trajectories:
    python -m swarmdance.choreography --show show.json --export out.json --interval 50

Play to console (no hardware required):
    python -m swarmdance.choreography --show show.json --play --sink console
"""
import argparse
import sys
from pathlib import Path

from .runner import run_choreography
from .sampling import format_summary, format_timestamp, to_json
from .script import build_choreography, load_show

BUILTIN_SHOWS = ["intro"]


def main():
    parser = argparse.ArgumentParser(
        description="Build and play drone swarm shows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--show",
        help="Path to show JSON file",
    )
    source.add_argument(
        "--builtin",
        choices=BUILTIN_SHOWS,
        help="Use a built-in show",
    )

    # Output
    parser.add_argument(
        "--export",
        metavar="PATH",
        help="Write sampled trajectories as JSON",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=100,
        metavar="MS",
        help="Sample interval in milliseconds for summary/export (default: 100)",
    )

    # Playback
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and print the show without playing it",
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play the show to pose sinks in real time",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "recording"],
        default="console",
        help="Pose sink used for --play (default: console)",
    )
    parser.add_argument(
        "--rate",
        type=float,
        default=20.0,
        metavar="HZ",
        help="Control loop rate for --play (default: 20)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Send poses one drone after the other instead of in parallel",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce output verbosity",
    )

    args = parser.parse_args()

    if args.play and args.dry_run:
        parser.error("Cannot use --play with --dry-run")

    verbose = not args.quiet

    try:
        view = load_view(args, verbose)
        if args.export:
            export_path = Path(args.export)
            export_path.write_text(to_json(view, args.interval), encoding="utf-8")
            if verbose:
                print(f"[Choreography] Exported {len(view.drones)} trajectories to {export_path}")
        if args.dry_run:
            dry_run(view, args.interval)
        elif args.play:
            play(view, args, verbose)
    except KeyboardInterrupt:
        print("\n[Choreography] Interrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def load_view(args, verbose: bool):
    """Build the playback view from a show file or a built-in show."""
    if args.builtin:
        from ..shows import create_intro_choreography

        view = create_intro_choreography()
        if verbose:
            print(f"[Choreography] Built-in show '{args.builtin}'")
        return view

    show_path = Path(args.show)
    if not show_path.exists():
        print(f"Error: Show file not found: {show_path}", file=sys.stderr)
        sys.exit(1)

    show = load_show(show_path)
    if verbose:
        print(f"[Choreography] Loaded '{show.name}': {len(show.drones)} drones, {len(show.acts)} acts")
        if show.warnings:
            print("[Choreography] Warnings:")
            for w in show.warnings:
                print(f"  - {w}")

    return build_choreography(show)


def dry_run(view, interval_ms: int):
    """Print the show timeline and per-drone summary."""
    print("\n[Dry Run] Acts:")
    for slot in view.acts:
        print(f"  {format_timestamp(slot.start_s)} -> {slot.name}")
    print()
    print(format_summary(view, interval_ms))
    print("\n[Dry Run] Validation complete")


def play(view, args, verbose: bool):
    """Play the show to one sink per drone."""
    from .. import create_sink

    sinks = {drone: create_sink(args.sink, name=drone, verbose=verbose) for drone in view.drones}
    for sink in sinks.values():
        sink.connect()
    try:
        run_choreography(
            sinks,
            view,
            rate_hz=args.rate,
            verbose=verbose,
            parallel=not args.sequential,
        )
    finally:
        for sink in sinks.values():
            sink.disconnect()


if __name__ == "__main__":
    main()
