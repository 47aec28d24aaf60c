"""Command-line interface: compute a trajectory from a path JSON file."""

import argparse
import logging
import sys
from pathlib import Path as FilePath

import numpy as np

import pathforge.config as cfg
from pathforge.config import TRACE, TrajectoryConfig
from pathforge.motion.trajectory import Trajectory, compute_trajectory
from pathforge.protocol.wire import decode_path, encode_trajectory
from pathforge.utils.errors import InfeasibleProfileError, MalformedPathError

logger = logging.getLogger("pathforge.cli.compute")

EXIT_OK = 0
EXIT_MALFORMED = 1
EXIT_INFEASIBLE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathforge",
        description="Compute a robot trajectory from a path JSON document",
    )
    parser.add_argument("path", help="Path JSON file ('-' reads stdin)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the trajectory as JSON instead of a summary",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail (exit 2) if any facing-angle target is unreachable",
    )
    parser.add_argument(
        "--divisions", type=int, help="Bezier samples per segment (overrides config)"
    )
    parser.add_argument(
        "--max-velocity",
        type=float,
        help="Max velocity in ft/s (overrides config, not the path's own override)",
    )

    # Verbose logging options
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Enable quiet logging (ERROR level)",
    )
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )
    return parser


def _resolve_log_level(args: argparse.Namespace) -> int:
    # Precedence:
    #   1) Explicit --log-level
    #   2) Verbose / quiet flags
    #   3) Environment-driven TRACE (PATHFORGE_TRACE=1)
    #   4) Default WARNING (stdout carries the result)
    if args.log_level:
        if args.log_level == "TRACE":
            cfg.TRACE_ENABLED = True
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        cfg.TRACE_ENABLED = True
        return TRACE
    if args.verbose == 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.ERROR
    if cfg.TRACE_ENABLED:
        return TRACE
    return logging.WARNING


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return FilePath(source).read_bytes()


def format_summary(trajectory: Trajectory) -> str:
    """Human-readable one-screen summary of a trajectory."""
    lines = [
        f"samples:      {len(trajectory)}",
        f"duration:     {trajectory.duration:.3f} s",
    ]
    if len(trajectory):
        speed = trajectory.speed
        lines.append(f"peak speed:   {float(np.max(speed)):.2f} in/s")
        lines.append(f"end point:    ({trajectory.x[-1]:.2f}, {trajectory.y[-1]:.2f}) in")
    n_bad = int(np.count_nonzero(trajectory.infeasible))
    lines.append(
        "angles:       feasible"
        if n_bad == 0
        else f"angles:       INFEASIBLE at {n_bad} samples"
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pathforge command."""
    args = _build_parser().parse_args(argv)

    log_level = _resolve_log_level(args)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    third_party_log_level = log_level if log_level >= logging.INFO else logging.INFO
    logging.getLogger("numba").setLevel(third_party_log_level)

    # Pre-compile numba JIT functions before the first computation
    from pathforge.utils.warmup import warmup_jit

    warmup_jit()

    config = TrajectoryConfig.from_defaults()
    try:
        if args.divisions is not None or args.max_velocity is not None:
            config = TrajectoryConfig(
                bezier_divisions=(
                    args.divisions
                    if args.divisions is not None
                    else config.bezier_divisions
                ),
                max_velocity=(
                    args.max_velocity * cfg.INCHES_PER_FOOT
                    if args.max_velocity is not None
                    else config.max_velocity
                ),
                max_accel=config.max_accel,
                max_decel=config.max_decel,
                curvature_velocity=config.curvature_velocity,
                angular_accel=config.angular_accel,
                angular_decel=config.angular_decel,
            )
        path = decode_path(_read_input(args.path))
        trajectory = compute_trajectory(path, config=config, strict=args.strict)
    except (MalformedPathError, ValueError, OSError) as e:
        logger.error("%s", e)
        return EXIT_MALFORMED
    except InfeasibleProfileError as e:
        logger.error("%s", e)
        return EXIT_INFEASIBLE

    if args.json:
        sys.stdout.write(encode_trajectory(trajectory).decode())
        sys.stdout.write("\n")
    else:
        print(format_summary(trajectory))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
