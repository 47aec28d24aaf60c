"""
JSON codec between the editing layer and the engine.

Input documents decode into Path structs:

    {"waypoints": [{"x", "y", "heading", "handleBeforeLength", "handleAfterLength"}],
     "angles": [{"afterWaypoint", "t", "angle"}],
     "maxVelocity": number (optional, ft/s)}

Trajectories encode as a JSON array of samples:

    [{"x", "y", "heading", "curvature", "t", "afterWaypoint",
      "velocity": {"x", "y"}, "time", "angle", "angularVelocity"}]

Non-finite floats (infeasible angles, undefined curvature) encode as null
and decode back to NaN.
"""

import logging

import msgspec
import numpy as np

from pathforge.motion.trajectory import Trajectory
from pathforge.protocol.types import Path
from pathforge.utils.errors import MalformedPathError

logger = logging.getLogger(__name__)


def _enc_hook(obj: object) -> object:
    """Custom encoder hook for numpy types."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.integer, np.floating)):
        return obj.item()  # Convert numpy scalar to Python native type
    raise NotImplementedError(f"Cannot encode {type(obj)}")


class VelocityMsg(msgspec.Struct, frozen=True):
    x: float | None
    y: float | None


class TrajectoryPointMsg(msgspec.Struct, frozen=True, rename="camel"):
    """One encoded trajectory sample. None stands for a non-finite value."""

    x: float
    y: float
    heading: float | None
    curvature: float | None
    t: float
    after_waypoint: int
    velocity: VelocityMsg
    time: float
    angle: float | None
    angular_velocity: float | None


_path_decoder = msgspec.json.Decoder(Path)
_path_encoder = msgspec.json.Encoder(enc_hook=_enc_hook)
_trajectory_decoder = msgspec.json.Decoder(list[TrajectoryPointMsg])
_trajectory_encoder = msgspec.json.Encoder(enc_hook=_enc_hook)


def decode_path(data: bytes | str) -> Path:
    """
    Decode a path JSON document.

    Raises:
        MalformedPathError: Invalid JSON, wrong types, or constraint violations
            (negative handle length, t outside [0, 1], negative maxVelocity)
    """
    try:
        return _path_decoder.decode(data)
    except msgspec.ValidationError as e:
        raise MalformedPathError(f"Invalid path: {e}") from e
    except msgspec.DecodeError as e:
        raise MalformedPathError(f"Path is not valid JSON: {e}") from e


def encode_path(path: Path) -> bytes:
    return _path_encoder.encode(path)


def _finite_or_none(value: float) -> float | None:
    return value if np.isfinite(value) else None


def trajectory_to_records(trajectory: Trajectory) -> list[TrajectoryPointMsg]:
    """Convert a Trajectory to its wire structs, one per sample."""
    records = []
    for point in trajectory:
        records.append(
            TrajectoryPointMsg(
                x=point.x,
                y=point.y,
                heading=_finite_or_none(point.heading),
                curvature=_finite_or_none(point.curvature),
                t=point.t,
                after_waypoint=point.after_waypoint,
                velocity=VelocityMsg(
                    x=_finite_or_none(point.velocity.x),
                    y=_finite_or_none(point.velocity.y),
                ),
                time=point.time,
                angle=_finite_or_none(point.angle),
                angular_velocity=_finite_or_none(point.angular_velocity),
            )
        )
    return records


def encode_trajectory(trajectory: Trajectory) -> bytes:
    """Encode a trajectory as a JSON array of samples."""
    return _trajectory_encoder.encode(trajectory_to_records(trajectory))


def _column(values: list[float | None]) -> np.ndarray:
    return np.array([np.nan if v is None else v for v in values], dtype=np.float64)


def decode_trajectory(data: bytes | str) -> Trajectory:
    """
    Decode a trajectory JSON array (e.g. a companion file written by the editor).

    Raises:
        msgspec.ValidationError: The document does not match the sample schema
    """
    records = _trajectory_decoder.decode(data)
    n = len(records)
    velocity = np.empty((n, 2), dtype=np.float64)
    velocity[:, 0] = _column([r.velocity.x for r in records])
    velocity[:, 1] = _column([r.velocity.y for r in records])
    return Trajectory(
        x=_column([r.x for r in records]),
        y=_column([r.y for r in records]),
        heading=_column([r.heading for r in records]),
        curvature=_column([r.curvature for r in records]),
        t=_column([r.t for r in records]),
        after_waypoint=np.array([r.after_waypoint for r in records], dtype=np.intp),
        velocity=velocity,
        time=_column([r.time for r in records]),
        angle=_column([r.angle for r in records]),
        angular_velocity=_column([r.angular_velocity for r in records]),
    )
