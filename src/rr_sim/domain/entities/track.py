# rr_sim/domain/entities/track.py
import math
from dataclasses import dataclass
from enum import Enum

from rr_sim.domain.errors import LayoutError

NodeId = int
Edge = tuple[NodeId, NodeId]


class Orientation(Enum):
    ALIGNED = "aligned"  # increasing pos moves toward the edge's `to` node
    REVERSED = "reversed"

    def invert(self) -> "Orientation":
        return Orientation.REVERSED if self is Orientation.ALIGNED else Orientation.ALIGNED


@dataclass(frozen=True)
class StraightTrack:
    length: float  # meters

    def __post_init__(self):
        if not (math.isfinite(self.length) and self.length > 0):
            raise LayoutError(f"straight track length must be finite and > 0, got {self.length}")


@dataclass(frozen=True)
class CurvedTrack:
    radius: float  # meters
    sweep: float  # radians, positive turns left

    def __post_init__(self):
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise LayoutError(f"curve radius must be finite and > 0, got {self.radius}")
        if not math.isfinite(self.sweep) or self.sweep == 0:
            raise LayoutError(f"curve sweep must be finite and non-zero, got {self.sweep}")


@dataclass(frozen=True)
class MapExit:
    """Sink leaving the drawn map; infinitely long."""


Track = StraightTrack | CurvedTrack | MapExit


def track_length(track: Track) -> float:
    if isinstance(track, StraightTrack):
        return track.length
    if isinstance(track, CurvedTrack):
        return abs(track.radius * track.sweep)
    if isinstance(track, MapExit):
        return math.inf
    raise TypeError(f"not a track: {track!r}")
