# domain/entities/train.py
from dataclasses import dataclass, field, replace

from rr_sim.domain.entities.track import Edge, Orientation


@dataclass(frozen=True)
class Location:
    edge: Edge
    pos: float  # meters from the edge's `from` node; may be out of bounds before normalization
    orientation: Orientation = Orientation.ALIGNED

    def moved_by(self, distance: float) -> "Location":
        """Shift along the direction the location faces (negative distance moves backwards)."""
        if self.orientation is Orientation.ALIGNED:
            return replace(self, pos=self.pos + distance)
        return replace(self, pos=self.pos - distance)


@dataclass(frozen=True)
class RollingStock:
    length: float  # meters, coupling point to coupling point


@dataclass(frozen=True)
class TrainState:
    name: str
    composition: tuple[RollingStock, ...] = field(default_factory=tuple)  # front to back
    speed: float = 0.0  # m/s, direction comes from the location's orientation
    location: Location | None = None  # None => left the network (derailed/exited)

    @property
    def length(self) -> float:
        return sum(rs.length for rs in self.composition)

    @property
    def inert(self) -> bool:
        return self.location is None

    def derailed(self) -> "TrainState":
        return replace(self, speed=0.0, location=None)
