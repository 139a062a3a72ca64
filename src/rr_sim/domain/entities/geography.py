import math
from dataclasses import dataclass


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    x: float  # meters in layout plane
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Frame:
    """Origin point plus heading (radians, counter-clockwise from +x)."""

    origin: Point
    heading: float = 0.0

    @classmethod
    def at(cls, x: float, y: float, heading: float = 0.0) -> "Frame":
        return cls(Point(float(x), float(y)), float(heading))

    def translate(self, distance: float) -> "Frame":
        """Move along the heading, keeping it."""
        return Frame(
            Point(
                self.origin.x + distance * math.cos(self.heading),
                self.origin.y + distance * math.sin(self.heading),
            ),
            self.heading,
        )

    def place(self, dx: float, dy: float, dheading: float = 0.0) -> "Frame":
        """Map a frame given in local coordinates (x forward, y left) into this frame's parent."""
        c, s = math.cos(self.heading), math.sin(self.heading)
        return Frame(
            Point(self.origin.x + c * dx - s * dy, self.origin.y + s * dx + c * dy),
            self.heading + dheading,
        )
