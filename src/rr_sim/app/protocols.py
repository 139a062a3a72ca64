from typing import Protocol, runtime_checkable

from rr_sim.domain.entities.geography import Frame
from rr_sim.domain.entities.track import Track
from rr_sim.domain.state import SimSnapshot


# ------------- Mechanics --------------------
@runtime_checkable
class TrackGeometry(Protocol):
    """
    Responsibilities:
    • Turn a scalar offset along one track segment into a drawable frame.
    • Carry a frame across a whole segment (used by the layout projector).
    Units: meters for offsets/coordinates; radians for headings.
    """

    def project_position(self, track: Track, origin: Frame, pos: float) -> Frame: ...
    def advance_frame(self, track: Track, origin: Frame) -> Frame:
        """Frame at the far end of `track`; map exits keep `origin`."""


# ------------- Runtime --------------------
@runtime_checkable
class LayoutSource(Protocol):
    """Produce the initial (layout, switch states, trains) a run starts and resets from."""

    def load(self) -> SimSnapshot: ...
