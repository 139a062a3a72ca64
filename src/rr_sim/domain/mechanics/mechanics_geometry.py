import math

from rr_sim.app.protocols import TrackGeometry
from rr_sim.domain.entities.geography import Frame
from rr_sim.domain.entities.track import CurvedTrack, MapExit, StraightTrack, Track, track_length


class PlanarTrackGeometry(TrackGeometry):
    """Flat 2-D track shapes: straight runs and constant-radius arcs."""

    def project_position(self, track: Track, origin: Frame, pos: float) -> Frame:
        if isinstance(track, (StraightTrack, MapExit)):
            return origin.translate(pos)
        if isinstance(track, CurvedTrack):
            r = track.radius
            phi = pos / r  # arc angle travelled, signed by pos
            turn = math.copysign(1.0, track.sweep)  # +1 left, -1 right
            return origin.place(r * math.sin(phi), turn * r * (1.0 - math.cos(phi)), turn * phi)
        raise TypeError(f"not a track: {track!r}")

    def advance_frame(self, track: Track, origin: Frame) -> Frame:
        if isinstance(track, MapExit):
            return origin
        return self.project_position(track, origin, track_length(track))
