from dataclasses import dataclass

import networkx as nx
import numpy as np

from rr_sim.app.protocols import TrackGeometry
from rr_sim.domain.entities.geography import Frame
from rr_sim.domain.entities.track import Edge, MapExit, NodeId
from rr_sim.domain.entities.train import Location
from rr_sim.domain.layout import Layout

DEFAULT_ORIGIN = Frame.at(0.0, 2.5)


def project(
    layout: Layout,
    geometry: TrackGeometry,
    *,
    root: NodeId = 0,
    origin: Frame = DEFAULT_ORIGIN,
) -> dict[NodeId, Frame]:
    """
    Give every node reachable from `root` a frame, walking the full graph
    depth-first (switch state is ignored). Neighbours are taken in ascending
    id order and the first path that reaches a node wins.
    """
    frames: dict[NodeId, Frame] = {root: origin}
    routable = layout.graph.routable()
    if root not in routable:
        return frames
    for frm, to in nx.dfs_edges(routable, root, sort_neighbors=sorted):
        track = layout.graph.get_edge_data(frm, to)
        frames[to] = geometry.advance_frame(track, frames[frm])
    return frames


def coords_for(
    loc: Location, layout: Layout, frames: dict[NodeId, Frame], geometry: TrackGeometry
) -> Frame | None:
    track = layout.track_at(loc.edge)
    start = frames.get(loc.edge[0])
    if track is None or start is None:
        return None
    return geometry.project_position(track, start, loc.pos)


def bounding_box(frames: dict[NodeId, Frame]) -> tuple[float, float, float, float]:
    """(x_min, y_min, x_max, y_max) over all node origins, always including (0, 0)."""
    pts = np.array([[f.origin.x, f.origin.y] for f in frames.values()] + [[0.0, 0.0]])
    lo, hi = pts.min(axis=0), pts.max(axis=0)
    return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])


# ---------------- Loop consistency ----------------------


@dataclass(frozen=True)
class FrameConflict:
    edge: Edge
    expected: Frame  # far end of the edge as projected from its `from` node
    recorded: Frame  # frame the projector kept for the `to` node
    distance: float


def frame_conflicts(
    layout: Layout,
    frames: dict[NodeId, Frame],
    geometry: TrackGeometry,
    tolerance: float = 0.05,
) -> list[FrameConflict]:
    """
    Edges whose far end disagrees with the frame recorded for their `to`
    node. Only loops (nodes reachable over several paths) can produce these.
    """
    edges, expected, recorded = [], [], []
    for frm, to, track in layout.graph.edges_with_data():
        if isinstance(track, MapExit) or frm not in frames or to not in frames:
            continue
        edges.append((frm, to))
        expected.append(geometry.advance_frame(track, frames[frm]))
        recorded.append(frames[to])
    if not edges:
        return []
    a = np.array([[f.origin.x, f.origin.y] for f in expected])
    b = np.array([[f.origin.x, f.origin.y] for f in recorded])
    dist = np.hypot(a[:, 0] - b[:, 0], a[:, 1] - b[:, 1])
    return [
        FrameConflict(edges[i], expected[i], recorded[i], float(dist[i]))
        for i in np.flatnonzero(dist > tolerance)
    ]
