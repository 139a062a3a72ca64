# rr_sim/domain/layouts.py
import math

from rr_sim.domain.entities.track import CurvedTrack, MapExit, Orientation, StraightTrack
from rr_sim.domain.entities.train import Location, RollingStock, TrainState
from rr_sim.domain.layout import Layout
from rr_sim.domain.state import SimSnapshot
from rr_sim.domain.switch import Switch


def demo_layout() -> Layout:
    """
    A single turnout at node 1: a left curve pair (1-2-4) and a straight
    pair (1-3-5) of matching length. Nodes 1000+ are map exits.
    """
    return Layout.from_edges(
        [
            (0, 1, StraightTrack(75.0)),
            (1, 2, CurvedTrack(300.0, math.radians(15.0))),
            (2, 4, CurvedTrack(300.0, math.radians(-15.0))),
            (1, 3, StraightTrack(77.645)),
            (3, 5, StraightTrack(77.645)),
            (5, 1000, MapExit()),
            (0, 1001, MapExit()),
            (4, 1002, MapExit()),
        ],
        [Switch(edges=((1, 2), (1, 3)), configs=((0,), (1,)))],
    )


def demo_train() -> TrainState:
    return TrainState(
        name="Happy Train",
        composition=tuple(RollingStock(10.0) for _ in range(5)),
        speed=10.0,
        location=Location((0, 1), 55.0, Orientation.ALIGNED),
    )


def demo_snapshot() -> SimSnapshot:
    layout = demo_layout()
    return SimSnapshot(layout, layout.initial_switch_states(), (demo_train(),))
