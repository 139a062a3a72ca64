import pytest

from rr_sim.domain.entities.track import MapExit, Orientation, StraightTrack
from rr_sim.domain.entities.train import Location, RollingStock, TrainState
from rr_sim.domain.layout import Layout
from rr_sim.domain.layouts import demo_layout
from rr_sim.domain.mechanics.mechanics_geometry import PlanarTrackGeometry


@pytest.fixture
def geometry() -> PlanarTrackGeometry:
    return PlanarTrackGeometry()


@pytest.fixture
def demo() -> Layout:
    return demo_layout()


@pytest.fixture
def straight_run() -> Layout:
    """75 m straight followed by a 50 m successor that ends in a map exit."""
    return Layout.from_edges(
        [
            (0, 1, StraightTrack(75.0)),
            (1, 2, StraightTrack(50.0)),
            (2, 3, MapExit()),
        ]
    )


@pytest.fixture
def dead_end() -> Layout:
    return Layout.from_edges([(0, 1, StraightTrack(75.0))])


@pytest.fixture
def make_train():
    def _make(edge=(0, 1), pos=0.0, speed=10.0, orientation=Orientation.ALIGNED, cars=1):
        return TrainState(
            name="t",
            composition=tuple(RollingStock(10.0) for _ in range(cars)),
            speed=speed,
            location=Location(edge, pos, orientation),
        )

    return _make
