import math

import pytest

from rr_sim.domain.entities.track import StraightTrack
from rr_sim.domain.entities.train import Location
from rr_sim.domain.layout import Layout
from rr_sim.domain.mechanics.mechanics_projector import (
    bounding_box,
    coords_for,
    frame_conflicts,
    project,
)


def _close(frame, x, y, tol=1e-3):
    return abs(frame.origin.x - x) < tol and abs(frame.origin.y - y) < tol


def test_demo_frames(demo: Layout, geometry):
    frames = project(demo, geometry)
    assert _close(frames[0], 0.0, 2.5)
    assert _close(frames[1], 75.0, 2.5)
    assert _close(frames[3], 152.645, 2.5)
    assert _close(frames[2], 152.646, 12.722)
    assert abs(frames[2].heading - math.radians(15.0)) < 1e-9
    # the s-curve straightens back out
    assert abs(frames[4].heading) < 1e-9


def test_map_exit_nodes_sit_on_their_junction(demo: Layout, geometry):
    frames = project(demo, geometry)
    assert frames[1000] == frames[5]
    assert frames[1001] == frames[0]
    assert frames[1002] == frames[4]


def test_unreachable_nodes_get_no_frame(geometry):
    layout = Layout.from_edges([(0, 1, StraightTrack(5.0)), (7, 8, StraightTrack(5.0))])
    frames = project(layout, geometry)
    assert set(frames) == {0, 1}
    assert coords_for(Location((7, 8), 1.0), layout, frames, geometry) is None


def test_coords_along_an_edge(demo: Layout, geometry):
    frames = project(demo, geometry)
    f = coords_for(Location((0, 1), 55.0), demo, frames, geometry)
    assert _close(f, 55.0, 2.5)


def test_bounding_box_includes_the_origin(geometry):
    layout = Layout.from_edges([(0, 1, StraightTrack(10.0))])
    frames = project(layout, geometry)
    assert bounding_box(frames) == (0.0, 0.0, 10.0, 2.5)


@pytest.mark.parametrize("closing, expected", [(7.0, [2.0]), (5.0, [])])
def test_loop_consistency(geometry, closing, expected):
    layout = Layout.from_edges(
        [
            (0, 1, StraightTrack(10.0)),
            (0, 2, StraightTrack(5.0)),
            (2, 1, StraightTrack(closing)),
        ]
    )
    frames = project(layout, geometry)
    conflicts = frame_conflicts(layout, frames, geometry)
    assert [round(c.distance, 6) for c in conflicts] == expected
    assert all(c.edge == (2, 1) for c in conflicts)


def test_depth_first_in_ascending_order_and_first_visit_wins(geometry):
    # 0 -> 1 -> 3 is explored before 0 -> 2, so node 3 takes its frame from 1
    layout = Layout.from_edges(
        [
            (0, 2, StraightTrack(4.0)),
            (0, 1, StraightTrack(10.0)),
            (1, 3, StraightTrack(10.0)),
            (2, 3, StraightTrack(1.0)),
        ]
    )
    frames = project(layout, geometry)
    assert _close(frames[3], 20.0, 2.5)
    assert _close(frames[2], 4.0, 2.5)


def test_connectivity_only_edges_are_not_walked(geometry):
    layout = Layout.from_edges([(0, 1, StraightTrack(5.0)), (1, 2, None)])
    assert set(project(layout, geometry)) == {0, 1}


def test_root_outside_the_graph_still_gets_the_origin(geometry):
    layout = Layout.from_edges([(0, 1, StraightTrack(5.0))])
    frames = project(layout, geometry, root=42)
    assert list(frames) == [42]
    assert _close(frames[42], 0.0, 2.5)
