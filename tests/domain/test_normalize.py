import math

import pytest

from rr_sim.domain.entities.track import Orientation, StraightTrack, track_length
from rr_sim.domain.entities.train import Location
from rr_sim.domain.layout import Layout, next_track, previous_track
from rr_sim.domain.mechanics.mechanics_normalizer import normalize

A, R = Orientation.ALIGNED, Orientation.REVERSED


@pytest.fixture
def fork() -> Layout:
    # node 1 fans out twice with no switch to choose between them
    return Layout.from_edges(
        [
            (0, 1, StraightTrack(10.0)),
            (1, 2, StraightTrack(10.0)),
            (1, 3, StraightTrack(10.0)),
        ]
    )


@pytest.fixture
def head_on() -> Layout:
    # two edges pointing at each other, meeting at node 1
    return Layout.from_edges([(0, 1, StraightTrack(10.0)), (2, 1, StraightTrack(10.0))])


def test_in_bounds_location_is_unchanged(straight_run: Layout):
    loc = Location((0, 1), 30.0, A)
    assert normalize(loc, straight_run, ()) == loc
    assert normalize(Location((0, 1), 75.0, A), straight_run, ()) == Location((0, 1), 75.0, A)


def test_overshoot_carries_onto_successor(straight_run: Layout):
    out = normalize(Location((0, 1), 80.0, A), straight_run, ())
    assert out.edge == (1, 2)
    assert abs(out.pos - 5.0) < 1e-9
    assert out.orientation is A


def test_overshoot_across_several_edges(straight_run: Layout):
    out = normalize(Location((0, 1), 128.0, A), straight_run, ())
    assert out.edge == (2, 3)  # map exit swallows everything
    assert abs(out.pos - 3.0) < 1e-9


def test_reversed_backs_into_predecessor(straight_run: Layout):
    out = normalize(Location((1, 2), -5.0, R), straight_run, ())
    assert out.edge == (0, 1)
    assert abs(out.pos - 70.0) < 1e-9
    assert out.orientation is R


def test_dead_end_and_unknown_edge(dead_end: Layout):
    assert normalize(Location((0, 1), 76.0, A), dead_end, ()) is None
    assert normalize(Location((0, 1), -1.0, A), dead_end, ()) is None
    assert normalize(Location((4, 5), 1.0, A), dead_end, ()) is None


def test_ambiguous_junction_yields_none(fork: Layout):
    assert next_track(Location((0, 1), 10.0, A), fork, ()) is None
    assert normalize(Location((0, 1), 12.0, A), fork, ()) is None


def test_switch_resolves_the_ambiguity(demo: Layout):
    loc = Location((0, 1), 80.0, A)
    assert normalize(loc, demo, (0,)).edge == (1, 2)
    assert normalize(loc, demo, (1,)).edge == (1, 3)


def test_entering_an_edge_against_its_direction(head_on: Layout):
    entry = next_track(Location((0, 1), 10.0, A), head_on, ())
    assert entry == Location((2, 1), 10.0, R)

    out = normalize(Location((0, 1), 12.0, A), head_on, ())
    assert out.edge == (2, 1)
    assert abs(out.pos - 8.0) < 1e-9
    assert out.orientation is R


def test_previous_track_from_the_far_side(head_on: Layout):
    # REVERSED on (2, 1) looks behind at node 1
    entry = previous_track(Location((2, 1), 3.0, R), head_on, ())
    assert entry == Location((0, 1), 10.0, A)


def test_idempotent_and_in_bounds(demo: Layout):
    samples = [
        Location((0, 1), p, o)
        for p in (-3.0, 0.0, 20.0, 75.0, 90.0, 160.0, 400.0)
        for o in (A, R)
    ]
    for loc in samples:
        once = normalize(loc, demo, (0,))
        if once is None:
            continue
        assert normalize(once, demo, (0,)) == once
        assert 0.0 <= once.pos <= track_length(demo.track_at(once.edge))


@pytest.mark.parametrize("pos", [math.inf, -math.inf, math.nan])
def test_non_finite_position_goes_nowhere(straight_run: Layout, pos):
    assert normalize(Location((0, 1), pos, A), straight_run, ()) is None


def test_two_node_oval_runs_round():
    # the return edge (1, 0) is a separate track, not the current one reversed
    oval = Layout.from_edges([(0, 1, StraightTrack(10.0)), (1, 0, StraightTrack(10.0))])

    out = normalize(Location((0, 1), 12.0, A), oval, ())
    assert out.edge == (1, 0)
    assert abs(out.pos - 2.0) < 1e-9
    assert out.orientation is A

    lap = normalize(Location((0, 1), 25.0, A), oval, ())
    assert lap.edge == (0, 1)
    assert abs(lap.pos - 5.0) < 1e-9
    assert lap.orientation is A

    back = normalize(Location((0, 1), -3.0, A), oval, ())
    assert back.edge == (1, 0)
    assert abs(back.pos - 7.0) < 1e-9
