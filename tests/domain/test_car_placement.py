import math

import pytest

from rr_sim.domain.entities.track import CurvedTrack, Orientation, StraightTrack
from rr_sim.domain.entities.train import Location
from rr_sim.domain.layout import Layout
from rr_sim.domain.layouts import demo_train
from rr_sim.domain.mechanics.mechanics_placement import car_positions, end_location
from rr_sim.domain.mechanics.mechanics_projector import coords_for, project


@pytest.fixture
def half_circle() -> Layout:
    # radius 5, 180 degrees left: about 15.71 m of track
    return Layout.from_edges([(0, 1, CurvedTrack(5.0, math.pi))])


def test_straight_car_is_exact(demo: Layout, geometry):
    rear = end_location(10.0, demo, (0,), Location((0, 1), 55.0), geometry=geometry)
    assert rear.edge == (0, 1)
    assert abs(rear.pos - 45.0) < 1e-9


def test_reversed_lead_places_rear_ahead_in_pos(demo: Layout, geometry):
    lead = Location((0, 1), 30.0, Orientation.REVERSED)
    rear = end_location(10.0, demo, (0,), lead, geometry=geometry)
    assert abs(rear.pos - 40.0) < 1e-9
    assert rear.orientation is Orientation.REVERSED


def test_curve_converges_to_chord_length(half_circle: Layout, geometry):
    lead = Location((0, 1), 15.0)
    rear = end_location(8.0, half_circle, (), lead, geometry=geometry)
    assert rear is not None

    frames = project(half_circle, geometry)
    p1 = coords_for(lead, half_circle, frames, geometry).origin
    p2 = coords_for(rear, half_circle, frames, geometry).origin
    assert abs(p1.distance_to(p2) - 8.0) <= 0.05
    # the arc behind the lead is longer than the chord
    assert lead.pos - rear.pos > 8.0


def test_iteration_cap_gives_none(half_circle: Layout, geometry):
    lead = Location((0, 1), 15.0)
    assert end_location(8.0, half_circle, (), lead, geometry=geometry, max_iterations=1) is None


def test_running_out_of_track_gives_none(geometry):
    short = Layout.from_edges([(0, 1, StraightTrack(5.0))])
    assert end_location(10.0, short, (), Location((0, 1), 4.0), geometry=geometry) is None


def test_demo_train_cars_chain_front_to_back(demo: Layout, geometry):
    cars = car_positions(demo_train(), demo, (0,), geometry=geometry)
    assert len(cars) == 5
    assert [round(c.rear.pos, 6) for c in cars] == [45.0, 35.0, 25.0, 15.0, 5.0]
    for a, b in zip(cars, cars[1:]):
        assert a.rear == b.front
    assert all(abs(c.chord - 10.0) < 1e-6 for c in cars)


def test_placement_stops_at_first_unplaceable_car(geometry, make_train):
    short = Layout.from_edges([(0, 1, StraightTrack(25.0))])
    cars = car_positions(make_train(pos=24.0, cars=4), short, (), geometry=geometry)
    assert len(cars) == 2


def test_derailed_train_has_no_cars(demo: Layout, geometry):
    assert car_positions(demo_train().derailed(), demo, (0,), geometry=geometry) == []
