from collections.abc import Sequence
from dataclasses import dataclass

from rr_sim.app.protocols import TrackGeometry
from rr_sim.domain.entities.geography import Frame, Point
from rr_sim.domain.entities.track import NodeId
from rr_sim.domain.entities.train import Location, TrainState
from rr_sim.domain.layout import EdgeTriple, Layout, partition
from rr_sim.domain.mechanics.mechanics_normalizer import normalize
from rr_sim.domain.mechanics.mechanics_projector import coords_for, project

MAX_ITERATIONS = 50
TOLERANCE_M = 0.05


def end_location(
    target_length: float,
    layout: Layout,
    switch_states: Sequence[int],
    lead: Location,
    *,
    geometry: TrackGeometry,
    frames: dict[NodeId, Frame] | None = None,
    usable: frozenset[EdgeTriple] | None = None,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE_M,
) -> Location | None:
    """
    Location behind `lead` whose straight-line distance from it is
    `target_length` (within `tolerance`), found by successive substitution
    on the along-track offset. On a curve the chord is shorter than the arc,
    so the offset grows by the shortfall each round.

    None if the track runs out, the point cannot be drawn, or no candidate
    is close enough after `max_iterations` rounds.
    """
    if frames is None:
        frames = project(layout, geometry)
    if usable is None:
        usable = partition(layout, switch_states).usable
    head = coords_for(lead, layout, frames, geometry)
    if head is None:
        return None

    correction = 0.0
    for _ in range(max_iterations):
        cand = normalize(
            lead.moved_by(-(target_length + correction)), layout, switch_states, usable=usable
        )
        if cand is None:
            return None
        tail = coords_for(cand, layout, frames, geometry)
        if tail is None:
            return None
        actual = head.origin.distance_to(tail.origin)
        if abs(actual - target_length) <= tolerance:
            return cand
        correction += target_length - actual
    return None


@dataclass(frozen=True)
class CarPlacement:
    front: Location
    rear: Location
    p1: Point
    p2: Point

    @property
    def chord(self) -> float:
        return self.p1.distance_to(self.p2)


def car_positions(
    train: TrainState,
    layout: Layout,
    switch_states: Sequence[int],
    *,
    geometry: TrackGeometry,
    frames: dict[NodeId, Frame] | None = None,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE_M,
) -> list[CarPlacement]:
    """Place each unit front to back; a unit's rear coupling is the next one's front."""
    if train.location is None:
        return []
    if frames is None:
        frames = project(layout, geometry)
    usable = partition(layout, switch_states).usable

    out: list[CarPlacement] = []
    front = train.location
    for car in train.composition:
        rear = end_location(
            car.length,
            layout,
            switch_states,
            front,
            geometry=geometry,
            frames=frames,
            usable=usable,
            max_iterations=max_iterations,
            tolerance=tolerance,
        )
        if rear is None:
            break
        p1 = coords_for(front, layout, frames, geometry)
        p2 = coords_for(rear, layout, frames, geometry)
        out.append(CarPlacement(front, rear, p1.origin, p2.origin))
        front = rear
    return out
