# rr_sim/domain/mechanics/mechanics_core.py
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rr_sim.app.protocols import TrackGeometry
from rr_sim.domain.entities.geography import Frame
from rr_sim.domain.entities.track import NodeId
from rr_sim.domain.entities.train import Location, TrainState
from rr_sim.domain.layout import Layout, Partition, partition
from rr_sim.domain.mechanics.mechanics_motion import advance
from rr_sim.domain.mechanics.mechanics_normalizer import normalize
from rr_sim.domain.mechanics.mechanics_placement import (
    MAX_ITERATIONS,
    TOLERANCE_M,
    CarPlacement,
    car_positions,
    end_location,
)
from rr_sim.domain.mechanics.mechanics_projector import (
    DEFAULT_ORIGIN,
    FrameConflict,
    frame_conflicts,
    project,
)


@dataclass
class Mechanics:
    """Bundles the geometry adapter with the tuning knobs of the layout & motion engine."""

    geometry: TrackGeometry
    max_iterations: int = MAX_ITERATIONS
    tolerance_m: float = TOLERANCE_M
    root: NodeId = 0
    origin: Frame = DEFAULT_ORIGIN
    loop_tolerance_m: float = 0.05

    def partition(self, layout: Layout, switch_states: Sequence[int]) -> Partition:
        return partition(layout, switch_states)

    def normalize(
        self, loc: Location, layout: Layout, switch_states: Sequence[int]
    ) -> Location | None:
        return normalize(loc, layout, switch_states)

    def advance(
        self, dt_s: float, train: TrainState, layout: Layout, switch_states: Sequence[int]
    ) -> TrainState:
        return advance(dt_s, train, layout, switch_states)

    def advance_all(
        self,
        dt_s: float,
        trains: Iterable[TrainState],
        layout: Layout,
        switch_states: Sequence[int],
    ) -> tuple[TrainState, ...]:
        usable = partition(layout, switch_states).usable  # one partition per tick
        return tuple(advance(dt_s, tr, layout, switch_states, usable=usable) for tr in trains)

    def frames(self, layout: Layout) -> dict[NodeId, Frame]:
        return project(layout, self.geometry, root=self.root, origin=self.origin)

    def end_location(
        self,
        target_length: float,
        layout: Layout,
        switch_states: Sequence[int],
        lead: Location,
        frames: dict[NodeId, Frame] | None = None,
    ) -> Location | None:
        return end_location(
            target_length,
            layout,
            switch_states,
            lead,
            geometry=self.geometry,
            frames=frames if frames is not None else self.frames(layout),
            max_iterations=self.max_iterations,
            tolerance=self.tolerance_m,
        )

    def car_positions(
        self,
        train: TrainState,
        layout: Layout,
        switch_states: Sequence[int],
        frames: dict[NodeId, Frame] | None = None,
    ) -> list[CarPlacement]:
        return car_positions(
            train,
            layout,
            switch_states,
            geometry=self.geometry,
            frames=frames if frames is not None else self.frames(layout),
            max_iterations=self.max_iterations,
            tolerance=self.tolerance_m,
        )

    def frame_conflicts(
        self, layout: Layout, frames: dict[NodeId, Frame] | None = None
    ) -> list[FrameConflict]:
        return frame_conflicts(
            layout,
            frames if frames is not None else self.frames(layout),
            self.geometry,
            self.loop_tolerance_m,
        )
