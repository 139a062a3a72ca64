# rr_sim/domain/mechanics/mechanics_factory.py
import math

from rr_sim.config.models import PlacementModel, ProjectorModel
from rr_sim.domain.entities.geography import Frame
from rr_sim.domain.mechanics.mechanics_core import Mechanics
from rr_sim.domain.mechanics.mechanics_geometry import PlanarTrackGeometry


def build_mechanics(placement: PlacementModel, projector: ProjectorModel) -> Mechanics:
    x, y = projector.origin
    return Mechanics(
        geometry=PlanarTrackGeometry(),
        max_iterations=placement.max_iterations,
        tolerance_m=placement.tolerance_m,
        root=projector.root,
        origin=Frame.at(x, y, math.radians(projector.heading_deg)),
        loop_tolerance_m=projector.loop_tolerance_m,
    )
